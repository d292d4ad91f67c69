"""Error types with formatted source context."""

from __future__ import annotations

from minimark.tokens import Position, Span, Token, TokenType


class MinimarkError(Exception):
    """Base class for errors that abort a parse."""


class LexError(MinimarkError):
    """Raised on the first character that does not start any token."""

    def __init__(self, message: str, position: Position, source: str, char: str = "") -> None:
        self.message = message
        self.position = position
        self.source = source
        self.char = char
        super().__init__(self.format())

    def format(self, filename: str = "input.md") -> str:
        return _format_snippet(self.message, self.source, filename, self.position.line,
                               self.position.column, 1)


class ParseError(MinimarkError):
    """Raised when the current token fits no alternative of the active rule."""

    def __init__(
        self,
        message: str,
        span: Span,
        source: str,
        expected: tuple[TokenType, ...] = (),
        found: Token | None = None,
    ) -> None:
        self.message = message
        self.span = span
        self.source = source
        self.expected = expected
        self.found = found
        super().__init__(self.format())

    def format(self, filename: str = "input.md") -> str:
        col = self.span.start.column
        if self.span.end.line == self.span.start.line:
            underline_len = max(1, self.span.end.column - col)
        else:
            # Multi-line span: underline to end of the first line
            underline_len = -1
        return _format_snippet(self.message, self.source, filename, self.span.start.line,
                               col, underline_len)


def _format_snippet(
    message: str, source: str, filename: str, line: int, col: int, underline_len: int
) -> str:
    lines = source.splitlines(keepends=True)
    line_idx = line - 1

    # Build the source line (strip trailing newline for display)
    if 0 <= line_idx < len(lines):
        source_line = lines[line_idx].rstrip("\n").rstrip("\r")
    else:
        source_line = ""

    if underline_len < 0:
        underline_len = max(1, len(source_line) - col + 1)

    pad = " " * (col - 1)
    carets = "^" * underline_len

    line_num = str(line)
    gutter_width = len(line_num) + 1

    blank_gutter = " " * gutter_width + "|"
    line_gutter = f"{line_num:>{gutter_width - 1}} |"

    return (
        f"error: {message}\n"
        f"{' ' * gutter_width}--> {filename}:{line}:{col}\n"
        f"{blank_gutter}\n"
        f"{line_gutter} {source_line}\n"
        f"{blank_gutter} {pad}{carets}"
    )
