"""minimark lexer — hands out one token per request from the source text."""

from __future__ import annotations

from minimark.errors import LexError
from minimark.tokens import (
    HEADER_TYPES,
    MAX_HEADER_LEVEL,
    LexerOptions,
    Position,
    Span,
    Token,
    TokenType,
    is_text_char,
)

_SINGLE_CHAR: dict[str, TokenType] = {
    " ": TokenType.SPACE,
    "_": TokenType.ITALIC,
    "\n": TokenType.NEWLINE,
}


class Lexer:
    """Pull-based tokenizer: each next_token() call scans one token forward.

    The scan position only ever moves forward. Once the end of input (or a
    NUL character) is reached, every further call returns an EOF token.
    """

    def __init__(self, source: str, options: LexerOptions | None = None) -> None:
        self._source = source
        self._options = options if options is not None else LexerOptions()
        self._pos = 0
        self._line = 1
        self._col = 1

    @property
    def source(self) -> str:
        return self._source

    def next_token(self) -> Token:
        ch = self._peek()

        if ch in ("", "\0"):
            pos = self._current_pos()
            return Token(TokenType.EOF, "", Span(pos, pos))

        start = self._current_pos()

        if ch in _SINGLE_CHAR:
            self._advance()
            return self._make(_SINGLE_CHAR[ch], ch, start)

        if ch == "\r" and self._peek(1) == "\n":
            return self._make(TokenType.NEWLINE, self._advance(2), start)

        if ch == "*":
            if self._peek(1) != "*":
                raise self._error(f"invalid character {ch!r} (bold is written '**')", ch)
            return self._make(TokenType.BOLD, self._advance(2), start)

        if ch == "-":
            if self._peek(1) == "-" and self._peek(2) == "-":
                return self._make(TokenType.LINE_BREAK, self._advance(3), start)
            return self._make(TokenType.UNORDERED_LIST_MARKER, self._advance(), start)

        if ch == "#":
            return self._lex_header(start)

        if ch == "`":
            if self._peek(1) == "`" and self._peek(2) == "`":
                return self._make(TokenType.CODE_FENCE, self._advance(3), start)
            return self._make(TokenType.MONOSPACE, self._advance(), start)

        if is_text_char(ch):
            return self._lex_string(start)

        raise self._error(f"invalid character {ch!r}", ch)

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _advance(self, count: int = 1) -> str:
        consumed = self._source[self._pos : self._pos + count]
        for ch in consumed:
            self._pos += 1
            if ch == "\n":
                self._line += 1
                self._col = 1
            else:
                self._col += 1
        return consumed

    def _make(self, tt: TokenType, value: str, start: Position) -> Token:
        return Token(tt, value, Span(start, self._current_pos()))

    def _error(self, message: str, ch: str) -> LexError:
        return LexError(message, self._current_pos(), self._source, ch)

    # ------------------------------------------------------------------
    # Multi-character tokens
    # ------------------------------------------------------------------

    def _lex_header(self, start: Position) -> Token:
        run = 0
        while self._peek(run) == "#":
            run += 1
        # Runs longer than the deepest level are clamped, not rejected
        level = min(run, MAX_HEADER_LEVEL)
        return self._make(HEADER_TYPES[level - 1], self._advance(run), start)

    def _lex_string(self, start: Position) -> Token:
        absorb_spaces = self._options.strings_absorb_spaces
        chars = []
        while True:
            ch = self._peek()
            if not (is_text_char(ch) or (absorb_spaces and ch == " ")):
                break
            chars.append(self._advance())
        return self._make(TokenType.STRING, "".join(chars), start)


def tokenize(source: str, options: LexerOptions | None = None) -> list[Token]:
    """Convenience function: lex the whole source, ending with one EOF token."""
    lexer = Lexer(source, options)
    tokens: list[Token] = []
    while True:
        tok = lexer.next_token()
        tokens.append(tok)
        if tok.type == TokenType.EOF:
            return tokens
