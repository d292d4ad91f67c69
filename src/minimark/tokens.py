"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, StrEnum, auto


class TokenType(Enum):
    # Content
    STRING = auto()  # alphanumeric run
    SPACE = auto()  # single ' '
    NEWLINE = auto()  # \n

    # Inline emphasis
    BOLD = auto()  # **
    ITALIC = auto()  # _
    MONOSPACE = auto()  # `

    # Block markers
    UNORDERED_LIST_MARKER = auto()  # -
    HEADER1 = auto()  # #
    HEADER2 = auto()  # ##
    HEADER3 = auto()  # ###
    HEADER4 = auto()  # ####
    HEADER5 = auto()  # ##### (and longer runs)
    CODE_FENCE = auto()  # ```
    LINE_BREAK = auto()  # ---

    EOF = auto()

    # Synthetic tokens for structural nodes
    UNTYPED = auto()


HEADER_TYPES: tuple[TokenType, ...] = (
    TokenType.HEADER1,
    TokenType.HEADER2,
    TokenType.HEADER3,
    TokenType.HEADER4,
    TokenType.HEADER5,
)

MAX_HEADER_LEVEL = len(HEADER_TYPES)


class LexMode(StrEnum):
    """How the lexer treats spaces between words."""

    STRICT = "strict"
    PERMISSIVE = "permissive"


@dataclass(frozen=True, slots=True)
class LexerOptions:
    """Lexer configuration."""

    mode: LexMode = LexMode.STRICT

    @property
    def strings_absorb_spaces(self) -> bool:
        return self.mode == LexMode.PERMISSIVE


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


_NO_POSITION = Position(1, 1, 0)
NO_SPAN = Span(_NO_POSITION, _NO_POSITION)


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token. Two tokens are equal when type and value match."""

    type: TokenType
    value: str
    span: Span = field(default=NO_SPAN, compare=False)


def is_text_char(ch: str) -> bool:
    """Return True if ch can appear in a STRING token."""
    return ch.isascii() and ch.isalnum()


def describe(tt: TokenType) -> str:
    """Human-readable name of a token type, for error messages."""
    return _DESCRIPTIONS[tt]


_DESCRIPTIONS: dict[TokenType, str] = {
    TokenType.STRING: "text",
    TokenType.SPACE: "space",
    TokenType.NEWLINE: "newline",
    TokenType.BOLD: "'**'",
    TokenType.ITALIC: "'_'",
    TokenType.MONOSPACE: "'`'",
    TokenType.UNORDERED_LIST_MARKER: "'-'",
    TokenType.HEADER1: "'#'",
    TokenType.HEADER2: "'##'",
    TokenType.HEADER3: "'###'",
    TokenType.HEADER4: "'####'",
    TokenType.HEADER5: "'#####'",
    TokenType.CODE_FENCE: "'```'",
    TokenType.LINE_BREAK: "'---'",
    TokenType.EOF: "end of input",
    TokenType.UNTYPED: "untyped token",
}
