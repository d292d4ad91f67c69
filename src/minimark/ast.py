"""AST node types for parsed minimark documents."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from minimark.tokens import Token, TokenType


class NodeType(Enum):
    DOCUMENT = auto()
    TEXT = auto()
    SPACE = auto()
    NEWLINE = auto()
    BOLD = auto()
    ITALIC = auto()
    MONOSPACE = auto()
    CODE = auto()
    HEADER1 = auto()
    HEADER2 = auto()
    HEADER3 = auto()
    HEADER4 = auto()
    HEADER5 = auto()
    UNORDERED_LIST_ROOT = auto()
    UNORDERED_LIST_ITEM = auto()
    VOID = auto()


HEADER_NODES: dict[TokenType, NodeType] = {
    TokenType.HEADER1: NodeType.HEADER1,
    TokenType.HEADER2: NodeType.HEADER2,
    TokenType.HEADER3: NodeType.HEADER3,
    TokenType.HEADER4: NodeType.HEADER4,
    TokenType.HEADER5: NodeType.HEADER5,
}


@dataclass(frozen=True, slots=True)
class Node:
    """A parsed element: its kind, the token that introduced it, and its children."""

    type: NodeType
    token: Token
    children: tuple[AstNode, ...] = ()

    @property
    def text(self) -> str:
        return self.token.value


@dataclass(frozen=True, slots=True)
class CodeBlock:
    """Fenced code block; the single Text child holds the raw body."""

    token: Token
    language: str
    children: tuple[AstNode, ...] = ()

    @property
    def type(self) -> NodeType:
        return NodeType.CODE

    @property
    def text(self) -> str:
        return self.token.value

    @property
    def body(self) -> str:
        return "".join(child.text for child in self.children)


AstNode = Node | CodeBlock


def header_level(node: AstNode) -> int | None:
    """Return 1-5 for header nodes, None otherwise."""
    for level, nt in enumerate(HEADER_NODES.values(), start=1):
        if node.type == nt:
            return level
    return None
