"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from minimark.ast import AstNode, Node, NodeType
from minimark.lexer import tokenize
from minimark.parser import parse
from minimark.tokens import LexerOptions, Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding EOF)."""

    def _lex(source: str, options: LexerOptions | None = None) -> list[Token]:
        tokens = tokenize(source, options)
        # Strip trailing EOF for convenience
        return [t for t in tokens if t.type != TokenType.EOF]

    return _lex


@pytest.fixture
def parse_source():
    """Return a helper that parses source and returns a Document."""

    def _parse(source: str, options: LexerOptions | None = None) -> Node:
        return parse(source, options)

    return _parse


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def node_types(node: AstNode) -> list[NodeType]:
    """Return the types of a node's direct children."""
    return [c.type for c in node.children]


def assert_text(node: AstNode, value: str) -> None:
    """Assert that node is a Text node holding value."""
    assert node.type == NodeType.TEXT, f"Expected TEXT, got {node.type}"
    assert node.text == value, f"Expected text {value!r}, got {node.text!r}"


def only_child(node: AstNode) -> AstNode:
    """Return the single child of node, failing if there is not exactly one."""
    assert len(node.children) == 1, f"Expected one child, got {len(node.children)}"
    return node.children[0]
