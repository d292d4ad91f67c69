"""--debug AST dump and --tokens token dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from minimark.ast import AstNode, CodeBlock, NodeType
from minimark.tokens import Token, TokenType

_LEAF_TYPES = frozenset({NodeType.TEXT, NodeType.SPACE})


def dump_ast(doc: AstNode, *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable AST tree to *file*."""
    _dump_node(doc, 0, file)


def dump_tokens(tokens: list[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one token per line with its starting line:column."""
    for tok in tokens:
        pos = tok.span.start
        if tok.type == TokenType.EOF:
            file.write(f"{pos.line}:{pos.column} {tok.type.name}\n")
        else:
            file.write(f"{pos.line}:{pos.column} {tok.type.name} {tok.value!r}\n")


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_node(node: AstNode, depth: int, f: TextIO) -> None:
    name = node.type.name.title().replace("_", "")
    if isinstance(node, CodeBlock):
        f.write(f"{_indent(depth)}{name} language={node.language!r}\n")
    elif node.type in _LEAF_TYPES:
        f.write(f"{_indent(depth)}{name}({node.text!r})\n")
    else:
        f.write(f"{_indent(depth)}{name}\n")
    for child in node.children:
        _dump_node(child, depth + 1, f)
