"""minimark: a small Markdown dialect compiled to HTML."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from minimark.tokens import LexerOptions

__version__ = "0.1.0"


def compile(source: str, options: LexerOptions | None = None) -> str:
    """Parse and render minimark source to HTML."""
    from minimark.parser import parse
    from minimark.render import render

    return render(parse(source, options))
