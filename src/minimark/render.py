"""HTML renderer — converts a parsed AST to an HTML document.

Text is emitted verbatim: no HTML escaping is applied to node content.
"""

from __future__ import annotations

from minimark.ast import AstNode, CodeBlock, Node, NodeType, header_level


def render(doc: Node) -> str:
    """Render a Document node to an HTML string."""
    body = _render_children(doc)
    return f"<html>\n{body}\n</html>\n"


def _render_children(node: AstNode) -> str:
    return "".join(_render_node(child) for child in node.children)


# ---------------------------------------------------------------------------
# Node rendering dispatcher
# ---------------------------------------------------------------------------


def _render_node(node: AstNode) -> str:
    match node.type:
        case NodeType.TEXT | NodeType.SPACE:
            return f"<span>{node.text}</span>"
        case NodeType.NEWLINE:
            return "<br>\n"
        case NodeType.BOLD:
            return f"<strong>{_render_children(node)}</strong>"
        case NodeType.ITALIC:
            return f"<i>{_render_children(node)}</i>"
        case NodeType.MONOSPACE:
            return f"<code>{_render_children(node)}</code>"
        case NodeType.CODE:
            assert isinstance(node, CodeBlock)
            return _render_code(node)
        case NodeType.UNORDERED_LIST_ROOT:
            return _render_list(node)
        case NodeType.UNORDERED_LIST_ITEM:
            return f"<li>{_render_children(node)}</li>"
        case NodeType.VOID:
            return ""
        case NodeType.DOCUMENT:
            return _render_children(node)

    level = header_level(node)
    if level is not None:
        return f"<h{level}>{_render_children(node)}</h{level}>"
    return ""


def _render_code(node: CodeBlock) -> str:
    cls = f' class="language-{node.language}"' if node.language else ""
    return f"<pre><code{cls}>{node.body}</code></pre>"


def _render_list(node: AstNode) -> str:
    items = "\n".join(_render_node(child) for child in node.children)
    return f"<ul>\n{items}\n</ul>"
