"""minimark parser — pulls tokens from the lexer and builds an AST.

Grammar (one token of lookahead, no backtracking)::

    document       := block* EOF
    block          := text | space-run | monospace | code-block | italic
                    | bold | newline | unordered-list | header
    text           := (STRING | SPACE)+          one Text node per run
    bold           := '**' (italic | text)* '**'
    italic         := '_' (bold | text)* '_'
    monospace      := '`' text? '`'
    code-block     := '```' STRING NEWLINE <any token>* '```'
    header         := '#'{1,5} SPACE text?
    unordered-list := list-item+
    list-item      := '-' SPACE (italic | bold | text | monospace | header) NEWLINE?

Bold and italic only nest into each other, never into themselves. The
first error aborts the whole parse.
"""

from __future__ import annotations

from dataclasses import dataclass

from minimark.ast import HEADER_NODES, AstNode, CodeBlock, Node, NodeType
from minimark.errors import LexError, ParseError
from minimark.lexer import Lexer
from minimark.tokens import LexerOptions, Span, Token, TokenType, describe

# Bold and italic recurse into each other; deeper input is rejected
MAX_EMPHASIS_DEPTH = 200


class Parser:
    """Recursive descent parser over a Lexer's token stream."""

    def __init__(self, lexer: Lexer) -> None:
        self._lexer = lexer
        self._source = lexer.source
        self._current = lexer.next_token()
        self._last_end = self._current.span.start
        self._emphasis_depth = 0

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _at(self, *types: TokenType) -> bool:
        return self._current.type in types

    def _advance(self) -> Token:
        tok = self._current
        if tok.type != TokenType.EOF:
            self._last_end = tok.span.end
            self._current = self._lexer.next_token()
        return tok

    def _expect(self, tt: TokenType, context: str = "") -> Token:
        if self._current.type != tt:
            raise self._unexpected((tt,), context)
        return self._advance()

    # ------------------------------------------------------------------
    # Document level
    # ------------------------------------------------------------------

    def parse(self) -> Node:
        start = self._current.span.start
        children: list[AstNode] = []

        while not self._at(TokenType.EOF):
            children.append(self._parse_block())

        root = Token(TokenType.UNTYPED, "", Span(start, self._current.span.end))
        return Node(NodeType.DOCUMENT, root, tuple(children))

    def _parse_block(self) -> AstNode:
        tt = self._current.type

        if tt == TokenType.STRING:
            return self._parse_text()
        if tt == TokenType.SPACE:
            return self._parse_space_run()
        if tt == TokenType.MONOSPACE:
            return self._parse_monospace()
        if tt == TokenType.CODE_FENCE:
            return self._parse_code_block()
        if tt == TokenType.ITALIC:
            return self._parse_italic()
        if tt == TokenType.BOLD:
            return self._parse_bold()
        if tt == TokenType.NEWLINE:
            return Node(NodeType.NEWLINE, self._advance())
        if tt == TokenType.UNORDERED_LIST_MARKER:
            return self._parse_unordered_list()
        if tt in HEADER_NODES:
            return self._parse_header()
        raise self._error(
            f"unexpected {_found(self._current)} at start of block", _BLOCK_START
        )

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def _parse_text(self) -> Node:
        """Merge a run of STRING and SPACE tokens into one Text node.

        An empty run yields an empty Text node positioned at the current token.
        """
        start = self._current.span.start
        end = start
        parts: list[str] = []
        while self._at(TokenType.STRING, TokenType.SPACE):
            tok = self._advance()
            parts.append(tok.value)
            end = tok.span.end
        merged = Token(TokenType.STRING, "".join(parts), Span(start, end))
        return Node(NodeType.TEXT, merged)

    def _parse_space_run(self) -> Node:
        start = self._current.span.start
        parts: list[str] = []
        while self._at(TokenType.SPACE):
            parts.append(self._advance().value)
        run = Token(TokenType.SPACE, "".join(parts), Span(start, self._last_end))
        return Node(NodeType.SPACE, run)

    # ------------------------------------------------------------------
    # Inline emphasis
    # ------------------------------------------------------------------

    def _enter_emphasis(self) -> None:
        if self._emphasis_depth >= MAX_EMPHASIS_DEPTH:
            raise self._error(
                f"emphasis nested too deeply (more than {MAX_EMPHASIS_DEPTH} levels)"
            )
        self._emphasis_depth += 1

    def _parse_bold(self) -> Node:
        self._enter_emphasis()
        open_tok = self._expect(TokenType.BOLD)
        children: list[AstNode] = []

        while self._at(TokenType.ITALIC, TokenType.STRING, TokenType.SPACE):
            if self._at(TokenType.ITALIC):
                children.append(self._parse_italic())
            else:
                children.append(self._parse_text())

        self._expect(TokenType.BOLD, "to close bold text")
        self._emphasis_depth -= 1
        return Node(NodeType.BOLD, open_tok, tuple(children))

    def _parse_italic(self) -> Node:
        self._enter_emphasis()
        open_tok = self._expect(TokenType.ITALIC)
        children: list[AstNode] = []

        while self._at(TokenType.BOLD, TokenType.STRING, TokenType.SPACE):
            if self._at(TokenType.BOLD):
                children.append(self._parse_bold())
            else:
                children.append(self._parse_text())

        self._expect(TokenType.ITALIC, "to close italic text")
        self._emphasis_depth -= 1
        return Node(NodeType.ITALIC, open_tok, tuple(children))

    def _parse_monospace(self) -> Node:
        open_tok = self._expect(TokenType.MONOSPACE)
        text = self._parse_text()
        self._expect(TokenType.MONOSPACE, "to close inline code")
        return Node(NodeType.MONOSPACE, open_tok, (text,))

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def _parse_code_block(self) -> CodeBlock:
        fence = self._expect(TokenType.CODE_FENCE)
        language = self._expect(TokenType.STRING, "naming the code block language").value
        self._expect(TokenType.NEWLINE, "after the code block language")

        # Body is kept verbatim, whatever the tokens inside it are
        start = self._current.span.start
        parts: list[str] = []
        while not self._at(TokenType.CODE_FENCE, TokenType.EOF):
            parts.append(self._advance().value)
        body = Token(TokenType.STRING, "".join(parts), Span(start, self._current.span.start))

        self._expect(TokenType.CODE_FENCE, "to close the code block")
        return CodeBlock(fence, language, (Node(NodeType.TEXT, body),))

    def _parse_header(self) -> Node:
        marker = self._advance()
        self._expect(TokenType.SPACE, "after header marker")
        return Node(HEADER_NODES[marker.type], marker, (self._parse_text(),))

    def _parse_unordered_list(self) -> Node:
        start = self._current.span.start
        items: list[AstNode] = []

        while self._at(TokenType.UNORDERED_LIST_MARKER):
            items.append(self._parse_list_item())

        root = Token(TokenType.UNTYPED, "", Span(start, self._last_end))
        return Node(NodeType.UNORDERED_LIST_ROOT, root, tuple(items))

    def _parse_list_item(self) -> Node:
        marker = self._expect(TokenType.UNORDERED_LIST_MARKER)
        self._expect(TokenType.SPACE, "after list marker")

        tt = self._current.type
        content: AstNode
        if tt == TokenType.ITALIC:
            content = self._parse_italic()
        elif tt == TokenType.BOLD:
            content = self._parse_bold()
        elif tt in (TokenType.STRING, TokenType.SPACE):
            content = self._parse_text()
        elif tt == TokenType.MONOSPACE:
            content = self._parse_monospace()
        elif tt in HEADER_NODES:
            content = self._parse_header()
        elif tt == TokenType.EOF:
            content = Node(NodeType.VOID, self._current)
        else:
            raise self._error(
                f"unexpected {_found(self._current)} in list item", _LIST_ITEM_START
            )

        # The item owns the newline that ends its line
        if self._at(TokenType.NEWLINE):
            self._advance()

        return Node(NodeType.UNORDERED_LIST_ITEM, marker, (content,))

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def _unexpected(self, expected: tuple[TokenType, ...], context: str = "") -> ParseError:
        wanted = " or ".join(describe(tt) for tt in expected)
        if context:
            wanted = f"{wanted} {context}"
        return self._error(f"expected {wanted}, found {_found(self._current)}", expected)

    def _error(self, message: str, expected: tuple[TokenType, ...] = ()) -> ParseError:
        return ParseError(message, self._current.span, self._source, expected, self._current)


# Module-level constants
_BLOCK_START: tuple[TokenType, ...] = (
    TokenType.STRING,
    TokenType.SPACE,
    TokenType.MONOSPACE,
    TokenType.CODE_FENCE,
    TokenType.ITALIC,
    TokenType.BOLD,
    TokenType.NEWLINE,
    TokenType.UNORDERED_LIST_MARKER,
    *HEADER_NODES,
)
_LIST_ITEM_START: tuple[TokenType, ...] = (
    TokenType.ITALIC,
    TokenType.BOLD,
    TokenType.STRING,
    TokenType.SPACE,
    TokenType.MONOSPACE,
    *HEADER_NODES,
)


def _found(tok: Token) -> str:
    if tok.type == TokenType.STRING:
        return f"text {tok.value!r}"
    return describe(tok.type)


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Outcome of try_parse(): the document, or the error that aborted it."""

    document: Node | None = None
    error: LexError | ParseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Node:
        """Return the document, re-raising the stored error if parsing failed."""
        if self.error is not None:
            raise self.error
        assert self.document is not None
        return self.document


def parse(source: str, options: LexerOptions | None = None) -> Node:
    """Convenience function: parse source text and return the Document node."""
    return Parser(Lexer(source, options)).parse()


def try_parse(source: str, options: LexerOptions | None = None) -> ParseResult:
    """Parse source text without raising; errors are carried in the result."""
    try:
        return ParseResult(document=parse(source, options))
    except (LexError, ParseError) as exc:
        return ParseResult(error=exc)

