"""Tests for parser error messages, positions, and the non-raising entry point."""

from __future__ import annotations

import pytest

from minimark.ast import NodeType
from minimark.errors import LexError, ParseError
from minimark.parser import parse, try_parse
from minimark.tokens import Position, Span, TokenType


class TestUnterminated:
    def test_unterminated_bold(self):
        with pytest.raises(ParseError, match="expected '\\*\\*' to close bold text"):
            parse("**Hello")

    def test_unterminated_italic(self):
        with pytest.raises(ParseError, match="found end of input"):
            parse("_Hello")

    def test_unterminated_monospace(self):
        with pytest.raises(ParseError, match="to close inline code"):
            parse("`abc\n")

    def test_unterminated_code_block(self):
        with pytest.raises(ParseError, match="to close the code block"):
            parse("```py\nx 1")

    def test_error_keeps_expected_and_found(self):
        with pytest.raises(ParseError) as exc_info:
            parse("**Hello")
        err = exc_info.value
        assert err.expected == (TokenType.BOLD,)
        assert err.found is not None
        assert err.found.type == TokenType.EOF


class TestNesting:
    def test_bold_cannot_contain_newline(self):
        with pytest.raises(ParseError, match="found newline"):
            parse("**a\nb**")

    def test_bold_cannot_contain_monospace(self):
        with pytest.raises(ParseError, match="found '`'"):
            parse("**`x`**")

    def test_italic_cannot_contain_header(self):
        with pytest.raises(ParseError):
            parse("_# x_")


class TestMissingParts:
    def test_header_without_space(self):
        with pytest.raises(ParseError, match="expected space after header marker, found text 'Title'"):
            parse("#Title")

    def test_code_block_without_language(self):
        with pytest.raises(ParseError, match="naming the code block language"):
            parse("```\nx\n```")

    def test_code_block_language_without_newline(self):
        with pytest.raises(ParseError, match="after the code block language"):
            parse("```py x\n```")

    def test_list_marker_without_space(self):
        with pytest.raises(ParseError, match="after list marker"):
            parse("-a")

    def test_list_item_with_newline_content(self):
        with pytest.raises(ParseError, match="in list item"):
            parse("- \n")


class TestUnexpectedBlock:
    def test_line_break_is_not_a_block(self):
        with pytest.raises(ParseError, match="unexpected '---' at start of block"):
            parse("---")

    def test_whole_parse_aborts(self):
        # A valid prefix does not produce a partial document
        with pytest.raises(ParseError):
            parse("# Fine\n**broken")


class TestErrorPosition:
    def test_error_has_span(self):
        with pytest.raises(ParseError) as exc_info:
            parse("ok\n#x")
        assert exc_info.value.span.start.line == 2
        assert exc_info.value.span.start.column == 2

    def test_error_format_contains_arrow(self):
        with pytest.raises(ParseError) as exc_info:
            parse("#x")
        formatted = exc_info.value.format("test.md")
        assert "-->" in formatted
        assert "test.md:1:2" in formatted

    def test_error_format_contains_carets(self):
        with pytest.raises(ParseError) as exc_info:
            parse("#x")
        formatted = exc_info.value.format()
        assert "^" in formatted

    def test_format_multiline_span(self):
        """ParseError with a span crossing lines underlines to end of line."""
        err = ParseError(
            "test error",
            Span(Position(1, 1, 0), Position(2, 5, 10)),
            "first line\nsecond line",
        )
        formatted = err.format("test.md")
        assert "error: test error" in formatted
        assert formatted.splitlines()[-1].endswith("^" * len("first line"))


class TestTryParse:
    def test_ok(self):
        result = try_parse("**Hello**")
        assert result.ok
        assert result.error is None
        assert result.unwrap() is result.document

    def test_parse_error(self):
        result = try_parse("**Hello")
        assert not result.ok
        assert result.document is None
        assert isinstance(result.error, ParseError)

    def test_lex_error(self):
        result = try_parse("*Hello*")
        assert isinstance(result.error, LexError)

    def test_unwrap_reraises(self):
        result = try_parse("_x")
        with pytest.raises(ParseError):
            result.unwrap()


class TestNestingDepth:
    def test_deep_emphasis_rejected(self):
        with pytest.raises(ParseError, match="nested too deeply"):
            parse("_**" * 2000 + "x" + "**_" * 2000)

    def test_deep_emphasis_in_try_parse(self):
        result = try_parse("**_" * 2000 + "x" + "_**" * 2000)
        assert not result.ok
        assert isinstance(result.error, ParseError)

    def test_moderate_nesting_accepted(self):
        doc = parse("_**" * 50 + "x" + "**_" * 50)
        node = doc.children[0]
        depth = 0
        while node.children and node.type in (NodeType.BOLD, NodeType.ITALIC):
            depth += 1
            node = node.children[0]
        assert depth == 100
        assert node.text == "x"

    def test_depth_resets_between_siblings(self):
        run = "_**" * 60 + "x" + "**_" * 60
        doc = parse(" ".join([run] * 5))
        assert len([c for c in doc.children if c.type == NodeType.ITALIC]) == 5
