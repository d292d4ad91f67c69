"""Minimal LSP server for minimark — diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from minimark import __version__
from minimark.errors import LexError, ParseError
from minimark.parser import try_parse

server = LanguageServer(
    "minimark-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _diagnostic(start: Position, end: Position, message: str) -> Diagnostic:
    return Diagnostic(
        range=Range(start=start, end=end),
        message=message,
        severity=DiagnosticSeverity.Error,
        source="minimark",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Parse the document and publish its diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    result = try_parse(doc.source)
    diagnostics: list[Diagnostic] = []

    if isinstance(result.error, LexError):
        line = result.error.position.line - 1
        col = result.error.position.column - 1
        diagnostics.append(
            _diagnostic(
                Position(line=line, character=col),
                Position(line=line, character=col + 1),
                result.error.message,
            )
        )
    elif isinstance(result.error, ParseError):
        span = result.error.span
        start = Position(line=span.start.line - 1, character=span.start.column - 1)
        end = Position(line=span.end.line - 1, character=span.end.column - 1)
        if end == start:
            # EOF tokens are zero-width; cover one character instead
            end = Position(line=start.line, character=start.character + 1)
        diagnostics.append(_diagnostic(start, end, result.error.message))

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
