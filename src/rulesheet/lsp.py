"""Minimal LSP server for rulesheet stylesheets — diagnostics only."""

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

from rulesheet import __version__
from rulesheet.contexts import Position as SourcePosition
from rulesheet.engine import parse
from rulesheet.errors import ParseError

server = LanguageServer(
    "rulesheet-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _utf16_column(lines: list[str], pos: SourcePosition) -> int:
    """Convert a 1-based code point column to a 0-based UTF-16 offset."""
    if not 0 <= pos.line - 1 < len(lines):
        return pos.column - 1
    prefix = lines[pos.line - 1][: pos.column - 1]
    return len(prefix.encode("utf-16-le")) // 2


def _validate(ls: LanguageServer, uri: str) -> None:
    """Parse the stylesheet and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri
    diagnostics: list[Diagnostic] = []

    try:
        parse(source, filename)
    except ParseError as exc:
        lines = source.split("\n")
        start_line = exc.span.start.line - 1
        start_col = _utf16_column(lines, exc.span.start)
        end_line = exc.span.end.line - 1
        end_col = _utf16_column(lines, exc.span.end)
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=start_line, character=start_col),
                    end=Position(line=end_line, character=end_col),
                ),
                message=exc.message,
                severity=DiagnosticSeverity.Error,
                source="rulesheet",
                code=exc.kind.name.lower(),
            )
        )

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
