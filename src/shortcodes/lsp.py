"""Minimal LSP server for shortcodes — diagnostics only."""

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

from shortcodes import __version__
from shortcodes.errors import ShortcodeSyntaxError
from shortcodes.tokenizer import ShortcodesTokenizer
from shortcodes.tokens import position_at

server = LanguageServer(
    "shortcodes-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _range(source: str, offset: int, length: int) -> Range:
    start = position_at(source, offset)
    end = position_at(source, offset + max(1, length))
    return Range(
        start=Position(line=start.line - 1, character=start.column - 1),
        end=Position(line=end.line - 1, character=end.column - 1),
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Build the document and publish one diagnostic per repair."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    diagnostics: list[Diagnostic] = []

    tokenizer = ShortcodesTokenizer(source)
    try:
        tokenizer.build_forest()
    except ShortcodeSyntaxError as exc:
        diagnostics.append(
            Diagnostic(
                range=_range(source, exc.position, len(exc.raw)),
                message=exc.message,
                severity=DiagnosticSeverity.Error,
                source="shortcodes",
            )
        )
    else:
        for repair in tokenizer.repairs:
            diagnostics.append(
                Diagnostic(
                    range=_range(source, repair.position, repair.length),
                    message=repair.describe(),
                    severity=DiagnosticSeverity.Warning,
                    source="shortcodes",
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
