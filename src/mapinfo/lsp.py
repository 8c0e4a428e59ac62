"""Minimal LSP server for MAPINFO: diagnostics only."""

from __future__ import annotations

import argparse
import tomllib
from pathlib import Path

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

from mapinfo import __version__
from mapinfo.cli import check_comment_markers, config_comment_markers, load_config
from mapinfo.errors import MapInfoError
from mapinfo.lexer import DEFAULT_COMMENT_MARKERS
from mapinfo.parser import parse

server = LanguageServer("mapinfo-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _validate(ls: LanguageServer, uri: str) -> None:
    """Parse the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics: list[Diagnostic] = []

    # Same mapinfo.toml lookup as the CLI, relative to the document
    comment_markers: tuple[str, ...] = DEFAULT_COMMENT_MARKERS
    try:
        comment_markers = config_comment_markers(load_config(None, Path(doc.path).parent))
        check_comment_markers(comment_markers)
    except (tomllib.TOMLDecodeError, argparse.ArgumentTypeError) as exc:
        comment_markers = DEFAULT_COMMENT_MARKERS
        diagnostics.append(
            Diagnostic(
                range=Range(start=Position(line=0, character=0), end=Position(line=0, character=1)),
                message=f"invalid mapinfo.toml, using default comment markers: {exc}",
                severity=DiagnosticSeverity.Warning,
                source="mapinfo",
            )
        )

    try:
        parse(doc.source, comment_markers)
    except MapInfoError as exc:
        # TextLoc is already 0-based, like LSP positions
        start = Position(line=exc.loc.line, character=exc.loc.column)
        if exc.end is not None and exc.end.offset > exc.loc.offset:
            end = Position(line=exc.end.line, character=exc.end.column)
        else:
            end = Position(line=exc.loc.line, character=exc.loc.column + 1)
        diagnostics.append(
            Diagnostic(
                range=Range(start=start, end=end),
                message=exc.message,
                severity=DiagnosticSeverity.Error,
                source="mapinfo",
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
