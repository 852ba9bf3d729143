"""Monkey Language Server: pygls-based LSP for Monkey source files.

Provides diagnostics, document symbols, hover and keyword completion via
stdio transport.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from lsprotocol import types as lsp
from pygls.lsp.server import LanguageServer

from monkey import __version__
from monkey.ast_nodes import LetStatement, Program
from monkey.errors import CompileError, Diagnostic, Severity
from monkey.lexer import Lexer
from monkey.parser import Parser
from monkey.source import SourceText, Span
from monkey.tokens import KEYWORDS, Token, TokenKind

# ── Conversion helpers ────────────────────────────────────────────

_SEVERITY_MAP = {
    Severity.ERROR: lsp.DiagnosticSeverity.Error,
    Severity.WARNING: lsp.DiagnosticSeverity.Warning,
    Severity.NOTE: lsp.DiagnosticSeverity.Information,
}

_KEYWORD_COMPLETIONS = sorted(KEYWORDS.keys())


def span_to_range(span: Span, source: SourceText) -> lsp.Range:
    """Convert an inclusive offset Span to a 0-indexed, end-exclusive LSP Range."""
    sl, sc = source.location(span.start)
    el, ec = source.location(span.end)
    if span.end < len(source.content):
        ec += 1
    return lsp.Range(
        start=lsp.Position(line=sl - 1, character=sc - 1),
        end=lsp.Position(line=el - 1, character=ec - 1),
    )


def _to_lsp_diag(d: Diagnostic, source: SourceText) -> lsp.Diagnostic:
    span = d.span or Span(0, 0)
    return lsp.Diagnostic(
        range=span_to_range(span, source),
        severity=_SEVERITY_MAP.get(d.severity, lsp.DiagnosticSeverity.Error),
        source="monkey",
        code=d.code,
        message=f"[{d.code}] {d.message}",
    )


# ── Per-document state ────────────────────────────────────────────


@dataclass
class DocumentState:
    """Cached analysis results for a single open document."""

    source: str = ""
    tokens: list[Token] = field(default_factory=list)
    program: Program | None = None
    diagnostics: list[lsp.Diagnostic] = field(default_factory=list)


# ── Server ────────────────────────────────────────────────────────

server = LanguageServer(
    "monkey-lsp", __version__,
    text_document_sync_kind=lsp.TextDocumentSyncKind.Full,
)
_state: dict[str, DocumentState] = {}


def _analyze(uri: str, source: str) -> DocumentState:
    """Run Lexer → Parser, cache results, return state."""
    ds = DocumentState(source=source)
    text = SourceText(source, uri)

    token_lexer = Lexer(source, uri)
    ds.tokens = list(token_lexer.tokens())
    diags = [_to_lsp_diag(d, text) for d in token_lexer.diagnostics]

    try:
        ds.program = Parser(Lexer(source, uri)).parse_program()
    except CompileError as e:
        diags.extend(_to_lsp_diag(d, text) for d in e.diagnostics)

    ds.diagnostics = diags
    _state[uri] = ds
    return ds


def _token_at(ds: DocumentState, line: int, character: int) -> Token | None:
    """Find the token covering a 0-indexed position."""
    offset = SourceText(ds.source).offset(line + 1, character + 1)
    for tok in ds.tokens:
        if tok.kind != TokenKind.EOF and tok.span.start <= offset <= tok.span.end:
            return tok
    return None


def _let_symbols(ds: DocumentState) -> list[lsp.DocumentSymbol]:
    if ds.program is None:
        return []
    text = SourceText(ds.source)
    symbols = []
    for stmt in ds.program.statements:
        if isinstance(stmt, LetStatement):
            symbols.append(lsp.DocumentSymbol(
                name=stmt.name,
                kind=lsp.SymbolKind.Variable,
                range=span_to_range(stmt.span, text),
                selection_range=span_to_range(stmt.identifier.span, text),
            ))
    return symbols


# ── LSP Feature Handlers ─────────────────────────────────────────


@server.feature(lsp.TEXT_DOCUMENT_DID_OPEN)
def did_open(params: lsp.DidOpenTextDocumentParams) -> None:
    uri = params.text_document.uri
    ds = _analyze(uri, params.text_document.text)
    server.text_document_publish_diagnostics(lsp.PublishDiagnosticsParams(
        uri=uri,
        diagnostics=ds.diagnostics,
    ))


@server.feature(lsp.TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: lsp.DidChangeTextDocumentParams) -> None:
    uri = params.text_document.uri
    # Full sync, the last change holds the whole text
    source = params.content_changes[-1].text if params.content_changes else ""
    ds = _analyze(uri, source)
    server.text_document_publish_diagnostics(lsp.PublishDiagnosticsParams(
        uri=uri,
        diagnostics=ds.diagnostics,
    ))


@server.feature(lsp.TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: lsp.DidCloseTextDocumentParams) -> None:
    _state.pop(params.text_document.uri, None)


@server.feature(lsp.TEXT_DOCUMENT_HOVER)
def hover(params: lsp.HoverParams) -> lsp.Hover | None:
    ds = _state.get(params.text_document.uri)
    if ds is None:
        return None
    tok = _token_at(ds, params.position.line, params.position.character)
    if tok is None:
        return None
    content = f"**{tok.kind.name.lower()}** `{tok.span.text(ds.source)}`"
    return lsp.Hover(contents=lsp.MarkupContent(
        kind=lsp.MarkupKind.Markdown,
        value=content,
    ))


@server.feature(lsp.TEXT_DOCUMENT_COMPLETION)
def completion(params: lsp.CompletionParams) -> lsp.CompletionList:
    items = [
        lsp.CompletionItem(label=kw, kind=lsp.CompletionItemKind.Keyword)
        for kw in _KEYWORD_COMPLETIONS
    ]
    return lsp.CompletionList(is_incomplete=False, items=items)


@server.feature(lsp.TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def document_symbol(params: lsp.DocumentSymbolParams) -> list[lsp.DocumentSymbol]:
    ds = _state.get(params.text_document.uri)
    if ds is None:
        return []
    return _let_symbols(ds)


# ── Entry point ──────────────────────────────────────────────────


def main() -> None:
    """Start the Monkey language server on stdio."""
    server.start_io()
