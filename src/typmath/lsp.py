"""typmath language server: pygls-based LSP for documents with math.

Provides diagnostics for malformed math, hover with the glyph behind a
symbol, and inlay hints showing rendered glyphs next to their source.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from lsprotocol import types as lsp
from pygls.lsp.server import LanguageServer

from typmath import __version__
from typmath.ast_nodes import Call, MathNode, Symbol, walk
from typmath.config import TypmathConfig
from typmath.document import math_errors, parse_document
from typmath.errors import MathError, Severity
from typmath.glyphs import GlyphTable
from typmath.renderer import UnicodeRenderer
from typmath.scanner import Segment
from typmath.source import SourceText, Span

logger = logging.getLogger(__name__)

# ── Conversion helpers ────────────────────────────────────────────

_SEVERITY_MAP = {
    Severity.ERROR: lsp.DiagnosticSeverity.Error,
    Severity.WARNING: lsp.DiagnosticSeverity.Warning,
    Severity.NOTE: lsp.DiagnosticSeverity.Information,
}


def span_to_range(source: SourceText, span: Span) -> lsp.Range:
    """Convert an offset Span to a 0-indexed LSP Range."""
    sl, sc = source.position(span.start)
    el, ec = source.position(span.end)
    return lsp.Range(
        start=lsp.Position(line=sl - 1, character=sc - 1),
        end=lsp.Position(line=el - 1, character=ec - 1),
    )


def position_to_offset(source: SourceText, line: int, character: int) -> int:
    """Convert a 0-indexed LSP position to an offset into the document."""
    offset = 0
    for i, text in enumerate(source.content.split("\n")):
        if i == line:
            return offset + min(character, len(text.rstrip("\r")))
        offset += len(text) + 1
    return len(source.content)


def _error_diag(source: SourceText, err: MathError) -> lsp.Diagnostic:
    diag = err.to_diagnostic()
    return lsp.Diagnostic(
        range=span_to_range(source, err.span),
        severity=_SEVERITY_MAP[diag.severity],
        source="typmath",
        code=diag.code,
        message=f"[{diag.code}] {diag.message}",
    )


# ── Per-document state ────────────────────────────────────────────


@dataclass
class DocumentState:
    """Cached analysis results for a single open document."""

    source: SourceText
    segments: list[Segment] = field(default_factory=list)
    diagnostics: list[lsp.Diagnostic] = field(default_factory=list)


@dataclass
class ServerSettings:
    relations: list[str] = field(default_factory=list)
    glyphs: GlyphTable = field(default_factory=GlyphTable)


server = LanguageServer(
    "typmath-lsp", __version__,
    text_document_sync_kind=lsp.TextDocumentSyncKind.Full,
)
_state: dict[str, DocumentState] = {}
_settings = ServerSettings()


def configure(config: TypmathConfig) -> None:
    """Apply project configuration to subsequent analyses."""
    _settings.relations = list(config.parser.relations)
    _settings.glyphs = GlyphTable(config.render.symbols)


def _analyze(uri: str, text: str) -> DocumentState:
    """Scan and parse the document leniently, cache results, return state."""
    ds = DocumentState(source=SourceText(text, uri))
    try:
        ds.segments = parse_document(text, strict=False, relations=_settings.relations)
    except MathError as e:
        # Scanning failed; no segments to work with.
        ds.diagnostics = [_error_diag(ds.source, e)]
    else:
        ds.diagnostics = [_error_diag(ds.source, e) for e in math_errors(ds.segments)]
    logger.debug("analyzed %s: %d diagnostic(s)", uri, len(ds.diagnostics))
    _state[uri] = ds
    return ds


def _located_nodes(ds: DocumentState):
    """Yield (node, document span) for every node of every parsed math segment."""
    for seg in ds.segments:
        if seg.tree is None:
            continue
        for node in walk(seg.tree):
            if node.span is not None:
                yield node, node.span.shifted(seg.body_start)


def node_at(ds: DocumentState, offset: int) -> tuple[MathNode, Span] | None:
    """Return the innermost symbol or call covering ``offset``."""
    best: tuple[MathNode, Span] | None = None
    for node, span in _located_nodes(ds):
        if not isinstance(node, (Symbol, Call)):
            continue
        if span.start <= offset < span.end:
            if best is None or (span.end - span.start) < (best[1].end - best[1].start):
                best = (node, span)
    return best


def glyph_hints(ds: DocumentState) -> list[lsp.InlayHint]:
    """Inlay hints placing each symbol's glyph right after its source text."""
    renderer = UnicodeRenderer(_settings.glyphs)
    hints: list[lsp.InlayHint] = []
    for node, span in _located_nodes(ds):
        if isinstance(node, Symbol):
            glyph = _settings.glyphs.lookup(node.name)
            if glyph is None or glyph == node.name:
                continue
        elif isinstance(node, Call):
            glyph = renderer.render(node)
            if glyph.startswith(f"{node.callee}("):
                continue
        else:
            continue
        range_ = span_to_range(ds.source, span)
        hints.append(lsp.InlayHint(
            position=range_.end,
            label=glyph,
            padding_left=True,
        ))
    return hints


# ── LSP Feature Handlers ─────────────────────────────────────────


def _publish(uri: str, ds: DocumentState) -> None:
    server.text_document_publish_diagnostics(lsp.PublishDiagnosticsParams(
        uri=uri,
        diagnostics=ds.diagnostics,
    ))


@server.feature(lsp.TEXT_DOCUMENT_DID_OPEN)
def did_open(params: lsp.DidOpenTextDocumentParams) -> None:
    uri = params.text_document.uri
    _publish(uri, _analyze(uri, params.text_document.text))


@server.feature(lsp.TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: lsp.DidChangeTextDocumentParams) -> None:
    uri = params.text_document.uri
    # Full sync: the last change holds the whole text
    text = params.content_changes[-1].text if params.content_changes else ""
    _publish(uri, _analyze(uri, text))


@server.feature(lsp.TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: lsp.DidCloseTextDocumentParams) -> None:
    _state.pop(params.text_document.uri, None)


@server.feature(lsp.TEXT_DOCUMENT_HOVER)
def hover(params: lsp.HoverParams) -> lsp.Hover | None:
    ds = _state.get(params.text_document.uri)
    if ds is None:
        return None
    offset = position_to_offset(ds.source, params.position.line, params.position.character)
    found = node_at(ds, offset)
    if found is None:
        return None

    node, span = found
    if isinstance(node, Symbol):
        glyph = _settings.glyphs.lookup(node.name)
        if glyph is None:
            return None
        content = f"**symbol** `{node.name}` → {glyph}"
    else:
        content = f"**{node.callee}** → {UnicodeRenderer(_settings.glyphs).render(node)}"
    return lsp.Hover(
        contents=lsp.MarkupContent(kind=lsp.MarkupKind.Markdown, value=content),
        range=span_to_range(ds.source, span),
    )


@server.feature(lsp.TEXT_DOCUMENT_INLAY_HINT)
def inlay_hint(params: lsp.InlayHintParams) -> list[lsp.InlayHint] | None:
    ds = _state.get(params.text_document.uri)
    if ds is None:
        return None
    first = params.range.start.line
    last = params.range.end.line
    return [h for h in glyph_hints(ds) if first <= h.position.line <= last]


# ── Entry point ──────────────────────────────────────────────────


def main(config: TypmathConfig | None = None) -> None:
    """Start the typmath language server on stdio."""
    if config is not None:
        configure(config)
    server.start_io()
