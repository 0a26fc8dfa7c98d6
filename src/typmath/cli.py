"""typmath command line interface."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from typmath import __version__
from typmath.ast_nodes import dump
from typmath.config import TypmathConfig, discover_config
from typmath.document import math_errors, parse_document
from typmath.errors import DiagnosticRenderer, MathError
from typmath.formatter import MathFormatter
from typmath.glyphs import GlyphTable
from typmath.parser import parse_math
from typmath.renderer import UnicodeRenderer
from typmath.scanner import scan as scan_text
from typmath.source import SourceText


def _report(errors: list[MathError], source: SourceText, config: TypmathConfig) -> None:
    renderer = DiagnosticRenderer(color=config.render.color)
    for err in errors:
        click.echo(renderer.render(err.to_diagnostic(), source), err=True)


def _load_source(path: str) -> SourceText:
    return SourceText.from_path(Path(path))


@click.group()
@click.version_option(__version__, prog_name="typmath")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Parse prose with embedded $-delimited math."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def scan(path: str) -> None:
    """List the text and math segments of a document."""
    source = _load_source(path)
    try:
        segments = scan_text(source.content)
    except MathError as e:
        _report([e], source, discover_config(Path(path)))
        raise SystemExit(1)
    for seg in segments:
        click.echo(f"{seg.kind.value:<4} {seg.span} {seg.content!r}")


@main.command()
@click.argument("expr")
def parse(expr: str) -> None:
    """Print the syntax tree of one math expression."""
    config = discover_config()
    try:
        tree = parse_math(expr, relations=config.parser.relations)
    except MathError as e:
        _report([e], SourceText(expr, "<expr>"), config)
        raise SystemExit(1)
    click.echo(dump(tree))


@main.command(name="format")
@click.argument("expr")
def format_cmd(expr: str) -> None:
    """Print a math expression in canonical form."""
    config = discover_config()
    try:
        tree = parse_math(expr, relations=config.parser.relations)
    except MathError as e:
        _report([e], SourceText(expr, "<expr>"), config)
        raise SystemExit(1)
    click.echo(MathFormatter().format(tree))


@main.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
def check(paths: tuple[str, ...]) -> None:
    """Report every malformed math span in the given documents."""
    had_errors = False
    for path in paths:
        config = discover_config(Path(path))
        source = _load_source(path)
        try:
            segments = parse_document(
                source.content, strict=False, relations=config.parser.relations,
            )
        except MathError as e:
            errors = [e]
        else:
            errors = math_errors(segments)
        if errors:
            had_errors = True
            _report(errors, source, config)

    if had_errors:
        raise SystemExit(1)
    click.echo(f"checked {len(paths)} file(s) — no errors")


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def render(path: str) -> None:
    """Print a document with its math replaced by Unicode glyphs."""
    config = discover_config(Path(path))
    source = _load_source(path)
    try:
        segments = parse_document(
            source.content,
            strict=config.document.strict,
            relations=config.parser.relations,
        )
    except MathError as e:
        _report([e], source, config)
        raise SystemExit(1)
    _report(math_errors(segments), source, config)
    renderer = UnicodeRenderer(GlyphTable(config.render.symbols))
    click.echo(renderer.render_document(segments), nl=False)


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def highlight(path: str) -> None:
    """Print a document with terminal syntax highlighting."""
    from pygments import highlight as pygments_highlight
    from pygments.formatters import TerminalFormatter

    from typmath.highlight import TypstMathLexer

    source = _load_source(path)
    click.echo(pygments_highlight(source.content, TypstMathLexer(), TerminalFormatter()), nl=False)


@main.command()
def lsp() -> None:
    """Start the language server (stdio)."""
    from typmath.lsp import main as lsp_main

    lsp_main(discover_config())


if __name__ == "__main__":
    main()
