"""Monkey front-end CLI."""

from __future__ import annotations

from pathlib import Path

import click

from monkey import __version__
from monkey.ast_nodes import Program
from monkey.config import MonkeyConfig, find_config, load_config
from monkey.errors import CompileError, Diagnostic, DiagnosticRenderer
from monkey.formatter import render
from monkey.lexer import Lexer
from monkey.parser import Parser
from monkey.source import SourceText
from monkey.tokens import Token, TokenKind


def _load_project(path: Path) -> tuple[MonkeyConfig, Path]:
    """Return the config governing ``path`` and its project directory."""
    try:
        config_path = find_config(path)
    except FileNotFoundError:
        return MonkeyConfig(), (path if path.is_dir() else path.parent)
    return load_config(config_path), config_path.parent


def _renderer(ctx: click.Context, config: MonkeyConfig) -> DiagnosticRenderer:
    color = ctx.obj.get("color") if ctx.obj else None
    if color is None:
        color = config.diagnostics.color
    return DiagnosticRenderer(color=color)


def _report(renderer: DiagnosticRenderer, diagnostics: list[Diagnostic],
            text: SourceText) -> None:
    for diag in diagnostics:
        click.echo(renderer.render(diag, text), err=True)


def _parse_text(text: SourceText) -> tuple[Program | None, list[Diagnostic]]:
    """Parse source text; return the program (if any) and all diagnostics."""
    lexer = Lexer(text.content, text.filename)
    try:
        program = Parser(lexer).parse_program()
    except CompileError as e:
        return None, lexer.diagnostics + e.diagnostics
    return program, lexer.diagnostics


def _echo_tokens(source: str, filename: str) -> list[Diagnostic]:
    lexer = Lexer(source, filename)
    for tok in lexer.tokens():
        if tok.kind == TokenKind.EOF:
            break
        click.echo(
            f"token: start: {tok.span.start} end: {tok.span.end}, kind: {tok}, "
            f"literal value: {tok.span.text(source)}"
        )
    return lexer.diagnostics


@click.group()
@click.version_option(__version__, prog_name="monkey")
@click.option("--color/--no-color", default=None, help="Force colored diagnostics on or off.")
@click.pass_context
def main(ctx: click.Context, color: bool | None) -> None:
    """The Monkey programming language front end."""
    ctx.ensure_object(dict)
    ctx.obj["color"] = color


@main.command()
@click.pass_context
def repl(ctx: click.Context) -> None:
    """Tokenize lines typed on stdin; an empty line exits."""
    config, _ = _load_project(Path.cwd())
    renderer = _renderer(ctx, config)
    click.echo("Welcome to the Monkey REPL!")
    for line in click.get_text_stream("stdin"):
        if not line.rstrip():
            break
        text = SourceText(line, "<repl>")
        _report(renderer, _echo_tokens(line, "<repl>"), text)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def tokens(ctx: click.Context, file: str) -> None:
    """List the tokens of a Monkey source file."""
    text = SourceText.from_path(Path(file))
    config, _ = _load_project(Path(file))
    _report(_renderer(ctx, config), _echo_tokens(text.content, text.filename), text)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def parse(ctx: click.Context, file: str) -> None:
    """Print the canonical, fully parenthesized form of a source file."""
    text = SourceText.from_path(Path(file))
    config, _ = _load_project(Path(file))
    program, diagnostics = _parse_text(text)
    _report(_renderer(ctx, config), diagnostics, text)
    if program is None:
        raise SystemExit(1)
    click.echo(render(program))


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def view(ctx: click.Context, file: str) -> None:
    """View the AST of a Monkey source file."""
    text = SourceText.from_path(Path(file))
    config, _ = _load_project(Path(file))
    program, diagnostics = _parse_text(text)
    if program is None:
        _report(_renderer(ctx, config), diagnostics, text)
        raise SystemExit(1)
    _dump_ast(program, 0)


@main.command()
@click.argument("path", default=".", type=click.Path(exists=True))
@click.pass_context
def check(ctx: click.Context, path: str) -> None:
    """Parse every source file of a Monkey project."""
    config, project_dir = _load_project(Path(path))
    renderer = _renderer(ctx, config)
    name = config.project.name
    click.echo(f"checking {name}...")

    src_dir = project_dir / config.project.src
    if not src_dir.is_dir():
        src_dir = project_dir  # fallback to project root

    files = sorted({
        f for ext in config.project.extensions for f in src_dir.rglob(f"*{ext}")
    })
    if not files:
        click.echo("warning: no source files found", err=True)
        return

    had_errors = False
    for source_file in files:
        text = SourceText.from_path(source_file)
        program, diagnostics = _parse_text(text)
        _report(renderer, diagnostics, text)
        if program is None:
            had_errors = True

    if had_errors:
        raise SystemExit(1)
    click.echo(f"checked {name}: {len(files)} file(s), no errors")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def highlight(file: str) -> None:
    """Print a source file with terminal syntax highlighting."""
    from pygments import highlight as pygments_highlight
    from pygments.formatters import TerminalFormatter

    from monkey.highlight import MonkeyLexer

    source = Path(file).read_text()
    click.echo(pygments_highlight(source, MonkeyLexer(), TerminalFormatter()), nl=False)


@main.command()
def lsp() -> None:
    """Start the Monkey language server."""
    from monkey.lsp import main as lsp_main

    lsp_main()


def _dump_ast(node: object, depth: int) -> None:
    """Print a readable AST dump."""
    indent = "  " * depth
    name = type(node).__name__

    if hasattr(node, "__dataclass_fields__"):
        fields = node.__dataclass_fields__  # type: ignore[union-attr]
        click.echo(f"{indent}{name}")
        for field_name in fields:
            if field_name == "span":
                continue
            value = getattr(node, field_name)
            if isinstance(value, Token):
                click.echo(f"{indent}  {field_name}: {value}")
            elif isinstance(value, list):
                if value:
                    click.echo(f"{indent}  {field_name}:")
                    for item in value:
                        _dump_ast(item, depth + 2)
                else:
                    click.echo(f"{indent}  {field_name}: []")
            elif hasattr(value, "__dataclass_fields__"):
                click.echo(f"{indent}  {field_name}:")
                _dump_ast(value, depth + 2)
            elif value is not None:
                click.echo(f"{indent}  {field_name}: {value!r}")
    else:
        click.echo(f"{indent}{name}: {node!r}")
