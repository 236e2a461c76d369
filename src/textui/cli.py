"""
textui command line.

Commands:
  render    Print the HTML fragment for a document
  css       Print the theme CSS block
  validate  Check a document against the component contract
  export    Write a standalone HTML file (or a React / Pug projection)
  preview   Serve a live preview that follows file changes
"""

from __future__ import annotations

import logging
import platform
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from textui._version import __version__
from textui.config import TextUISettings, load_settings
from textui.core.errors import TextUIError
from textui.core.parser import parse
from textui.log import setup_logging
from textui.runtime.pipeline import RenderPipeline
from textui.runtime.session import ExportService, LastKnownGood
from textui.surfaces.export import ExportFormat
from textui.themes.css_generator import emit

logger = logging.getLogger(__name__)

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

app = typer.Typer(
    help="""TextUI – render YAML UI documents to HTML

  • Inspect: validate, render, css
  • Deliver: export (HTML, React, Pug), preview (live, follows edits)
""",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"textui {__version__}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version information",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
    log_file: Path | None = typer.Option(None, "--log-file", help="Also write JSONL logs here"),
    project: Path = typer.Option(
        Path("."), "--project", "-p", help="Directory containing textui.toml"
    ),
) -> None:
    """TextUI CLI main callback for global options."""
    setup_logging(logging.DEBUG if verbose else logging.INFO, log_file)
    try:
        ctx.obj = load_settings(project.resolve())
    except TextUIError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)


# =============================================================================
# Helpers
# =============================================================================


def _settings(ctx: typer.Context) -> TextUISettings:
    if isinstance(ctx.obj, TextUISettings):
        return ctx.obj
    return TextUISettings()


def _read_document(path: Path) -> bytes:
    """Raw document bytes; decoding happens in the parser."""
    try:
        return path.read_bytes()
    except OSError as e:
        _fail(path, f"cannot read file: {e.strerror or e}")
        raise typer.Exit(code=1)


def _fail(source: Path, error: object) -> None:
    err_console.print(f"[red]{escape(str(source))}: {escape(str(error))}[/red]")


def _pipeline(settings: TextUISettings, theme: Path | None) -> RenderPipeline:
    """Pipeline with the theme applied: --theme wins, then the configured file if present."""
    pipeline = RenderPipeline()
    if theme is not None:
        pipeline.load_theme_file(theme)
    elif settings.theme_path.exists():
        pipeline.load_theme_file(settings.theme_path)
    return pipeline


_THEME_OPTION = typer.Option(None, "--theme", "-t", help="Theme file (overrides textui.toml)")


# =============================================================================
# Commands
# =============================================================================


@app.command("validate")
def validate_command(
    document: Path = typer.Argument(..., help="TextUI YAML document"),
) -> None:
    """Parse a document and report the first contract violation, if any."""
    raw = _read_document(document)
    try:
        doc = parse(raw)
    except TextUIError as e:
        _fail(document, e)
        raise typer.Exit(code=1)

    node_count = sum(1 for _ in doc.walk()) - 1
    console.print(f"[green]{escape(str(document))}: OK ({node_count} components)[/green]")


@app.command("render")
def render_command(
    ctx: typer.Context,
    document: Path = typer.Argument(..., help="TextUI YAML document"),
    theme: Path | None = _THEME_OPTION,
) -> None:
    """Print the rendered HTML fragment."""
    pipeline = _pipeline(_settings(ctx), theme)
    outcome = pipeline.run(_read_document(document))
    if not outcome.ok or outcome.fragment is None:
        _fail(document, outcome.error)
        raise typer.Exit(code=1)
    typer.echo(outcome.fragment.markup)


@app.command("css")
def css_command(
    ctx: typer.Context,
    theme: Path | None = _THEME_OPTION,
    minimal: Path | None = typer.Option(
        None,
        "--minimal",
        help="Only emit the custom properties this document references",
    ),
) -> None:
    """Print the theme CSS block (custom properties plus component rules)."""
    pipeline = _pipeline(_settings(ctx), theme)
    if minimal is None:
        typer.echo(pipeline.css_block)
        return

    outcome = pipeline.run(_read_document(minimal))
    if not outcome.ok or outcome.fragment is None:
        _fail(minimal, outcome.error)
        raise typer.Exit(code=1)
    typer.echo(emit(pipeline.theme, only=outcome.fragment.variables))


@app.command("export")
def export_command(
    ctx: typer.Context,
    document: Path = typer.Argument(..., help="TextUI YAML document"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output file"),
    theme: Path | None = _THEME_OPTION,
    title: str | None = typer.Option(None, "--title", help="Document title fallback"),
    fmt: ExportFormat | None = typer.Option(
        None, "--format", "-f", help="html (default), react or pug", case_sensitive=False
    ),
) -> None:
    """Write a standalone export: HTML (no scripts, no external references), TSX or Pug."""
    settings = _settings(ctx)
    fmt = fmt or settings.export.format
    pipeline = _pipeline(settings, theme)
    slot = LastKnownGood()
    slot.record(pipeline.run(_read_document(document)))

    exporter = ExportService(slot, default_title=title or settings.export.title)
    target = output or settings.export_path_for(document, fmt)
    try:
        path = exporter.export(target, fmt)
    except TextUIError as e:
        _fail(document, e)
        raise typer.Exit(code=1)
    console.print(f"[green]Exported {escape(str(path))}[/green]")


@app.command("preview")
def preview_command(
    ctx: typer.Context,
    document: Path = typer.Argument(..., help="TextUI YAML document"),
    host: str | None = typer.Option(None, "--host", help="Host to bind to"),
    port: int | None = typer.Option(None, "--port", help="Port to bind to"),
    theme: Path | None = _THEME_OPTION,
) -> None:
    """Serve a live preview that re-renders on document and theme changes."""
    from textui.runtime.dev_server import ClientHub, PreviewServer
    from textui.runtime.hot_reload import PreviewReloader
    from textui.runtime.session import PreviewSession

    settings = _settings(ctx)

    hub = ClientHub()
    session = PreviewSession(
        RenderPipeline(),
        transport=hub.broadcast,
        export_target=settings.export_path_for(document),
        export_title=settings.export.title,
        export_format=settings.export.format,
    )
    reloader = PreviewReloader(
        session,
        document_path=document.resolve(),
        theme_path=(theme or settings.theme_path).resolve(),
        poll_interval=settings.preview.poll_interval,
        debounce=settings.preview.debounce,
    )
    server = PreviewServer(
        session,
        hub,
        host=host or settings.preview.host,
        port=port if port is not None else settings.preview.port,
    )

    reloader.start()
    console.print(f"[bold]Preview:[/bold] {server.url}  (Ctrl+C to stop)")
    try:
        server.start()
    finally:
        reloader.stop()


def main(argv: list[str] | None = None) -> None:
    app(args=argv if argv is not None else sys.argv[1:], standalone_mode=True)


if __name__ == "__main__":
    main()
