"""Command-line interface for nbenv."""

import json
import logging
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from nbenv import InvalidCell, NbEnvError, __version__
from nbenv.acquisition import load_notebook, resolve_sample
from nbenv.config import NbEnvConfig, get_config
from nbenv.output.writer import OutputWriter
from nbenv.pipeline import NotebookPipeline
from nbenv.preview.terminal import TerminalPreview
from nbenv.rendering import cell_source

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger("nbenv.cli")


def _setup_logging(level: str) -> None:
    """Route log records to stderr through Rich."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        datefmt="%H:%M:%S",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def _fail(title: str, message: str) -> None:
    """Print an error panel and exit with status 1."""
    console.print()
    console.print(
        Panel.fit(
            f"[red]Error:[/red] {escape(message)}",
            border_style="red",
            title=f"[bold red]{title}[/bold red]",
        )
    )
    sys.exit(1)


def _load(source: Optional[str], sample: Optional[str], config: NbEnvConfig) -> tuple[Any, str]:
    """Acquire a notebook from a path, URL, or named sample.

    Returns:
        tuple: Parsed document and a label describing where it came from
    """
    if sample:
        url = resolve_sample(sample, config)
        return load_notebook(url, timeout=config.fetch_timeout), url
    if not source:
        raise click.UsageError("Provide a SOURCE path/URL or --sample NAME")
    return load_notebook(source, timeout=config.fetch_timeout), source


def _markdown_sources(doc: Any) -> dict[int, str]:
    """Raw markdown of each readable markdown cell, keyed by index."""
    sources: dict[int, str] = {}
    cells = doc.get("cells") if isinstance(doc, Mapping) else None
    for index, cell in enumerate(cells or []):
        if isinstance(cell, Mapping) and cell.get("cell_type") == "markdown":
            try:
                sources[index] = cell_source(cell, index)
            except InvalidCell:
                continue
    return sources


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level (default: from config or WARNING)",
)
def main(log_level: Optional[str]):
    """nbenv - Render notebooks and provision their environments."""
    try:
        level = log_level or get_config().log_level
    except NbEnvError:
        level = "WARNING"
    _setup_logging(level)


@main.command()
@click.argument("source", required=False)
@click.option("--sample", "-s", type=str, default=None, help="Render a named sample notebook")
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output file path (default: SOURCE name with format extension)",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["html", "json", "text"]),
    default=None,
    help="Output format (default: from config or html)",
)
@click.option(
    "--manifest",
    "-m",
    type=click.Path(path_type=Path),
    default=None,
    help="File receiving the environment manifest (default: from config)",
)
@click.option(
    "--manifest-format",
    type=click.Choice(["py-env", "requirements"]),
    default=None,
    help="Manifest line format (default: from config or py-env)",
)
@click.option("--preview/--no-preview", default=True, help="Show a terminal preview")
@click.option("--compact", is_flag=True, help="Preview only the dependency list")
def render(
    source: Optional[str],
    sample: Optional[str],
    output: Optional[Path],
    format: Optional[str],
    manifest: Optional[Path],
    manifest_format: Optional[str],
    preview: bool,
    compact: bool,
):
    """Render a notebook and publish its environment manifest.

    SOURCE: Path or http(s) URL of the .ipynb file
    """
    try:
        config = get_config()
        overrides: dict[str, Any] = {}
        if manifest:
            overrides["manifest_path"] = str(manifest)
        if manifest_format:
            overrides["manifest_format"] = manifest_format
        if overrides:
            config = config.model_copy(update=overrides)

        doc, label = _load(source, sample, config)
        logger.debug("Loaded notebook from %s", label)
        result = NotebookPipeline.from_config(config).process(doc)

        output_format = format or config.output_format
        stem = Path(label.rstrip("/").rsplit("/", 1)[-1]).stem or "notebook"
        output_path = output or Path(f"{stem}.{output_format}")

        writer = OutputWriter(manifest_format=config.manifest_format)
        writer.write(result, output_path, format=output_format, title=stem)

        if compact:
            TerminalPreview(console).show_compact(result)
        elif preview:
            TerminalPreview(console).show(result, label, _markdown_sources(doc))

        console.print()
        console.print(
            Panel.fit(
                f"[green]Success![/green]\n\n"
                f"Cells: [bold]{len(result.cells)}[/bold], "
                f"dependencies: [bold]{len(result.manifest)}[/bold]\n\n"
                f"Output: [yellow]{escape(str(output_path))}[/yellow]\n"
                f"Manifest: [yellow]{escape(config.manifest_path or '(in memory)')}[/yellow]",
                border_style="green",
                title=f"[bold green]{escape(stem)}[/bold green]",
            )
        )

    except NbEnvError as e:
        _fail("Render Failed", str(e))
    except OSError as e:
        _fail("Render Failed", f"Could not write output: {e}")


@main.command()
@click.argument("source", required=False)
@click.option("--sample", "-s", type=str, default=None, help="Use a named sample notebook")
@click.option(
    "--format",
    "-f",
    type=click.Choice(["text", "json", "py-env"]),
    default="text",
    help="Output format (default: text)",
)
def deps(source: Optional[str], sample: Optional[str], format: str):
    """Print the modules a notebook imports.

    SOURCE: Path or http(s) URL of the .ipynb file
    """
    try:
        config = get_config()
        doc, _ = _load(source, sample, config)
        result = NotebookPipeline.from_config(config).process(doc)
    except NbEnvError as e:
        _fail("Dependency Scan Failed", str(e))
        return

    if format == "json":
        click.echo(json.dumps(result.dependencies, indent=2))
    elif format == "py-env":
        for line in result.manifest.lines("py-env"):
            click.echo(line)
    else:
        for dep in result.dependencies:
            click.echo(dep)


@main.command()
def samples():
    """List the configured sample notebooks."""
    try:
        config = get_config()
    except NbEnvError as e:
        _fail("Configuration Error", str(e))
        return

    if not config.samples:
        console.print("[yellow]No samples configured.[/yellow]")
        return

    for name, url in sorted(config.samples.items()):
        console.print(f"  [cyan]•[/cyan] [bold]{escape(name)}[/bold]")
        console.print(f"    [dim]{escape(url)}[/dim]")


@main.command()
def config_show():
    """Show current configuration."""
    try:
        config = get_config()
    except NbEnvError as e:
        _fail("Configuration Error", str(e))
        return

    console.print(Panel.fit("[bold cyan]nbenv Configuration[/bold cyan]", border_style="cyan"))
    console.print()
    console.print(f"[cyan]Manifest Path:[/cyan] {escape(config.manifest_path or '(in memory)')}")
    console.print(f"[cyan]Manifest Format:[/cyan] {config.manifest_format}")
    console.print(f"[cyan]Output Format:[/cyan] {config.output_format}")
    console.print(f"[cyan]Markdown Format:[/cyan] {config.markdown_format}")
    console.print(f"[cyan]Markdown Width:[/cyan] {config.markdown_width}")
    console.print(f"[cyan]Fetch Timeout:[/cyan] {config.fetch_timeout}s")
    console.print(f"[cyan]Strict Schema:[/cyan] {config.strict_schema}")
    console.print(f"[cyan]Log Level:[/cyan] {config.log_level}")
    console.print(f"[cyan]Samples:[/cyan] {len(config.samples)}")


if __name__ == "__main__":
    main()
