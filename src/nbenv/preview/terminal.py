"""Terminal preview for rendered notebooks using Rich."""

from typing import Optional

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from nbenv.models import PipelineResult, RenderedCode, RenderedMarkdown


class TerminalPreview:
    """Generate terminal preview of a rendered notebook using Rich."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize terminal preview.

        Args:
            console: Rich console to use (creates new if None)
        """
        self.console = console or Console()

    def show(
        self,
        result: PipelineResult,
        source: str = "",
        markdown_sources: Optional[dict[int, str]] = None,
    ) -> None:
        """Show the notebook and its manifest in the terminal.

        Args:
            result: Pipeline result to preview
            source: Where the notebook came from, for the header
            markdown_sources: Raw markdown by cell index; when given, markdown
                cells are shown from source instead of their exported body
        """
        markdown_sources = markdown_sources or {}

        # Header
        self.console.print()
        self.console.print(
            Panel.fit(
                f"[bold cyan]Notebook Preview[/bold cyan]\n\n"
                f"Cells: [bold]{len(result.cells)}[/bold]\n"
                f"Dependencies: [bold]{len(result.manifest)}[/bold]\n"
                f"Source: [dim]{escape(source or '-')}[/dim]",
                border_style="cyan",
            )
        )
        self.console.print()

        for cell in result.cells:
            self._show_cell(cell, markdown_sources.get(cell.index))

        self._show_manifest(result)

    def _show_cell(self, cell, markdown_source: Optional[str]) -> None:
        """Show a single cell in the preview.

        Args:
            cell: Rendered cell to show
            markdown_source: Raw markdown for the cell, if known
        """
        if isinstance(cell, RenderedMarkdown):
            body = Markdown(markdown_source) if markdown_source is not None else Text(cell.body)
            self.console.print(
                Panel(
                    body,
                    border_style="white",
                    title=f"[dim]\\[{cell.index}] markdown[/dim]",
                    title_align="left",
                )
            )

        elif isinstance(cell, RenderedCode):
            self.console.print(
                Panel(
                    Syntax(cell.source, "python", line_numbers=False),
                    border_style="blue",
                    title=f"[bold blue]\\[{cell.index}] code[/bold blue]",
                    title_align="left",
                )
            )
            for text in cell.outputs:
                self.console.print(Panel(Text(text), border_style="dim", expand=False))

        else:
            self.console.print(
                Panel(
                    f"[yellow]{escape(cell.reason)}[/yellow]",
                    border_style="yellow",
                    title=f"[yellow]\\[{cell.index}] {escape(cell.cell_type or 'unknown')}[/yellow]",
                    title_align="left",
                )
            )

    def _show_manifest(self, result: PipelineResult) -> None:
        """Show the published dependencies.

        Args:
            result: Pipeline result holding the manifest
        """
        self.console.print()
        self.console.print("[bold]Environment:[/bold]")

        if not result.manifest.dependencies:
            self.console.print("  [dim]No dependencies found[/dim]")
            return

        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Dependency", style="cyan")
        for dep in result.manifest.dependencies:
            table.add_row(f"- {escape(dep)}")

        self.console.print(table)

    def show_compact(self, result: PipelineResult) -> None:
        """Show compact preview (just the dependency list).

        Args:
            result: Pipeline result to preview
        """
        for dep in result.manifest.dependencies:
            self.console.print(escape(dep))
