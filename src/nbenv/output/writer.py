"""Output writing for rendered notebooks in various formats."""

import html
import json
from pathlib import Path
from typing import Literal

from nbenv.models import (
    ManifestFormat,
    PipelineResult,
    RenderedCode,
    RenderedMarkdown,
    UnsupportedCell,
)

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
<div id="notebook-content">
{cells}
</div>
<py-env>
{manifest}
</py-env>
</body>
</html>
"""


class OutputWriter:
    """Write a rendered notebook in various formats.

    Supports an HTML page, JSON, and plain text.
    """

    def __init__(self, manifest_format: ManifestFormat = "py-env"):
        """Initialize output writer.

        Args:
            manifest_format: Line format for the manifest section
        """
        self.manifest_format = manifest_format

    def write(
        self,
        result: PipelineResult,
        output_path: Path | str,
        format: Literal["html", "json", "text"] = "html",
        title: str = "Notebook",
    ) -> Path:
        """Write a rendered notebook to file in specified format.

        Args:
            result: Pipeline result to write
            output_path: Path to output file
            format: Output format (html, json, or text)
            title: Page title for HTML output

        Returns:
            Path: Path to written file
        """
        output_path = Path(output_path)

        if format == "html":
            content = self.render_html(result, title=title)
        elif format == "json":
            content = self.render_json(result)
        elif format == "text":
            content = self.render_text(result)
        else:
            raise ValueError(f"Unsupported format: {format}")

        # Ensure parent directory exists
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            f.write(content)

        return output_path

    def render_html(self, result: PipelineResult, title: str = "Notebook") -> str:
        """Assemble the rendered cells and manifest into one HTML page.

        Args:
            result: Pipeline result to render
            title: Page title

        Returns:
            str: Complete HTML document
        """
        cells = "\n".join(self._cell_html(cell) for cell in result.cells)
        manifest = html.escape(result.manifest.to_text(self.manifest_format))
        return PAGE_TEMPLATE.format(title=html.escape(title), cells=cells, manifest=manifest)

    def _cell_html(self, cell) -> str:
        """Render one cell as a ``div.cell`` element."""
        if isinstance(cell, RenderedMarkdown):
            # Body is already markup from the markdown renderer
            return f'<div class="cell markdown" data-index="{cell.index}">{cell.body}</div>'

        if isinstance(cell, RenderedCode):
            source = html.escape(cell.source)
            outputs = "".join(f"<pre>{html.escape(text)}</pre>" for text in cell.outputs)
            return (
                f'<div class="cell code" data-index="{cell.index}">'
                f'<textarea class="code-editor">{source}</textarea>'
                f"<py-repl>{source}</py-repl>"
                f'<div class="output">{outputs}</div>'
                f"</div>"
            )

        reason = html.escape(cell.reason)
        return f'<div class="cell unsupported" data-index="{cell.index}">{reason}</div>'

    def render_json(self, result: PipelineResult) -> str:
        """Serialize the result as JSON.

        Args:
            result: Pipeline result to serialize

        Returns:
            str: Indented JSON document
        """
        result_dict = {
            "cells": [cell.model_dump() for cell in result.cells],
            "manifest": {
                "dependencies": list(result.manifest.dependencies),
                "lines": result.manifest.lines(self.manifest_format),
            },
        }
        return json.dumps(result_dict, indent=2, ensure_ascii=False)

    def render_text(self, result: PipelineResult) -> str:
        """Render the result as human-readable text.

        Args:
            result: Pipeline result to render

        Returns:
            str: Plain text listing of cells and manifest
        """
        lines = []

        # Header
        lines.append("=" * 60)
        lines.append("NOTEBOOK")
        lines.append("=" * 60)
        lines.append("")

        for cell in result.cells:
            lines.append(f"[Cell {cell.index}: {cell.kind}]")
            if isinstance(cell, RenderedMarkdown):
                lines.append(cell.body)
            elif isinstance(cell, RenderedCode):
                lines.append(cell.source)
                for text in cell.outputs:
                    lines.append("-" * 20)
                    lines.append(text)
            elif isinstance(cell, UnsupportedCell):
                lines.append(cell.reason)
            lines.append("")

        # Manifest
        lines.append("-" * 60)
        lines.append(f"ENVIRONMENT ({len(result.manifest)} dependencies)")
        lines.extend(result.manifest.lines(self.manifest_format))
        lines.append("=" * 60)

        return "\n".join(lines) + "\n"
