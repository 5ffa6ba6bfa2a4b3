"""Presentation of individual notebook cells."""

import json
from collections.abc import Mapping
from typing import Any, Optional

from nbenv import InvalidCell
from nbenv.models import RenderedCell, RenderedCode, RenderedMarkdown, UnsupportedCell
from nbenv.rendering.markdown import HtmlMarkdownRenderer, MarkdownRenderer

DATA_OUTPUT_TYPES = ("execute_result", "display_data")


def join_text(value: Any, index: int, field: str = "source") -> str:
    """Join a multiline text field into a single string.

    nbformat stores multiline strings either as one string or as a list of
    fragments; both are accepted.

    Args:
        value: Raw field value from the cell
        index: Cell index, for error reporting
        field: Field name, for error reporting

    Returns:
        str: The concatenated text

    Raises:
        InvalidCell: If the value is missing or not text
    """
    if isinstance(value, str):
        return value
    if isinstance(value, list) and all(isinstance(part, str) for part in value):
        return "".join(value)
    if value is None:
        raise InvalidCell(f"Cell {index} has no '{field}'", index)
    raise InvalidCell(f"Cell {index} has a malformed '{field}'", index)


def cell_source(cell: Any, index: int) -> str:
    """Return the joined source of a cell mapping.

    Raises:
        InvalidCell: If the cell is not a mapping or its source is malformed
    """
    if not isinstance(cell, Mapping):
        raise InvalidCell(f"Cell {index} is not an object", index)
    return join_text(cell.get("source"), index)


class CellRenderer:
    """Turn raw notebook cells into rendered cell descriptions.

    Markdown is delegated to a markdown renderer; code cells are shown with
    their source and saved outputs but never executed here.
    """

    def __init__(self, markdown_renderer: Optional[MarkdownRenderer] = None):
        """Initialize cell renderer.

        Args:
            markdown_renderer: Callable used for markdown cells
                (defaults to HtmlMarkdownRenderer)
        """
        self.markdown_renderer = markdown_renderer or HtmlMarkdownRenderer()

    def render(self, cell: Any, index: int) -> RenderedCell:
        """Render a single cell.

        Args:
            cell: Raw cell mapping from the notebook
            index: Position of the cell in the notebook

        Returns:
            RenderedCell: Markdown, code, or unsupported placeholder

        Raises:
            InvalidCell: If the cell is malformed
        """
        if not isinstance(cell, Mapping):
            raise InvalidCell(f"Cell {index} is not an object", index)

        cell_type = cell.get("cell_type")

        if cell_type == "markdown":
            text = cell_source(cell, index)
            return RenderedMarkdown(index=index, body=self.markdown_renderer(text))

        elif cell_type == "code":
            source = cell_source(cell, index)
            outputs = self._render_outputs(cell.get("outputs"), index)
            return RenderedCode(index=index, source=source, outputs=outputs)

        return UnsupportedCell(
            index=index,
            cell_type=cell_type if isinstance(cell_type, str) else None,
        )

    def _render_outputs(self, outputs: Any, index: int) -> list[str]:
        """Render saved outputs of a code cell.

        Args:
            outputs: Raw ``outputs`` value (may be absent)
            index: Cell index, for error reporting

        Returns:
            list[str]: Preformatted text for each displayed output
        """
        if outputs is None:
            return []
        if not isinstance(outputs, list):
            raise InvalidCell(f"Cell {index} has a malformed 'outputs'", index)

        rendered = []
        for output in outputs:
            if not isinstance(output, Mapping):
                raise InvalidCell(f"Cell {index} has a malformed output", index)

            output_type = output.get("output_type")
            if output_type == "stream":
                rendered.append(join_text(output.get("text"), index, field="text"))
            elif output_type in DATA_OUTPUT_TYPES:
                rendered.append(self._format_data(output.get("data")))
            # Other output types (errors, unknown) are not displayed

        return rendered

    def _format_data(self, data: Any) -> str:
        """Dump a rich output's data bundle as indented JSON."""
        return json.dumps(data, indent=2, ensure_ascii=False, default=str)
