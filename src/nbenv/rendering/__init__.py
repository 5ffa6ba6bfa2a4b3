"""Rendering of notebook cells."""

from nbenv.rendering.cells import CellRenderer, cell_source
from nbenv.rendering.markdown import (
    HtmlMarkdownRenderer,
    MarkdownRenderer,
    RichMarkdownRenderer,
    create_markdown_renderer,
)

__all__ = [
    "CellRenderer",
    "cell_source",
    "HtmlMarkdownRenderer",
    "MarkdownRenderer",
    "RichMarkdownRenderer",
    "create_markdown_renderer",
]
