"""Markdown rendering for narrative cells."""

import io
from collections.abc import Sequence
from typing import Protocol

from markdown_it import MarkdownIt
from rich.console import Console
from rich.markdown import Markdown

DEFAULT_EXTENSIONS = ("table", "strikethrough")


class MarkdownRenderer(Protocol):
    """Anything that turns markdown text into display markup."""

    def __call__(self, text: str) -> str: ...


class HtmlMarkdownRenderer:
    """Convert markdown to an HTML fragment with markdown-it.

    The CommonMark preset passes raw HTML in the source through unchanged,
    as notebook front ends do.
    """

    def __init__(self, preset: str = "commonmark", extensions: Sequence[str] = DEFAULT_EXTENSIONS):
        """Initialize markdown renderer.

        Args:
            preset: markdown-it preset name
            extensions: Extra parser rules to enable on top of the preset
        """
        self.md = MarkdownIt(preset)
        if extensions:
            self.md.enable(list(extensions))

    def __call__(self, text: str) -> str:
        return self.md.render(text)


class RichMarkdownRenderer:
    """Render markdown as plain text through a recording Rich console.

    The console never writes to a terminal; its recorded output is exported
    without styles.
    """

    def __init__(self, width: int = 100, code_theme: str = "monokai"):
        """Initialize markdown renderer.

        Args:
            width: Console width used for wrapping
            code_theme: Pygments theme for fenced code blocks
        """
        self.width = width
        self.code_theme = code_theme

    def __call__(self, text: str) -> str:
        console = Console(file=io.StringIO(), record=True, width=self.width)
        console.print(Markdown(text, code_theme=self.code_theme))
        return console.export_text()


def create_markdown_renderer(fmt: str = "html", width: int = 100) -> MarkdownRenderer:
    """Build the markdown renderer for an output markup.

    Args:
        fmt: ``html`` for an HTML fragment, ``text`` for wrapped plain text
        width: Wrapping width for text output

    Returns:
        MarkdownRenderer: Renderer callable

    Raises:
        ValueError: If the format is unknown
    """
    if fmt == "html":
        return HtmlMarkdownRenderer()
    if fmt == "text":
        return RichMarkdownRenderer(width=width)
    raise ValueError(f"Unsupported markdown format: {fmt}")
