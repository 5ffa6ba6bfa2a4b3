"""Terminal preview of rendered notebooks."""

from nbenv.preview.terminal import TerminalPreview

__all__ = ["TerminalPreview"]
