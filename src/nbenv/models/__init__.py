"""Data models for nbenv."""

from nbenv.models.notebook import (
    NotebookDocument,
    RenderedCell,
    RenderedCode,
    RenderedMarkdown,
    UnsupportedCell,
)
from nbenv.models.manifest import EnvironmentManifest, ManifestFormat, PipelineResult

__all__ = [
    "NotebookDocument",
    "RenderedCell",
    "RenderedCode",
    "RenderedMarkdown",
    "UnsupportedCell",
    "EnvironmentManifest",
    "ManifestFormat",
    "PipelineResult",
]
