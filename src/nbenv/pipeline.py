"""Notebook pipeline: validate, render, extract, publish."""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from nbenv import InvalidCell
from nbenv.config import NbEnvConfig
from nbenv.host import ExecutionHost, get_host
from nbenv.models import PipelineResult, RenderedCell, UnsupportedCell
from nbenv.output.manifest import ManifestWriter
from nbenv.parsing import NotebookValidator, iter_dependencies
from nbenv.rendering import CellRenderer, cell_source, create_markdown_renderer

logger = logging.getLogger(__name__)


class NotebookPipeline:
    """Render a notebook and publish the environment it needs.

    Structural problems with the document abort the run before anything is
    rendered or published. Problems with a single cell only replace that
    cell with a placeholder.
    """

    def __init__(
        self,
        renderer: Optional[CellRenderer] = None,
        writer: Optional[ManifestWriter] = None,
        host: Optional[ExecutionHost] = None,
        validator: Optional[NotebookValidator] = None,
    ):
        """Initialize the pipeline.

        Args:
            renderer: Cell renderer (defaults to HTML markdown)
            writer: Manifest writer (defaults to one bound to ``host``)
            host: Execution host receiving the manifest and code hand-off
            validator: Document validator
        """
        self.host = host or (writer.host if writer else get_host())
        self.renderer = renderer or CellRenderer()
        self.writer = writer or ManifestWriter(host=self.host)
        self.validator = validator or NotebookValidator()

    @classmethod
    def from_config(
        cls, config: NbEnvConfig, host: Optional[ExecutionHost] = None
    ) -> "NotebookPipeline":
        """Build a pipeline wired according to configuration.

        Args:
            config: Application configuration
            host: Execution host (defaults to the process-wide host)

        Returns:
            NotebookPipeline: Configured pipeline
        """
        host = host or get_host()
        markdown = create_markdown_renderer(config.markdown_format, width=config.markdown_width)
        return cls(
            renderer=CellRenderer(markdown_renderer=markdown),
            writer=ManifestWriter(
                host=host, path=config.manifest_path, fmt=config.manifest_format
            ),
            host=host,
            validator=NotebookValidator(strict_schema=config.strict_schema),
        )

    def process(self, raw_doc: Any) -> PipelineResult:
        """Process one parsed notebook document.

        Args:
            raw_doc: Parsed notebook JSON

        Returns:
            PipelineResult: Rendered cells and the published manifest

        Raises:
            InvalidStructure: If the document has no valid cell list
        """
        notebook = self.validator.validate(raw_doc)
        logger.info("Rendering notebook with %d cell(s)", len(notebook.cells))

        cells = [self._render_cell(cell, index) for index, cell in enumerate(notebook.cells)]

        dependencies: dict[str, None] = {}
        sources: list[tuple[int, str]] = []
        for index, cell in enumerate(notebook.cells):
            source = self._code_source(cell, index)
            if source is None:
                continue
            sources.append((index, source))
            dependencies.update(dict.fromkeys(iter_dependencies(source)))

        manifest = self.writer.publish(dependencies)
        self.host.load_sources(sources)

        logger.info(
            "Published %d dependency(ies): %s",
            len(manifest),
            ", ".join(manifest.dependencies) or "(none)",
        )
        return PipelineResult(cells=cells, manifest=manifest)

    def _render_cell(self, cell: Any, index: int) -> RenderedCell:
        """Render a cell, degrading to a placeholder if it is malformed."""
        try:
            return self.renderer.render(cell, index)
        except InvalidCell as e:
            logger.warning("Skipping cell %d: %s", index, e)
            cell_type = cell.get("cell_type") if isinstance(cell, Mapping) else None
            return UnsupportedCell(
                index=index,
                cell_type=cell_type if isinstance(cell_type, str) else None,
                reason=str(e),
            )

    def _code_source(self, cell: Any, index: int) -> Optional[str]:
        """Source of a code cell, or None for other cells and unreadable source."""
        if not isinstance(cell, Mapping) or cell.get("cell_type") != "code":
            return None
        try:
            return cell_source(cell, index)
        except InvalidCell:
            return None


def process_notebook(raw_doc: Any, pipeline: Optional[NotebookPipeline] = None) -> PipelineResult:
    """Process a notebook with the given or a default pipeline."""
    return (pipeline or NotebookPipeline()).process(raw_doc)
