"""Data models for notebook documents and their rendered cells."""

from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class NotebookDocument(BaseModel):
    """A notebook that passed structural validation.

    Cells are kept as raw mappings; each one is checked when it is rendered
    so a single malformed cell cannot sink the whole document.

    Attributes:
        cells: Ordered cell mappings as read from the document
        metadata: Notebook metadata dictionary
    """

    cells: list[Any]
    metadata: dict = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @property
    def language(self) -> str | None:
        """Kernel language declared in the metadata, if any."""
        for key, field in (("kernelspec", "language"), ("language_info", "name")):
            section = self.metadata.get(key)
            value = section.get(field) if isinstance(section, Mapping) else None
            if isinstance(value, str) and value:
                return value
        return None


class RenderedMarkdown(BaseModel):
    """A markdown cell turned into display markup.

    Attributes:
        index: Position of the cell in the notebook
        body: Markup produced by the markdown renderer
    """

    kind: Literal["markdown"] = "markdown"
    index: int
    body: str

    model_config = ConfigDict(frozen=True)


class RenderedCode(BaseModel):
    """A code cell decorated with its source and saved outputs.

    Attributes:
        index: Position of the cell in the notebook
        source: Joined cell source, unexecuted
        outputs: Preformatted text for each displayed output, in order
    """

    kind: Literal["code"] = "code"
    index: int
    source: str
    outputs: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class UnsupportedCell(BaseModel):
    """Placeholder for a cell that could not be rendered.

    Attributes:
        index: Position of the cell in the notebook
        cell_type: The cell's declared type, if it had one
        reason: Human-readable explanation shown in place of the cell
    """

    kind: Literal["unsupported"] = "unsupported"
    index: int
    cell_type: str | None = None
    reason: str = "Unsupported cell type"

    model_config = ConfigDict(frozen=True)


RenderedCell = Annotated[
    Union[RenderedMarkdown, RenderedCode, UnsupportedCell],
    Field(discriminator="kind"),
]
