"""Data models for the environment manifest and pipeline results."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from nbenv.models.notebook import RenderedCell

ManifestFormat = Literal["py-env", "requirements"]


class EnvironmentManifest(BaseModel):
    """Declarative list of modules the execution host must provide.

    Order follows first appearance in the notebook, but two manifests with
    the same names compare equal regardless of order.

    Attributes:
        dependencies: Top-level module names, without duplicates
    """

    dependencies: tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)

    @field_validator("dependencies")
    @classmethod
    def drop_duplicates(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Keep the first occurrence of each name."""
        return tuple(dict.fromkeys(v))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EnvironmentManifest):
            return NotImplemented
        return set(self.dependencies) == set(other.dependencies)

    def __hash__(self) -> int:
        return hash(frozenset(self.dependencies))

    def __contains__(self, name: str) -> bool:
        return name in self.dependencies

    def __len__(self) -> int:
        return len(self.dependencies)

    def lines(self, fmt: ManifestFormat = "py-env") -> list[str]:
        """Render one declaration line per dependency.

        Args:
            fmt: ``py-env`` gives dash-prefixed entries, ``requirements``
                gives bare names

        Returns:
            list[str]: Declaration lines in manifest order
        """
        if fmt == "py-env":
            return [f"- {dep}" for dep in self.dependencies]
        elif fmt == "requirements":
            return list(self.dependencies)
        else:
            raise ValueError(f"Unsupported manifest format: {fmt}")

    def to_text(self, fmt: ManifestFormat = "py-env") -> str:
        """Render the manifest as newline-joined declaration lines."""
        return "\n".join(self.lines(fmt))


class PipelineResult(BaseModel):
    """Outcome of rendering one notebook.

    Attributes:
        cells: Rendered cells in document order
        manifest: Manifest published for this notebook
    """

    cells: list[RenderedCell] = Field(default_factory=list)
    manifest: EnvironmentManifest = Field(default_factory=EnvironmentManifest)

    @property
    def dependencies(self) -> list[str]:
        return list(self.manifest.dependencies)
