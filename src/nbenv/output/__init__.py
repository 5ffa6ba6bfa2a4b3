"""Writers for manifests and rendered notebooks."""

from nbenv.output.manifest import ManifestWriter
from nbenv.output.writer import OutputWriter

__all__ = ["ManifestWriter", "OutputWriter"]
