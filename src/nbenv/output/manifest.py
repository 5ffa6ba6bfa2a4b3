"""Publishing of environment manifests."""

import logging
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path
from typing import Optional

from nbenv.host import ExecutionHost, get_host
from nbenv.models import EnvironmentManifest, ManifestFormat

logger = logging.getLogger(__name__)


class ManifestWriter:
    """Replace the live environment manifest.

    Every publish is a full replacement: the host's previous manifest (and
    the mirrored file, when configured) is overwritten, never appended to.
    """

    def __init__(
        self,
        host: Optional[ExecutionHost] = None,
        path: Path | str | None = None,
        fmt: ManifestFormat = "py-env",
    ):
        """Initialize manifest writer.

        Args:
            host: Execution host receiving the manifest (defaults to the
                process-wide host)
            path: Optional file mirroring the manifest
            fmt: Line format used when writing the file
        """
        self.host = host or get_host()
        self.path = Path(path) if path else None
        self.fmt = fmt

    def publish(self, deps: Iterable[str]) -> EnvironmentManifest:
        """Publish a dependency list as the new live manifest.

        Args:
            deps: Top-level module names, in first-appearance order

        Returns:
            EnvironmentManifest: The manifest now visible to the host
        """
        manifest = EnvironmentManifest(dependencies=tuple(deps))

        if self.path is not None:
            self._write_file(manifest, self.path)

        self.host.install_manifest(manifest)
        return manifest

    def _write_file(self, manifest: EnvironmentManifest, path: Path) -> Path:
        """Write the manifest file without ever exposing a partial file.

        Args:
            manifest: Manifest to write
            path: Destination file

        Returns:
            Path: Path to written file
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        text = manifest.to_text(self.fmt)
        if text:
            text += "\n"

        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug("Wrote manifest to %s", path)
        return path
