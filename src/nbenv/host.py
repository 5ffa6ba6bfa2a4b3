"""Execution host: the single live manifest and the code hand-off."""

import logging
import threading
from typing import Optional

from nbenv.models import EnvironmentManifest

logger = logging.getLogger(__name__)


class ExecutionHost:
    """Holds what the live execution component sees.

    There is exactly one active manifest at a time. Publishing replaces it
    wholesale; nothing is merged with what was there before. The same holds
    for the code cells handed off for live execution.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._manifest: Optional[EnvironmentManifest] = None
        self._sources: tuple[tuple[int, str], ...] = ()

    @property
    def manifest(self) -> Optional[EnvironmentManifest]:
        """The currently published manifest, or None before the first render."""
        return self._manifest

    @property
    def sources(self) -> tuple[tuple[int, str], ...]:
        """``(cell index, source)`` pairs handed off by the last render."""
        return self._sources

    def install_manifest(self, manifest: EnvironmentManifest) -> Optional[EnvironmentManifest]:
        """Swap in a new manifest in one step.

        Args:
            manifest: Manifest replacing the current one

        Returns:
            Optional[EnvironmentManifest]: The manifest that was replaced
        """
        with self._lock:
            previous, self._manifest = self._manifest, manifest
        logger.info("Installed manifest with %d dependency(ies)", len(manifest))
        return previous

    def load_sources(self, sources: list[tuple[int, str]]) -> None:
        """Replace the code handed off for live execution.

        Args:
            sources: ``(cell index, source)`` pairs in document order
        """
        with self._lock:
            self._sources = tuple(sources)
        logger.debug("Handed off %d code cell(s)", len(sources))

    def clear(self) -> None:
        """Forget the manifest and handed-off sources."""
        with self._lock:
            self._manifest = None
            self._sources = ()


# Process-wide host instance (lazy-loaded)
_host: ExecutionHost | None = None


def get_host() -> ExecutionHost:
    """Get or create the process-wide execution host.

    Returns:
        ExecutionHost: The shared host
    """
    global _host
    if _host is None:
        _host = ExecutionHost()
    return _host


def reset_host() -> None:
    """Drop the process-wide host (useful for testing)."""
    global _host
    _host = None
