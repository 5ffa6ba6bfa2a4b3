"""nbenv - Render Jupyter notebooks and provision their environments.

Walks the code cells of a notebook, collects the top-level modules they
import, and publishes them as an environment manifest for the execution host.
"""

__version__ = "0.1.0"


class NbEnvError(Exception):
    """Base exception for all nbenv errors."""

    pass


class AcquisitionError(NbEnvError):
    """Raised when a notebook cannot be read or fetched."""

    pass


class InvalidStructure(NbEnvError):
    """Raised when a document lacks a valid cell sequence."""

    pass


class InvalidCell(NbEnvError):
    """Raised when a single cell is malformed.

    Attributes:
        index: Position of the offending cell in the notebook
    """

    def __init__(self, message: str, index: int):
        super().__init__(message)
        self.index = index


class ConfigurationError(NbEnvError):
    """Raised when configuration is invalid or missing."""

    pass
