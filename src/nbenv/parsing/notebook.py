"""Notebook document validation."""

import logging
from collections.abc import Mapping
from typing import Any

import nbformat

from nbenv import InvalidStructure
from nbenv.models import NotebookDocument

logger = logging.getLogger(__name__)

INVALID_STRUCTURE_MESSAGE = "Invalid notebook structure"


class NotebookValidator:
    """Gatekeeper for parsed notebook documents.

    Only the presence of a cell list is required. Individual cells are left
    untouched here and checked when they are rendered.
    """

    def __init__(self, strict_schema: bool = False):
        """Initialize the validator.

        Args:
            strict_schema: Also validate against the nbformat JSON schema
        """
        self.strict_schema = strict_schema

    def validate(self, doc: Any) -> NotebookDocument:
        """Validate a parsed notebook document.

        Args:
            doc: Parsed JSON value of unknown shape

        Returns:
            NotebookDocument: The document with its cell sequence

        Raises:
            InvalidStructure: If the document has no cell list
        """
        if not isinstance(doc, Mapping):
            raise InvalidStructure(f"{INVALID_STRUCTURE_MESSAGE}: expected a JSON object")

        cells = doc.get("cells")
        if cells is None:
            raise InvalidStructure(f"{INVALID_STRUCTURE_MESSAGE}: missing 'cells'")
        if not isinstance(cells, list):
            raise InvalidStructure(f"{INVALID_STRUCTURE_MESSAGE}: 'cells' is not a list")

        if self.strict_schema:
            self._validate_schema(doc)

        metadata = doc.get("metadata")
        if not isinstance(metadata, Mapping):
            metadata = {}

        logger.debug("Validated notebook with %d cell(s)", len(cells))
        return NotebookDocument(cells=list(cells), metadata=dict(metadata))

    def _validate_schema(self, doc: Mapping) -> None:
        """Check the document against the official nbformat schema.

        Args:
            doc: Parsed notebook document

        Raises:
            InvalidStructure: If the schema rejects the document
        """
        # nbformat asserts on these rather than reporting a ValidationError
        for key in ("nbformat", "nbformat_minor"):
            value = doc.get(key)
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidStructure(f"{INVALID_STRUCTURE_MESSAGE}: '{key}' must be an integer")
        for index, cell in enumerate(doc["cells"]):
            if not isinstance(cell, Mapping):
                raise InvalidStructure(f"{INVALID_STRUCTURE_MESSAGE}: cell {index} is not an object")

        try:
            nbformat.validate(nbformat.from_dict(dict(doc)))
        except nbformat.ValidationError as e:
            detail = getattr(e, "message", str(e))
            raise InvalidStructure(f"{INVALID_STRUCTURE_MESSAGE}: {detail}") from e


def validate_notebook(doc: Any, strict_schema: bool = False) -> NotebookDocument:
    """Validate a parsed document with a one-off NotebookValidator."""
    return NotebookValidator(strict_schema=strict_schema).validate(doc)
