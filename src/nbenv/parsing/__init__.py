"""Notebook validation and dependency discovery."""

from nbenv.parsing.imports import extract_dependencies, iter_dependencies
from nbenv.parsing.notebook import NotebookValidator, validate_notebook

__all__ = [
    "extract_dependencies",
    "iter_dependencies",
    "NotebookValidator",
    "validate_notebook",
]
