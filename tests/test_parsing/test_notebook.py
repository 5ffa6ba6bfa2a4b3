"""Tests for notebook validation."""

import nbformat
import pytest

from nbenv import InvalidStructure
from nbenv.parsing.notebook import NotebookValidator, validate_notebook


class TestNotebookValidator:
    """Tests for NotebookValidator class."""

    def test_validate_valid_notebook(self, sample_notebook_data):
        """Test validating a well-formed notebook."""
        notebook = NotebookValidator().validate(sample_notebook_data)

        assert len(notebook.cells) == 4
        assert notebook.metadata["kernelspec"]["name"] == "python3"
        assert notebook.language == "python"

    def test_missing_cells(self):
        """Test a document without cells is rejected."""
        with pytest.raises(InvalidStructure, match="Invalid notebook structure"):
            validate_notebook({"metadata": {}})

    @pytest.mark.parametrize("cells", [None, "cells", {"0": {}}, 42])
    def test_cells_not_a_list(self, cells):
        """Test a non-list cells value is rejected."""
        with pytest.raises(InvalidStructure):
            validate_notebook({"cells": cells})

    @pytest.mark.parametrize("doc", [None, [], "notebook", 3.5])
    def test_document_not_an_object(self, doc):
        """Test a document that isn't a JSON object is rejected."""
        with pytest.raises(InvalidStructure, match="expected a JSON object"):
            validate_notebook(doc)

    def test_empty_cell_list_is_valid(self):
        """Test an empty notebook passes validation."""
        notebook = validate_notebook({"cells": []})
        assert notebook.cells == []
        assert notebook.metadata == {}

    def test_malformed_cells_pass_validation(self):
        """Test individual cells aren't checked at this stage."""
        notebook = validate_notebook({"cells": [42, {"cell_type": "code"}]})
        assert len(notebook.cells) == 2

    def test_non_dict_metadata_is_dropped(self):
        """Test junk metadata is replaced with an empty mapping."""
        notebook = validate_notebook({"cells": [], "metadata": "junk"})
        assert notebook.metadata == {}

    def test_language_from_language_info(self):
        """Test language falls back to language_info."""
        notebook = validate_notebook({"cells": [], "metadata": {"language_info": {"name": "julia"}}})
        assert notebook.language == "julia"


class TestStrictSchema:
    """Tests for nbformat schema validation."""

    def test_strict_accepts_real_notebook(self):
        """Test a notebook built by nbformat passes the schema."""
        nb = nbformat.v4.new_notebook()
        nb.cells.append(nbformat.v4.new_markdown_cell("# Title"))
        nb.cells.append(nbformat.v4.new_code_cell("import numpy"))

        doc = nbformat.reads(nbformat.writes(nb), as_version=nbformat.NO_CONVERT)
        notebook = NotebookValidator(strict_schema=True).validate(doc)

        assert len(notebook.cells) == 2

    def test_strict_rejects_schema_violation(self):
        """Test strict mode rejects a document the schema doesn't allow."""
        doc = {
            "cells": [{"cell_type": "code", "source": "x = 1"}],
            "metadata": {},
            "nbformat": 4,
            "nbformat_minor": 5,
        }
        with pytest.raises(InvalidStructure, match="Invalid notebook structure"):
            NotebookValidator(strict_schema=True).validate(doc)

    @pytest.mark.parametrize(
        "versions",
        [
            {"nbformat": "x", "nbformat_minor": 5},
            {"nbformat": 4, "nbformat_minor": "5"},
            {"nbformat": True, "nbformat_minor": 5},
            {"nbformat_minor": 5},
            {"nbformat": 4.0, "nbformat_minor": 5},
        ],
    )
    def test_strict_rejects_bad_version(self, versions):
        """Test a non-integer or missing version is reported as a structure error."""
        doc = {"cells": [], "metadata": {}, **versions}
        with pytest.raises(InvalidStructure, match="must be an integer"):
            validate_notebook(doc, strict_schema=True)

    @pytest.mark.parametrize("cell", [42, "code", None])
    def test_strict_rejects_non_object_cell(self, cell):
        """Test a cell that isn't an object fails strict validation cleanly."""
        doc = {"cells": [cell], "metadata": {}, "nbformat": 4, "nbformat_minor": 5}
        with pytest.raises(InvalidStructure, match="cell 0 is not an object"):
            validate_notebook(doc, strict_schema=True)

    def test_lenient_by_default(self):
        """Test the same document passes without strict mode."""
        doc = {"cells": [{"cell_type": "code", "source": "x = 1"}]}
        assert len(validate_notebook(doc).cells) == 1


class TestNotebookLanguage:
    """Tests for NotebookDocument.language."""

    @pytest.mark.parametrize(
        "metadata",
        [
            {"kernelspec": "python3"},
            {"kernelspec": ["python"], "language_info": 3},
            {"kernelspec": {"language": 7}},
            {"kernelspec": {"language": ""}},
        ],
    )
    def test_malformed_sections_give_none(self, metadata):
        """Test junk kernel metadata doesn't raise."""
        assert validate_notebook({"cells": [], "metadata": metadata}).language is None

    def test_falls_through_malformed_kernelspec(self):
        metadata = {"kernelspec": "python3", "language_info": {"name": "python"}}
        assert validate_notebook({"cells": [], "metadata": metadata}).language == "python"
