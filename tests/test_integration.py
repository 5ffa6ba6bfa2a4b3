"""Integration tests for the full nbenv pipeline."""

import json

import nbformat
import pytest

from nbenv.acquisition import load_notebook
from nbenv.host import ExecutionHost
from nbenv.models import RenderedCode, RenderedMarkdown, UnsupportedCell
from nbenv.output.manifest import ManifestWriter
from nbenv.output.writer import OutputWriter
from nbenv.pipeline import NotebookPipeline


@pytest.fixture
def sample_notebook_file(tmp_path):
    """Create a sample notebook file for testing."""
    nb = nbformat.v4.new_notebook()

    nb.cells.append(
        nbformat.v4.new_markdown_cell(
            """# Linear Regression

We fit `y = wx + b` by least squares.

```python
import not_a_dependency
```"""
        )
    )

    nb.cells.append(nbformat.v4.new_code_cell("import numpy as np\nimport matplotlib.pyplot as plt"))

    code_cell = nbformat.v4.new_code_cell(
        """from sklearn.linear_model import LinearRegression
x = np.linspace(0, 10, 100)
print(x.shape)
x.mean()"""
    )
    code_cell.outputs = [
        nbformat.v4.new_output("stream", name="stdout", text="(100,)\n"),
        nbformat.v4.new_output("execute_result", data={"text/plain": "5.0"}, execution_count=1),
        nbformat.v4.new_output("error", ename="Boom", evalue="", traceback=[]),
    ]
    nb.cells.append(code_cell)

    nb.cells.append(nbformat.v4.new_raw_cell("import raw_stuff"))

    notebook_path = tmp_path / "regression.ipynb"
    with open(notebook_path, "w") as f:
        nbformat.write(nb, f)

    return notebook_path


class TestFullPipeline:
    """Integration tests for the complete pipeline."""

    def test_end_to_end(self, sample_notebook_file, tmp_path):
        """Test loading, rendering, publishing and writing a real notebook file."""
        host = ExecutionHost()
        manifest_path = tmp_path / "env" / "py-env.txt"
        pipeline = NotebookPipeline(writer=ManifestWriter(host=host, path=manifest_path))

        # Step 1: Load notebook
        doc = load_notebook(str(sample_notebook_file))
        assert isinstance(doc["cells"][1]["source"], list)

        # Step 2: Process
        result = pipeline.process(doc)

        assert [type(cell) for cell in result.cells] == [
            RenderedMarkdown,
            RenderedCode,
            RenderedCode,
            UnsupportedCell,
        ]
        assert "Linear Regression" in result.cells[0].body
        assert result.cells[1].source == "import numpy as np\nimport matplotlib.pyplot as plt"
        assert result.cells[2].outputs == ["(100,)\n", json.dumps({"text/plain": ["5.0"]}, indent=2)]

        # Step 3: Manifest
        assert result.manifest.dependencies == ("numpy", "matplotlib", "sklearn")
        assert host.manifest == result.manifest
        assert manifest_path.read_text() == "- numpy\n- matplotlib\n- sklearn\n"
        assert [index for index, _ in host.sources] == [1, 2]

        # Step 4: Write page
        page_path = OutputWriter().write(result, tmp_path / "regression.html", title="regression")
        page = page_path.read_text()
        assert page.count('class="cell ') == 4
        assert "<py-env>\n- numpy\n- matplotlib\n- sklearn\n</py-env>" in page

    def test_rerender_replaces_environment(self, sample_notebook_file, tmp_path):
        """Test rendering a second notebook replaces the first one's manifest."""
        host = ExecutionHost()
        manifest_path = tmp_path / "py-env.txt"
        pipeline = NotebookPipeline(writer=ManifestWriter(host=host, path=manifest_path))

        pipeline.process(load_notebook(str(sample_notebook_file)))

        nb = nbformat.v4.new_notebook()
        nb.cells.append(nbformat.v4.new_code_cell("import requests\nrequests.get('https://example.com')"))
        second = tmp_path / "fetch.ipynb"
        nbformat.write(nb, str(second))

        result = pipeline.process(load_notebook(str(second)))

        assert set(result.manifest.dependencies) == {"requests"}
        assert set(host.manifest.dependencies) == {"requests"}
        assert manifest_path.read_text() == "- requests\n"
        assert host.sources == ((0, "import requests\nrequests.get('https://example.com')"),)
