"""Static discovery of imported modules in code cell source.

This is a line-oriented pattern scan, not a parser. Known blind spots:

- imports inside string literals or comments that start a line are counted
- ``import a, b`` yields only ``a``
- conditional imports are treated like any other import line
- dynamic imports (``__import__``, ``importlib.import_module``) are missed
"""

import re
from typing import Iterator

IMPORT_PATTERN = re.compile(r"^\s*(?:from\s+([^\s,;]+)|import\s+([^\s,;]+))", re.MULTILINE)


def top_level_name(module: str) -> str:
    """Return the first dot-separated segment of a module path.

    Relative imports (``.pkg``, ``..``) give an empty string.
    """
    return module.split(".", 1)[0]


def iter_dependencies(code: str) -> Iterator[str]:
    """Yield top-level module names in order of first appearance.

    Args:
        code: Source text of a code cell

    Yields:
        str: Each distinct top-level module name
    """
    seen: set[str] = set()
    for match in IMPORT_PATTERN.finditer(code):
        module = match.group(1) or match.group(2)
        name = top_level_name(module)
        # relative import
        if not name or name in seen:
            continue
        seen.add(name)
        yield name


def extract_dependencies(code: str) -> set[str]:
    """Collect the top-level modules imported by a piece of code.

    Args:
        code: Source text of a code cell

    Returns:
        set[str]: Top-level module names; empty when nothing matches
    """
    return set(iter_dependencies(code))
