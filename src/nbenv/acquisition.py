"""
Acquisition of notebook documents from disk or over HTTP.

Every failure (missing file, malformed JSON, unreachable URL, non-2xx
response) surfaces as AcquisitionError with a plain message the CLI can show
as-is; the original exception is chained for the logs.

Uses only Python stdlib (urllib.request) for fetching.
"""

import json
import logging
import urllib.error
import urllib.request
from pathlib import Path
from typing import Any

from nbenv import AcquisitionError
from nbenv.config import NbEnvConfig

logger = logging.getLogger(__name__)

INVALID_FILE_MESSAGE = "Invalid .ipynb file"
NO_FILE_MESSAGE = "No file selected."
BLANK_URL_MESSAGE = "Please enter a valid URL."
FETCH_FAILED_MESSAGE = "Unable to fetch notebook from the provided URL."


def is_url(source: str) -> bool:
    """Return True when the source looks like an http(s) URL."""
    return source.strip().lower().startswith(("http://", "https://"))


def read_notebook_file(path: Path | str | None) -> Any:
    """Read and parse a notebook file.

    Args:
        path: Path to the .ipynb file

    Returns:
        Parsed JSON document (shape is checked later by the validator)

    Raises:
        AcquisitionError: If no path is given, the file can't be read, or it
            isn't valid JSON
    """
    if not path:
        raise AcquisitionError(NO_FILE_MESSAGE)

    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Error reading notebook %s: %s", path, e)
        raise AcquisitionError(f"{INVALID_FILE_MESSAGE}: {path}") from e


def fetch_notebook(url: str, timeout: float = 30.0) -> Any:
    """Fetch and parse a notebook from a URL.

    Args:
        url: http(s) URL of the notebook
        timeout: Seconds to wait for the server

    Returns:
        Parsed JSON document

    Raises:
        AcquisitionError: If the URL is blank, the request fails, the server
            answers with a non-success status, or the body isn't JSON
    """
    url = (url or "").strip()
    if not url:
        raise AcquisitionError(BLANK_URL_MESSAGE)

    try:
        req = urllib.request.Request(url, headers={"Accept": "application/json"})
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            status = getattr(resp, "status", 200)
            if not 200 <= status < 300:
                logger.error("Failed to fetch notebook. Status: %d", status)
                raise AcquisitionError(FETCH_FAILED_MESSAGE)
            body = resp.read()
        return json.loads(body)
    except urllib.error.HTTPError as e:
        logger.error("Fetching %s failed with HTTP %d", url, e.code)
        raise AcquisitionError(FETCH_FAILED_MESSAGE) from e
    except urllib.error.URLError as e:
        logger.error("Network error fetching %s: %s", url, e.reason)
        raise AcquisitionError(FETCH_FAILED_MESSAGE) from e
    except (TimeoutError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Error fetching %s: %s", url, e)
        raise AcquisitionError(FETCH_FAILED_MESSAGE) from e


def resolve_sample(name: str, config: NbEnvConfig) -> str:
    """Look up the URL of a named sample notebook.

    Raises:
        AcquisitionError: If no sample has that name
    """
    try:
        return config.samples[name]
    except KeyError:
        available = ", ".join(sorted(config.samples)) or "none"
        raise AcquisitionError(f"Unknown sample '{name}' (available: {available})") from None


def load_notebook(source: str | Path, timeout: float = 30.0) -> Any:
    """Load a notebook from a file path or an http(s) URL.

    Args:
        source: Local path or URL
        timeout: Fetch timeout for URLs

    Returns:
        Parsed JSON document
    """
    if isinstance(source, str) and is_url(source):
        logger.info("Fetching notebook from %s", source)
        return fetch_notebook(source, timeout=timeout)
    logger.info("Reading notebook from %s", source)
    return read_notebook_file(source)
