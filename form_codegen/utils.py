"""Loading form documents from a file, a URL or standard input.

Every loader returns ``(source, data)``: ``source`` names where the
document came from (the CLI uses it for messages and default project
names) and ``data`` is the decoded JSON, still unvalidated.
"""

import json
import sys
from pathlib import Path
from typing import Any, Optional, TextIO, Tuple, Union
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30


class JSONLoaderError(Exception):
    """A form document could not be read or decoded."""


def _decode(text: str, source: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in %s: %s", source, e)
        raise JSONLoaderError(f"Invalid JSON in {source}: {e}") from e


def load_json_from_file(file_path: Union[str, Path]) -> Tuple[str, Any]:
    """
    Read a form document from disk.

    Any suffix is accepted; only the content has to be JSON.

    Raises:
        FileNotFoundError: If the file does not exist
        JSONLoaderError: If it cannot be read or decoded
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise JSONLoaderError(f"Cannot read {path}: {e}") from e
    data = _decode(text, str(path))
    logger.info("Loaded form document from %s", path)
    return str(path), data


def load_json_from_url(url: str, timeout: int = DEFAULT_TIMEOUT) -> Tuple[str, Any]:
    """
    Fetch a form document over HTTP(S).

    Args:
        url: Absolute URL of the document
        timeout: Seconds before the request is abandoned

    Raises:
        JSONLoaderError: On a malformed URL, any request failure, an error
            status or a body that is not JSON
    """
    parsed = urlparse(url)
    if not (parsed.scheme and parsed.netloc):
        raise JSONLoaderError(f"Invalid URL: {url}")

    logger.debug("GET %s (timeout %ss)", url, timeout)
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.Timeout as e:
        raise JSONLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        raise JSONLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "unknown"
        raise JSONLoaderError(f"HTTP error {status} for URL: {url}") from e
    except (requests.exceptions.JSONDecodeError, json.JSONDecodeError) as e:
        raise JSONLoaderError(f"Invalid JSON response from URL {url}: {e}") from e
    except requests.exceptions.RequestException as e:
        raise JSONLoaderError(f"Request error for URL {url}: {e}") from e

    logger.info("Loaded form document from %s", url)
    return url, data


def load_json_from_stream(stream: Optional[TextIO] = None) -> Tuple[str, Any]:
    """Read a form document from ``stream``, standard input by default."""
    stream = stream or sys.stdin
    return "stdin", _decode(stream.read(), "stdin")


def load_json(
    file_path: Optional[Union[str, Path]] = None,
    url: Optional[str] = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> Tuple[str, Any]:
    """Load from exactly one of ``file_path`` or ``url``."""
    if not file_path and not url:
        raise JSONLoaderError("Either file_path or url must be provided")
    if file_path and url:
        raise JSONLoaderError("Cannot specify both file_path and url")
    if file_path:
        return load_json_from_file(file_path)
    return load_json_from_url(url, timeout)
