"""Unit tests for document loading (form_codegen.utils) and logging setup.

Tests cover:
- load_json_from_file success, missing file, invalid JSON, other suffixes
- load_json_from_url with a mocked requests.get: success and each failure
- load_json_from_stream
- load_json argument checks
- configure_logging handler replacement
"""

from __future__ import annotations

import io
import json
import logging
from unittest.mock import MagicMock, patch

import pytest
import requests

from form_codegen.logging_config import ROOT_LOGGER_NAME, configure_logging, get_logger
from form_codegen.utils import (
    JSONLoaderError,
    load_json,
    load_json_from_file,
    load_json_from_stream,
    load_json_from_url,
)


def _response(data=None, content_type="application/json"):
    response = MagicMock()
    response.headers = {"content-type": content_type}
    response.json.return_value = data
    return response


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

class TestLoadFromFile:
    def test_loads_document(self, tmp_path, editor_document):
        path = tmp_path / "intake.json"
        path.write_text(json.dumps(editor_document), encoding="utf-8")
        source, data = load_json_from_file(path)
        assert source == str(path)
        assert data["name"] == "Customer Intake"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_json_from_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(JSONLoaderError, match="Invalid JSON"):
            load_json_from_file(path)

    def test_other_suffix_still_loads(self, tmp_path):
        path = tmp_path / "form.txt"
        path.write_text('{"fields": []}', encoding="utf-8")
        assert load_json_from_file(path)[1] == {"fields": []}


# ---------------------------------------------------------------------------
# URLs
# ---------------------------------------------------------------------------

class TestLoadFromUrl:
    URL = "https://example.com/forms/42.json"

    def test_success(self):
        with patch("form_codegen.utils.requests.get", return_value=_response({"fields": []})) as get:
            source, data = load_json_from_url(self.URL)
        get.assert_called_once_with(self.URL, timeout=30)
        assert source == self.URL
        assert data == {"fields": []}

    def test_custom_timeout(self):
        with patch("form_codegen.utils.requests.get", return_value=_response({})) as get:
            load_json_from_url(self.URL, timeout=5)
        get.assert_called_once_with(self.URL, timeout=5)

    def test_invalid_url(self):
        with pytest.raises(JSONLoaderError, match="Invalid URL"):
            load_json_from_url("not a url")

    def test_timeout(self):
        with patch("form_codegen.utils.requests.get", side_effect=requests.exceptions.Timeout()):
            with pytest.raises(JSONLoaderError, match="timeout"):
                load_json_from_url(self.URL)

    def test_connection_error(self):
        with patch("form_codegen.utils.requests.get", side_effect=requests.exceptions.ConnectionError()):
            with pytest.raises(JSONLoaderError, match="Connection error"):
                load_json_from_url(self.URL)

    def test_http_error(self):
        response = _response()
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            response=MagicMock(status_code=404)
        )
        with patch("form_codegen.utils.requests.get", return_value=response):
            with pytest.raises(JSONLoaderError, match="HTTP error 404"):
                load_json_from_url(self.URL)

    def test_invalid_json_response(self):
        response = _response(content_type="text/html")
        response.json.side_effect = json.JSONDecodeError("Expecting value", "", 0)
        with patch("form_codegen.utils.requests.get", return_value=response):
            with pytest.raises(JSONLoaderError, match="Invalid JSON response"):
                load_json_from_url("https://example.com/form")


# ---------------------------------------------------------------------------
# Streams and dispatch
# ---------------------------------------------------------------------------

class TestLoadFromStream:
    def test_loads(self):
        assert load_json_from_stream(io.StringIO('{"a": 1}')) == ("stdin", {"a": 1})

    def test_invalid(self):
        with pytest.raises(JSONLoaderError, match="stdin"):
            load_json_from_stream(io.StringIO("nope"))


class TestLoadJson:
    def test_requires_a_source(self):
        with pytest.raises(JSONLoaderError, match="Either"):
            load_json()

    def test_rejects_both_sources(self):
        with pytest.raises(JSONLoaderError, match="both"):
            load_json(file_path="a.json", url="https://example.com/a.json")

    def test_dispatches_to_file(self, tmp_path):
        path = tmp_path / "a.json"
        path.write_text("[]", encoding="utf-8")
        assert load_json(file_path=path) == (str(path), [])


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

class TestLogging:
    def test_get_logger_is_namespaced(self):
        assert get_logger("form_codegen.cli").name == "form_codegen.cli"
        assert get_logger("plugins").name == "form_codegen.plugins"

    def test_configure_replaces_handler(self):
        configure_logging("DEBUG", rich=False)
        logger = configure_logging("INFO", rich=False)
        assert logger.name == ROOT_LOGGER_NAME
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
        assert not logger.propagate
