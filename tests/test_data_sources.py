"""Tests for document source implementations."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import requests

from oiflow.data.sources import (DocumentSource, HTTPSource, JSONFileSource,
                                 load_record_store, resolve_document_source,
                                 source_for_location)
from oiflow.exceptions import DataSourceError
from oiflow.types import DocumentSourceConfig

SAMPLE_DOCUMENT = {
    "20240101": [{"symbol": "AAA", "buy_diff": 10, "sell_diff": 4}],
    "20240102": [{"symbol": "AAA", "buy_diff": 6, "sell_diff": 2}],
}


@pytest.fixture
def document_file(tmp_path: Path) -> Path:
    """Write the sample document to a temporary JSON file."""
    path = tmp_path / "processed_data.json"
    path.write_text(json.dumps(SAMPLE_DOCUMENT), encoding="utf-8")
    return path


class TestDocumentSourceProtocol:
    """Tests for the DocumentSource abstract base class."""

    def test_document_source_is_abstract(self) -> None:
        """DocumentSource cannot be instantiated directly."""
        with pytest.raises(TypeError, match="abstract"):
            DocumentSource()  # type: ignore[abstract]

    def test_subclass_must_implement_load(self) -> None:
        """Subclasses must implement load."""

        class IncompleteSource(DocumentSource):
            pass

        with pytest.raises(TypeError, match="abstract"):
            IncompleteSource()  # type: ignore[abstract]


class TestJSONFileSource:
    """Tests for JSONFileSource."""

    def test_load_valid_file(self, document_file: Path) -> None:
        """A valid JSON file is parsed."""
        assert JSONFileSource(document_file).load() == SAMPLE_DOCUMENT

    def test_load_unicode_content(self, tmp_path: Path) -> None:
        """Persian symbols survive loading."""
        path = tmp_path / "fa.json"
        path.write_text(json.dumps({"20240101": [{"symbol": "فولاد"}]}, ensure_ascii=False), encoding="utf-8")

        assert JSONFileSource(path).load()["20240101"][0]["symbol"] == "فولاد"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """A missing file raises DataSourceError."""
        with pytest.raises(DataSourceError, match="not found"):
            JSONFileSource(tmp_path / "missing.json").load()

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        """Malformed JSON raises DataSourceError."""
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(DataSourceError, match="Invalid JSON"):
            JSONFileSource(path).load()


class TestHTTPSource:
    """Tests for HTTPSource."""

    def test_init_defaults(self) -> None:
        """HTTPSource uses a 30 second timeout by default."""
        source = HTTPSource("https://example.com/data.json")

        assert source.url == "https://example.com/data.json"
        assert source.timeout == 30.0

    def test_load_success(self) -> None:
        """A successful response is parsed as JSON."""
        response = MagicMock()
        response.ok = True
        response.json.return_value = SAMPLE_DOCUMENT

        with patch("requests.get", return_value=response) as mock_get:
            result = HTTPSource("https://example.com/data.json", timeout=5).load()

        assert result == SAMPLE_DOCUMENT
        mock_get.assert_called_once()
        _, kwargs = mock_get.call_args
        assert kwargs["timeout"] == 5
        assert kwargs["headers"]["Cache-Control"] == "no-store"

    def test_error_status_raises(self) -> None:
        """A non-2xx status raises DataSourceError with the status."""
        response = MagicMock()
        response.ok = False
        response.status_code = 404

        with patch("requests.get", return_value=response):
            with pytest.raises(DataSourceError, match="404"):
                HTTPSource("https://example.com/data.json").load()

    def test_transport_error_raises(self) -> None:
        """Connection failures raise DataSourceError."""
        with patch("requests.get", side_effect=requests.ConnectionError("refused")):
            with pytest.raises(DataSourceError, match="refused"):
                HTTPSource("https://example.com/data.json").load()

    def test_invalid_json_raises(self) -> None:
        """An unparseable body raises DataSourceError."""
        response = MagicMock()
        response.ok = True
        response.json.side_effect = ValueError("Expecting value")

        with patch("requests.get", return_value=response):
            with pytest.raises(DataSourceError, match="Invalid JSON"):
                HTTPSource("https://example.com/data.json").load()


class TestResolveDocumentSource:
    """Tests for source construction helpers."""

    def test_resolve_file(self) -> None:
        """type=file resolves to JSONFileSource."""
        source = resolve_document_source(DocumentSourceConfig(type="file", location="data.json"))

        assert isinstance(source, JSONFileSource)
        assert source.path == Path("data.json")

    def test_resolve_http(self) -> None:
        """type=http resolves to HTTPSource with the configured timeout."""
        source = resolve_document_source(
            DocumentSourceConfig(type="HTTP", location="https://example.com/d.json", timeout=7)
        )

        assert isinstance(source, HTTPSource)
        assert source.timeout == 7

    def test_resolve_unknown_type(self) -> None:
        """Unknown source types raise DataSourceError."""
        with pytest.raises(DataSourceError, match="Unrecognized"):
            resolve_document_source(DocumentSourceConfig(type="ftp", location="x"))

    def test_source_for_location(self) -> None:
        """URLs map to HTTPSource and anything else to JSONFileSource."""
        assert isinstance(source_for_location("https://example.com/d.json"), HTTPSource)
        assert isinstance(source_for_location("HTTP://example.com/d.json"), HTTPSource)
        assert isinstance(source_for_location("data/processed.json"), JSONFileSource)


class TestLoadRecordStore:
    """Tests for loading a store from a source."""

    def test_load_builds_store(self, document_file: Path) -> None:
        """Loading walks the document into a store."""
        store = load_record_store(JSONFileSource(document_file))

        assert store.dates == ["20240101", "20240102"]
        assert store.latest_date == "20240102"

    def test_load_failure_propagates(self, tmp_path: Path) -> None:
        """A load failure surfaces as DataSourceError."""
        with pytest.raises(DataSourceError):
            load_record_store(JSONFileSource(tmp_path / "missing.json"))
