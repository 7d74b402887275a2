"""Document sources for retrieving the raw snapshot document.

This module provides an abstract interface for document sources and concrete
implementations for local JSON files and HTTP endpoints. Loading is the only
fallible step of the pipeline: a failure raises :class:`DataSourceError` once
and no record store is built. Retrying is left to the caller.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any

from oiflow.data.walker import walk_document
from oiflow.exceptions import DataSourceError

if TYPE_CHECKING:
    from oiflow.data.store import RecordStore
    from oiflow.types import DocumentSourceConfig

logger = logging.getLogger(__name__)


class DocumentSource(ABC):
    """Abstract base class for document sources.

    All document source implementations must inherit from this class and
    implement the `load` method.
    """

    @abstractmethod
    def load(self) -> Any:
        """Retrieve and parse the raw document.

        :returns: Parsed JSON value.
        :raises DataSourceError: If retrieval or parsing fails.
        """
        ...


class JSONFileSource(DocumentSource):
    """Document source that reads a JSON file from disk.

    :param path: Path to the JSON document.
    :param encoding: File encoding (default: utf-8).
    """

    def __init__(self, path: str | Path, encoding: str = "utf-8") -> None:
        self.path = Path(path)
        self.encoding = encoding

    def load(self) -> Any:
        """Read and parse the JSON file.

        :returns: Parsed JSON value.
        :raises DataSourceError: If the file is missing, unreadable or not JSON.
        """
        logger.info("Loading snapshot document from %s", self.path)
        if not self.path.exists():
            logger.error("Snapshot document not found: %s", self.path)
            raise DataSourceError(f"Document file not found: {self.path}")

        try:
            with open(self.path, encoding=self.encoding) as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            logger.error("Invalid JSON in %s: %s", self.path, e)
            raise DataSourceError(f"Invalid JSON in document file {self.path}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to read %s: %s", self.path, e)
            raise DataSourceError(f"Failed to read document file {self.path}: {e}") from e


class HTTPSource(DocumentSource):
    """Document source that fetches a JSON document over HTTP(S) via requests.

    Responses are requested uncached so a refreshed snapshot is always seen.

    :param url: Document URL.
    :param timeout: Request timeout in seconds (default: 30).
    """

    def __init__(self, url: str, timeout: float = 30.0) -> None:
        self.url = url
        self.timeout = timeout

    def load(self) -> Any:
        """Fetch and parse the document.

        :returns: Parsed JSON value.
        :raises DataSourceError: On transport errors, non-2xx status or invalid JSON.
        """
        try:
            import requests
        except ImportError as e:
            raise DataSourceError(
                "requests is not installed. Install it with: pip install requests"
            ) from e

        logger.info("Fetching snapshot document from %s", self.url)
        try:
            response = requests.get(
                self.url,
                timeout=self.timeout,
                headers={"Cache-Control": "no-store"},
            )
        except requests.RequestException as e:
            logger.error("Request to %s failed: %s", self.url, e)
            raise DataSourceError(f"Failed to fetch document from {self.url}: {e}") from e

        if not response.ok:
            logger.error("Request to %s returned status %s", self.url, response.status_code)
            raise DataSourceError(
                f"Failed to fetch document from {self.url} (status {response.status_code})"
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error("Invalid JSON from %s: %s", self.url, e)
            raise DataSourceError(f"Invalid JSON returned by {self.url}: {e}") from e


def source_for_location(location: str | Path, timeout: float = 30.0) -> DocumentSource:
    """Pick a document source from a path or URL.

    :param location: File path, or an ``http://``/``https://`` URL.
    :param timeout: Request timeout for URLs.
    :returns: DocumentSource able to load the location.
    """
    text = str(location)
    if text.lower().startswith(("http://", "https://")):
        return HTTPSource(text, timeout=timeout)
    return JSONFileSource(text)


def resolve_document_source(config: DocumentSourceConfig) -> DocumentSource:
    """Construct a document source from configuration.

    :param config: DocumentSourceConfig with type and location.
    :returns: DocumentSource instance for the specified type.
    :raises DataSourceError: If the source type is unrecognized.
    """
    source_type = config.type.lower()

    if source_type == "file":
        return JSONFileSource(config.location)
    elif source_type == "http":
        return HTTPSource(config.location, timeout=config.timeout)
    else:
        raise DataSourceError(
            f"Unrecognized document source type: '{config.type}'. "
            f"Supported types: file, http"
        )


def load_record_store(source: DocumentSource) -> RecordStore:
    """Load the raw document once and build the record store from it.

    :param source: Source to load from.
    :returns: Immutable record store.
    :raises DataSourceError: If loading fails; no partial store is built.
    """
    document = source.load()
    return walk_document(document)


__all__ = [
    "DocumentSource",
    "JSONFileSource",
    "HTTPSource",
    "source_for_location",
    "resolve_document_source",
    "load_record_store",
]
