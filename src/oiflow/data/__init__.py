"""Document ingestion, record storage and source management module."""

from oiflow.data.sources import (DocumentSource, HTTPSource, JSONFileSource,
                                 load_record_store, resolve_document_source,
                                 source_for_location)
from oiflow.data.store import RecordStore
from oiflow.data.walker import (DocumentWalker, is_record_leaf,
                                normalize_date_key, walk_document)

__all__ = [
    "DocumentSource",
    "JSONFileSource",
    "HTTPSource",
    "source_for_location",
    "resolve_document_source",
    "load_record_store",
    "RecordStore",
    "DocumentWalker",
    "is_record_leaf",
    "normalize_date_key",
    "walk_document",
]
