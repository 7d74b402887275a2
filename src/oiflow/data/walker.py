"""Ingestion walker that files symbol records from an arbitrarily nested document.

The published document has no fixed schema: snapshots may sit in lists under
date-named keys, inside wrapper objects, or carry their own date field. The
walker visits every node, treating any mapping that exposes a recognized
record field as a record leaf and filing it under the nearest date hint (a
date-named ancestor key) or, failing that, the record's own date field.

Nodes that are neither record leaves nor containers of record leaves are
dropped without error: there is no way to tell a malformed record from a
structurally irrelevant node.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping

from oiflow.data.fields import (DATE_FIELDS, HISTORY_FIELD,
                                RECORD_MARKER_FIELDS, first_present)
from oiflow.data.store import RecordStore
from oiflow.types import DateKey, Record

logger = logging.getLogger(__name__)

DATE_KEY_LENGTH = 8

_NON_DIGITS = re.compile(r"[^0-9]")
# Field names that act as date hints: 8 digits, optionally split by one
# separator between year/month/day ("20240101", "2024-01-01", "2024/01/01").
_DATE_FIELD_NAME = re.compile(r"^[0-9]{4}([-/.]?)[0-9]{2}\1[0-9]{2}$")


def normalize_date_key(value: Any) -> DateKey | None:
    """Normalize a date-like value to an 8-digit date key.

    Everything but ASCII digits is stripped. Empty values and results that are
    not exactly eight digits are rejected.

    :param value: Raw date value (string or number).
    :returns: The date key, or None if the value is not a usable date.
    """
    if value is None or value == "" or isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    digits = _NON_DIGITS.sub("", str(value))
    if len(digits) != DATE_KEY_LENGTH:
        return None
    return DateKey(digits)


def date_key_from_field(name: str) -> DateKey | None:
    """Return the date key a field name stands for, if it names a date."""
    if not _DATE_FIELD_NAME.match(name):
        return None
    return normalize_date_key(name)


def is_record_leaf(node: Any) -> bool:
    """Whether a node is a symbol record.

    A record is a mapping exposing a symbol field, a buy/sell/net
    differential or a 7/21-day volume field.
    """
    if not isinstance(node, Mapping):
        return False
    return any(name in node for name in RECORD_MARKER_FIELDS)


def resolve_record_date(record: Record, hinted_date: str | None = None) -> DateKey | None:
    """Resolve the date a record is filed under.

    :param record: Record leaf.
    :param hinted_date: Date inherited from an enclosing date-named key.
    :returns: The date key, or None if no valid date can be resolved.
    """
    raw = hinted_date if hinted_date is not None else first_present(record, DATE_FIELDS)
    return normalize_date_key(raw)


class DocumentWalker:
    """Recursive visitor that collects dated records from a raw document.

    A walker instance accumulates results; use :meth:`build` (or the
    :func:`walk_document` shortcut) to obtain an immutable store.
    """

    def __init__(self) -> None:
        self._records: dict[DateKey, list[Record]] = {}
        self.dropped = 0

    def visit(self, node: Any, hinted_date: DateKey | None = None) -> None:
        """Visit a node, filing every record leaf found beneath it.

        :param node: Any JSON-like value.
        :param hinted_date: Date inherited from the nearest date-named key.
        """
        if isinstance(node, list):
            for item in node:
                self.visit(item, hinted_date)
            return
        if not isinstance(node, Mapping):
            return

        if is_record_leaf(node):
            self._add(node, hinted_date)
            return

        for name, value in node.items():
            # Embedded history is read from its owning record, never filed.
            if name == HISTORY_FIELD:
                continue
            self.visit(value, date_key_from_field(str(name)) or hinted_date)

    def _add(self, record: Record, hinted_date: DateKey | None) -> None:
        date = resolve_record_date(record, hinted_date)
        if date is None:
            self.dropped += 1
            return
        self._records.setdefault(date, []).append(record)

    def build(self) -> RecordStore:
        """Freeze the collected records into a :class:`RecordStore`."""
        return RecordStore(self._records)


def walk_document(document: Any) -> RecordStore:
    """Build a record store from a parsed document.

    :param document: Parsed JSON value of any shape.
    :returns: Store of every dated record found; empty if nothing matched.
    """
    walker = DocumentWalker()
    walker.visit(document)
    store = walker.build()
    logger.info(
        "Discovered %d records across %d dates (latest: %s)",
        store.record_count(),
        len(store),
        store.latest_date,
    )
    if walker.dropped:
        logger.debug("Dropped %d records without a resolvable date", walker.dropped)
    return store


__all__ = [
    "DATE_KEY_LENGTH",
    "normalize_date_key",
    "date_key_from_field",
    "is_record_leaf",
    "resolve_record_date",
    "DocumentWalker",
    "walk_document",
]
