"""Immutable date-indexed collection of symbol records."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping, Sequence

from oiflow.types import DateKey, Record


class RecordStore:
    """Records grouped by trading date.

    Records keep the order in which they were discovered in the source
    document. Date keys are zero-padded ``YYYYMMDD`` strings, so lexical order
    is chronological order.

    The store is read-only after construction and can be shared freely
    between readers.

    :param records_by_date: Records keyed by date key.
    """

    __slots__ = ("_by_date", "_dates")

    def __init__(self, records_by_date: Mapping[str, Sequence[Record]] | None = None) -> None:
        by_date = {
            DateKey(date): tuple(records)
            for date, records in (records_by_date or {}).items()
        }
        self._by_date: Mapping[DateKey, tuple[Record, ...]] = MappingProxyType(by_date)
        self._dates: tuple[DateKey, ...] = tuple(sorted(by_date))

    def records_for_date(self, date: str) -> list[Record]:
        """Get the records filed under a date.

        :param date: Date key to look up.
        :returns: Records in discovery order, or an empty list for unknown dates.
        """
        return list(self._by_date.get(DateKey(date), ()))

    @property
    def dates(self) -> list[DateKey]:
        """All date keys in ascending order."""
        return list(self._dates)

    @property
    def latest_date(self) -> DateKey | None:
        """The greatest date key, or None for an empty store."""
        return self._dates[-1] if self._dates else None

    def latest_records(self) -> list[Record]:
        """Get the records of the latest date (empty for an empty store)."""
        if self.latest_date is None:
            return []
        return self.records_for_date(self.latest_date)

    def record_count(self) -> int:
        """Total number of records across all dates."""
        return sum(len(records) for records in self._by_date.values())

    def __len__(self) -> int:
        return len(self._dates)

    def __contains__(self, date: object) -> bool:
        return date in self._by_date

    def __iter__(self) -> Iterator[DateKey]:
        return iter(self._dates)

    def __repr__(self) -> str:
        return (
            f"RecordStore(dates={len(self._dates)}, records={self.record_count()}, "
            f"latest={self.latest_date!r})"
        )


__all__ = ["RecordStore"]
