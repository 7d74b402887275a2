"""Per-symbol timeline reconstruction.

A symbol's timeline is assembled from two kinds of evidence: the record
matched on each snapshot date, and the embedded ``history`` list a record may
carry with prior-dated entries. Both are merged, deduplicated and sorted.

Deduplication uses the composite key (effective date, first of ``buy_diff`` /
``net_diff``). The key is approximate: two distinct entries sharing a date
and that value are indistinguishable, and only the first one is kept.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

import numpy as np

from oiflow.analytics.symbols import normalize_symbol, record_matches
from oiflow.data.fields import (HISTORY_DATE_FIELDS, HISTORY_FIELD,
                                first_present, resolve_buy, resolve_net,
                                resolve_sell, resolve_volume7,
                                resolve_volume21)
from oiflow.data.store import RecordStore
from oiflow.data.walker import normalize_date_key
from oiflow.types import HistoryEntry, Record, SymbolSummary

# Candidate fields for the dedup key, first present wins.
DEDUP_VALUE_FIELDS = ("buy_diff", "net_diff")


def _key_part(value: Any) -> str:
    """Render a dedup key component so that 10, 10.0 and "10" agree."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _dedup_key(date: str, entry: Mapping[str, Any]) -> tuple[str, str]:
    return date, _key_part(first_present(entry, DEDUP_VALUE_FIELDS))


def _entry_date(entry: Mapping[str, Any], fallback: str) -> str:
    raw = first_present(entry, HISTORY_DATE_FIELDS)
    if raw is None:
        return fallback
    return normalize_date_key(raw) or str(raw)


def history_entry(date: str, entry: Mapping[str, Any]) -> HistoryEntry:
    """Convert a record or embedded history entry to a timeline entry."""
    return HistoryEntry(
        date=date,
        buy=resolve_buy(entry),
        sell=resolve_sell(entry),
        net=resolve_net(entry),
        volume7=resolve_volume7(entry),
        volume21=resolve_volume21(entry),
    )


def find_symbol_record(records: Sequence[Record], normalized_symbol: str) -> Record | None:
    """Return the first record of a date matching an already-normalized symbol."""
    for record in records:
        if record_matches(record, normalized_symbol):
            return record
    return None


def build_symbol_history(symbol: Any, store: RecordStore) -> list[HistoryEntry]:
    """Reconstruct the chronological timeline of one symbol.

    For every date, only the first record matching the symbol is used. A
    record with a non-empty embedded history contributes every entry of that
    history (dated by the entry itself, else by the snapshot date); any other
    matched record contributes itself.

    :param symbol: Symbol identifier in any spelling.
    :param store: Record store to search.
    :returns: Timeline sorted by date; empty for unknown or blank symbols.
    """
    target = normalize_symbol(symbol)
    if not target:
        return []

    timeline: list[HistoryEntry] = []
    seen: set[tuple[str, str]] = set()

    def add(date: str, entry: Mapping[str, Any]) -> None:
        key = _dedup_key(date, entry)
        if key in seen:
            return
        seen.add(key)
        timeline.append(history_entry(date, entry))

    for date in store.dates:
        match = find_symbol_record(store.records_for_date(date), target)
        if match is None:
            continue

        embedded = match.get(HISTORY_FIELD)
        if isinstance(embedded, list) and embedded:
            for entry in embedded:
                if isinstance(entry, Mapping):
                    add(_entry_date(entry, date), entry)
        else:
            add(date, match)

    # Embedded histories are emitted in document order, not date order.
    timeline.sort(key=lambda entry: entry.date)
    return timeline


def summarize_history(timeline: Sequence[HistoryEntry]) -> SymbolSummary | None:
    """Average a symbol timeline.

    :param timeline: Timeline in ascending date order.
    :returns: Summary, or None for an empty timeline.
    """
    if not timeline:
        return None

    values = np.array(
        [[e.net, e.buy, e.sell, e.volume7, e.volume21] for e in timeline],
        dtype=np.float64,
    )
    net, buy, sell, volume7, volume21 = values.mean(axis=0)
    return SymbolSummary(
        entries=len(timeline),
        net=float(net),
        buy=float(buy),
        sell=float(sell),
        volume7=float(volume7),
        volume21=float(volume21),
        latest_date=timeline[-1].date,
    )


__all__ = [
    "DEDUP_VALUE_FIELDS",
    "history_entry",
    "find_symbol_record",
    "build_symbol_history",
    "summarize_history",
]
