"""Views over the records of a single snapshot date."""

from __future__ import annotations

from typing import Any, Iterable

from oiflow.data.fields import (RISK_FIELDS, first_present, optional_number,
                                resolve_symbol, resolve_volume21,
                                resolve_volume7, to_number)
from oiflow.types import Record, RiskBadge, RiskLevel, SymbolRow

DEFAULT_TOP_SYMBOL_LIMIT = 10

# Keywords checked in order; Persian terms appear alongside English ones.
_RISK_KEYWORDS: tuple[tuple[RiskLevel, tuple[str, ...]], ...] = (
    (RiskLevel.LOW, ("low", "کم")),
    (RiskLevel.HIGH, ("high", "بالا")),
    (RiskLevel.MEDIUM, ("medium", "متوسط")),
)


def classify_risk(value: Any) -> RiskBadge:
    """Parse a free-text risk level into a badge.

    :param value: Risk text as published (any case, English or Persian).
    :returns: Badge keeping the original text; UNKNOWN when nothing matches.
    """
    if value is None:
        return RiskBadge()
    text = str(value)
    lowered = text.lower()
    for level, keywords in _RISK_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return RiskBadge(text=text, level=level)
    return RiskBadge(text=text, level=RiskLevel.UNKNOWN)


def describe_record(record: Record) -> SymbolRow:
    """Build the display row of a snapshot record."""
    return SymbolRow(
        symbol=resolve_symbol(record),
        pm_ratio=optional_number(record.get("pm_ratio")),
        first_ceiling_diff_percent=optional_number(record.get("first_ceiling_diff_percent")),
        risk=classify_risk(first_present(record, RISK_FIELDS)),
        volume7=resolve_volume7(record),
        volume21=resolve_volume21(record),
        volume=to_number(record.get("volume")),
        real_money_flow=to_number(record.get("real_money_flow")),
        buy_ratio=to_number(record.get("buy_ratio")),
    )


def _ranking_volume(record: Record) -> float:
    return to_number(first_present(record, ("volume_7days", "volume")))


def top_symbols_by_volume(
    records: Iterable[Record],
    limit: int = DEFAULT_TOP_SYMBOL_LIMIT,
) -> list[Record]:
    """Select the most traded records of a snapshot.

    :param records: Records of one date.
    :param limit: Maximum number of records returned.
    :returns: Records with positive 7-day volume, largest first.
    """
    if limit <= 0:
        return []
    ranked = [record for record in records if _ranking_volume(record) > 0]
    ranked.sort(key=_ranking_volume, reverse=True)
    return ranked[:limit]


__all__ = [
    "DEFAULT_TOP_SYMBOL_LIMIT",
    "classify_risk",
    "describe_record",
    "top_symbols_by_volume",
]
