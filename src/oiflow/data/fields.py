"""Field aliases and lenient value coercion for raw snapshot records.

Independently produced snapshots name the same metric differently. Each
metric has an ordered alias tuple; the first alias carrying a non-null value
wins.
"""

from __future__ import annotations

import math
from typing import Any, Mapping, Sequence

from oiflow.types import Symbol

SYMBOL_FIELDS = ("symbol", "ticker", "Symbol")
BUY_FIELDS = ("buy_diff", "buyOI", "buy_ratio")
SELL_FIELDS = ("sell_diff", "sellOI", "sell_ratio")
NET_FIELDS = ("net_diff", "netOI")
VOLUME7_FIELDS = ("volume_7days", "volume7", "volume", "volume_weight")
VOLUME21_FIELDS = ("volume_21days", "volume21")
DATE_FIELDS = ("trade_date", "date", "snapshot_date", "last_date")
# Embedded history entries look up their own date in this order.
HISTORY_DATE_FIELDS = ("date", "trade_date", "snapshot_date")
MONTHLY_VOLUME_FIELDS = ("monthly_volume", "volume_21days")
RISK_FIELDS = ("risk_level", "risk")

HISTORY_FIELD = "history"

# Keys whose mere presence marks a mapping as a symbol record. Only the
# canonical names count; a mapping carrying nothing but secondary aliases
# (Symbol, buyOI, buy_ratio, ...) is descended into like any container.
RECORD_MARKER_FIELDS = frozenset(
    ("symbol", "ticker")
    + ("buy_diff", "sell_diff", "net_diff")
    + ("volume_7days", "volume_21days")
)


def first_present(record: Mapping[str, Any], fields: Sequence[str]) -> Any:
    """Return the value of the first field that is present and not null.

    :param record: Mapping to inspect.
    :param fields: Candidate field names in priority order.
    :returns: The first non-null value, or None if every alias is missing.
    """
    for name in fields:
        value = record.get(name)
        if value is not None:
            return value
    return None


def to_number(value: Any) -> float:
    """Coerce a loosely typed JSON value to a float.

    Missing, blank, non-numeric and NaN values all become 0.0. Numeric
    strings (surrounding whitespace allowed) are parsed; booleans count as
    0 or 1.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    else:
        return 0.0
    return 0.0 if math.isnan(number) else number


def optional_number(value: Any) -> float | None:
    """Like :func:`to_number` but keeps None for missing values."""
    if value is None:
        return None
    return to_number(value)


def resolve_symbol(record: Mapping[str, Any]) -> Symbol:
    """Return the record's symbol identifier with surrounding whitespace removed."""
    value = first_present(record, SYMBOL_FIELDS)
    if value is None:
        return Symbol("")
    return Symbol(str(value).strip())


def resolve_buy(record: Mapping[str, Any]) -> float:
    return to_number(first_present(record, BUY_FIELDS))


def resolve_sell(record: Mapping[str, Any]) -> float:
    return to_number(first_present(record, SELL_FIELDS))


def resolve_net(record: Mapping[str, Any]) -> float:
    """Return the net differential, deriving ``buy - sell`` when none is published."""
    value = first_present(record, NET_FIELDS)
    if value is None:
        return resolve_buy(record) - resolve_sell(record)
    return to_number(value)


def resolve_volume7(record: Mapping[str, Any]) -> float:
    return to_number(first_present(record, VOLUME7_FIELDS))


def resolve_volume21(record: Mapping[str, Any]) -> float:
    return to_number(first_present(record, VOLUME21_FIELDS))


__all__ = [
    "SYMBOL_FIELDS",
    "BUY_FIELDS",
    "SELL_FIELDS",
    "NET_FIELDS",
    "VOLUME7_FIELDS",
    "VOLUME21_FIELDS",
    "DATE_FIELDS",
    "HISTORY_DATE_FIELDS",
    "MONTHLY_VOLUME_FIELDS",
    "RISK_FIELDS",
    "HISTORY_FIELD",
    "RECORD_MARKER_FIELDS",
    "first_present",
    "to_number",
    "optional_number",
    "resolve_symbol",
    "resolve_buy",
    "resolve_sell",
    "resolve_net",
    "resolve_volume7",
    "resolve_volume21",
]
