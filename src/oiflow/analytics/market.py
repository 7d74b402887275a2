"""Market-wide aggregation of per-symbol order-flow records.

Each date collapses into one :class:`MarketPoint` whose buy/sell/net values
are means weighted by the records' 7-day volume. Records without a positive
volume still count, with weight 1, so a date never divides by zero.
"""

from __future__ import annotations

import math
from typing import Sequence

from oiflow.data.fields import (MONTHLY_VOLUME_FIELDS, first_present,
                                resolve_buy, resolve_net, resolve_sell,
                                resolve_volume7, to_number)
from oiflow.data.store import RecordStore
from oiflow.types import (Change, DateKey, MarketPoint, MarketSummary, Record,
                          Trend)

DEFAULT_MARKET_WINDOW = 30


def record_weight(volume: float) -> float:
    """Aggregation weight for a record volume: the volume if positive, else 1."""
    return volume if volume > 0 else 1.0


def is_filtered(record: Record) -> bool:
    """Whether a record carries a premium-ratio or monthly-volume signal."""
    pm_ratio = to_number(record.get("pm_ratio"))
    monthly_volume = to_number(first_present(record, MONTHLY_VOLUME_FIELDS))
    return bool(pm_ratio or monthly_volume)


def aggregate_records(date: str, records: Sequence[Record]) -> MarketPoint:
    """Aggregate the records of one date into a market point.

    :param date: Date key of the records.
    :param records: Records filed under the date.
    :returns: Weighted market point; all zeros when there are no records.
    """
    if not records:
        return MarketPoint(date=DateKey(date))

    weighted_buy = 0.0
    weighted_sell = 0.0
    weighted_net = 0.0
    total_weight = 0.0
    volume_sum = 0.0
    filtered_count = 0

    for record in records:
        volume = resolve_volume7(record)
        weight = record_weight(volume)
        buy = resolve_buy(record)
        sell = resolve_sell(record)
        net = resolve_net(record)

        weighted_buy += buy * weight
        weighted_sell += sell * weight
        weighted_net += net * weight
        total_weight += weight
        volume_sum += max(volume, 0.0)

        if is_filtered(record):
            filtered_count += 1

    divisor = total_weight or len(records) or 1
    return MarketPoint(
        date=DateKey(date),
        buy=weighted_buy / divisor,
        sell=weighted_sell / divisor,
        net=weighted_net / divisor,
        volume=volume_sum,
        symbol_count=len(records),
        # No record carrying the signal means the dataset lacks it altogether.
        filtered_count=filtered_count or len(records),
    )


def compute_market_series(store: RecordStore) -> list[MarketPoint]:
    """Compute one market point per known date, in ascending date order.

    :param store: Record store to aggregate.
    :returns: Market points; empty for an empty store.
    """
    return [aggregate_records(date, store.records_for_date(date)) for date in store.dates]


def market_window(
    series: Sequence[MarketPoint],
    limit: int = DEFAULT_MARKET_WINDOW,
) -> list[MarketPoint]:
    """Keep the trailing ``limit`` points of a market series."""
    if limit <= 0:
        return []
    return list(series[-limit:])


def compute_change(current: float, previous: float | None) -> Change | None:
    """Compare a value with its predecessor.

    :param current: Current value.
    :param previous: Previous value, or None when there is none.
    :returns: The change, or None if there is no usable previous value.
    """
    if previous is None or math.isnan(previous):
        return None
    diff = current - previous
    percent = 0.0 if previous == 0 else diff / abs(previous) * 100
    return Change(diff=diff, percent=percent)


def classify_trend(net: float) -> Trend:
    """Map a market net differential to a flow direction.

    Positive net pressure means smart money is leaving the market.
    """
    if net > 0:
        return Trend.OUTFLOW
    if net < 0:
        return Trend.INFLOW
    return Trend.NEUTRAL


def summarize_market(
    series: Sequence[MarketPoint],
    window: int = DEFAULT_MARKET_WINDOW,
) -> MarketSummary | None:
    """Build headline figures for the latest point of a market series.

    :param series: Market series in ascending date order.
    :param window: Trailing window size used for display.
    :returns: Summary, or None for an empty series.
    """
    if not series:
        return None

    current = series[-1]
    previous = series[-2] if len(series) > 1 else None

    def change(field: str) -> Change | None:
        if previous is None:
            return None
        return compute_change(getattr(current, field), getattr(previous, field))

    return MarketSummary(
        current=current,
        buy_change=change("buy"),
        sell_change=change("sell"),
        net_change=change("net"),
        volume_change=change("volume"),
        trend=classify_trend(current.net),
        window=min(len(series), window),
        date_count=len(series),
    )


__all__ = [
    "DEFAULT_MARKET_WINDOW",
    "record_weight",
    "is_filtered",
    "aggregate_records",
    "compute_market_series",
    "market_window",
    "compute_change",
    "classify_trend",
    "summarize_market",
]
