"""Derivations over a record store: market series, symbol timelines, indicators."""

from oiflow.analytics.history import build_symbol_history, summarize_history
from oiflow.analytics.indicators import moving_average
from oiflow.analytics.market import (aggregate_records, classify_trend,
                                     compute_change, compute_market_series,
                                     market_window, summarize_market)
from oiflow.analytics.snapshot import (classify_risk, describe_record,
                                       top_symbols_by_volume)
from oiflow.analytics.symbols import (filter_records, normalize_symbol,
                                      symbols_match)

__all__ = [
    # Market
    "aggregate_records",
    "compute_market_series",
    "market_window",
    "compute_change",
    "classify_trend",
    "summarize_market",
    # Symbols
    "normalize_symbol",
    "symbols_match",
    "filter_records",
    # History
    "build_symbol_history",
    "summarize_history",
    # Indicators
    "moving_average",
    # Snapshot
    "classify_risk",
    "describe_record",
    "top_symbols_by_volume",
]
