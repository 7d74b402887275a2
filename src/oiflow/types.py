"""Core type definitions for the order-flow analytics engine.

Derived outputs and configuration use Pydantic models for validation and
JSON serialization. Raw records are kept as the plain mappings found in the
source document and are never copied into models.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, NewType

from pydantic import BaseModel, ConfigDict, Field

# Type aliases for domain-specific identifiers
DateKey = NewType("DateKey", str)
Symbol = NewType("Symbol", str)

# A record is one symbol snapshot exactly as found in the raw document.
Record = Mapping[str, Any]


# ---------------------------------------------------------------------------
# Base Configuration
# ---------------------------------------------------------------------------


class FrozenModel(BaseModel):
    """Base model with frozen (immutable) configuration."""

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Market Types
# ---------------------------------------------------------------------------


class MarketPoint(FrozenModel):
    """Volume-weighted aggregate of every record filed under one date.

    :param date: Date key this point aggregates.
    :param buy: Weighted mean buy differential.
    :param sell: Weighted mean sell differential.
    :param net: Weighted mean net differential.
    :param volume: Sum of raw record volumes, negatives floored at zero.
    :param symbol_count: Number of records filed under the date.
    :param filtered_count: Records carrying a premium-ratio or monthly-volume
        signal, or ``symbol_count`` when none of them do.
    """

    date: DateKey
    buy: float = 0.0
    sell: float = 0.0
    net: float = 0.0
    volume: float = 0.0
    symbol_count: int = 0
    filtered_count: int = 0


class Change(FrozenModel):
    """Difference between a value and its predecessor.

    :param diff: ``current - previous``.
    :param percent: ``diff`` relative to ``abs(previous)`` in percent, or 0
        when the previous value is zero.
    """

    diff: float
    percent: float


class Trend(str, Enum):
    """Direction of smart-money flow implied by the market net differential."""

    INFLOW = "inflow"
    OUTFLOW = "outflow"
    NEUTRAL = "neutral"


class MarketSummary(FrozenModel):
    """Headline figures for the most recent market point.

    :param current: The most recent market point.
    :param buy_change: Buy change against the previous point, if any.
    :param sell_change: Sell change against the previous point, if any.
    :param net_change: Net change against the previous point, if any.
    :param volume_change: Volume change against the previous point, if any.
    :param trend: Flow direction derived from the current net value.
    :param window: Number of points shown in the trailing window.
    :param date_count: Total number of dates in the series.
    """

    current: MarketPoint
    buy_change: Change | None = None
    sell_change: Change | None = None
    net_change: Change | None = None
    volume_change: Change | None = None
    trend: Trend = Trend.NEUTRAL
    window: int = 0
    date_count: int = 0


# ---------------------------------------------------------------------------
# Symbol Types
# ---------------------------------------------------------------------------


class HistoryEntry(FrozenModel):
    """One point in a symbol's reconstructed timeline.

    :param date: Effective date in string form (normally a date key).
    :param buy: Buy differential.
    :param sell: Sell differential.
    :param net: Net differential.
    :param volume7: Trailing 7-day volume.
    :param volume21: Trailing 21-day volume.
    """

    date: str
    buy: float = 0.0
    sell: float = 0.0
    net: float = 0.0
    volume7: float = 0.0
    volume21: float = 0.0


class SymbolSummary(FrozenModel):
    """Averages over a symbol timeline.

    :param entries: Number of timeline entries averaged.
    :param net: Mean net differential.
    :param buy: Mean buy differential.
    :param sell: Mean sell differential.
    :param volume7: Mean 7-day volume.
    :param volume21: Mean 21-day volume.
    :param latest_date: Date of the last timeline entry.
    """

    entries: int
    net: float
    buy: float
    sell: float
    volume7: float
    volume21: float
    latest_date: str


class RiskLevel(str, Enum):
    """Coarse risk bucket parsed from a free-text risk field."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    UNKNOWN = "unknown"


class RiskBadge(FrozenModel):
    """Risk text as published together with its parsed bucket."""

    text: str = ""
    level: RiskLevel = RiskLevel.UNKNOWN


class SymbolRow(FrozenModel):
    """Display-ready view of one record from the latest snapshot.

    Optional fields stay ``None`` when the record does not carry them so the
    presentation layer can tell "absent" from zero.

    :param symbol: Resolved symbol identifier (may be empty).
    :param pm_ratio: Premium ratio.
    :param first_ceiling_diff_percent: Distance from the first ceiling in percent.
    :param risk: Parsed risk badge.
    :param volume7: 7-day volume.
    :param volume21: 21-day volume.
    :param volume: Same-day volume.
    :param real_money_flow: Retail ("real") money flow.
    :param buy_ratio: Buyer strength ratio.
    """

    symbol: Symbol
    pm_ratio: float | None = None
    first_ceiling_diff_percent: float | None = None
    risk: RiskBadge = Field(default_factory=RiskBadge)
    volume7: float = 0.0
    volume21: float = 0.0
    volume: float = 0.0
    real_money_flow: float = 0.0
    buy_ratio: float = 0.0


# ---------------------------------------------------------------------------
# Configuration Types
# ---------------------------------------------------------------------------


class DocumentSourceConfig(FrozenModel):
    """Where the raw document is retrieved from.

    :param type: Source type ("file" or "http").
    :param location: File path or URL of the document.
    :param timeout: Request timeout in seconds (http only).
    """

    type: str = "file"
    location: str
    timeout: float = 30.0


class DisplayConfig(FrozenModel):
    """Sizes used by the presentation layer.

    :param max_market_points: Size of the trailing market window.
    :param top_symbol_limit: Number of symbols in the top-volume list.
    :param moving_average: Default moving-average period.
    """

    max_market_points: int = 30
    top_symbol_limit: int = 10
    moving_average: int = 2


class ReportConfig(FrozenModel):
    """Configuration for a report run.

    :param source: Document source settings.
    :param display: Presentation sizes.
    :param log_level: Logging level.
    """

    source: DocumentSourceConfig
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    log_level: str = "INFO"


# ---------------------------------------------------------------------------
# Exports
# ---------------------------------------------------------------------------

__all__ = [
    # Type aliases
    "DateKey",
    "Symbol",
    "Record",
    # Base models
    "FrozenModel",
    # Market
    "MarketPoint",
    "Change",
    "Trend",
    "MarketSummary",
    # Symbols
    "HistoryEntry",
    "SymbolSummary",
    "RiskLevel",
    "RiskBadge",
    "SymbolRow",
    # Configuration
    "DocumentSourceConfig",
    "DisplayConfig",
    "ReportConfig",
]
