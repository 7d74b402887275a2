#!/usr/bin/env python3
"""Command-line interface for the order-flow analytics engine."""

from __future__ import annotations

import argparse
import logging
import re
import sys
from typing import TYPE_CHECKING, Any, Sequence

from oiflow.exceptions import OIFlowError

if TYPE_CHECKING:
    from oiflow.data.store import RecordStore
    from oiflow.types import Change

_NON_DIGITS = re.compile(r"[^0-9]")


def configure_logging(level: str) -> None:
    """Configure root logging for command-line runs."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def format_date_label(value: Any) -> str:
    """Render a date key as ``YYYY/MM/DD``; other values pass through."""
    if value is None or value == "":
        return "-"
    digits = _NON_DIGITS.sub("", str(value))
    if len(digits) == 8:
        return f"{digits[:4]}/{digits[4:6]}/{digits[6:]}"
    return str(value)


def format_change(change: Change | None) -> str:
    """Render a change as an arrow, difference and percentage."""
    if change is None:
        return "-"
    arrow = "▲" if change.diff >= 0 else "▼"
    return f"{arrow} {change.diff:,.3f} ({change.percent:.1f}%)"


def _load_store(location: str, timeout: float = 30.0) -> RecordStore:
    from oiflow.data.sources import load_record_store, source_for_location

    return load_record_store(source_for_location(location, timeout=timeout))


def _print_market(store: RecordStore, points: int) -> None:
    from oiflow.analytics import compute_market_series, market_window, summarize_market

    series = compute_market_series(store)
    summary = summarize_market(series, window=points)
    if summary is None:
        print("No market data found in the document.")
        return

    current = summary.current
    print(f"Last update: {format_date_label(store.latest_date)}")
    print(f"Dates:       {summary.date_count}")
    print(f"Symbols:     {current.symbol_count}")
    print(f"Filtered:    {current.filtered_count}")
    print(f"Trend:       {summary.trend.value}")
    print(f"Buy:         {current.buy:,.3f}  {format_change(summary.buy_change)}")
    print(f"Sell:        {current.sell:,.3f}  {format_change(summary.sell_change)}")
    print(f"Net:         {current.net:,.3f}  {format_change(summary.net_change)}")
    print(f"Volume:      {current.volume:,.0f}  {format_change(summary.volume_change)}")

    print(f"\nLast {summary.window} dates:")
    print(f"{'Date':<12} {'Buy':>12} {'Sell':>12} {'Net':>12} {'Volume':>16}")
    print("-" * 68)
    for point in market_window(series, points):
        print(
            f"{format_date_label(point.date):<12} {point.buy:>12,.3f} "
            f"{point.sell:>12,.3f} {point.net:>12,.3f} {point.volume:>16,.0f}"
        )


def _print_rows(records: Sequence[Any]) -> None:
    from oiflow.analytics import describe_record

    print(
        f"{'Symbol':<16} {'P/M':>8} {'Ceiling%':>9} {'Risk':<10} "
        f"{'Volume 7d':>14} {'Volume 21d':>14}"
    )
    print("-" * 76)
    for record in records:
        row = describe_record(record)
        pm = f"{row.pm_ratio:.2f}" if row.pm_ratio is not None else "-"
        ceiling = (
            f"{row.first_ceiling_diff_percent:.2f}%"
            if row.first_ceiling_diff_percent is not None
            else "-"
        )
        risk = row.risk.text or row.risk.level.value
        print(
            f"{row.symbol or '-':<16} {pm:>8} {ceiling:>9} {risk:<10} "
            f"{row.volume7:>14,.0f} {row.volume21:>14,.0f}"
        )


def _print_top(store: RecordStore, limit: int) -> None:
    from oiflow.analytics import top_symbols_by_volume

    top = top_symbols_by_volume(store.latest_records(), limit=limit)
    print(f"Top {limit} symbols by volume on {format_date_label(store.latest_date)}")
    if not top:
        print("No symbol with positive volume.")
        return
    _print_rows(top)


def cmd_market(args: argparse.Namespace) -> int:
    """Show the market-wide aggregate series."""
    store = _load_store(args.source)

    print("=" * 60)
    print("MARKET")
    print("=" * 60)
    _print_market(store, args.points)
    return 0


def cmd_symbol(args: argparse.Namespace) -> int:
    """Show one symbol's timeline with a moving average of its net value."""
    from oiflow.analytics import (build_symbol_history, describe_record,
                                  moving_average, normalize_symbol,
                                  summarize_history)
    from oiflow.analytics.history import find_symbol_record

    store = _load_store(args.source)
    history = build_symbol_history(args.symbol, store)

    print("=" * 60)
    print(f"SYMBOL {args.symbol}")
    print("=" * 60)

    if not history:
        print("No history found for this symbol.")
        return 0

    ma = moving_average([entry.net for entry in history], args.ma)
    print(f"{'Date':<12} {'Buy':>12} {'Sell':>12} {'Net':>12} {f'MA({args.ma})':>12}")
    print("-" * 64)
    for entry, average in zip(history, ma):
        ma_text = f"{average:,.3f}" if average is not None else "-"
        print(
            f"{format_date_label(entry.date):<12} {entry.buy:>12,.3f} "
            f"{entry.sell:>12,.3f} {entry.net:>12,.3f} {ma_text:>12}"
        )

    summary = summarize_history(history)
    if summary is not None:
        print(f"\n{summary.entries} entries, latest {format_date_label(summary.latest_date)}")
        print(f"Average net:        {summary.net:,.3f}")
        print(f"Average buy:        {summary.buy:,.3f}")
        print(f"Average sell:       {summary.sell:,.3f}")
        print(f"Average volume 7d:  {summary.volume7:,.0f}")
        print(f"Average volume 21d: {summary.volume21:,.0f}")

    latest = find_symbol_record(store.latest_records(), normalize_symbol(args.symbol))
    if latest is None:
        print("\nNo details for this symbol in the latest snapshot.")
        return 0

    row = describe_record(latest)
    print("\nLatest snapshot:")
    print(f"P/M:              {row.pm_ratio if row.pm_ratio is not None else '-'}")
    print(
        "Ceiling diff:     "
        f"{row.first_ceiling_diff_percent if row.first_ceiling_diff_percent is not None else '-'}"
    )
    print(f"Risk:             {row.risk.text or '-'} ({row.risk.level.value})")
    print(f"Volume today:     {row.volume:,.0f}")
    print(f"Real money flow:  {row.real_money_flow:,.3f}")
    print(f"Buy ratio:        {row.buy_ratio:,.3f}")
    return 0


def cmd_top(args: argparse.Namespace) -> int:
    """Show the most traded symbols of the latest snapshot."""
    store = _load_store(args.source)

    print("=" * 60)
    print("TOP SYMBOLS")
    print("=" * 60)
    _print_top(store, args.limit)
    return 0


def cmd_search(args: argparse.Namespace) -> int:
    """Search the latest snapshot by symbol."""
    from oiflow.analytics import filter_records

    store = _load_store(args.source)
    records = store.latest_records()
    matches = filter_records(records, args.query)

    print("=" * 60)
    print(f"SEARCH '{args.query}'")
    print("=" * 60)
    print(f"{len(matches)} of {len(records)} symbols on {format_date_label(store.latest_date)}")
    if matches:
        _print_rows(matches)
    return 0


def cmd_report(args: argparse.Namespace) -> int:
    """Run the market and top-symbol reports from a configuration file."""
    from oiflow.analytics import compute_market_series, moving_average
    from oiflow.commands.report import load_report_config
    from oiflow.data.sources import load_record_store, resolve_document_source

    config = load_report_config(args.config)
    logging.getLogger().setLevel(config.log_level)

    store = load_record_store(resolve_document_source(config.source))

    print("=" * 60)
    print("REPORT")
    print("=" * 60)
    print(f"Source:      {config.source.location}")
    _print_market(store, config.display.max_market_points)

    period = config.display.moving_average
    net_ma = moving_average([p.net for p in compute_market_series(store)], period)
    if net_ma and net_ma[-1] is not None:
        print(f"Net MA({period}):   {net_ma[-1]:,.3f}")
    print()
    _print_top(store, config.display.top_symbol_limit)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all commands."""
    parser = argparse.ArgumentParser(
        description="Order-flow snapshot analytics CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level", default="WARNING", help="Logging level (default: WARNING)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Market command
    market_parser = subparsers.add_parser("market", help="Show the market aggregate series")
    market_parser.add_argument("source", help="Document path or http(s) URL")
    market_parser.add_argument(
        "-p", "--points", type=int, default=30, help="Trailing dates to show (default: 30)"
    )

    # Symbol command
    symbol_parser = subparsers.add_parser("symbol", help="Show one symbol's timeline")
    symbol_parser.add_argument("source", help="Document path or http(s) URL")
    symbol_parser.add_argument("symbol", help="Symbol to look up (any spelling)")
    symbol_parser.add_argument(
        "--ma", type=int, default=2, help="Moving average period (default: 2)"
    )

    # Top command
    top_parser = subparsers.add_parser("top", help="Show the most traded symbols")
    top_parser.add_argument("source", help="Document path or http(s) URL")
    top_parser.add_argument(
        "-l", "--limit", type=int, default=10, help="Number of symbols (default: 10)"
    )

    # Search command
    search_parser = subparsers.add_parser("search", help="Search the latest snapshot")
    search_parser.add_argument("source", help="Document path or http(s) URL")
    search_parser.add_argument("query", help="Symbol text to search for")

    # Report command
    report_parser = subparsers.add_parser("report", help="Run reports from a YAML config")
    report_parser.add_argument("config", help="Path to YAML configuration file")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(args.log_level)

    commands = {
        "market": cmd_market,
        "symbol": cmd_symbol,
        "top": cmd_top,
        "search": cmd_search,
        "report": cmd_report,
    }
    try:
        return commands[args.command](args)
    except OIFlowError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
