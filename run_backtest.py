#!/usr/bin/env python3
"""
Run the analysis components against CSV candle files.

Usage:
    python run_backtest.py portfolio data/monthly/                 # GEM/TAA/sector backtest
    python run_backtest.py portfolio data/monthly/ --start-year 2015 --capital 50000
    python run_backtest.py pair data/daily/KO.csv data/daily/PEP.csv
    python run_backtest.py confluence data/daily/AAPL.csv
    python run_backtest.py orb data/1m/TSLA.csv --range-minutes 15 --session krx
    python run_backtest.py -v ...                                  # Debug logging

CSV columns: time,open,high,low,close,volume (time as unix seconds or ISO-8601).
The portfolio directory holds one <SYMBOL>.csv file of monthly candles per symbol.
"""

import argparse
import logging
import math
import sys
from datetime import datetime, timezone

from rich.console import Console
from rich.table import Table

from quanting.backtest import BacktestConfig, run_backtest
from quanting.core.errors import InsufficientDataError
from quanting.data import CSVCandleSource, load_series_map
from quanting.indicators import compute_indicator_set
from quanting.orb import KRX, US_EQUITIES, ORBConfig, detect_breakout, detect_opening_range
from quanting.pairs import analyze_pair
from quanting.signals import detect_confluence_signals
from quanting.strategies import (
    GEM_RISK_A,
    GEM_RISK_B,
    UNRANKED,
    compute_gem_signal,
    compute_sector_rankings,
)

console = Console()

SESSIONS = {"us": US_EQUITIES, "krx": KRX}


def format_time(ts: int) -> str:
    """Unix seconds as 'YYYY-MM-DD HH:MM' (UTC)."""
    return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%d %H:%M")


def cmd_portfolio(args: argparse.Namespace) -> int:
    series_map = load_series_map(args.directory)
    config = BacktestConfig(
        start_year=args.start_year,
        initial_capital=args.capital,
        gem_weight=args.gem_weight,
        taa_weight=args.taa_weight,
        sector_weight=args.sector_weight,
    )
    result = run_backtest(series_map, config)

    if result.is_empty:
        console.print(
            "[red]❌ Not enough history: need 12 months of SPY data before the start year.[/red]"
        )
        return 1

    summary = Table(title="📊 PORTFOLIO BACKTEST")
    summary.add_column("Metric", style="bold")
    summary.add_column("Value", justify="right")
    for label, value in result.summary_rows():
        summary.add_row(label, value)
    console.print(summary)

    trades = Table(title=f"📜 RECENT MONTHS (last {args.last})")
    trades.add_column("Month")
    trades.add_column("GEM")
    trades.add_column("TAA")
    trades.add_column("Sectors")
    trades.add_column("Return", justify="right")
    trades.add_column("Cumulative", justify="right")
    for t in result.trades[-args.last :]:
        style = "green" if t.portfolio_return > 0 else "red"
        trades.add_row(
            t.month,
            t.gem_asset,
            ", ".join(t.taa_assets) or "-",
            ", ".join(t.sector_assets) or "-",
            f"[{style}]{t.portfolio_return:+.2%}[/{style}]",
            f"{t.cumulative_return:+.2%}",
        )
    console.print(trades)

    gem = compute_gem_signal(series_map.get(GEM_RISK_A, []), series_map.get(GEM_RISK_B, []))
    if gem:
        console.print(f"GEM {gem.month}: [bold]{gem.asset}[/bold] ({gem.reason})")

    rankings = Table(title="🏭 SECTOR RANKING")
    rankings.add_column("Rank", justify="right")
    rankings.add_column("Sector")
    rankings.add_column("12m", justify="right")
    rankings.add_column("> SMA10")
    rankings.add_column("Selected")
    for r in compute_sector_rankings(series_map):
        rankings.add_row(
            "-" if r.rank == UNRANKED else str(r.rank),
            r.asset,
            f"{r.return_12m:+.1%}",
            "✅" if r.above_sma else "",
            "⭐" if r.selected else "",
        )
    console.print(rankings)
    return 0


def cmd_pair(args: argparse.Namespace) -> int:
    source_a = CSVCandleSource(args.file_a)
    source_b = CSVCandleSource(args.file_b)
    try:
        result = analyze_pair(source_a.candles, source_b.candles, source_a.symbol, source_b.symbol)
    except InsufficientDataError as e:
        console.print(f"[red]❌ {e}[/red]")
        return 1

    table = Table(title=f"🔗 PAIR {result.pair_a} / {result.pair_b}")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Aligned points", str(result.aligned_points))
    table.add_row("Beta (hedge ratio)", f"{result.beta:.4f}")
    table.add_row("Alpha", f"{result.alpha:.4f}")
    table.add_row("ADF statistic", f"{result.adf_statistic:.3f}")
    table.add_row("p-value", result.p_value.value)
    table.add_row("Cointegrated", "✅" if result.is_cointegrated else "❌")
    table.add_row(
        "Half-life",
        f"{result.half_life:.1f} bars" if math.isfinite(result.half_life) else "∞",
    )
    table.add_row("Z window", str(result.z_window))
    table.add_row("Current Z", f"{result.current_z_score:+.2f}")
    table.add_row("Signal", result.signal.value.upper())
    console.print(table)
    return 0


def cmd_confluence(args: argparse.Namespace) -> int:
    candles = CSVCandleSource(args.file).candles
    signals = detect_confluence_signals(candles, compute_indicator_set(candles))

    table = Table(title=f"🎯 CONFLUENCE SIGNALS ({len(signals)})")
    table.add_column("Time")
    table.add_column("Side")
    table.add_column("Price", justify="right")
    table.add_column("Confidence")
    table.add_column("Conditions")
    for s in signals:
        style = "green" if s.is_buy else "red"
        table.add_row(
            format_time(s.time),
            f"[{style}]{s.direction.value.upper()}[/{style}]",
            f"{s.price:,.2f}",
            s.confidence.value,
            "; ".join(s.conditions),
        )
    console.print(table)
    return 0


def cmd_orb(args: argparse.Namespace) -> int:
    source = CSVCandleSource(args.file)
    config = ORBConfig(
        range_minutes=args.range_minutes,
        use_vwap_filter=not args.no_vwap,
    )
    candles = source.candles
    opening_range = detect_opening_range(candles, config.range_minutes, SESSIONS[args.session])
    if opening_range is None:
        console.print("[yellow]⚠️  No candles inside the opening range window.[/yellow]")
        return 1

    console.print(
        f"Opening range {format_time(opening_range.start_time)} → "
        f"{format_time(opening_range.end_time)}: "
        f"{opening_range.low:,.2f} - {opening_range.high:,.2f} "
        f"(width {opening_range.range_width:,.2f})"
    )

    signals = detect_breakout(candles, opening_range, config, symbol=source.symbol)
    if not signals:
        console.print("No breakout yet.")
        return 0

    table = Table(title="🚀 ORB BREAKOUT")
    for column in ("Time", "Side", "Entry", "T1", "T2", "Stop"):
        table.add_column(column, justify="right" if column not in ("Time", "Side") else "left")
    for s in signals:
        table.add_row(
            format_time(s.time),
            s.direction.value.upper(),
            f"{s.entry:,.2f}",
            f"{s.target1:,.2f}",
            f"{s.target2:,.2f}",
            f"{s.stop:,.2f}",
        )
    console.print(table)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Quantitative analysis over CSV candle files")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    portfolio = sub.add_parser("portfolio", help="GEM/TAA/sector portfolio rotation backtest")
    portfolio.add_argument("directory", help="Directory of <SYMBOL>.csv monthly candle files")
    portfolio.add_argument("--start-year", type=int, default=2010, help="First year (default: 2010)")
    portfolio.add_argument(
        "--capital", type=float, default=100_000.0, help="Initial capital (default: 100000)"
    )
    portfolio.add_argument("--gem-weight", type=float, default=0.4, help="GEM leg weight")
    portfolio.add_argument("--taa-weight", type=float, default=0.4, help="TAA leg weight")
    portfolio.add_argument("--sector-weight", type=float, default=0.2, help="Sector leg weight")
    portfolio.add_argument("--last", type=int, default=12, help="Months to list (default: 12)")
    portfolio.set_defaults(func=cmd_portfolio)

    pair = sub.add_parser("pair", help="Cointegration analysis of two daily series")
    pair.add_argument("file_a", help="CSV of the dependent leg")
    pair.add_argument("file_b", help="CSV of the hedge leg")
    pair.set_defaults(func=cmd_pair)

    confluence = sub.add_parser("confluence", help="Bollinger + MACD + RSI confluence signals")
    confluence.add_argument("file", help="CSV of candles")
    confluence.set_defaults(func=cmd_confluence)

    orb = sub.add_parser("orb", help="Opening-range breakout on intraday candles")
    orb.add_argument("file", help="CSV of intraday candles")
    orb.add_argument("--range-minutes", type=int, default=5, help="Range length (default: 5)")
    orb.add_argument("--session", choices=sorted(SESSIONS), default="us", help="Market session")
    orb.add_argument("--no-vwap", action="store_true", help="Disable the VWAP filter")
    orb.set_defaults(func=cmd_orb)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]❌ {e}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
