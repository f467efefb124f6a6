"""
Monthly Rotation Strategies.

Three independent signal generators walk the same monthly index and are
combined by the portfolio backtester:
- gem: dual momentum between two risk assets with a bond fallback
- taa: 10-month trend filter over a multi-asset basket
- sector: top-3 sector ETFs by 12-month momentum with a trend filter

Each module exposes an ``*_at_index`` function used inside the backtest loop
and a ``compute_*`` function describing the latest month for display.

Usage:
    from quanting.core import AlignedMonthlySeries
    from quanting.strategies import gem_at_index, backtest_symbols

    series = AlignedMonthlySeries(provider.fetch_candles(backtest_symbols(), "1mo", 300))
    pick = gem_at_index(series, len(series) - 1)
    print(pick.asset)  # "SPY"
"""

from quanting.strategies.baskets import (
    GEM_ASSETS,
    GEM_CASH,
    GEM_RISK_A,
    GEM_RISK_B,
    GEM_SAFETY,
    MOMENTUM_LOOKBACK,
    SECTOR_ETFS,
    TAA_ASSETS,
    TOP_SECTORS_COUNT,
    TREND_SMA_PERIOD,
    backtest_symbols,
)
from quanting.strategies.gem import GemPick, GemSignal, choose_asset, compute_gem_signal, gem_at_index
from quanting.strategies.sector import (
    UNRANKED,
    SectorPick,
    SectorRanking,
    compute_sector_rankings,
    sector_at_index,
)
from quanting.strategies.taa import TaaHolding, TaaSignal, compute_taa_signals, taa_at_index

__all__ = [
    "GEM_ASSETS",
    "GEM_CASH",
    "GEM_RISK_A",
    "GEM_RISK_B",
    "GEM_SAFETY",
    "MOMENTUM_LOOKBACK",
    "SECTOR_ETFS",
    "TAA_ASSETS",
    "TOP_SECTORS_COUNT",
    "TREND_SMA_PERIOD",
    "UNRANKED",
    "GemPick",
    "GemSignal",
    "SectorPick",
    "SectorRanking",
    "TaaHolding",
    "TaaSignal",
    "backtest_symbols",
    "choose_asset",
    "compute_gem_signal",
    "compute_sector_rankings",
    "compute_taa_signals",
    "gem_at_index",
    "sector_at_index",
    "taa_at_index",
]
