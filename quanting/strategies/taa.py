"""
Tactical Asset Allocation (TAA) - 10-month trend filter.

Each basket asset is held while its close is above its 10-bar simple moving
average and sits in cash otherwise.
"""

from dataclasses import dataclass

from quanting.core.models import SeriesMap
from quanting.core.series import AlignedMonthlySeries, closes, sma_at

from .baskets import TAA_ASSETS, TREND_SMA_PERIOD


@dataclass(frozen=True)
class TaaHolding:
    """Trend-filter state of one asset at one backtest index."""

    asset: str
    invested: bool
    return_pct: float  # One-bar return into the index


@dataclass(frozen=True)
class TaaSignal:
    """Trend-filter state of one asset at its latest bar."""

    asset: str
    invested: bool
    price: float
    sma10: float
    reason: str

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "asset": self.asset,
            "invested": self.invested,
            "price": self.price,
            "sma10": self.sma10,
            "reason": self.reason,
        }


def taa_at_index(series: AlignedMonthlySeries, index: int) -> list[TaaHolding]:
    """Trend-filter state of every basket asset at ``index``."""
    holdings: list[TaaHolding] = []

    for asset in TAA_ASSETS:
        if asset not in series or index < TREND_SMA_PERIOD:
            holdings.append(TaaHolding(asset=asset, invested=False, return_pct=0.0))
            continue

        price = series.close_at(asset, index) or 0.0
        trend = series.sma_at(asset, TREND_SMA_PERIOD, index)
        holdings.append(
            TaaHolding(
                asset=asset,
                invested=trend is not None and price > trend,
                return_pct=series.bar_return(asset, index),
            )
        )

    return holdings


def compute_taa_signals(series_map: SeriesMap) -> list[TaaSignal]:
    """Trend-filter state of every basket asset at its own latest bar."""
    signals: list[TaaSignal] = []

    for asset in TAA_ASSETS:
        candles = series_map.get(asset)
        if not candles or len(candles) < TREND_SMA_PERIOD + 1:
            signals.append(
                TaaSignal(asset=asset, invested=False, price=0.0, sma10=0.0, reason="insufficient data")
            )
            continue

        values = closes(candles)
        last = len(values) - 1
        price = values[last]
        trend = sma_at(values, TREND_SMA_PERIOD, last)
        if trend is None:
            signals.append(
                TaaSignal(asset=asset, invested=False, price=price, sma10=0.0, reason="SMA unavailable")
            )
            continue

        invested = price > trend
        if invested:
            reason = f"price ({price:.2f}) > 10-month SMA ({trend:.2f}) -> invest"
        else:
            reason = f"price ({price:.2f}) <= 10-month SMA ({trend:.2f}) -> cash"
        signals.append(
            TaaSignal(asset=asset, invested=invested, price=price, sma10=trend, reason=reason)
        )

    return signals
