"""
Global Equities Momentum (GEM) - dual momentum rotation.

Compares the trailing 12-month return of two risk assets. When both are
negative the leg moves to the safety asset; otherwise it holds whichever
risk asset has the higher return (ties go to the first).
"""

from collections.abc import Sequence
from dataclasses import dataclass

from quanting.core.models import Candle, month_label
from quanting.core.series import AlignedMonthlySeries, period_return, simple_return

from .baskets import GEM_RISK_A, GEM_RISK_B, GEM_SAFETY, MOMENTUM_LOOKBACK


@dataclass(frozen=True)
class GemPick:
    """GEM selection at one backtest index."""

    asset: str
    return_a: float  # 12-month return of the first risk asset
    return_b: float  # 12-month return of the second risk asset


@dataclass(frozen=True)
class GemSignal:
    """GEM selection for the latest month, with an explanation."""

    month: str
    asset: str
    return_a: float
    return_b: float
    reason: str

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "month": self.month,
            "asset": self.asset,
            "return_a": self.return_a,
            "return_b": self.return_b,
            "reason": self.reason,
        }


def choose_asset(return_a: float, return_b: float) -> str:
    """Pick the GEM asset from the two trailing returns."""
    if return_a < 0 and return_b < 0:
        return GEM_SAFETY
    if return_a >= return_b:
        return GEM_RISK_A
    return GEM_RISK_B


def gem_at_index(series: AlignedMonthlySeries, index: int) -> GemPick:
    """
    GEM selection using bars up to ``index``.

    Missing closes count as 0 and a non-positive past close gives a 0
    return, so absent data never raises. Before 12 bars of history the
    safety asset is selected.
    """
    if index < MOMENTUM_LOOKBACK:
        return GemPick(asset=GEM_SAFETY, return_a=0.0, return_b=0.0)

    past = index - MOMENTUM_LOOKBACK
    return_a = simple_return(
        series.close_at(GEM_RISK_A, index) or 0.0, series.close_at(GEM_RISK_A, past) or 0.0
    )
    return_b = simple_return(
        series.close_at(GEM_RISK_B, index) or 0.0, series.close_at(GEM_RISK_B, past) or 0.0
    )

    return GemPick(asset=choose_asset(return_a, return_b), return_a=return_a, return_b=return_b)


def compute_gem_signal(
    candles_a: Sequence[Candle],
    candles_b: Sequence[Candle],
) -> GemSignal | None:
    """
    GEM selection from the latest bar of each risk asset.

    Returns:
        GemSignal, or None if either series lacks 13 bars or has a
        non-positive close 12 bars back
    """
    return_a = period_return(candles_a, MOMENTUM_LOOKBACK)
    return_b = period_return(candles_b, MOMENTUM_LOOKBACK)
    if return_a is None or return_b is None:
        return None

    asset = choose_asset(return_a, return_b)
    if asset == GEM_SAFETY:
        reason = f"{GEM_RISK_A} and {GEM_RISK_B} both negative -> bonds ({GEM_SAFETY})"
    elif asset == GEM_RISK_A:
        reason = f"{GEM_RISK_A} 12m return >= {GEM_RISK_B} -> US equities"
    else:
        reason = f"{GEM_RISK_B} 12m return > {GEM_RISK_A} -> international equities"

    return GemSignal(
        month=month_label(candles_a[-1].time),
        asset=asset,
        return_a=return_a,
        return_b=return_b,
        reason=reason,
    )
