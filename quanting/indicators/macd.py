"""
MACD Indicator - Moving Average Convergence Divergence.

Trend-following momentum indicator showing the relationship
between two exponential moving averages of price.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from quanting.core.models import Candle

from .moving_averages import ema_series


@dataclass(frozen=True)
class MACDPoint:
    """MACD values at one candle time."""

    time: int
    macd: float  # Fast EMA - Slow EMA
    signal: float  # EMA of MACD line
    histogram: float  # MACD line - Signal line

    @property
    def is_bullish(self) -> bool:
        """True if MACD is above signal line."""
        return self.histogram > 0

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "time": self.time,
            "macd": self.macd,
            "signal": self.signal,
            "histogram": self.histogram,
        }


def macd_series(
    candles: Sequence[Candle],
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
) -> list[MACDPoint]:
    """
    Calculate the MACD series keyed by candle time.

    MACD Line = Fast EMA - Slow EMA
    Signal Line = EMA of MACD Line
    Histogram = MACD Line - Signal Line

    The first point lands on candle index ``(slow - 1) + (signal - 1)``,
    where the signal EMA first exists.

    Args:
        candles: Candles, oldest first
        fast: Fast EMA period (default 12)
        slow: Slow EMA period (default 26)
        signal: Signal line EMA period (default 9)

    Returns:
        List of MACDPoint, empty if insufficient data or fast >= slow
    """
    if fast <= 0 or slow <= 0 or signal <= 0 or fast >= slow:
        return []

    prices = [c.close for c in candles]
    fast_ema = ema_series(prices, fast)
    slow_ema = ema_series(prices, slow)
    if not fast_ema or not slow_ema:
        return []

    # Fast EMA starts earlier, trim to match slow EMA length
    offset = slow - fast
    macd_line = [f - s for f, s in zip(fast_ema[offset:], slow_ema, strict=False)]

    signal_values = ema_series(macd_line, signal)
    if not signal_values:
        return []

    candle_start = (slow - 1) + (signal - 1)
    points: list[MACDPoint] = []
    for i, sig in enumerate(signal_values):
        m = macd_line[i + signal - 1]
        points.append(
            MACDPoint(time=candles[candle_start + i].time, macd=m, signal=sig, histogram=m - sig)
        )

    return points
