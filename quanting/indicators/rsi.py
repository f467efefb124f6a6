"""
RSI Indicator - Relative Strength Index calculation.

Measures the speed and magnitude of recent price changes
to evaluate overbought or oversold conditions.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from quanting.core.models import Candle


@dataclass(frozen=True)
class RSIPoint:
    """RSI value at one candle time."""

    time: int
    value: float

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"time": self.time, "value": self.value}


def _rsi_from_averages(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return 100 - (100 / (1 + rs))


def rsi_series(candles: Sequence[Candle], period: int = 14) -> list[RSIPoint]:
    """
    Calculate RSI using Wilder's smoothing method, keyed by candle time.

    The first value is an SMA of the first ``period`` gains/losses and lands
    on candle index ``period``; later values use
    ``(prev_avg * (period - 1) + current) / period``.

    Args:
        candles: Candles, oldest first (needs period + 1 minimum)
        period: Lookback period (default 14)

    Returns:
        List of RSIPoint, empty if insufficient data
    """
    if len(candles) < period + 1 or period <= 0:
        return []

    prices = [c.close for c in candles]
    changes = [prices[i] - prices[i - 1] for i in range(1, len(prices))]
    gains = [c if c > 0 else 0.0 for c in changes]
    losses = [-c if c < 0 else 0.0 for c in changes]

    avg_gain = sum(gains[:period]) / period
    avg_loss = sum(losses[:period]) / period
    result = [RSIPoint(time=candles[period].time, value=_rsi_from_averages(avg_gain, avg_loss))]

    for i in range(period, len(changes)):
        avg_gain = (avg_gain * (period - 1) + gains[i]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i]) / period
        # changes[i] is the move into candles[i + 1]
        result.append(
            RSIPoint(time=candles[i + 1].time, value=_rsi_from_averages(avg_gain, avg_loss))
        )

    return result
