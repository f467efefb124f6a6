"""
Bollinger Bands - volatility envelope around a simple moving average.

Upper/lower bands sit ``multiplier`` population standard deviations away
from the SMA of closes.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from quanting.core.models import Candle

from .moving_averages import sma


@dataclass(frozen=True)
class BollingerPoint:
    """Band values at one candle time."""

    time: int
    upper: float
    middle: float
    lower: float

    @property
    def width(self) -> float:
        """Distance between the outer bands."""
        return self.upper - self.lower

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"time": self.time, "upper": self.upper, "middle": self.middle, "lower": self.lower}


def bollinger_bands(
    candles: Sequence[Candle],
    period: int = 20,
    multiplier: float = 2.0,
) -> list[BollingerPoint]:
    """
    Calculate Bollinger Bands for every complete window.

    Args:
        candles: Candles, oldest first
        period: SMA window (default 20)
        multiplier: Standard deviations between middle and outer bands

    Returns:
        One BollingerPoint per candle from index ``period - 1``; empty if
        there are fewer than ``period`` candles
    """
    if period <= 0 or len(candles) < period:
        return []

    prices = [c.close for c in candles]
    result: list[BollingerPoint] = []

    for i in range(period - 1, len(prices)):
        window = prices[i - period + 1 : i + 1]
        middle = sma(window, period)
        # Population standard deviation (divide by N, not N-1)
        variance = sum((p - middle) ** 2 for p in window) / period
        std_dev = math.sqrt(variance)
        result.append(
            BollingerPoint(
                time=candles[i].time,
                upper=middle + multiplier * std_dev,
                middle=middle,
                lower=middle - multiplier * std_dev,
            )
        )

    return result
