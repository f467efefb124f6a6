"""
Relative Volume (RVOL).

Each candle's volume divided by the average volume of the ``period``
candles before it. 1.0 means average, 2.0 means twice the average.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from quanting.core.models import Candle


@dataclass(frozen=True)
class RvolPoint:
    """Relative volume at one candle time."""

    time: int
    value: float


def rvol_series(candles: Sequence[Candle], period: int) -> list[RvolPoint]:
    """
    Calculate relative volume for every candle with ``period`` predecessors.

    The current candle is excluded from its own baseline. A zero baseline
    yields 0.0.
    """
    if not candles or period < 1:
        return []

    result: list[RvolPoint] = []
    for i in range(period, len(candles)):
        avg = sum(c.volume for c in candles[i - period : i]) / period
        ratio = candles[i].volume / avg if avg > 0 else 0.0
        result.append(RvolPoint(time=candles[i].time, value=ratio))

    return result
