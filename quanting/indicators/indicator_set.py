"""
Indicator bundle consumed by the confluence signal detector.

Groups the band, trend-following oscillator and momentum oscillator series
for one symbol so they can be looked up by candle time.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from quanting.core.models import Candle

from .bollinger import BollingerPoint, bollinger_bands
from .macd import MACDPoint, macd_series
from .rsi import RSIPoint, rsi_series


@dataclass(frozen=True)
class IndicatorSet:
    """Time-aligned Bollinger, MACD and RSI series."""

    bollinger: list[BollingerPoint] = field(default_factory=list)
    macd: list[MACDPoint] = field(default_factory=list)
    rsi: list[RSIPoint] = field(default_factory=list)

    def bollinger_by_time(self) -> dict[int, BollingerPoint]:
        """Band points keyed by candle time."""
        return {p.time: p for p in self.bollinger}

    def macd_by_time(self) -> dict[int, MACDPoint]:
        """MACD points keyed by candle time."""
        return {p.time: p for p in self.macd}

    def rsi_by_time(self) -> dict[int, RSIPoint]:
        """RSI points keyed by candle time."""
        return {p.time: p for p in self.rsi}


def compute_indicator_set(
    candles: Sequence[Candle],
    bb_period: int = 20,
    bb_multiplier: float = 2.0,
    macd_fast: int = 12,
    macd_slow: int = 26,
    macd_signal: int = 9,
    rsi_period: int = 14,
) -> IndicatorSet:
    """Compute the default indicator bundle for one candle series."""
    return IndicatorSet(
        bollinger=bollinger_bands(candles, bb_period, bb_multiplier),
        macd=macd_series(candles, macd_fast, macd_slow, macd_signal),
        rsi=rsi_series(candles, rsi_period),
    )
