"""
Collaborator protocols.

The analysis core never fetches anything. Callers obtain candles, indicator
series and premarket snapshots from services shaped like these protocols and
pass the results in.
"""

from typing import TYPE_CHECKING, Protocol

from .models import SeriesMap

if TYPE_CHECKING:
    from quanting.indicators import IndicatorSet
    from quanting.orb.models import PremarketSnapshot


class CandleProvider(Protocol):
    """Returns candles for a list of symbols at one interval."""

    def fetch_candles(self, symbols: list[str], interval: str, limit: int) -> SeriesMap:
        """Fetch up to ``limit`` candles per symbol, oldest first."""
        ...


class IndicatorProvider(Protocol):
    """Returns time-aligned indicator series for one symbol."""

    def fetch_indicators(self, symbol: str, interval: str) -> "IndicatorSet":
        """Bollinger, MACD and RSI points keyed by candle time."""
        ...


class PremarketProvider(Protocol):
    """Returns premarket snapshots for candidate symbols."""

    def fetch_premarket(self, symbols: list[str]) -> list["PremarketSnapshot"]:
        """One snapshot per symbol that has premarket data."""
        ...
