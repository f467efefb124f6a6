"""
Time-Series Primitives - helpers shared by every analysis component.

Pure functions over ordered candle lists:
- close extraction, index-based SMA and average volume
- trailing period returns
- timestamp intersection of two series
- the aligned monthly series used by the portfolio backtester
"""

from collections.abc import Sequence

from .models import Candle, SeriesMap


def closes(candles: Sequence[Candle]) -> list[float]:
    """Extract close prices, oldest first."""
    return [c.close for c in candles]


def sma_at(values: Sequence[float | None], period: int, end_index: int) -> float | None:
    """
    Simple moving average of ``values[end_index - period + 1 : end_index + 1]``.

    Args:
        values: Values ordered oldest first (None marks a missing point)
        period: Number of values to average
        end_index: Index of the last value in the window (inclusive)

    Returns:
        The average, or None if the window is incomplete or has a gap
    """
    if period <= 0 or end_index < period - 1 or end_index >= len(values):
        return None

    window = values[end_index - period + 1 : end_index + 1]
    if any(v is None for v in window):
        return None
    return sum(window) / period


def avg_volume(candles: Sequence[Candle], end_index: int, period: int) -> float:
    """
    Average volume of up to ``period`` candles ending at ``end_index``.

    Uses however many candles are available when the history is shorter
    than ``period``. Returns 0.0 for an empty window.
    """
    start = max(0, end_index - period + 1)
    window = candles[start : end_index + 1]
    if not window:
        return 0.0
    return sum(c.volume for c in window) / len(window)


def simple_return(now: float, past: float) -> float:
    """(now - past) / past, or 0.0 when past is not positive."""
    return (now - past) / past if past > 0 else 0.0


def period_return(candles: Sequence[Candle], periods: int) -> float | None:
    """
    Return over the last ``periods`` candles.

    Returns:
        Fractional return, or None if there is not enough history or the
        starting close is not positive
    """
    if len(candles) < periods + 1:
        return None
    current = candles[-1].close
    past = candles[-1 - periods].close
    if past <= 0:
        return None
    return (current - past) / past


def align_by_time(
    series_a: Sequence[Candle], series_b: Sequence[Candle]
) -> tuple[list[int], list[float], list[float]]:
    """
    Intersect two candle series on exact timestamps.

    Candles whose time is not present in both series are dropped. Order
    follows ``series_a``.

    Returns:
        (times, closes_a, closes_b) of equal length
    """
    b_by_time = {c.time: c for c in series_b}
    times: list[int] = []
    closes_a: list[float] = []
    closes_b: list[float] = []

    for ca in series_a:
        cb = b_by_time.get(ca.time)
        if cb is None:
            continue
        times.append(ca.time)
        closes_a.append(ca.close)
        closes_b.append(cb.close)

    return times, closes_a, closes_b


class AlignedMonthlySeries:
    """
    Monthly closes for several instruments walking one shared index.

    The reference symbol defines the calendar: index ``i`` means the i-th
    reference bar. The default constructor aligns every other symbol by
    position (its i-th candle is assumed to be the same month), which is
    what the portfolio backtester has always done. ``by_calendar`` builds a
    stricter view that matches bars by timestamp and leaves holes where a
    symbol has no bar for a reference month.

    Strategy legs only talk to this class, so either alignment can be used
    without touching them.
    """

    def __init__(self, series_map: SeriesMap, reference: str = "SPY") -> None:
        self.reference = reference
        self._times = [c.time for c in series_map.get(reference, [])]
        self._closes: dict[str, list[float | None]] = {
            symbol: [c.close for c in candles] for symbol, candles in series_map.items()
        }

    @classmethod
    def by_calendar(cls, series_map: SeriesMap, reference: str = "SPY") -> "AlignedMonthlySeries":
        """Align every symbol to the reference bars by exact timestamp."""
        aligned = cls({}, reference)
        aligned._times = [c.time for c in series_map.get(reference, [])]
        for symbol, candles in series_map.items():
            by_time = {c.time: c.close for c in candles}
            aligned._closes[symbol] = [by_time.get(t) for t in aligned._times]
        return aligned

    def __len__(self) -> int:
        return len(self._times)

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._closes

    @property
    def symbols(self) -> list[str]:
        """Symbols with data, in insertion order."""
        return list(self._closes)

    def time_at(self, index: int) -> int | None:
        """Reference bar time at ``index``, or None when out of range."""
        if 0 <= index < len(self._times):
            return self._times[index]
        return None

    def first_index_at_or_after(self, time: int) -> int:
        """First reference index whose time is >= ``time``, or -1 if none."""
        for i, t in enumerate(self._times):
            if t >= time:
                return i
        return -1

    def length_of(self, symbol: str) -> int:
        """Number of bars held for ``symbol`` (0 if absent)."""
        return len(self._closes.get(symbol, []))

    def close_at(self, symbol: str, index: int) -> float | None:
        """Close of ``symbol`` at ``index``; None if absent or out of range."""
        values = self._closes.get(symbol)
        if values is None or not 0 <= index < len(values):
            return None
        return values[index]

    def bar_return(self, symbol: str, index: int) -> float:
        """
        One-bar return of ``symbol`` into ``index``.

        A missing current bar yields 0.0; a missing previous bar is treated
        as unchanged.
        """
        now = self.close_at(symbol, index)
        if now is None:
            return 0.0
        prev = self.close_at(symbol, index - 1)
        if prev is None:
            prev = now
        return simple_return(now, prev)

    def sma_at(self, symbol: str, period: int, index: int) -> float | None:
        """SMA of ``symbol`` closes over ``period`` bars ending at ``index``."""
        values = self._closes.get(symbol)
        if values is None:
            return None
        return sma_at(values, period, index)
