"""
Core data models shared by every analysis component.

Contains dataclasses for:
- Candles (OHLCV bars keyed by unix time)
- Instrument series maps (symbol -> ordered candles)
"""

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class Candle:
    """
    A single OHLCV bar.

    Candles within one series are ordered by ``time`` ascending and the
    timestamps are unique. Nothing in this package mutates a candle.
    """

    time: int  # Unix timestamp in seconds
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0

    def __post_init__(self) -> None:
        """Validate volume."""
        if self.volume < 0:
            raise ValueError("volume must be non-negative")

    @property
    def timestamp(self) -> datetime:
        """Bar time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.time, tz=timezone.utc)

    @property
    def typical_price(self) -> float:
        """(high + low + close) / 3, the price used for VWAP."""
        return (self.high + self.low + self.close) / 3

    @property
    def is_bullish(self) -> bool:
        """Returns True if close >= open (green candle)."""
        return self.close >= self.open

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "time": self.time,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Candle":
        """Create a candle from a dictionary with OHLCV keys."""
        return cls(
            time=int(data["time"]),
            open=float(data["open"]),
            high=float(data["high"]),
            low=float(data["low"]),
            close=float(data["close"]),
            volume=float(data.get("volume", 0.0)),
        )


# Instrument Series Map: symbol -> candles ordered by time.
# Calendars are not assumed to match across symbols.
SeriesMap = dict[str, list[Candle]]


def month_label(time: int) -> str:
    """Format a unix timestamp as a ``YYYY-MM`` label (UTC)."""
    return datetime.fromtimestamp(time, tz=timezone.utc).strftime("%Y-%m")
