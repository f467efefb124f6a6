"""
Data models for opening-range breakout trading.

Contains dataclasses for:
- Market sessions (timezone + official open time)
- ORB configuration
- Opening ranges and breakout signals
- Premarket snapshots (input) and screened stocks (output)
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from zoneinfo import ZoneInfo


class BreakoutDirection(str, Enum):
    """Side of the range the price broke out of."""

    LONG = "long"
    SHORT = "short"


@dataclass(frozen=True)
class MarketSession:
    """
    Where and when a market opens.

    The open is resolved through zoneinfo, so daylight saving shifts are
    handled for sessions like New York.
    """

    timezone: str = "America/New_York"
    open_time: time = time(9, 30)

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def session_date(self, timestamp: int) -> date:
        """Calendar date of ``timestamp`` in the session's timezone."""
        return datetime.fromtimestamp(timestamp, tz=self.tz).date()

    def open_timestamp(self, session_date: date) -> int:
        """Unix timestamp of the market open on ``session_date``."""
        local_open = datetime.combine(session_date, self.open_time, tzinfo=self.tz)
        return int(local_open.timestamp())


US_EQUITIES = MarketSession("America/New_York", time(9, 30))
KRX = MarketSession("Asia/Seoul", time(9, 0))


@dataclass
class ORBConfig:
    """Configuration for range detection, breakout detection and screening."""

    # ==========================================================================
    # RANGE / BREAKOUT
    # ==========================================================================
    range_minutes: int = 5  # Length of the opening range window
    use_vwap_filter: bool = True  # Breakout close must be on the right side of VWAP
    stop_buffer: float = 0.02  # Added beyond the opposite range edge for the stop

    # ==========================================================================
    # PREMARKET SCREENER
    # ==========================================================================
    rvol_threshold: float = 3.0  # Minimum premarket relative volume
    premarket_change_threshold: float = 2.0  # Minimum |premarket change| in percent
    premarket_volume_fraction: float = 0.02  # Normal premarket volume as a share of regular

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.range_minutes <= 0:
            raise ValueError("range_minutes must be positive")
        if self.stop_buffer < 0:
            raise ValueError("stop_buffer must be non-negative")
        if self.rvol_threshold < 0 or self.premarket_change_threshold < 0:
            raise ValueError("screener thresholds must be non-negative")
        if self.premarket_volume_fraction < 0:
            raise ValueError("premarket_volume_fraction must be non-negative")


@dataclass(frozen=True)
class OpeningRange:
    """High/low of the candles inside ``[start_time, end_time)``."""

    high: float
    low: float
    range_width: float
    start_time: int
    end_time: int

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "high": self.high,
            "low": self.low,
            "range_width": self.range_width,
            "start_time": self.start_time,
            "end_time": self.end_time,
        }


@dataclass(frozen=True)
class ORBSignal:
    """A breakout entry with its targets and stop."""

    symbol: str
    direction: BreakoutDirection
    entry: float
    target1: float  # entry +/- range width
    target2: float  # entry +/- 1.5 x range width
    stop: float
    range_high: float
    range_low: float
    time: int

    @property
    def risk(self) -> float:
        """Distance from entry to stop."""
        return abs(self.entry - self.stop)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "symbol": self.symbol,
            "direction": self.direction.value,
            "entry": self.entry,
            "target1": self.target1,
            "target2": self.target2,
            "stop": self.stop,
            "range_high": self.range_high,
            "range_low": self.range_low,
            "time": self.time,
        }


@dataclass(frozen=True)
class PremarketSnapshot:
    """Premarket quote for one symbol; any field may be missing."""

    symbol: str
    pre_market_price: float | None = None
    pre_market_change: float | None = None  # Fraction, 0.05 = +5%
    pre_market_volume: float | None = None
    regular_market_price: float | None = None
    regular_market_volume: float | None = None


@dataclass(frozen=True)
class PremarketStock:
    """A screened premarket candidate."""

    symbol: str
    pre_price: float
    pre_change: float  # Percent
    pre_volume: float
    normal_volume: float
    rvol: float
    has_catalyst: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "symbol": self.symbol,
            "pre_price": self.pre_price,
            "pre_change": self.pre_change,
            "pre_volume": self.pre_volume,
            "normal_volume": self.normal_volume,
            "rvol": self.rvol,
            "has_catalyst": self.has_catalyst,
        }
