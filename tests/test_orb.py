"""
Unit tests for the opening-range breakout detector and premarket screener.

Run with:
    python -m pytest tests/test_orb.py -v
"""

import sys
from datetime import date, datetime, time, timezone
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

# Add project root to path for standalone execution
sys.path.insert(0, str(Path(__file__).parent.parent))

from quanting.core.models import Candle
from quanting.orb import (
    KRX,
    US_EQUITIES,
    BreakoutDirection,
    MarketSession,
    OpeningRange,
    ORBConfig,
    PremarketSnapshot,
    detect_breakout,
    detect_opening_range,
    filter_candidates,
)

MINUTE = 60

# 2024-01-16 09:30 New York (EST) = 14:30 UTC
WINTER_OPEN = int(datetime(2024, 1, 16, 14, 30, tzinfo=timezone.utc).timestamp())


def bar(open_ts: int, minute: int, high: float, low: float, close: float, volume: float = 1000.0) -> Candle:
    """Helper to create a one-minute candle ``minute`` minutes after the open."""
    return Candle(time=open_ts + minute * MINUTE, open=close, high=high, low=low, close=close, volume=volume)


def opening_bars(open_ts: int = WINTER_OPEN) -> list[Candle]:
    """Five range candles with high 101 / low 99, typical price 100."""
    return [bar(open_ts, m, 101.0, 99.0, 100.0) for m in range(5)]


class TestMarketSession:
    """Tests for market open resolution."""

    def test_us_winter_open(self):
        """Test 09:30 New York is 14:30 UTC in winter."""
        assert US_EQUITIES.open_timestamp(date(2024, 1, 16)) == WINTER_OPEN

    def test_us_summer_open(self):
        """Test 09:30 New York is 13:30 UTC under daylight saving."""
        expected = int(datetime(2024, 7, 16, 13, 30, tzinfo=timezone.utc).timestamp())
        assert US_EQUITIES.open_timestamp(date(2024, 7, 16)) == expected

    def test_krx_open(self):
        """Test 09:00 Seoul is 00:00 UTC."""
        expected = int(datetime(2024, 1, 16, 0, 0, tzinfo=timezone.utc).timestamp())
        assert KRX.open_timestamp(date(2024, 1, 16)) == expected

    def test_session_date_uses_local_calendar(self):
        """Test the session date comes from the session's timezone."""
        # 2024-01-16 02:00 UTC is still Jan 15 in New York
        ts = int(datetime(2024, 1, 16, 2, 0, tzinfo=timezone.utc).timestamp())
        assert US_EQUITIES.session_date(ts) == date(2024, 1, 15)
        assert KRX.session_date(ts) == date(2024, 1, 16)

    def test_custom_session(self):
        """Test a custom timezone and open time."""
        session = MarketSession("Europe/London", time(8, 0))
        local = datetime(2024, 1, 16, 8, 0, tzinfo=ZoneInfo("Europe/London"))
        assert session.open_timestamp(date(2024, 1, 16)) == int(local.timestamp())


class TestOpeningRange:
    """Tests for range detection."""

    def test_range_extremes(self):
        """Test the range spans the first N minutes after the open."""
        candles = opening_bars() + [bar(WINTER_OPEN, 5, 105.0, 95.0, 100.0)]
        opening_range = detect_opening_range(candles, range_minutes=5)

        assert opening_range == OpeningRange(
            high=101.0,
            low=99.0,
            range_width=2.0,
            start_time=WINTER_OPEN,
            end_time=WINTER_OPEN + 5 * MINUTE,
        )

    def test_premarket_excluded(self):
        """Test candles before the open do not widen the range."""
        candles = [bar(WINTER_OPEN, -10, 150.0, 50.0, 100.0)] + opening_bars()
        opening_range = detect_opening_range(candles, range_minutes=5)
        assert opening_range.high == 101.0
        assert opening_range.low == 99.0

    def test_empty(self):
        """Test no candles gives no range."""
        assert detect_opening_range([], range_minutes=5) is None

    def test_no_candles_in_window(self):
        """Test premarket-only data gives no range."""
        candles = [bar(WINTER_OPEN, -30, 101.0, 99.0, 100.0), bar(WINTER_OPEN, -1, 101.0, 99.0, 100.0)]
        assert detect_opening_range(candles, range_minutes=5) is None

    def test_krx_session(self):
        """Test range detection in the Seoul session."""
        krx_open = KRX.open_timestamp(date(2024, 1, 16))
        candles = opening_bars(krx_open)
        opening_range = detect_opening_range(candles, range_minutes=5, session=KRX)
        assert opening_range is not None
        assert opening_range.start_time == krx_open


class TestBreakout:
    """Tests for breakout detection."""

    def setup_method(self):
        self.range = detect_opening_range(opening_bars(), range_minutes=5)

    def test_long_breakout(self):
        """Test a close above the range high emits a long signal."""
        candles = opening_bars() + [
            bar(WINTER_OPEN, 5, 101.0, 99.5, 100.5),
            bar(WINTER_OPEN, 6, 102.5, 101.0, 102.0),
        ]
        signals = detect_breakout(candles, self.range, symbol="TSLA")

        assert len(signals) == 1
        signal = signals[0]
        assert signal.symbol == "TSLA"
        assert signal.direction == BreakoutDirection.LONG
        assert signal.entry == 102.0
        assert signal.target1 == pytest.approx(104.0)
        assert signal.target2 == pytest.approx(105.0)
        assert signal.stop == pytest.approx(98.98)
        assert signal.time == WINTER_OPEN + 6 * MINUTE
        assert (signal.range_high, signal.range_low) == (101.0, 99.0)

    def test_short_breakout(self):
        """Test a close below the range low emits a short signal."""
        candles = opening_bars() + [bar(WINTER_OPEN, 5, 99.0, 97.5, 98.0)]
        (signal,) = detect_breakout(candles, self.range)

        assert signal.direction == BreakoutDirection.SHORT
        assert signal.target1 == pytest.approx(96.0)
        assert signal.target2 == pytest.approx(95.0)
        assert signal.stop == pytest.approx(101.02)

    def test_first_breakout_wins(self):
        """Test only the first breakout is reported."""
        candles = opening_bars() + [
            bar(WINTER_OPEN, 5, 102.5, 101.0, 102.0),
            bar(WINTER_OPEN, 6, 99.0, 96.0, 97.0),
            bar(WINTER_OPEN, 7, 104.0, 102.0, 103.0),
        ]
        signals = detect_breakout(candles, self.range)

        assert len(signals) == 1
        assert signals[0].direction == BreakoutDirection.LONG
        assert signals[0].time == WINTER_OPEN + 5 * MINUTE

    def test_no_breakout(self):
        """Test closes inside the range emit nothing."""
        candles = opening_bars() + [bar(WINTER_OPEN, m, 101.0, 99.0, 100.0) for m in range(5, 30)]
        assert detect_breakout(candles, self.range) == []

    def test_range_candles_never_signal(self):
        """Test candles inside the range window are not breakout candidates."""
        # Every close (100) is above this range, but all candles are inside the window
        narrow = OpeningRange(
            high=99.5,
            low=99.0,
            range_width=0.5,
            start_time=WINTER_OPEN,
            end_time=WINTER_OPEN + 5 * MINUTE,
        )
        assert detect_breakout(opening_bars(), narrow, ORBConfig(use_vwap_filter=False)) == []

    def test_vwap_filter_blocks(self):
        """Test a long breakout below VWAP is filtered."""
        # Heavy volume at a high typical price drags VWAP above the close
        candles = opening_bars() + [bar(WINTER_OPEN, 5, 200.0, 102.0, 102.0, volume=100_000.0)]
        assert detect_breakout(candles, self.range) == []

    def test_vwap_filter_disabled(self):
        """Test the same candle breaks out without the VWAP filter."""
        candles = opening_bars() + [bar(WINTER_OPEN, 5, 200.0, 102.0, 102.0, volume=100_000.0)]
        (signal,) = detect_breakout(candles, self.range, ORBConfig(use_vwap_filter=False))
        assert signal.direction == BreakoutDirection.LONG

    def test_vwap_starts_at_range(self):
        """Test premarket volume does not enter VWAP."""
        premarket = [bar(WINTER_OPEN, -10, 300.0, 250.0, 275.0, volume=1_000_000.0)]
        candles = premarket + opening_bars() + [bar(WINTER_OPEN, 5, 102.5, 101.0, 102.0)]
        (signal,) = detect_breakout(candles, self.range)
        assert signal.direction == BreakoutDirection.LONG

    def test_custom_stop_buffer(self):
        """Test the stop buffer comes from the config."""
        candles = opening_bars() + [bar(WINTER_OPEN, 5, 102.5, 101.0, 102.0)]
        (signal,) = detect_breakout(candles, self.range, ORBConfig(stop_buffer=0.5))
        assert signal.stop == pytest.approx(98.5)


class TestScreener:
    """Tests for the premarket screener."""

    def test_threshold_filtering(self):
        """Test low relative volume and small moves are dropped."""
        snapshots = [
            # rvol = 100k / (1M * 0.02) = 5, change 5%
            PremarketSnapshot("HOT", 10.5, 0.05, 100_000, 10.0, 1_000_000),
            # rvol = 2 (below 3)
            PremarketSnapshot("QUIET", 10.5, 0.05, 40_000, 10.0, 1_000_000),
            # rvol 5 but change only 1%
            PremarketSnapshot("FLAT", 10.1, 0.01, 100_000, 10.0, 1_000_000),
            # rvol = 10, change -4% (magnitude counts)
            PremarketSnapshot("DROP", 9.6, -0.04, 200_000, 10.0, 1_000_000),
        ]
        stocks = filter_candidates(snapshots)

        assert [s.symbol for s in stocks] == ["DROP", "HOT"]
        assert stocks[0].rvol == pytest.approx(10.0)
        assert stocks[0].pre_change == pytest.approx(-4.0)
        assert stocks[1].normal_volume == pytest.approx(20_000.0)
        assert all(s.rvol >= ORBConfig().rvol_threshold for s in stocks)
        assert not any(s.has_catalyst for s in stocks)

    def test_missing_fields(self):
        """Test missing volumes and prices fall back to neutral values."""
        stocks = filter_candidates(
            [PremarketSnapshot("NOVOL", pre_market_change=0.1)],
            ORBConfig(rvol_threshold=0.0),
        )
        (stock,) = stocks
        # pre volume 0, regular volume 1 -> normal 0.02
        assert stock.pre_volume == 0.0
        assert stock.normal_volume == pytest.approx(0.02)
        assert stock.rvol == 0.0
        assert stock.pre_price == 0.0

    def test_missing_regular_volume(self):
        """Test a missing regular volume counts as 1."""
        (stock,) = filter_candidates([PremarketSnapshot("X", 5.0, 0.05, 1.0)])
        # rvol = 1 / 0.02 = 50
        assert stock.rvol == pytest.approx(50.0)

    def test_zero_regular_volume(self):
        """Test zero regular volume gives rvol 0 and is filtered."""
        assert filter_candidates([PremarketSnapshot("Z", 5.0, 0.05, 1000.0, 5.0, 0.0)]) == []

    def test_stable_order_on_ties(self):
        """Test equal relative volumes keep input order."""
        snapshots = [
            PremarketSnapshot("A", 1.0, 0.05, 100_000, 1.0, 1_000_000),
            PremarketSnapshot("B", 1.0, 0.05, 100_000, 1.0, 1_000_000),
        ]
        assert [s.symbol for s in filter_candidates(snapshots)] == ["A", "B"]

    def test_invalid_config(self):
        """Test invalid ORB settings are rejected."""
        with pytest.raises(ValueError):
            ORBConfig(range_minutes=0)
