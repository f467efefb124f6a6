#!/usr/bin/env python3
"""
Unit tests for the indicators module.

Run with:
    python -m pytest tests/test_indicators.py -v

Or standalone:
    python tests/test_indicators.py
"""

import sys
from pathlib import Path

# Add project root to path for standalone execution
sys.path.insert(0, str(Path(__file__).parent.parent))

from quanting.core.models import Candle
from quanting.indicators import (
    bollinger_bands,
    compute_indicator_set,
    ema_series,
    macd_series,
    rsi_series,
    rvol_series,
    sma,
)

DAY = 86_400


def make_candles(prices: list[float], volumes: list[float] | None = None, start: int = 1_700_000_000) -> list[Candle]:
    """Helper to create daily candles from a list of close prices."""
    if volumes is None:
        volumes = [1000.0] * len(prices)

    return [
        Candle(
            time=start + i * DAY,
            open=price * 0.999,
            high=price * 1.001,
            low=price * 0.998,
            close=price,
            volume=volume,
        )
        for i, (price, volume) in enumerate(zip(prices, volumes, strict=True))
    ]


class TestSMA:
    """Tests for Simple Moving Average."""

    def test_sma_basic(self):
        """Test basic SMA calculation."""
        prices = [10.0, 11.0, 12.0, 13.0, 14.0]
        # Last 3 prices: 12, 13, 14 -> avg = 13
        assert sma(prices, period=3) == 13.0

    def test_sma_insufficient_data(self):
        """Test SMA returns None with insufficient data."""
        assert sma([10.0, 11.0], period=3) is None

    def test_sma_invalid_period(self):
        """Test SMA with invalid period."""
        assert sma([10.0, 11.0, 12.0], period=0) is None


class TestEMA:
    """Tests for Exponential Moving Average series."""

    def test_ema_series_length(self):
        """Test EMA series returns correct length."""
        result = ema_series([10.0, 11.0, 12.0, 13.0, 14.0], period=3)
        # len(prices) - period + 1 = 3
        assert len(result) == 3

    def test_ema_first_value_is_sma(self):
        """Test that first EMA value equals SMA."""
        series = ema_series([10.0, 11.0, 12.0, 13.0, 14.0], period=3)
        assert series[0] == 11.0

    def test_ema_insufficient_data(self):
        """Test EMA series is empty with insufficient data."""
        assert ema_series([10.0, 11.0], period=3) == []


class TestBollinger:
    """Tests for Bollinger Bands."""

    def test_constant_prices_collapse_bands(self):
        """Test that a flat series has zero-width bands."""
        candles = make_candles([50.0] * 25)
        bands = bollinger_bands(candles, period=20)

        assert len(bands) == 6
        for point in bands:
            assert point.upper == point.middle == point.lower == 50.0

    def test_first_point_time(self):
        """Test that the first band lands on candle index period - 1."""
        candles = make_candles([float(i) for i in range(1, 31)])
        bands = bollinger_bands(candles, period=20)
        assert bands[0].time == candles[19].time

    def test_population_std(self):
        """Test bands use population standard deviation."""
        candles = make_candles([1.0, 3.0])
        (point,) = bollinger_bands(candles, period=2, multiplier=1.0)
        # mean 2, population std 1
        assert point.middle == 2.0
        assert point.upper == 3.0
        assert point.lower == 1.0

    def test_insufficient_data(self):
        """Test empty result with fewer candles than the period."""
        assert bollinger_bands(make_candles([1.0] * 5), period=20) == []


class TestMACD:
    """Tests for the MACD series."""

    def test_first_point_alignment(self):
        """Test the first MACD point lands where the signal EMA first exists."""
        candles = make_candles([100.0 + i * 0.5 for i in range(60)])
        points = macd_series(candles)

        # (26 - 1) + (9 - 1) = 33
        assert points[0].time == candles[33].time
        assert len(points) == 60 - 33

    def test_histogram_is_difference(self):
        """Test histogram = macd - signal."""
        candles = make_candles([100.0 + (i % 7) for i in range(50)])
        for p in macd_series(candles):
            assert abs(p.histogram - (p.macd - p.signal)) < 1e-12

    def test_uptrend_positive(self):
        """Test MACD line is positive in a steady uptrend."""
        candles = make_candles([100.0 + i for i in range(60)])
        assert macd_series(candles)[-1].macd > 0

    def test_insufficient_data(self):
        """Test MACD returns empty list with insufficient data."""
        assert macd_series(make_candles([100.0] * 20)) == []

    def test_invalid_periods(self):
        """Test fast >= slow returns empty list."""
        assert macd_series(make_candles([100.0] * 60), fast=26, slow=12) == []


class TestRSI:
    """Tests for the RSI series."""

    def test_all_gains(self):
        """Test RSI with all gains is 100."""
        candles = make_candles([float(i) for i in range(1, 21)])
        points = rsi_series(candles, period=14)
        assert all(p.value == 100.0 for p in points)

    def test_all_losses(self):
        """Test RSI with all losses is 0."""
        candles = make_candles([float(i) for i in range(20, 0, -1)])
        points = rsi_series(candles, period=14)
        assert all(p.value == 0.0 for p in points)

    def test_first_point_time(self):
        """Test the first RSI value lands on candle index ``period``."""
        candles = make_candles([100.0 + (i % 3) for i in range(30)])
        points = rsi_series(candles, period=14)
        assert points[0].time == candles[14].time
        assert len(points) == 30 - 14

    def test_range(self):
        """Test RSI stays within 0-100."""
        candles = make_candles([100.0, 102.0, 99.0, 104.0, 98.0, 103.0] * 5)
        for p in rsi_series(candles, period=5):
            assert 0.0 <= p.value <= 100.0

    def test_insufficient_data(self):
        """Test RSI returns empty list with insufficient data."""
        assert rsi_series(make_candles([100.0] * 10), period=14) == []


class TestRvol:
    """Tests for relative volume."""

    def test_baseline_excludes_current(self):
        """Test the current candle is not part of its own baseline."""
        candles = make_candles([10.0] * 4, volumes=[100.0, 100.0, 100.0, 300.0])
        points = rvol_series(candles, period=3)

        assert len(points) == 1
        assert points[0].time == candles[3].time
        assert points[0].value == 3.0

    def test_zero_baseline(self):
        """Test zero average volume gives 0."""
        candles = make_candles([10.0] * 3, volumes=[0.0, 0.0, 500.0])
        assert rvol_series(candles, period=2)[0].value == 0.0


class TestIndicatorSet:
    """Tests for the indicator bundle."""

    def test_compute_indicator_set(self):
        """Test the bundle holds all three series keyed by time."""
        candles = make_candles([100.0 + (i % 5) for i in range(60)])
        indicators = compute_indicator_set(candles)

        assert indicators.bollinger and indicators.macd and indicators.rsi
        assert candles[-1].time in indicators.bollinger_by_time()
        assert candles[-1].time in indicators.macd_by_time()
        assert candles[-1].time in indicators.rsi_by_time()


def run_tests():
    """Run all tests."""
    import traceback

    test_classes = [TestSMA, TestEMA, TestBollinger, TestMACD, TestRSI, TestRvol, TestIndicatorSet]
    passed = 0
    failed = 0

    for test_class in test_classes:
        print(f"\n{'='*60}")
        print(f"Running {test_class.__name__}")
        print("=" * 60)

        instance = test_class()
        for method_name in dir(instance):
            if method_name.startswith("test_"):
                try:
                    getattr(instance, method_name)()
                    print(f"  ✓ {method_name}")
                    passed += 1
                except AssertionError as e:
                    print(f"  ✗ {method_name}: {e}")
                    failed += 1
                except Exception as e:
                    print(f"  ✗ {method_name}: {e}")
                    traceback.print_exc()
                    failed += 1

    print(f"\n{'='*60}")
    print(f"Results: {passed} passed, {failed} failed")
    print("=" * 60)
    return failed == 0


if __name__ == "__main__":
    success = run_tests()
    sys.exit(0 if success else 1)
