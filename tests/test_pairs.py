"""
Unit tests for the pair trading analyzer.

Run with:
    python -m pytest tests/test_pairs.py -v
"""

import math
import random
import sys
from pathlib import Path

import pytest

# Add project root to path for standalone execution
sys.path.insert(0, str(Path(__file__).parent.parent))

from quanting.core.errors import InsufficientDataError
from quanting.core.models import Candle
from quanting.pairs import (
    PREDEFINED_PAIRS,
    PairDefinition,
    ZScoreSignal,
    analyze_pair,
    analyze_pairs,
    get_zscore_signal,
    zscore_window,
)

DAY = 86_400
START = 1_600_000_000


def make_candles(prices: list[float], start: int = START, step: int = DAY) -> list[Candle]:
    """Helper to create daily candles from close prices."""
    return [
        Candle(time=start + i * step, open=p, high=p, low=p, close=p, volume=1000.0)
        for i, p in enumerate(prices)
    ]


def cointegrated_pair(n: int = 250, seed: int = 5) -> tuple[list[float], list[float]]:
    """B is a random walk; A = 10 + 2*B + AR(0.3) noise."""
    rng = random.Random(seed)
    b = [50.0]
    for _ in range(n - 1):
        b.append(b[-1] + rng.gauss(0, 1))

    noise = [0.0]
    for _ in range(n - 1):
        noise.append(0.3 * noise[-1] + rng.gauss(0, 0.5))

    a = [10.0 + 2.0 * bv + e for bv, e in zip(b, noise, strict=True)]
    return a, b


class TestZScoreSignal:
    """Tests for mapping a Z-score to a position action."""

    def test_signal_mapping(self):
        """Test each band maps to its action."""
        assert get_zscore_signal(4.0) == ZScoreSignal.STOPLOSS
        assert get_zscore_signal(-4.0) == ZScoreSignal.STOPLOSS
        assert get_zscore_signal(2.5) == ZScoreSignal.SHORT
        assert get_zscore_signal(-2.5) == ZScoreSignal.LONG
        assert get_zscore_signal(0.2) == ZScoreSignal.CLOSE
        assert get_zscore_signal(1.0) == ZScoreSignal.NONE

    def test_boundaries(self):
        """Test band edges are exclusive."""
        assert get_zscore_signal(3.5) == ZScoreSignal.SHORT
        assert get_zscore_signal(2.0) == ZScoreSignal.NONE
        assert get_zscore_signal(-2.0) == ZScoreSignal.NONE
        assert get_zscore_signal(0.5) == ZScoreSignal.NONE

    def test_wire_values(self):
        """Test enum values are the lowercase strings."""
        assert ZScoreSignal.STOPLOSS.value == "stoploss"
        assert ZScoreSignal.NONE.value == "none"


class TestZScoreWindow:
    """Tests for the half-life to window mapping."""

    def test_clamped_low(self):
        """Test short half-lives clamp to 20."""
        assert zscore_window(3.2) == 20

    def test_clamped_high(self):
        """Test long half-lives clamp to 60."""
        assert zscore_window(120.0) == 60

    def test_infinite(self):
        """Test an infinite half-life uses the maximum window."""
        assert zscore_window(math.inf) == 60

    def test_rounds_half_up(self):
        """Test x.5 rounds up."""
        assert zscore_window(30.5) == 31
        assert zscore_window(30.4) == 30


class TestAnalyzePair:
    """Tests for single pair analysis."""

    def test_cointegrated_pair(self):
        """Test a constructed cointegrated pair is detected."""
        a, b = cointegrated_pair()
        result = analyze_pair(make_candles(a), make_candles(b), "AAA", "BBB")

        assert result.pair_a == "AAA"
        assert result.pair_b == "BBB"
        assert abs(result.beta - 2.0) < 0.1
        assert result.is_cointegrated
        assert result.aligned_points == 250
        assert 20 <= result.z_window <= 60
        assert len(result.z_scores) == 250 - result.z_window + 1
        assert result.current_z_score == result.z_scores[-1].value
        assert result.signal == get_zscore_signal(result.current_z_score)

    def test_zscore_times_are_candle_times(self):
        """Test Z-score points carry the aligned candle times."""
        a, b = cointegrated_pair()
        candles_a = make_candles(a)
        result = analyze_pair(candles_a, make_candles(b))
        assert result.z_scores[-1].time == candles_a[-1].time

    def test_short_series_raises(self):
        """Test fewer than 30 candles raises InsufficientDataError."""
        a, b = cointegrated_pair(n=29)
        with pytest.raises(InsufficientDataError) as exc_info:
            analyze_pair(make_candles(a), make_candles(b), "AAA", "BBB")

        assert exc_info.value.required == 30
        assert "AAA/BBB" in str(exc_info.value)

    def test_small_overlap_raises(self):
        """Test fewer than 30 common timestamps raises."""
        a, b = cointegrated_pair(n=50)
        candles_a = make_candles(a)
        # Shift B so only 20 timestamps overlap
        candles_b = make_candles(b, start=START + 30 * DAY)

        with pytest.raises(InsufficientDataError) as exc_info:
            analyze_pair(candles_a, candles_b)
        assert exc_info.value.available == 20

    def test_error_is_value_error(self):
        """Test InsufficientDataError is a ValueError."""
        assert issubclass(InsufficientDataError, ValueError)

    def test_to_dict_infinite_half_life(self):
        """Test serialization turns an infinite half-life into None."""
        rng = random.Random(9)
        a = [100.0]
        b = [100.0]
        for _ in range(99):
            a.append(a[-1] + rng.gauss(0, 1))
            b.append(b[-1] + rng.gauss(0, 1))
        result = analyze_pair(make_candles(a), make_candles(b))

        data = result.to_dict()
        if result.has_finite_half_life:
            assert data["half_life"] == result.half_life
        else:
            assert data["half_life"] is None
            assert result.z_window == 60


class TestAnalyzePairs:
    """Tests for batch pair analysis."""

    def test_errors_are_collected(self):
        """Test missing and short pairs land in the errors map."""
        a, b = cointegrated_pair()
        series_map = {
            "AAA": make_candles(a),
            "BBB": make_candles(b),
            "SHORT": make_candles(b[:10]),
        }

        results, errors = analyze_pairs(
            series_map,
            [("AAA", "BBB"), ("AAA", "SHORT"), ("AAA", "MISSING")],
        )

        assert [(r.pair_a, r.pair_b) for r in results] == [("AAA", "BBB")]
        assert set(errors) == {"AAA/SHORT", "AAA/MISSING"}

    def test_accepts_pair_definitions(self):
        """Test PairDefinition entries are accepted."""
        a, b = cointegrated_pair()
        series_map = {"AAA": make_candles(a), "BBB": make_candles(b)}
        results, errors = analyze_pairs(series_map, [PairDefinition("AAA", "BBB", "usStock", "test")])

        assert len(results) == 1
        assert errors == {}

    def test_predefined_pairs(self):
        """Test the built-in universe covers both markets."""
        markets = {p.market for p in PREDEFINED_PAIRS}
        assert markets == {"krStock", "usStock"}
        assert all(p.a != p.b for p in PREDEFINED_PAIRS)
