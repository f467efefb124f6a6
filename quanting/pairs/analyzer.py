"""
Pair Trading Analyzer - Engle-Granger style cointegration check.

Pipeline for two daily candle series:
1. Intersect on exact timestamps (need 30 common closes)
2. Regress A on B (OLS) to get the hedge ratio and the spread
3. ADF test on the spread for the cointegration verdict
4. Half-life of the spread, which sets the Z-score window (clamped 20..60)
5. Rolling Z-score; the latest value maps to a position action

Nothing is remembered between calls; tracking an open position is the
caller's job.
"""

import logging
import math
from collections.abc import Iterable, Sequence

from quanting.core.config import DEFAULT_CONFIG, AnalysisConfig
from quanting.core.errors import InsufficientDataError
from quanting.core.models import Candle, SeriesMap
from quanting.core.series import align_by_time
from quanting.stats import adf_test, compute_zscore, half_life, ols

from .models import PairDefinition, PairTradingResult, ZScoreSignal

logger = logging.getLogger(__name__)


def get_zscore_signal(z: float, config: AnalysisConfig = DEFAULT_CONFIG) -> ZScoreSignal:
    """
    Map a spread Z-score to a position action.

    Checked in order: |z| > 3.5 stoploss, z > 2 short, z < -2 long,
    |z| < 0.5 close, otherwise none.
    """
    if abs(z) > config.zscore_stoploss:
        return ZScoreSignal.STOPLOSS
    if z > config.zscore_entry:
        return ZScoreSignal.SHORT
    if z < -config.zscore_entry:
        return ZScoreSignal.LONG
    if abs(z) < config.zscore_exit:
        return ZScoreSignal.CLOSE
    return ZScoreSignal.NONE


def zscore_window(hl: float, config: AnalysisConfig = DEFAULT_CONFIG) -> int:
    """Z-score window from a half-life: round half up, clamp to [20, 60]."""
    if not math.isfinite(hl):
        return config.zscore_window_max
    rounded = math.floor(hl + 0.5)
    return max(config.zscore_window_min, min(config.zscore_window_max, rounded))


def analyze_pair(
    series_a: Sequence[Candle],
    series_b: Sequence[Candle],
    pair_a: str = "A",
    pair_b: str = "B",
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> PairTradingResult:
    """
    Analyze two candle series for cointegration and a current signal.

    Args:
        series_a: Daily candles of the dependent leg, oldest first
        series_b: Daily candles of the hedge leg, oldest first
        pair_a: Symbol label for A
        pair_b: Symbol label for B
        config: Thresholds

    Returns:
        PairTradingResult

    Raises:
        InsufficientDataError: If either series, or their timestamp
            intersection, has fewer than 30 points
    """
    required = config.pair_min_points
    if len(series_a) < required or len(series_b) < required:
        raise InsufficientDataError(
            f"Not enough data for {pair_a}/{pair_b}.",
            available=min(len(series_a), len(series_b)),
            required=required,
        )

    times, closes_a, closes_b = align_by_time(series_a, series_b)
    if len(times) < required:
        raise InsufficientDataError(
            f"Not enough overlapping data for {pair_a}/{pair_b}.",
            available=len(times),
            required=required,
        )

    regression = ols(closes_a, closes_b, config)
    adf = adf_test(regression.residuals, config)
    hl = half_life(regression.residuals, config)
    window = zscore_window(hl, config)
    z_scores = compute_zscore(regression.residuals, window, times=times, config=config)

    current_z = z_scores[-1].value if z_scores else 0.0
    signal = get_zscore_signal(current_z, config)

    logger.info(
        f"Pair {pair_a}/{pair_b}: beta={regression.beta:.4f} "
        f"ADF={adf.statistic:.2f} ({adf.p_value.value}) z={current_z:+.2f} -> {signal.value}"
    )

    return PairTradingResult(
        pair_a=pair_a,
        pair_b=pair_b,
        beta=regression.beta,
        alpha=regression.alpha,
        adf_statistic=adf.statistic,
        is_cointegrated=adf.is_cointegrated,
        half_life=hl,
        z_scores=z_scores,
        current_z_score=current_z,
        signal=signal,
        p_value=adf.p_value,
        z_window=window,
        aligned_points=len(times),
    )


def analyze_pairs(
    series_map: SeriesMap,
    pairs: Iterable[PairDefinition | tuple[str, str]],
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> tuple[list[PairTradingResult], dict[str, str]]:
    """
    Analyze several pairs from one series map.

    Each pair is independent; a pair with missing or short data is
    reported in the errors map instead of stopping the batch.

    Returns:
        (results, errors) where errors maps "A/B" to a message
    """
    results: list[PairTradingResult] = []
    errors: dict[str, str] = {}

    for pair in pairs:
        a, b = (pair.a, pair.b) if isinstance(pair, PairDefinition) else pair
        key = f"{a}/{b}"
        try:
            results.append(
                analyze_pair(series_map.get(a, []), series_map.get(b, []), a, b, config)
            )
        except InsufficientDataError as e:
            logger.debug(f"Skipping pair {key}: {e}")
            errors[key] = str(e)

    return results, errors
