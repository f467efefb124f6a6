"""
Simplified Augmented Dickey-Fuller test.

Tests H0: unit root (non-stationary) against H1: stationary using the
no-lag regression ``dY[t] = c + gamma * Y[t-1] + e[t]``. The test statistic
is ``gamma / SE(gamma)``, compared against MacKinnon critical values for the
two-variable (cointegration residual) case.
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from quanting.core.config import DEFAULT_CONFIG, AnalysisConfig

logger = logging.getLogger(__name__)


class PValueBucket(str, Enum):
    """Approximate p-value band of the ADF statistic."""

    BELOW_1PCT = "<0.01"
    BELOW_5PCT = "<0.05"
    BELOW_10PCT = "<0.10"
    ABOVE_10PCT = ">0.10"


@dataclass(frozen=True)
class ADFResult:
    """Verdict of the stationarity test."""

    statistic: float
    is_cointegrated: bool
    p_value: PValueBucket

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "statistic": self.statistic,
            "is_cointegrated": self.is_cointegrated,
            "p_value": self.p_value.value,
        }


NEUTRAL_ADF = ADFResult(statistic=0.0, is_cointegrated=False, p_value=PValueBucket.ABOVE_10PCT)


def p_value_bucket(statistic: float, config: AnalysisConfig = DEFAULT_CONFIG) -> PValueBucket:
    """Map an ADF statistic to its MacKinnon p-value band."""
    if statistic < config.adf_critical_1pct:
        return PValueBucket.BELOW_1PCT
    if statistic < config.adf_critical_5pct:
        return PValueBucket.BELOW_5PCT
    if statistic < config.adf_critical_10pct:
        return PValueBucket.BELOW_10PCT
    return PValueBucket.ABOVE_10PCT


def adf_test(series: Sequence[float], config: AnalysisConfig = DEFAULT_CONFIG) -> ADFResult:
    """
    Run the simplified ADF test on ``series``.

    Args:
        series: Observations, oldest first (typically OLS residuals)
        config: Critical values and minimum observation count

    Returns:
        ADFResult. With fewer than 20 observations, a flat lagged series or
        a perfect fit, the neutral verdict (statistic 0, p > 0.10) is
        returned instead.
    """
    n = len(series)
    if n < config.adf_min_points:
        logger.debug(f"ADF skipped: {n} observations < {config.adf_min_points}")
        return NEUTRAL_ADF

    delta = [series[i] - series[i - 1] for i in range(1, n)]
    lagged = list(series[:-1])
    m = len(delta)

    mean_x = sum(lagged) / m
    mean_y = sum(delta) / m
    sxx = sum((x - mean_x) ** 2 for x in lagged)
    sxy = sum((x - mean_x) * (y - mean_y) for x, y in zip(lagged, delta, strict=True))

    if sxx < config.epsilon:
        logger.debug("ADF skipped: lagged series has zero variance")
        return NEUTRAL_ADF

    gamma = sxy / sxx
    intercept = mean_y - gamma * mean_x

    sse = sum((y - (intercept + gamma * x)) ** 2 for x, y in zip(lagged, delta, strict=True))
    se = math.sqrt(sse / ((m - 2) * sxx))
    if se < config.epsilon:
        logger.debug("ADF skipped: zero standard error")
        return NEUTRAL_ADF

    statistic = gamma / se
    return ADFResult(
        statistic=statistic,
        is_cointegrated=statistic < config.adf_critical_5pct,
        p_value=p_value_bucket(statistic, config),
    )
