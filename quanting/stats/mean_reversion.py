"""
Mean-reversion statistics for a spread (regression residual) series.

- rolling Z-score of the spread against its trailing window
- half-life of mean reversion from a one-lag autoregression
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from quanting.core.config import DEFAULT_CONFIG, AnalysisConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ZScorePoint:
    """Z-score of the spread at one point.

    ``time`` is the candle time when the caller supplied times, otherwise
    the index into the residual series.
    """

    time: int
    value: float

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"time": self.time, "value": self.value}


def compute_zscore(
    residuals: Sequence[float],
    window: int,
    times: Sequence[int] | None = None,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> list[ZScorePoint]:
    """
    Rolling Z-score over a trailing window.

    For every index ``i >= window - 1``: z = (r[i] - mean) / std, with the
    mean and population standard deviation of ``r[i - window + 1 : i + 1]``.
    A window with zero deviation scores 0.

    Args:
        residuals: Spread values, oldest first
        window: Trailing window length (>= 1)
        times: Optional times parallel to ``residuals`` used to label points
        config: Zero tolerance

    Returns:
        ``len(residuals) - window + 1`` points (empty if window < 1 or too
        little data)
    """
    if window < 1:
        return []

    result: list[ZScorePoint] = []
    for i in range(window - 1, len(residuals)):
        chunk = residuals[i - window + 1 : i + 1]
        mean = sum(chunk) / window
        variance = sum((r - mean) ** 2 for r in chunk) / window
        std = math.sqrt(variance)

        z = (residuals[i] - mean) / std if std > config.epsilon else 0.0
        label = times[i] if times is not None and i < len(times) else i
        result.append(ZScorePoint(time=label, value=z))

    return result


rolling_zscore = compute_zscore


def half_life(residuals: Sequence[float], config: AnalysisConfig = DEFAULT_CONFIG) -> float:
    """
    Half-life of mean reversion, in bars.

    Fits ``r[t] = c + gamma * r[t-1]`` on the demeaned lag pair. Only a
    negative gamma (a decaying, sign-alternating spread) counts as mean
    reverting here; the half-life is the number of steps for ``|gamma|^k``
    to reach one half, ``-ln(2) / ln(|gamma|)``.

    Returns:
        math.inf with fewer than 10 residuals, a flat lagged series,
        gamma >= 0, or gamma <= -1 (no decay)
    """
    if len(residuals) < config.half_life_min_points:
        return math.inf

    y = residuals[1:]
    x = residuals[:-1]
    n = len(y)

    mean_x = sum(x) / n
    mean_y = sum(y) / n
    sxx = sum((xi - mean_x) ** 2 for xi in x)
    sxy = sum((xi - mean_x) * (yi - mean_y) for xi, yi in zip(x, y, strict=True))

    if sxx < config.epsilon:
        return math.inf

    gamma = sxy / sxx
    # TODO: confirm the gamma < 0 convention with product; textbook AR(1) reversion is 0 < gamma < 1
    if gamma >= 0 or gamma <= -1:
        logger.debug(f"Half-life undefined for gamma={gamma:.4f}")
        return math.inf

    return -math.log(2) / math.log(abs(gamma))
