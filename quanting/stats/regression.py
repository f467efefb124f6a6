"""
Ordinary least squares for a single regressor.

Fits ``y = alpha + beta * x + residual`` in closed form.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from quanting.core.config import DEFAULT_CONFIG, AnalysisConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OLSResult:
    """Result of a one-regressor OLS fit."""

    beta: float
    alpha: float
    residuals: list[float] = field(default_factory=list)

    @property
    def is_degenerate(self) -> bool:
        """True when the fit could not be computed (too few points or flat x)."""
        return not self.residuals


def ols(
    y: Sequence[float],
    x: Sequence[float],
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> OLSResult:
    """
    Regress ``y`` on ``x`` with an intercept.

    beta = (n*Sxy - Sx*Sy) / (n*Sxx - Sx^2)
    alpha = (Sy - beta*Sx) / n

    Pairs beyond the shorter input are ignored.

    Args:
        y: Dependent values
        x: Regressor values
        config: Thresholds (minimum points, zero tolerance)

    Returns:
        OLSResult; beta=0, alpha=0 and no residuals when there are fewer
        than 3 pairs or ``x`` has no variance
    """
    n = min(len(y), len(x))
    if n < config.ols_min_points:
        logger.debug(f"OLS skipped: {n} points < {config.ols_min_points}")
        return OLSResult(beta=0.0, alpha=0.0)

    ys = y[:n]
    xs = x[:n]
    sum_x = sum(xs)
    sum_y = sum(ys)
    sum_xx = sum(v * v for v in xs)
    sum_xy = sum(a * b for a, b in zip(xs, ys, strict=True))

    denom = n * sum_xx - sum_x * sum_x
    if abs(denom) < config.epsilon:
        logger.debug("OLS skipped: regressor has zero variance")
        return OLSResult(beta=0.0, alpha=0.0)

    beta = (n * sum_xy - sum_x * sum_y) / denom
    alpha = (sum_y - beta * sum_x) / n
    residuals = [yi - alpha - beta * xi for yi, xi in zip(ys, xs, strict=True)]

    return OLSResult(beta=beta, alpha=alpha, residuals=residuals)
