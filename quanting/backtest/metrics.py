"""
Performance metrics for a monthly equity curve.

All functions return 0.0 instead of raising on short or degenerate input.
"""

import math
from collections.abc import Sequence

from .models import EquityPoint

SECONDS_PER_YEAR = 365.25 * 24 * 3600
MONTHS_PER_YEAR = 12


def compute_cagr(equity_curve: Sequence[EquityPoint]) -> float:
    """
    Compound annual growth rate between the first and last points.

    Years are measured from the elapsed wall time (365.25-day years).
    """
    if len(equity_curve) < 2:
        return 0.0
    first = equity_curve[0]
    last = equity_curve[-1]
    if first.value <= 0:
        return 0.0

    years = (last.time - first.time) / SECONDS_PER_YEAR
    if years <= 0:
        return 0.0

    return (last.value / first.value) ** (1 / years) - 1


def compute_max_drawdown(equity_curve: Sequence[EquityPoint]) -> float:
    """Largest peak-to-trough decline, as a positive fraction."""
    peak = -math.inf
    max_dd = 0.0

    for point in equity_curve:
        peak = max(peak, point.value)
        if peak <= 0:
            continue
        max_dd = max(max_dd, (peak - point.value) / peak)

    return max_dd


def compute_sharpe(monthly_returns: Sequence[float], risk_free_monthly: float = 0.0) -> float:
    """
    Annualized Sharpe ratio of monthly returns.

    Uses the sample standard deviation and a sqrt(12) annualization factor.
    """
    if len(monthly_returns) < 2:
        return 0.0

    excess = [r - risk_free_monthly for r in monthly_returns]
    mean = sum(excess) / len(excess)
    variance = sum((r - mean) ** 2 for r in excess) / (len(excess) - 1)
    std = math.sqrt(variance)

    if std == 0:
        return 0.0
    return (mean / std) * math.sqrt(MONTHS_PER_YEAR)


def compute_calmar(cagr: float, max_drawdown: float) -> float:
    """CAGR divided by max drawdown (0 when there was no drawdown)."""
    if max_drawdown == 0:
        return 0.0
    return cagr / max_drawdown


def compute_win_rate(monthly_returns: Sequence[float]) -> float:
    """Fraction of months with a positive return."""
    if not monthly_returns:
        return 0.0
    return sum(1 for r in monthly_returns if r > 0) / len(monthly_returns)


def compute_total_return(equity_curve: Sequence[EquityPoint]) -> float:
    """(last - first) / first over the equity curve."""
    if len(equity_curve) < 2:
        return 0.0
    first = equity_curve[0].value
    if first <= 0:
        return 0.0
    return (equity_curve[-1].value - first) / first
