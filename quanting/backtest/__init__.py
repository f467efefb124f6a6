"""
Backtest Module - Monthly multi-strategy portfolio rotation.

Orchestrates the flow: Monthly Candles → Strategy Legs → Weighted Equity → Metrics
"""

from .engine import BacktestEngine, run_backtest, year_start_timestamp
from .metrics import (
    compute_cagr,
    compute_calmar,
    compute_max_drawdown,
    compute_sharpe,
    compute_total_return,
    compute_win_rate,
)
from .models import (
    AllocationSlot,
    BacktestConfig,
    BacktestResult,
    CurrentAllocation,
    EquityPoint,
    TradeRecord,
)

__all__ = [
    "BacktestEngine",
    "run_backtest",
    "year_start_timestamp",
    "BacktestConfig",
    "BacktestResult",
    "EquityPoint",
    "TradeRecord",
    "AllocationSlot",
    "CurrentAllocation",
    "compute_cagr",
    "compute_calmar",
    "compute_max_drawdown",
    "compute_sharpe",
    "compute_total_return",
    "compute_win_rate",
]
