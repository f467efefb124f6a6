"""
Backtest Engine - Portfolio rotation backtest over monthly bars.

Flow: Aligned Monthly Series → Strategy Legs (GEM, TAA, Sector) → Weighted
Monthly Return → Compounded Equity Curve → Performance Metrics

Each month every leg picks its holdings from the bars up to that month and
contributes the one-bar return of those holdings, scaled by its weight.
The run is a pure fold over the monthly index; inputs are never mutated.
"""

import logging
from datetime import datetime, timezone

from quanting.core.models import SeriesMap, month_label
from quanting.core.series import AlignedMonthlySeries
from quanting.strategies import (
    GEM_RISK_A,
    MOMENTUM_LOOKBACK,
    TAA_ASSETS,
    TOP_SECTORS_COUNT,
    gem_at_index,
    sector_at_index,
    taa_at_index,
)

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

logger = logging.getLogger(__name__)


def year_start_timestamp(year: int) -> int:
    """Unix time of January 1st 00:00 UTC of ``year``."""
    return int(datetime(year, 1, 1, tzinfo=timezone.utc).timestamp())


class BacktestEngine:
    """
    Runs the three-leg monthly rotation backtest.

    The reference (first risk) asset defines the monthly calendar. By
    default other symbols are aligned to it by position; pass an
    ``AlignedMonthlySeries.by_calendar`` view to ``run_series`` to align by
    timestamp instead.
    """

    def __init__(self, config: BacktestConfig | None = None) -> None:
        """
        Initialize the backtest engine.

        Args:
            config: Backtest configuration (uses defaults if None)
        """
        self.config = config or BacktestConfig()

    def run(self, series_map: SeriesMap) -> BacktestResult:
        """
        Run the backtest on raw monthly candles.

        Args:
            series_map: Symbol -> monthly candles, oldest first

        Returns:
            BacktestResult (the empty result if fewer than 12 months precede
            the start year or no data reaches it)
        """
        return self.run_series(AlignedMonthlySeries(series_map, reference=GEM_RISK_A))

    def run_series(self, series: AlignedMonthlySeries) -> BacktestResult:
        """Run the backtest on an already aligned monthly view."""
        config = self.config
        start_idx = series.first_index_at_or_after(year_start_timestamp(config.start_year))
        if start_idx < MOMENTUM_LOOKBACK:
            logger.debug(
                f"Backtest not started: start index {start_idx} "
                f"(need >= {MOMENTUM_LOOKBACK} months of lookback)"
            )
            return BacktestResult.empty()

        first_idx = max(start_idx, MOMENTUM_LOOKBACK)
        equity = config.initial_capital
        equity_curve: list[EquityPoint] = []
        trades: list[TradeRecord] = []
        monthly_returns: list[float] = []

        for i in range(first_idx, len(series)):
            month_return, record_assets = self._month_return(series, i)
            equity *= 1 + month_return
            monthly_returns.append(month_return)

            time_val = series.time_at(i) or 0
            equity_curve.append(EquityPoint(time=time_val, value=equity))
            gem_asset, taa_assets, sector_assets = record_assets
            trades.append(
                TradeRecord(
                    month=month_label(time_val),
                    gem_asset=gem_asset,
                    taa_assets=taa_assets,
                    sector_assets=sector_assets,
                    portfolio_return=month_return,
                    cumulative_return=(equity - config.initial_capital) / config.initial_capital,
                )
            )

        if not equity_curve:
            return BacktestResult.empty()

        # Starting capital sits on the bar before the first simulated month
        equity_curve.insert(
            0, EquityPoint(time=series.time_at(first_idx - 1) or 0, value=config.initial_capital)
        )

        cagr = compute_cagr(equity_curve)
        max_drawdown = compute_max_drawdown(equity_curve)
        result = BacktestResult(
            equity_curve=equity_curve,
            trades=trades,
            cagr=cagr,
            sharpe=compute_sharpe(monthly_returns),
            max_drawdown=max_drawdown,
            win_rate=compute_win_rate(monthly_returns),
            calmar=compute_calmar(cagr, max_drawdown),
            total_return=compute_total_return(equity_curve),
            current_allocation=self.current_allocation(series),
        )

        logger.info(
            f"Backtest complete: {len(trades)} months, "
            f"total return {result.total_return:+.2%}, CAGR {result.cagr:+.2%}"
        )
        return result

    def _month_return(
        self, series: AlignedMonthlySeries, index: int
    ) -> tuple[float, tuple[str, list[str], list[str]]]:
        """Weighted portfolio return for one month and the assets each leg held."""
        config = self.config

        # GEM: the whole leg sits in one asset
        gem = gem_at_index(series, index)
        gem_return = series.bar_return(gem.asset, index) * config.gem_weight

        # TAA: equal slot per basket asset, cash slots earn 0
        taa = taa_at_index(series, index)
        taa_invested = [h for h in taa if h.invested]
        per_asset = config.taa_weight / len(TAA_ASSETS)
        taa_return = sum(h.return_pct * per_asset for h in taa_invested)

        # Sector: equal slot per top-K position, unfilled slots earn 0
        sectors = [s for s in sector_at_index(series, index) if s.selected]
        per_sector = config.sector_weight / TOP_SECTORS_COUNT
        sector_return = sum(s.return_pct * per_sector for s in sectors)

        assets = (gem.asset, [h.asset for h in taa_invested], [s.asset for s in sectors])
        return gem_return + taa_return + sector_return, assets

    def current_allocation(self, series: AlignedMonthlySeries) -> CurrentAllocation | None:
        """Holdings each leg would pick at the latest bar."""
        last_idx = len(series) - 1
        if last_idx < 0:
            return None

        config = self.config
        gem = gem_at_index(series, last_idx)
        taa = taa_at_index(series, last_idx)
        sectors = [s for s in sector_at_index(series, last_idx) if s.selected]

        return CurrentAllocation(
            gem=AllocationSlot(asset=gem.asset, weight=config.gem_weight),
            taa=[
                AllocationSlot(
                    asset=h.asset,
                    weight=config.taa_weight / len(TAA_ASSETS),
                    invested=h.invested,
                )
                for h in taa
            ],
            sectors=[
                AllocationSlot(
                    asset=s.asset,
                    weight=config.sector_weight / TOP_SECTORS_COUNT,
                    rank=rank,
                )
                for rank, s in enumerate(sectors, start=1)
            ],
        )


def run_backtest(series_map: SeriesMap, config: BacktestConfig | None = None) -> BacktestResult:
    """
    Run the portfolio rotation backtest.

    Args:
        series_map: Symbol -> monthly candles, oldest first
        config: Backtest configuration (uses defaults if None)

    Returns:
        BacktestResult
    """
    return BacktestEngine(config).run(series_map)
