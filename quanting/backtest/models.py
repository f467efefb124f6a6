"""
Data models for portfolio backtest configuration and results.
"""

from dataclasses import dataclass, field


@dataclass
class BacktestConfig:
    """
    Configuration for a portfolio rotation backtest.

    Weights need not sum to 1; any unallocated weight sits in cash and
    earns nothing.
    """

    start_year: int = 2010
    initial_capital: float = 100_000.0
    gem_weight: float = 0.4
    taa_weight: float = 0.4
    sector_weight: float = 0.2

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.initial_capital <= 0:
            raise ValueError("initial_capital must be positive")
        for name in ("gem_weight", "taa_weight", "sector_weight"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")

    @property
    def cash_weight(self) -> float:
        """Weight left unallocated by the three legs (never negative)."""
        return max(0.0, 1.0 - self.gem_weight - self.taa_weight - self.sector_weight)

    @classmethod
    def from_dict(cls, data: dict) -> "BacktestConfig":
        """Create config from a dictionary with snake_case or camelCase keys."""

        def pick(snake: str, camel: str, default):
            if snake in data:
                return data[snake]
            return data.get(camel, default)

        return cls(
            start_year=int(pick("start_year", "startYear", 2010)),
            initial_capital=float(pick("initial_capital", "initialCapital", 100_000.0)),
            gem_weight=float(pick("gem_weight", "gemWeight", 0.4)),
            taa_weight=float(pick("taa_weight", "taaWeight", 0.4)),
            sector_weight=float(pick("sector_weight", "sectorWeight", 0.2)),
        )


@dataclass(frozen=True)
class EquityPoint:
    """A single point in the equity curve."""

    time: int
    value: float


@dataclass(frozen=True)
class TradeRecord:
    """Holdings and returns for one backtest month."""

    month: str  # YYYY-MM
    gem_asset: str
    taa_assets: list[str]
    sector_assets: list[str]
    portfolio_return: float
    cumulative_return: float  # Relative to initial capital

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "month": self.month,
            "gem_asset": self.gem_asset,
            "taa_assets": list(self.taa_assets),
            "sector_assets": list(self.sector_assets),
            "portfolio_return": self.portfolio_return,
            "cumulative_return": self.cumulative_return,
        }


@dataclass(frozen=True)
class AllocationSlot:
    """One asset's slot in the current allocation snapshot."""

    asset: str
    weight: float
    invested: bool = True
    rank: int | None = None  # Sector slots only

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"asset": self.asset, "weight": self.weight, "invested": self.invested, "rank": self.rank}


@dataclass(frozen=True)
class CurrentAllocation:
    """What each leg would hold at the latest bar."""

    gem: AllocationSlot
    taa: list[AllocationSlot] = field(default_factory=list)
    sectors: list[AllocationSlot] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "gem": self.gem.to_dict(),
            "taa": [s.to_dict() for s in self.taa],
            "sectors": [s.to_dict() for s in self.sectors],
        }


@dataclass(frozen=True)
class BacktestResult:
    """
    Results from a completed backtest run.

    Ratios are fractions (0.12 = 12%). An empty equity curve means the
    backtest could not start.
    """

    equity_curve: list[EquityPoint] = field(default_factory=list)
    trades: list[TradeRecord] = field(default_factory=list)
    cagr: float = 0.0
    sharpe: float = 0.0
    max_drawdown: float = 0.0
    win_rate: float = 0.0
    calmar: float = 0.0
    total_return: float = 0.0
    current_allocation: CurrentAllocation | None = None

    @classmethod
    def empty(cls) -> "BacktestResult":
        """The canonical result for a backtest that could not start."""
        return cls()

    @property
    def is_empty(self) -> bool:
        """True if no month was simulated."""
        return not self.equity_curve

    @property
    def final_equity(self) -> float:
        """Last equity value (0 for an empty result)."""
        return self.equity_curve[-1].value if self.equity_curve else 0.0

    @property
    def months(self) -> int:
        """Number of simulated months."""
        return len(self.trades)

    def summary_rows(self) -> list[tuple[str, str]]:
        """Label/value pairs for display."""
        return [
            ("Months", f"{self.months}"),
            ("Final Equity", f"${self.final_equity:,.2f}"),
            ("Total Return", f"{self.total_return:+.2%}"),
            ("CAGR", f"{self.cagr:+.2%}"),
            ("Sharpe", f"{self.sharpe:.2f}"),
            ("Max Drawdown", f"{self.max_drawdown:.2%}"),
            ("Calmar", f"{self.calmar:.2f}"),
            ("Win Rate", f"{self.win_rate:.1%}"),
        ]

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "equity_curve": [{"time": p.time, "value": p.value} for p in self.equity_curve],
            "trades": [t.to_dict() for t in self.trades],
            "performance": {
                "cagr": self.cagr,
                "sharpe": self.sharpe,
                "max_drawdown": self.max_drawdown,
                "win_rate": self.win_rate,
                "calmar": self.calmar,
                "total_return": self.total_return,
            },
            "current_allocation": (
                self.current_allocation.to_dict() if self.current_allocation else None
            ),
        }
