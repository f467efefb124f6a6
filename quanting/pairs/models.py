"""
Data models for pair trading analysis.
"""

import math
from dataclasses import dataclass, field
from enum import Enum

from quanting.stats import PValueBucket, ZScorePoint


class ZScoreSignal(str, Enum):
    """Position action implied by the latest spread Z-score."""

    LONG = "long"  # Spread unusually low: buy A, sell B
    SHORT = "short"  # Spread unusually high: sell A, buy B
    CLOSE = "close"  # Spread back near its mean: exit
    STOPLOSS = "stoploss"  # Spread too far out: relationship assumed broken
    NONE = "none"  # Hold / wait


@dataclass(frozen=True)
class PairDefinition:
    """A candidate pair offered to the user."""

    a: str
    b: str
    market: str  # "krStock" or "usStock"
    label: str


@dataclass(frozen=True)
class PairTradingResult:
    """
    Cointegration verdict and current signal for one pair.

    ``beta``/``alpha`` come from regressing A's closes on B's, so the spread
    is ``A - alpha - beta * B``.
    """

    pair_a: str
    pair_b: str
    beta: float
    alpha: float
    adf_statistic: float
    is_cointegrated: bool
    half_life: float  # Bars; math.inf when the spread does not revert
    z_scores: list[ZScorePoint] = field(default_factory=list)
    current_z_score: float = 0.0
    signal: ZScoreSignal = ZScoreSignal.NONE
    p_value: PValueBucket = PValueBucket.ABOVE_10PCT
    z_window: int = 0
    aligned_points: int = 0

    @property
    def has_finite_half_life(self) -> bool:
        """True when a half-life could be estimated."""
        return math.isfinite(self.half_life)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "pair_a": self.pair_a,
            "pair_b": self.pair_b,
            "beta": self.beta,
            "alpha": self.alpha,
            "adf_statistic": self.adf_statistic,
            "is_cointegrated": self.is_cointegrated,
            "p_value": self.p_value.value,
            "half_life": self.half_life if self.has_finite_half_life else None,
            "z_window": self.z_window,
            "z_scores": [z.to_dict() for z in self.z_scores],
            "current_z_score": self.current_z_score,
            "signal": self.signal.value,
        }


PREDEFINED_PAIRS: tuple[PairDefinition, ...] = (
    PairDefinition("005930.KS", "000660.KS", "krStock", "Samsung Electronics / SK Hynix"),
    PairDefinition("005380.KS", "000270.KS", "krStock", "Hyundai Motor / Kia"),
    PairDefinition("105560.KS", "055550.KS", "krStock", "KB Financial / Shinhan"),
    PairDefinition("035420.KS", "035720.KS", "krStock", "NAVER / Kakao"),
    PairDefinition("017670.KS", "030200.KS", "krStock", "SKT / KT"),
    PairDefinition("AMD", "INTC", "usStock", "AMD / Intel"),
    PairDefinition("KO", "PEP", "usStock", "Coca-Cola / Pepsi"),
    PairDefinition("XOM", "CVX", "usStock", "Exxon / Chevron"),
    PairDefinition("JPM", "BAC", "usStock", "JPMorgan / BofA"),
    PairDefinition("GLD", "IAU", "usStock", "GLD / IAU"),
)
