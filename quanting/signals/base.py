"""
Base signal types shared by the signal detectors.
"""

from dataclasses import dataclass, field
from enum import Enum


class SignalDirection(str, Enum):
    """Trade direction of a signal."""

    BUY = "buy"
    SELL = "sell"


class Confidence(str, Enum):
    """How many optional confirmations backed the signal."""

    STRONG = "strong"
    NORMAL = "normal"


@dataclass(frozen=True)
class ConfluenceSignal:
    """
    A candle where every condition of a rule held at once.

    ``conditions`` lists the satisfied conditions in evaluation order, in
    human-readable form.
    """

    time: int
    direction: SignalDirection
    price: float
    confidence: Confidence
    conditions: list[str] = field(default_factory=list)

    @property
    def is_buy(self) -> bool:
        """True for buy signals."""
        return self.direction == SignalDirection.BUY

    @property
    def is_strong(self) -> bool:
        """True for strong-confidence signals."""
        return self.confidence == Confidence.STRONG

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "time": self.time,
            "direction": self.direction.value,
            "price": self.price,
            "confidence": self.confidence.value,
            "conditions": list(self.conditions),
        }
