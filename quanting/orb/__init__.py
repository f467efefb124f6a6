"""
ORB Module - Opening-range breakout detection and premarket screening.
"""

from .detector import detect_breakout, detect_opening_range
from .models import (
    KRX,
    US_EQUITIES,
    BreakoutDirection,
    MarketSession,
    OpeningRange,
    ORBConfig,
    ORBSignal,
    PremarketSnapshot,
    PremarketStock,
)
from .screener import filter_candidates, to_premarket_stock

__all__ = [
    # Detection
    "detect_opening_range",
    "detect_breakout",
    # Screening
    "filter_candidates",
    "to_premarket_stock",
    # Models
    "BreakoutDirection",
    "MarketSession",
    "US_EQUITIES",
    "KRX",
    "ORBConfig",
    "OpeningRange",
    "ORBSignal",
    "PremarketSnapshot",
    "PremarketStock",
]
