"""
Pairs Module - Statistical arbitrage between two cointegrated instruments.
"""

from .analyzer import analyze_pair, analyze_pairs, get_zscore_signal, zscore_window
from .models import PREDEFINED_PAIRS, PairDefinition, PairTradingResult, ZScoreSignal

__all__ = [
    "analyze_pair",
    "analyze_pairs",
    "get_zscore_signal",
    "zscore_window",
    "PairDefinition",
    "PairTradingResult",
    "ZScoreSignal",
    "PREDEFINED_PAIRS",
]
