"""
Technical Indicators Module - Pure math functions for market analysis.

All functions are stateless and return points keyed by candle time, ready
to be joined against the candle series they were computed from.
"""

from .bollinger import BollingerPoint, bollinger_bands
from .indicator_set import IndicatorSet, compute_indicator_set
from .macd import MACDPoint, macd_series
from .moving_averages import ema_series, sma
from .rsi import RSIPoint, rsi_series
from .rvol import RvolPoint, rvol_series

__all__ = [
    # Moving Averages
    "sma",
    "ema_series",
    # Bollinger Bands
    "bollinger_bands",
    "BollingerPoint",
    # MACD
    "macd_series",
    "MACDPoint",
    # RSI
    "rsi_series",
    "RSIPoint",
    # Relative Volume
    "rvol_series",
    "RvolPoint",
    # Bundle
    "IndicatorSet",
    "compute_indicator_set",
]
