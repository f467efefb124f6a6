"""
Statistical Toolkit - regression, stationarity and mean-reversion measures.

Pure functions over float sequences. Degenerate input never raises; each
function documents the neutral value it returns instead.
"""

from .mean_reversion import ZScorePoint, compute_zscore, half_life, rolling_zscore
from .regression import OLSResult, ols
from .stationarity import NEUTRAL_ADF, ADFResult, PValueBucket, adf_test, p_value_bucket

__all__ = [
    # Regression
    "ols",
    "OLSResult",
    # Stationarity
    "adf_test",
    "ADFResult",
    "PValueBucket",
    "NEUTRAL_ADF",
    "p_value_bucket",
    # Mean reversion
    "compute_zscore",
    "rolling_zscore",
    "ZScorePoint",
    "half_life",
]
