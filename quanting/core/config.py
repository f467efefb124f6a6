"""
Analysis configuration and thresholds.

Centralizes the numeric constants of the statistical toolkit and the pair
trading analyzer so they can be tuned in one place.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class AnalysisConfig:
    """Thresholds for the statistical toolkit and pair analysis.

    Values below EPSILON are treated as numerically zero everywhere.
    """

    # =========================================================
    # Numerics
    # =========================================================

    epsilon: float = 1e-12

    # =========================================================
    # Minimum Observation Counts
    # =========================================================

    # OLS needs at least this many paired points
    ols_min_points: int = 3

    # ADF returns a neutral verdict below this many observations
    adf_min_points: int = 20

    # Half-life is +inf below this many residuals
    half_life_min_points: int = 10

    # Pair analysis refuses to run below this many aligned closes
    pair_min_points: int = 30

    # =========================================================
    # ADF Critical Values (MacKinnon, two-variable case)
    # =========================================================

    adf_critical_1pct: float = -3.90
    adf_critical_5pct: float = -3.37
    adf_critical_10pct: float = -3.07

    # =========================================================
    # Z-Score Signal Bands
    # =========================================================

    # |z| above this means the spread relationship broke down
    zscore_stoploss: float = 3.5

    # Entry threshold (short above +entry, long below -entry)
    zscore_entry: float = 2.0

    # |z| below this means the spread has reverted, exit
    zscore_exit: float = 0.5

    # Z-score window = clamp(round(half_life), min, max)
    zscore_window_min: int = 20
    zscore_window_max: int = 60


# Default configuration instance
DEFAULT_CONFIG = AnalysisConfig()
