"""
Core data model and primitives for the analysis components.

Modules:
- models: Candle and series map types
- series: Time-series primitives and the aligned monthly series
- config: Statistical and pair-analysis thresholds
- errors: Exceptions surfaced to callers
- providers: Protocols for the external data collaborators
"""

from quanting.core.config import DEFAULT_CONFIG, AnalysisConfig
from quanting.core.errors import InsufficientDataError
from quanting.core.models import Candle, SeriesMap, month_label
from quanting.core.providers import CandleProvider, IndicatorProvider, PremarketProvider
from quanting.core.series import (
    AlignedMonthlySeries,
    align_by_time,
    avg_volume,
    closes,
    period_return,
    simple_return,
    sma_at,
)

__all__ = [
    "DEFAULT_CONFIG",
    "AlignedMonthlySeries",
    "AnalysisConfig",
    "Candle",
    "CandleProvider",
    "IndicatorProvider",
    "InsufficientDataError",
    "PremarketProvider",
    "SeriesMap",
    "align_by_time",
    "avg_volume",
    "closes",
    "month_label",
    "period_return",
    "simple_return",
    "sma_at",
]
