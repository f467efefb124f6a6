"""
Data Module - file-backed candle sources.
"""

from .csv_source import CSVCandleProvider, CSVCandleSource, load_series_map, parse_time

__all__ = [
    "CSVCandleSource",
    "CSVCandleProvider",
    "load_series_map",
    "parse_time",
]
