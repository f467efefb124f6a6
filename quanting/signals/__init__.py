"""
Signals Module - Pattern detectors that use indicators to generate trading signals.

Detectors are deterministic: the same candles and indicator series always
produce the same signals.
"""

from .base import Confidence, ConfluenceSignal, SignalDirection
from .confluence import ConfluenceConfig, ConfluenceSignalDetector, detect_confluence_signals

__all__ = [
    "SignalDirection",
    "Confidence",
    "ConfluenceSignal",
    "ConfluenceConfig",
    "ConfluenceSignalDetector",
    "detect_confluence_signals",
]
