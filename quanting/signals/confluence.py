"""
Confluence Signal Detector - Bollinger + MACD + volume/RSI agreement.

Generates BUY signals when all of these hold on one candle:
1. Close at or below the lower Bollinger band
2. MACD crosses above its signal line, or the histogram turns positive
3. Volume at least 1.2x its trailing 20-candle average
(RSI < 30 upgrades the signal to strong)

Generates SELL signals when all of these hold:
1. Close at or above the upper Bollinger band
2. MACD crosses below its signal line, or the histogram turns negative
3. RSI above 70
(RSI > 80 upgrades the signal to strong)

A candle emits at most one signal; BUY is checked first.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from quanting.core.models import Candle
from quanting.core.series import avg_volume
from quanting.indicators import BollingerPoint, IndicatorSet, MACDPoint, RSIPoint

from .base import Confidence, ConfluenceSignal, SignalDirection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfluenceConfig:
    """Configuration for confluence signal detection."""

    warmup: int = 21  # First candle index scanned
    volume_period: int = 20  # Trailing window for average volume (includes current)
    volume_surge: float = 1.2  # Minimum volume / average volume for a BUY
    rsi_strong_buy: float = 30.0
    rsi_overbought: float = 70.0
    rsi_strong_sell: float = 80.0


class ConfluenceSignalDetector:
    """
    Scans a candle series for candles where band, trend and momentum agree.

    Indicator points are matched to candles by time; a candle without a
    band point or without MACD points for itself and the previous candle is
    skipped.
    """

    def __init__(self, config: ConfluenceConfig | None = None) -> None:
        """
        Initialize the detector.

        Args:
            config: Configuration for signal detection (uses defaults if None)
        """
        self.config = config or ConfluenceConfig()

    def detect(self, candles: Sequence[Candle], indicators: IndicatorSet) -> list[ConfluenceSignal]:
        """
        Scan every candle after the warm-up.

        Args:
            candles: Candles, oldest first
            indicators: Bollinger, MACD and RSI series for the same candles

        Returns:
            Signals in candle order
        """
        if not indicators.macd or not indicators.bollinger:
            return []

        bb_map = indicators.bollinger_by_time()
        macd_map = indicators.macd_by_time()
        rsi_map = indicators.rsi_by_time()

        signals: list[ConfluenceSignal] = []
        skipped = 0

        for i in range(self.config.warmup, len(candles)):
            candle = candles[i]
            bb = bb_map.get(candle.time)
            macd_cur = macd_map.get(candle.time)
            macd_prev = macd_map.get(candles[i - 1].time)
            if bb is None or macd_cur is None or macd_prev is None:
                skipped += 1
                continue

            rsi = rsi_map.get(candle.time)
            avg = avg_volume(candles, i, self.config.volume_period)
            vol_surge = candle.volume / avg if avg > 0 else 0.0

            signal = self._check_buy(candle, bb, macd_prev, macd_cur, rsi, vol_surge)
            if signal is None:
                signal = self._check_sell(candle, bb, macd_prev, macd_cur, rsi)
            if signal is not None:
                signals.append(signal)

        if skipped:
            logger.debug(f"Confluence scan skipped {skipped} candles without aligned indicators")
        return signals

    def _check_buy(
        self,
        candle: Candle,
        bb: BollingerPoint,
        macd_prev: MACDPoint,
        macd_cur: MACDPoint,
        rsi: RSIPoint | None,
        vol_surge: float,
    ) -> ConfluenceSignal | None:
        """Evaluate the BUY rule on one candle."""
        if candle.close > bb.lower:
            return None

        golden_cross = macd_prev.macd <= macd_prev.signal and macd_cur.macd > macd_cur.signal
        hist_turn_positive = macd_prev.histogram <= 0 and macd_cur.histogram > 0
        if not (golden_cross or hist_turn_positive):
            return None

        if vol_surge < self.config.volume_surge:
            return None

        conditions = [
            "BB lower touch",
            "MACD golden cross" if golden_cross else "histogram turned positive",
            f"volume {vol_surge:.1f}x",
        ]
        is_strong = rsi is not None and rsi.value < self.config.rsi_strong_buy
        if is_strong:
            conditions.append(f"RSI < {self.config.rsi_strong_buy:.0f} (strong buy)")

        return ConfluenceSignal(
            time=candle.time,
            direction=SignalDirection.BUY,
            price=candle.close,
            confidence=Confidence.STRONG if is_strong else Confidence.NORMAL,
            conditions=conditions,
        )

    def _check_sell(
        self,
        candle: Candle,
        bb: BollingerPoint,
        macd_prev: MACDPoint,
        macd_cur: MACDPoint,
        rsi: RSIPoint | None,
    ) -> ConfluenceSignal | None:
        """Evaluate the SELL rule on one candle."""
        if candle.close < bb.upper:
            return None

        dead_cross = macd_prev.macd >= macd_prev.signal and macd_cur.macd < macd_cur.signal
        hist_turn_negative = macd_prev.histogram >= 0 and macd_cur.histogram < 0
        if not (dead_cross or hist_turn_negative):
            return None

        if rsi is None or rsi.value <= self.config.rsi_overbought:
            return None

        conditions = [
            "BB upper touch",
            "MACD dead cross" if dead_cross else "histogram turned negative",
            f"RSI {rsi.value:.0f} > {self.config.rsi_overbought:.0f}",
        ]
        is_strong = rsi.value > self.config.rsi_strong_sell

        return ConfluenceSignal(
            time=candle.time,
            direction=SignalDirection.SELL,
            price=candle.close,
            confidence=Confidence.STRONG if is_strong else Confidence.NORMAL,
            conditions=conditions,
        )


def detect_confluence_signals(
    candles: Sequence[Candle],
    indicators: IndicatorSet,
    config: ConfluenceConfig | None = None,
) -> list[ConfluenceSignal]:
    """Scan ``candles`` for confluence signals (see ConfluenceSignalDetector)."""
    return ConfluenceSignalDetector(config).detect(candles, indicators)
