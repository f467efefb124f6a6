"""
Opening-Range Breakout Detector.

Two passes over one day's intraday candles:
1. detect_opening_range: high/low of the first ``range_minutes`` after the open
2. detect_breakout: first close outside the range, optionally confirmed by VWAP

Only the first breakout of the scan is reported.
"""

import logging
from collections.abc import Sequence

from quanting.core.models import Candle

from .models import US_EQUITIES, BreakoutDirection, MarketSession, OpeningRange, ORBConfig, ORBSignal

logger = logging.getLogger(__name__)


def detect_opening_range(
    candles: Sequence[Candle],
    range_minutes: int = 5,
    session: MarketSession = US_EQUITIES,
) -> OpeningRange | None:
    """
    Find the opening range of the session the latest candle belongs to.

    Args:
        candles: Intraday candles, oldest first
        range_minutes: Length of the range window after the open
        session: Market whose open anchors the window

    Returns:
        OpeningRange, or None if no candle falls inside the window
    """
    if not candles:
        return None

    open_ts = session.open_timestamp(session.session_date(candles[-1].time))
    end_ts = open_ts + range_minutes * 60

    range_bars = [c for c in candles if open_ts <= c.time < end_ts]
    if not range_bars:
        logger.debug(f"No candles between {open_ts} and {end_ts}")
        return None

    high = max(c.high for c in range_bars)
    low = min(c.low for c in range_bars)

    return OpeningRange(
        high=high,
        low=low,
        range_width=high - low,
        start_time=open_ts,
        end_time=end_ts,
    )


def detect_breakout(
    candles: Sequence[Candle],
    opening_range: OpeningRange,
    config: ORBConfig | None = None,
    symbol: str = "",
) -> list[ORBSignal]:
    """
    Scan candles after the range for the first breakout.

    VWAP runs over every candle from the range start through the candle
    being checked, each candle counted once.

    Args:
        candles: Intraday candles, oldest first
        opening_range: Range from detect_opening_range
        config: Breakout settings (uses defaults if None)
        symbol: Symbol stamped on the signal

    Returns:
        Empty list, or a list with exactly one signal
    """
    config = config or ORBConfig()

    cum_vol_price = 0.0
    cum_vol = 0.0

    for candle in candles:
        if candle.time < opening_range.start_time:
            continue

        cum_vol_price += candle.typical_price * candle.volume
        cum_vol += candle.volume

        if candle.time < opening_range.end_time:
            continue

        vwap = cum_vol_price / cum_vol if cum_vol > 0 else 0.0
        direction = _breakout_direction(candle.close, vwap, opening_range, config)
        if direction is None:
            continue

        signal = _build_signal(candle, direction, opening_range, config, symbol)
        logger.debug(
            f"{symbol or 'ORB'} {direction.value} breakout at {candle.close:.2f} (VWAP {vwap:.2f})"
        )
        return [signal]

    return []


def _breakout_direction(
    close: float, vwap: float, opening_range: OpeningRange, config: ORBConfig
) -> BreakoutDirection | None:
    if close > opening_range.high and (not config.use_vwap_filter or close > vwap):
        return BreakoutDirection.LONG
    if close < opening_range.low and (not config.use_vwap_filter or close < vwap):
        return BreakoutDirection.SHORT
    return None


def _build_signal(
    candle: Candle,
    direction: BreakoutDirection,
    opening_range: OpeningRange,
    config: ORBConfig,
    symbol: str,
) -> ORBSignal:
    entry = candle.close
    width = opening_range.range_width
    sign = 1 if direction == BreakoutDirection.LONG else -1

    if direction == BreakoutDirection.LONG:
        stop = opening_range.low - config.stop_buffer
    else:
        stop = opening_range.high + config.stop_buffer

    return ORBSignal(
        symbol=symbol,
        direction=direction,
        entry=entry,
        target1=entry + sign * width,
        target2=entry + sign * width * 1.5,
        stop=stop,
        range_high=opening_range.high,
        range_low=opening_range.low,
        time=candle.time,
    )
