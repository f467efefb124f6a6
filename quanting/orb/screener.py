"""
Premarket screener - finds stocks in play before the open.

Normal premarket volume is estimated as a fixed share of regular-session
volume; a stock is in play when its premarket volume is a multiple of that
estimate and its price has already moved.
"""

import logging
from collections.abc import Iterable

from .models import ORBConfig, PremarketSnapshot, PremarketStock

logger = logging.getLogger(__name__)


def to_premarket_stock(snapshot: PremarketSnapshot, config: ORBConfig) -> PremarketStock:
    """Derive relative volume and percent change from one snapshot."""
    pre_volume = snapshot.pre_market_volume if snapshot.pre_market_volume is not None else 0.0
    regular_volume = (
        snapshot.regular_market_volume if snapshot.regular_market_volume is not None else 1.0
    )
    normal_volume = regular_volume * config.premarket_volume_fraction
    rvol = pre_volume / normal_volume if normal_volume > 0 else 0.0
    change = snapshot.pre_market_change if snapshot.pre_market_change is not None else 0.0

    return PremarketStock(
        symbol=snapshot.symbol,
        pre_price=snapshot.pre_market_price if snapshot.pre_market_price is not None else 0.0,
        pre_change=change * 100,
        pre_volume=pre_volume,
        normal_volume=normal_volume,
        rvol=rvol,
        has_catalyst=False,  # Marked by the user
    )


def filter_candidates(
    snapshots: Iterable[PremarketSnapshot], config: ORBConfig | None = None
) -> list[PremarketStock]:
    """
    Keep snapshots that pass the relative volume and change thresholds.

    Args:
        snapshots: Premarket snapshots
        config: Thresholds (uses defaults if None)

    Returns:
        Passing stocks, highest relative volume first
    """
    config = config or ORBConfig()
    stocks = [to_premarket_stock(s, config) for s in snapshots]

    in_play = [
        s
        for s in stocks
        if s.rvol >= config.rvol_threshold
        and abs(s.pre_change) >= config.premarket_change_threshold
    ]
    in_play.sort(key=lambda s: s.rvol, reverse=True)

    logger.debug(f"Premarket screen: {len(in_play)}/{len(stocks)} in play")
    return in_play
