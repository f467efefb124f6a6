"""
Sector Rotation - top-K sector ETFs by 12-month momentum.

Sectors are ranked by trailing 12-month return. Walking the ranking from the
top, a sector is selected while fewer than K are selected and it is both
above its 10-bar SMA and up over 12 months.
"""

from dataclasses import dataclass

from quanting.core.models import SeriesMap
from quanting.core.series import AlignedMonthlySeries, closes, simple_return, sma_at

from .baskets import MOMENTUM_LOOKBACK, SECTOR_ETFS, TOP_SECTORS_COUNT, TREND_SMA_PERIOD

# Rank given to sectors without enough history
UNRANKED = 999


@dataclass(frozen=True)
class SectorPick:
    """Sector state at one backtest index."""

    asset: str
    return_12m: float
    above_sma: bool
    selected: bool
    return_pct: float  # One-bar return into the index


@dataclass(frozen=True)
class SectorRanking:
    """Sector state at its latest bar."""

    asset: str
    rank: int
    return_12m: float
    above_sma: bool
    selected: bool

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "asset": self.asset,
            "rank": self.rank,
            "return_12m": self.return_12m,
            "above_sma": self.above_sma,
            "selected": self.selected,
        }


def _is_eligible(return_12m: float, above_sma: bool) -> bool:
    return above_sma and return_12m > 0


def sector_at_index(series: AlignedMonthlySeries, index: int) -> list[SectorPick]:
    """
    Sector picks at ``index``, ordered by 12-month return descending.

    Absent sectors rank with a 0 return and are never selected.
    """
    if index < MOMENTUM_LOOKBACK:
        return [
            SectorPick(asset=a, return_12m=0.0, above_sma=False, selected=False, return_pct=0.0)
            for a in SECTOR_ETFS
        ]

    items: list[tuple[str, float, bool, float]] = []
    for asset in SECTOR_ETFS:
        if asset not in series:
            items.append((asset, 0.0, False, 0.0))
            continue

        now = series.close_at(asset, index) or 0.0
        past = series.close_at(asset, index - MOMENTUM_LOOKBACK)
        return_12m = simple_return(now, now if past is None else past)
        trend = series.sma_at(asset, TREND_SMA_PERIOD, index)
        above_sma = trend is not None and now > trend
        items.append((asset, return_12m, above_sma, series.bar_return(asset, index)))

    # Stable sort keeps basket order among ties
    items.sort(key=lambda item: item[1], reverse=True)

    picks: list[SectorPick] = []
    selected = 0
    for asset, return_12m, above_sma, return_pct in items:
        is_selected = selected < TOP_SECTORS_COUNT and _is_eligible(return_12m, above_sma)
        if is_selected:
            selected += 1
        picks.append(
            SectorPick(
                asset=asset,
                return_12m=return_12m,
                above_sma=above_sma,
                selected=is_selected,
                return_pct=return_pct,
            )
        )

    return picks


def compute_sector_rankings(series_map: SeriesMap) -> list[SectorRanking]:
    """
    Rank every sector at its own latest bar.

    Sectors with fewer than 13 bars are listed last with rank 999.
    """
    ranked: list[tuple[str, float, bool]] = []
    unranked: list[str] = []

    for asset in SECTOR_ETFS:
        candles = series_map.get(asset)
        if not candles or len(candles) < MOMENTUM_LOOKBACK + 1:
            unranked.append(asset)
            continue

        values = closes(candles)
        last = len(values) - 1
        now = values[last]
        return_12m = simple_return(now, values[last - MOMENTUM_LOOKBACK])
        trend = sma_at(values, TREND_SMA_PERIOD, last)
        ranked.append((asset, return_12m, trend is not None and now > trend))

    ranked.sort(key=lambda item: item[1], reverse=True)

    rankings: list[SectorRanking] = []
    selected = 0
    for rank, (asset, return_12m, above_sma) in enumerate(ranked, start=1):
        is_selected = selected < TOP_SECTORS_COUNT and _is_eligible(return_12m, above_sma)
        if is_selected:
            selected += 1
        rankings.append(
            SectorRanking(
                asset=asset,
                rank=rank,
                return_12m=return_12m,
                above_sma=above_sma,
                selected=is_selected,
            )
        )

    for asset in unranked:
        rankings.append(
            SectorRanking(asset=asset, rank=UNRANKED, return_12m=0.0, above_sma=False, selected=False)
        )

    return rankings
