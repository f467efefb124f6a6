"""
Instrument baskets used by the monthly rotation strategies.
"""

# Global Equities Momentum: two risk assets and the safety asset
GEM_RISK_A = "SPY"
GEM_RISK_B = "VEU"
GEM_SAFETY = "AGG"
# Cash proxy, fetched with the rest but never selected
GEM_CASH = "BIL"

GEM_ASSETS: tuple[str, ...] = (GEM_RISK_A, GEM_RISK_B, GEM_SAFETY, GEM_CASH)

# Tactical asset allocation basket (each gets an equal share of the TAA weight)
TAA_ASSETS: tuple[str, ...] = ("SPY", "EFA", "IEF", "VNQ", "GLD")

# SPDR sector ETFs ranked by the sector rotation leg
SECTOR_ETFS: tuple[str, ...] = (
    "XLK", "XLV", "XLF", "XLE", "XLY", "XLI", "XLU", "XLRE", "XLB", "XLC", "XLP",
)

# Number of sector slots; unfilled slots sit in cash
TOP_SECTORS_COUNT = 3

# Lookbacks, in monthly bars
MOMENTUM_LOOKBACK = 12
TREND_SMA_PERIOD = 10


def backtest_symbols() -> list[str]:
    """Every symbol the portfolio backtest needs, de-duplicated, in basket order."""
    return list(dict.fromkeys((*GEM_ASSETS, *TAA_ASSETS, *SECTOR_ETFS)))
