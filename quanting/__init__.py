"""
Quanting - quantitative analysis over OHLCV candle series.

Layers:
- core: candles, time-series primitives, collaborator protocols
- indicators / stats: pure math
- strategies + backtest: monthly portfolio rotation (GEM, TAA, sectors)
- pairs: cointegration-based pair trading
- signals: Bollinger/MACD/RSI confluence detector
- orb: opening-range breakout and premarket screener
- data: CSV candle files
"""

__version__ = "0.1.0"
