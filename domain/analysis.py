"""
Stock analysis over a fetched price history.

Combines the standard indicator bundle with the OHLC oscillators when
the history carries aligned highs and lows.
"""

import logging

from .indicators import PriceHistory, build_oscillator_indicators, calculate_all_indicators
from .models import StockAnalysis

logger = logging.getLogger(__name__)


def analyze_history(history: PriceHistory, period: str = "1M") -> StockAnalysis:
    """
    Compute every indicator available for a price history.

    Args:
        history: Price history from a data source, oldest first
        period: Period label the history was fetched for (e.g. "3M")

    Returns:
        StockAnalysis with the six standard indicators, followed by
        Stochastic %K and Williams %R when OHLC data is present

    Raises:
        ValueError: If the history has no closing prices
    """
    bundle = calculate_all_indicators(history.prices)
    indicators = list(bundle.indicators)

    if history.has_ohlc():
        indicators.extend(build_oscillator_indicators(history.ohlc()))
    else:
        logger.debug(f"{history.symbol}: no aligned OHLC data, skipping oscillators")

    return StockAnalysis(
        symbol=history.symbol,
        period=period,
        indicators=indicators,
        calculations=bundle.summary,
    )
