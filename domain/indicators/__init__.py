"""Technical indicators library for stock analysis.

This package provides pure Python implementations of the indicators shown
on the analysis screens. Every calculator returns the value for the most
recent bar of an oldest-first series, and each has a ``*_with_details``
variant returning the formula, intermediate values, derivation steps and
an interpretation.

Indicators:
    - Moving Averages: SMA (trailing window), EMA (full-history recursion)
    - RSI: Relative Strength Index from simple average gains/losses
    - MACD: EMA12 - EMA26 with a simplified signal line
    - Bollinger Bands: SMA +/- 2 population standard deviations
    - Stochastic: %K and simplified %D
    - Momentum: Williams %R
    - Signals: buy/sell/hold thresholds and indicator texts

Insufficient data never raises: SMA gives 0, RSI 50, Stochastic 50,
Williams %R -50 and Bollinger collapses to the SMA. Only the full bundle
rejects an empty series.

Example:
    >>> from domain.indicators import calculate_all_indicators
    >>>
    >>> closes = [44, 44.34, 44.09, 43.61, 44.33, 44.83, 45.10, 45.42,
    ...           45.84, 46.08, 45.89, 46.03, 45.61, 46.28, 46.28, 46.00]
    >>>
    >>> bundle = calculate_all_indicators(closes)
    >>> [i.name for i in bundle.indicators][:3]
    ['SMA20', 'SMA50', 'RSI']
"""

from domain.indicators.aggregate import (
    build_oscillator_indicators,
    calculate_all_indicators,
    compute_indicator_bundle,
    derive_lower_band_detail,
)
from domain.indicators.base import OHLCSeries, PriceHistory, PriceSeries
from domain.indicators.bollinger import bollinger_bands, bollinger_bands_with_details
from domain.indicators.macd import macd, macd_with_details
from domain.indicators.momentum import williams_r, williams_r_with_details
from domain.indicators.moving_averages import ema, ema_with_details, sma, sma_with_details
from domain.indicators.rsi import rsi, rsi_with_details
from domain.indicators.signals import (
    classify_signal,
    get_description,
    get_detailed_explanation,
    get_recommendation,
)
from domain.indicators.stochastic import stochastic, stochastic_with_details

__all__ = [
    # Base types
    "OHLCSeries",
    "PriceHistory",
    "PriceSeries",
    # Moving averages
    "sma",
    "sma_with_details",
    "ema",
    "ema_with_details",
    # Oscillators
    "rsi",
    "rsi_with_details",
    "macd",
    "macd_with_details",
    "bollinger_bands",
    "bollinger_bands_with_details",
    "stochastic",
    "stochastic_with_details",
    "williams_r",
    "williams_r_with_details",
    # Signals and texts
    "classify_signal",
    "get_description",
    "get_recommendation",
    "get_detailed_explanation",
    # Bundle
    "calculate_all_indicators",
    "compute_indicator_bundle",
    "build_oscillator_indicators",
    "derive_lower_band_detail",
]
