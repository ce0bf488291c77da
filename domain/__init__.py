from .models import (
    Signal,
    IndicatorCalculationDetail,
    BollingerBands,
    MACDResult,
    TechnicalIndicator,
    IndicatorCalculationSummary,
    IndicatorBundle,
    StockAnalysis,
)
from .indicators import (
    OHLCSeries,
    PriceHistory,
    PriceSeries,
    calculate_all_indicators,
    compute_indicator_bundle,
    build_oscillator_indicators,
    classify_signal,
)
from .analysis import analyze_history

__all__ = [
    # Domain models
    "Signal",
    "IndicatorCalculationDetail",
    "BollingerBands",
    "MACDResult",
    "TechnicalIndicator",
    "IndicatorCalculationSummary",
    "IndicatorBundle",
    "StockAnalysis",
    # Price data
    "OHLCSeries",
    "PriceHistory",
    "PriceSeries",
    # Calculation
    "calculate_all_indicators",
    "compute_indicator_bundle",
    "build_oscillator_indicators",
    "classify_signal",
    "analyze_history",
]
