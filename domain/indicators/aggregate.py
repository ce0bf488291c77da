"""
Full indicator bundle over one price series.

Runs every close-only indicator, classifies each one and packages the
records shown in the indicator list together with the raw numbers used
by chart overlays.
"""

import logging

from domain.indicators.base import OHLCSeries, PriceSeries
from domain.indicators.bollinger import bollinger_bands, bollinger_bands_with_details
from domain.indicators.macd import macd, macd_with_details
from domain.indicators.momentum import williams_r_with_details
from domain.indicators.moving_averages import ema, sma, sma_with_details
from domain.indicators.rsi import rsi, rsi_with_details
from domain.indicators.signals import (
    BOLLINGER_LOWER,
    BOLLINGER_UPPER,
    MACD,
    RSI,
    SMA20,
    SMA50,
    STOCHASTIC_K,
    WILLIAMS_R,
    classify_signal,
    get_description,
    get_recommendation,
)
from domain.indicators.stochastic import stochastic_with_details
from domain.models import (
    IndicatorBundle,
    IndicatorCalculationDetail,
    IndicatorCalculationSummary,
    Signal,
    TechnicalIndicator,
)

logger = logging.getLogger(__name__)


def derive_lower_band_detail(
    upper_detail: IndicatorCalculationDetail,
    lower: float,
) -> IndicatorCalculationDetail:
    """Lower-band view of an upper-band calculation.

    Copies the record with ``result`` set to the lower band and the
    first "upper band" in the interpretation renamed. The upper-band
    record is left as is.
    """
    return upper_detail.model_copy(update={
        "result": lower,
        "interpretation": upper_detail.interpretation.replace("upper band", "lower band", 1),
    })


def _classified(
    name: str,
    value: float,
    prices: PriceSeries,
    detail: IndicatorCalculationDetail,
) -> TechnicalIndicator:
    signal = classify_signal(name, value, prices)
    return TechnicalIndicator(
        name=name,
        value=value,
        signal=signal,
        description=get_description(name),
        recommendation=get_recommendation(signal, name),
        formula=detail.formula,
        calculation=detail,
    )


def calculate_all_indicators(prices: PriceSeries) -> IndicatorBundle:
    """
    Calculate the standard indicator set for a price series.

    Args:
        prices: Closing prices, oldest first

    Returns:
        IndicatorBundle with indicators in the order SMA20, SMA50, RSI,
        MACD, Bollinger Upper, Bollinger Lower, and the flat summary

    Raises:
        ValueError: If prices is empty
    """
    if not prices:
        raise ValueError("No price data available")

    sma20 = sma(prices, 20)
    sma50 = sma(prices, 50)
    ema12 = ema(prices, 12)
    ema26 = ema(prices, 26)
    rsi_value = rsi(prices)
    macd_result = macd(prices)
    bands = bollinger_bands(prices)

    summary = IndicatorCalculationSummary(
        sma20=sma20,
        sma50=sma50,
        ema12=ema12,
        ema26=ema26,
        rsi=rsi_value,
        macd=macd_result.macd,
        macd_signal=macd_result.signal,
        bollinger=bands,
    )

    upper_detail = bollinger_bands_with_details(prices)

    indicators = [
        _classified(SMA20, sma20, prices, sma_with_details(prices, 20)),
        _classified(SMA50, sma50, prices, sma_with_details(prices, 50)),
        _classified(RSI, rsi_value, prices, rsi_with_details(prices)),
        _classified(MACD, macd_result.macd, prices, macd_with_details(prices)),
        TechnicalIndicator(
            name=BOLLINGER_UPPER,
            value=bands.upper,
            signal=Signal.HOLD,
            description=get_description(BOLLINGER_UPPER),
            recommendation=f"Upper resistance at {bands.upper:.2f}",
            formula=upper_detail.formula,
            calculation=upper_detail,
        ),
        TechnicalIndicator(
            name=BOLLINGER_LOWER,
            value=bands.lower,
            signal=Signal.HOLD,
            description=get_description(BOLLINGER_LOWER),
            recommendation=f"Lower support at {bands.lower:.2f}",
            formula=upper_detail.formula,
            calculation=derive_lower_band_detail(upper_detail, bands.lower),
        ),
    ]

    logger.debug(f"Calculated {len(indicators)} indicators over {len(prices)} prices")
    return IndicatorBundle(indicators=indicators, summary=summary)


# Same operation, named after the bundle it returns
compute_indicator_bundle = calculate_all_indicators


def _oscillator(
    name: str,
    detail: IndicatorCalculationDetail,
    prices: PriceSeries,
) -> TechnicalIndicator:
    return TechnicalIndicator(
        name=name,
        value=detail.result,
        signal=classify_signal(name, detail.result, prices),
        description=get_description(name),
        recommendation=detail.interpretation,
        formula=detail.formula,
        calculation=detail,
    )


def build_oscillator_indicators(ohlc: OHLCSeries, period: int = 14) -> list[TechnicalIndicator]:
    """
    Stochastic %K and Williams %R records for bars with high/low data.

    Shown after the standard bundle when the data source supplies OHLC.
    """
    stoch = stochastic_with_details(ohlc.highs, ohlc.lows, ohlc.closes, period)
    wpr = williams_r_with_details(ohlc.highs, ohlc.lows, ohlc.closes, period)
    return [
        _oscillator(STOCHASTIC_K, stoch, ohlc.closes),
        _oscillator(WILLIAMS_R, wpr, ohlc.closes),
    ]
