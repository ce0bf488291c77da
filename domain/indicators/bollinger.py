"""Bollinger Bands indicator."""

import math

from domain.indicators.base import PriceSeries, fmt
from domain.indicators.moving_averages import sma
from domain.models import BollingerBands, IndicatorCalculationDetail

STD_MULTIPLIER = 2
HIGH_VOLATILITY_WIDTH = 20.0


def _std_dev(window: PriceSeries, mean: float) -> float:
    # Population variance, divided by the window length
    variance = sum((price - mean) ** 2 for price in window) / len(window)
    return math.sqrt(variance)


def bollinger_bands(closes: PriceSeries, period: int = 20) -> BollingerBands:
    """Calculate Bollinger Bands over the most recent window.

    Upper Band = SMA + (2 * standard_deviation)
    Middle Band = SMA
    Lower Band = SMA - (2 * standard_deviation)

    Args:
        closes: List of closing prices, oldest first
        period: Period for SMA and standard deviation (default: 20)

    Returns:
        BollingerBands; all three equal the SMA when len(closes) < period

    Example:
        >>> bands = bollinger_bands([100] * 25)
        >>> bands.upper == bands.middle == bands.lower
        True
    """
    middle = sma(closes, period)

    if len(closes) < period:
        return BollingerBands(upper=middle, middle=middle, lower=middle)

    std = _std_dev(closes[-period:], middle)
    return BollingerBands(
        upper=middle + (std * STD_MULTIPLIER),
        middle=middle,
        lower=middle - (std * STD_MULTIPLIER),
    )


def bollinger_bands_with_details(
    closes: PriceSeries,
    period: int = 20,
) -> IndicatorCalculationDetail:
    """Calculate Bollinger Bands with variance, width and a band reading.

    The result is the upper band. Readings name the upper band without
    quoting its value, so a lower-band view can be derived by renaming it.
    """
    formula = (
        f"Upper = SMA{period} + {STD_MULTIPLIER} x StdDev; "
        f"Lower = SMA{period} - {STD_MULTIPLIER} x StdDev"
    )
    middle = sma(closes, period)

    if len(closes) < period:
        return IndicatorCalculationDetail(
            formula=formula,
            variables={
                "Period": period,
                "Available Prices": len(closes),
                "Upper Band": middle,
                "Middle Band": middle,
                "Lower Band": middle,
            },
            steps=[
                f"Need {period} prices, only {len(closes)} available",
                f"All bands collapse to SMA{period} = {fmt(middle)}",
            ],
            result=middle,
            interpretation="Not enough price history - upper band equals the moving average",
            sufficient_data=False,
        )

    window = closes[-period:]
    variance = sum((price - middle) ** 2 for price in window) / period
    std = math.sqrt(variance)
    upper = middle + (std * STD_MULTIPLIER)
    lower = middle - (std * STD_MULTIPLIER)
    width = (upper - lower) / middle * 100 if middle else 0.0
    current_price = closes[-1]

    steps = [
        f"SMA{period} = {fmt(middle)}",
        f"Variance = sum((P - SMA)^2) / {period} = {fmt(variance, 4)}",
        f"StdDev = sqrt({fmt(variance, 4)}) = {fmt(std, 4)}",
        f"Upper = {fmt(middle)} + {STD_MULTIPLIER} x {fmt(std, 4)} = {fmt(upper)}",
        f"Lower = {fmt(middle)} - {STD_MULTIPLIER} x {fmt(std, 4)} = {fmt(lower)}",
        f"Band width = ({fmt(upper)} - {fmt(lower)}) / {fmt(middle)} x 100 = {width:.2f}%",
    ]

    if current_price > upper:
        interpretation = f"Price {fmt(current_price)} is above the upper band - overbought"
    elif current_price < lower:
        interpretation = f"Price {fmt(current_price)} is below the lower band - oversold"
    else:
        interpretation = (
            f"Price {fmt(current_price)} is inside the bands, "
            "upper band not reached - normal range"
        )

    if width > HIGH_VOLATILITY_WIDTH:
        interpretation += f"; width {width:.2f}% signals high volatility"
    else:
        interpretation += f"; width {width:.2f}% signals normal volatility"

    return IndicatorCalculationDetail(
        formula=formula,
        variables={
            "Period": period,
            f"SMA{period}": middle,
            "Variance": variance,
            "Standard Deviation": std,
            "Upper Band": upper,
            "Middle Band": middle,
            "Lower Band": lower,
            "Band Width (%)": width,
            "Current Price": current_price,
        },
        steps=steps,
        result=upper,
        interpretation=interpretation,
    )
