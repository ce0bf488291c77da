"""Momentum indicators."""

from domain.indicators.base import fmt, require_period
from domain.models import IndicatorCalculationDetail

NEUTRAL_WILLIAMS_R = -50.0
OVERBOUGHT = -20
OVERSOLD = -80


def williams_r(
    highs: list[float],
    lows: list[float],
    closes: list[float],
    period: int = 14,
) -> float:
    """Calculate Williams %R for the latest bar.

    Williams %R = (Highest High - Close) / (Highest High - Lowest Low) * -100

    Args:
        highs: List of high prices
        lows: List of low prices
        closes: List of closing prices
        period: Lookback period (default: 14)

    Returns:
        Williams %R (-100 to 0), or -50 when fewer than ``period`` closes

    Example:
        >>> highs = [50, 51, 52, 53, 54, 55, 56, 57, 58, 59, 60, 61, 62, 63, 64]
        >>> lows = [48, 49, 50, 51, 52, 53, 54, 55, 56, 57, 58, 59, 60, 61, 62]
        >>> closes = [49, 50, 51, 52, 53, 54, 55, 56, 57, 58, 59, 60, 61, 62, 63]
        >>> round(williams_r(highs, lows, closes, 14), 2)
        -6.67

    Notes:
        - Values range from -100 (oversold) to 0 (overbought)
        - Inverse of Stochastic %K (flipped and shifted)
    """
    require_period(period)
    if len(closes) < period:
        return NEUTRAL_WILLIAMS_R

    highest_high = max(highs[-period:])
    lowest_low = min(lows[-period:])

    # WHY: Prevent division by zero in flat markets
    if highest_high == lowest_low:
        return NEUTRAL_WILLIAMS_R

    return (highest_high - closes[-1]) / (highest_high - lowest_low) * -100


def williams_r_with_details(
    highs: list[float],
    lows: list[float],
    closes: list[float],
    period: int = 14,
) -> IndicatorCalculationDetail:
    """Calculate Williams %R with the window range and a zone reading."""
    require_period(period)
    formula = "%R = (Highest High - Close) / (Highest High - Lowest Low) x -100"

    if len(closes) < period:
        return IndicatorCalculationDetail(
            formula=formula,
            variables={"Period": period, "Available Bars": len(closes)},
            steps=[
                f"Need {period} bars, only {len(closes)} available",
                f"%R defaults to {NEUTRAL_WILLIAMS_R:.0f} (neutral)",
            ],
            result=NEUTRAL_WILLIAMS_R,
            interpretation="Not enough price history - Williams %R shown as neutral",
            sufficient_data=False,
        )

    highest_high = max(highs[-period:])
    lowest_low = min(lows[-period:])
    close = closes[-1]
    result = williams_r(highs, lows, closes, period)

    steps = [
        f"Highest high of last {period} bars = {fmt(highest_high)}",
        f"Lowest low of last {period} bars = {fmt(lowest_low)}",
        f"Current close = {fmt(close)}",
    ]
    if highest_high == lowest_low:
        steps.append(f"Range is zero, %R set to {NEUTRAL_WILLIAMS_R:.0f}")
    else:
        steps.append(
            f"%R = ({fmt(highest_high)} - {fmt(close)}) / "
            f"({fmt(highest_high)} - {fmt(lowest_low)}) x -100 = {result:.2f}"
        )

    if result > OVERBOUGHT:
        interpretation = f"%R {result:.2f} > {OVERBOUGHT}: overbought - selling pressure may follow"
    elif result < OVERSOLD:
        interpretation = f"%R {result:.2f} < {OVERSOLD}: oversold - buying pressure may follow"
    else:
        interpretation = f"%R {result:.2f} is in the neutral zone ({OVERSOLD} to {OVERBOUGHT})"

    return IndicatorCalculationDetail(
        formula=formula,
        variables={
            "Period": period,
            "Highest High": highest_high,
            "Lowest Low": lowest_low,
            "Current Close": close,
            "Williams %R": result,
        },
        steps=steps,
        result=result,
        interpretation=interpretation,
    )
