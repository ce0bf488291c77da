"""Stochastic Oscillator indicators."""

from domain.indicators.base import fmt, require_period
from domain.models import IndicatorCalculationDetail

NEUTRAL_K = 50.0
OVERBOUGHT = 80
OVERSOLD = 20

# %D is approximated from the latest %K; a 3-period SMA of %K would need
# a %K history that these single-value calculators do not keep.
D_FACTOR = 0.9


def _window_range(
    highs: list[float],
    lows: list[float],
    period: int,
) -> tuple[float, float]:
    """Highest high and lowest low of the trailing window."""
    return max(highs[-period:]), min(lows[-period:])


def stochastic(
    highs: list[float],
    lows: list[float],
    closes: list[float],
    period: int = 14,
) -> tuple[float, float]:
    """Calculate Stochastic Oscillator (%K and %D) for the latest bar.

    %K = 100 * (Close - Lowest Low) / (Highest High - Lowest Low)
    %D = %K * 0.9 (simplified)

    Args:
        highs: List of high prices
        lows: List of low prices
        closes: List of closing prices
        period: Lookback period for %K (default: 14)

    Returns:
        Tuple of (k, d); both 50 when fewer than ``period`` closes

    Example:
        >>> highs = [50, 51, 52, 53, 54, 55, 56, 57, 58, 59, 60, 61, 62, 63, 64]
        >>> lows = [48, 49, 50, 51, 52, 53, 54, 55, 56, 57, 58, 59, 60, 61, 62]
        >>> closes = [49, 50, 51, 52, 53, 54, 55, 56, 57, 58, 59, 60, 61, 62, 63]
        >>> k, d = stochastic(highs, lows, closes, 14)
        >>> round(k, 2)  # (63 - 49) / (64 - 49) over the last 14 bars
        93.33
    """
    require_period(period)
    if len(closes) < period:
        return (NEUTRAL_K, NEUTRAL_K)

    highest_high, lowest_low = _window_range(highs, lows, period)

    # WHY: Prevent division by zero in flat markets
    if highest_high == lowest_low:
        k = NEUTRAL_K
    else:
        k = (closes[-1] - lowest_low) / (highest_high - lowest_low) * 100

    return (k, k * D_FACTOR)


def stochastic_with_details(
    highs: list[float],
    lows: list[float],
    closes: list[float],
    period: int = 14,
) -> IndicatorCalculationDetail:
    """Calculate Stochastic %K with the window range and a zone reading."""
    require_period(period)
    formula = "%K = (Close - Lowest Low) / (Highest High - Lowest Low) x 100; %D = %K x 0.9"

    if len(closes) < period:
        return IndicatorCalculationDetail(
            formula=formula,
            variables={"Period": period, "Available Bars": len(closes)},
            steps=[
                f"Need {period} bars, only {len(closes)} available",
                f"%K and %D default to {NEUTRAL_K:.0f} (neutral)",
            ],
            result=NEUTRAL_K,
            interpretation="Not enough price history - Stochastic shown as neutral",
            sufficient_data=False,
        )

    highest_high, lowest_low = _window_range(highs, lows, period)
    close = closes[-1]
    k, d = stochastic(highs, lows, closes, period)

    steps = [
        f"Highest high of last {period} bars = {fmt(highest_high)}",
        f"Lowest low of last {period} bars = {fmt(lowest_low)}",
        f"Current close = {fmt(close)}",
    ]
    if highest_high == lowest_low:
        steps.append(f"Range is zero, %K set to {NEUTRAL_K:.0f}")
    else:
        steps.append(
            f"%K = ({fmt(close)} - {fmt(lowest_low)}) / "
            f"({fmt(highest_high)} - {fmt(lowest_low)}) x 100 = {k:.2f}"
        )
    steps.append(f"%D = {k:.2f} x {D_FACTOR} = {d:.2f} (simplified)")

    if k > OVERBOUGHT:
        interpretation = f"%K {k:.2f} > {OVERBOUGHT}: overbought - consider taking profits"
    elif k < OVERSOLD:
        interpretation = f"%K {k:.2f} < {OVERSOLD}: oversold - potential buying opportunity"
    else:
        interpretation = f"%K {k:.2f} is in the neutral zone ({OVERSOLD}-{OVERBOUGHT})"

    return IndicatorCalculationDetail(
        formula=formula,
        variables={
            "Period": period,
            "Highest High": highest_high,
            "Lowest Low": lowest_low,
            "Current Close": close,
            "%K": k,
            "%D": d,
        },
        steps=steps,
        result=k,
        interpretation=interpretation,
    )
