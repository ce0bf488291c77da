"""Relative Strength Index (RSI) indicator."""

from domain.indicators.base import PriceSeries, fmt, require_period
from domain.models import IndicatorCalculationDetail

NEUTRAL_RSI = 50
OVERBOUGHT = 70
OVERSOLD = 30


def _changes(closes: PriceSeries, period: int) -> list[float]:
    # FIXME: reads prices[0..period], the OLDEST window, while every other
    # indicator uses the trailing window. Kept until product confirms which
    # window the RSI screen should show.
    return [closes[i] - closes[i - 1] for i in range(1, period + 1)]


def rsi(closes: PriceSeries, period: int = 14) -> float:
    """Calculate RSI from simple average gains and losses.

    Returns values on 0-100 scale.

    Args:
        closes: List of closing prices, oldest first
        period: RSI period (default: 14)

    Returns:
        RSI value, or 50 (neutral) when fewer than period + 1 prices

    Example:
        >>> rsi(list(range(1, 20)))
        100

    Notes:
        - Uses the first period + 1 prices of the series
        - avgLoss == 0 gives 100
    """
    require_period(period)
    if len(closes) < period + 1:
        return NEUTRAL_RSI

    gains = 0.0
    losses = 0.0
    for change in _changes(closes, period):
        if change > 0:
            gains += change
        else:
            losses -= change

    avg_gain = gains / period
    avg_loss = losses / period

    if avg_loss == 0:
        return 100

    rs = avg_gain / avg_loss
    return 100 - (100 / (1 + rs))


def interpret_rsi(value: float) -> str:
    """Three-way overbought/oversold reading."""
    if value > OVERBOUGHT:
        return f"RSI {value:.2f} > {OVERBOUGHT}: overbought - price may pull back"
    if value < OVERSOLD:
        return f"RSI {value:.2f} < {OVERSOLD}: oversold - price may rebound"
    return f"RSI {value:.2f} is in the neutral zone ({OVERSOLD}-{OVERBOUGHT})"


def rsi_with_details(closes: PriceSeries, period: int = 14) -> IndicatorCalculationDetail:
    """Calculate RSI and list every change, the totals and RS."""
    require_period(period)
    formula = "RSI = 100 - 100 / (1 + RS), RS = Average Gain / Average Loss"

    if len(closes) < period + 1:
        return IndicatorCalculationDetail(
            formula=formula,
            variables={"Period": period, "Available Prices": len(closes)},
            steps=[
                f"Need {period + 1} prices, only {len(closes)} available",
                f"RSI defaults to {NEUTRAL_RSI} (neutral)",
            ],
            result=NEUTRAL_RSI,
            interpretation="Not enough price history - RSI shown as neutral",
            sufficient_data=False,
        )

    steps = [f"Compute {period} day-over-day price changes"]
    gains = 0.0
    losses = 0.0
    for i, change in enumerate(_changes(closes, period), start=1):
        if change > 0:
            gains += change
            kind = "gain"
        else:
            losses -= change
            kind = "loss" if change < 0 else "no change"
        steps.append(
            f"Day {i}: {fmt(closes[i])} - {fmt(closes[i - 1])} = {change:+,.2f} ({kind})"
        )

    avg_gain = gains / period
    avg_loss = losses / period
    steps.append(f"Total gains = {fmt(gains)}, total losses = {fmt(losses)}")
    steps.append(f"Average gain = {fmt(gains)} / {period} = {avg_gain:.4f}")
    steps.append(f"Average loss = {fmt(losses)} / {period} = {avg_loss:.4f}")

    variables: dict[str, float | str] = {
        "Period": period,
        "Total Gains": gains,
        "Total Losses": losses,
        "Average Gain": avg_gain,
        "Average Loss": avg_loss,
    }

    if avg_loss == 0:
        result = 100
        variables["RS"] = "infinite"
        steps.append("Average loss is 0, so RSI = 100")
    else:
        rs = avg_gain / avg_loss
        result = 100 - (100 / (1 + rs))
        variables["RS"] = rs
        steps.append(f"RS = {avg_gain:.4f} / {avg_loss:.4f} = {rs:.4f}")
        steps.append(f"RSI = 100 - 100 / (1 + {rs:.4f}) = {result:.2f}")

    variables["RSI"] = result

    return IndicatorCalculationDetail(
        formula=formula,
        variables=variables,
        steps=steps,
        result=result,
        interpretation=interpret_rsi(result),
    )
