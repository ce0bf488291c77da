"""Moving average indicators."""

from domain.indicators.base import PriceSeries, fmt, require_period
from domain.models import IndicatorCalculationDetail

# Iterations of the EMA recursion written out verbatim in the derivation.
EMA_LOGGED_ITERATIONS = 5


def sma(values: PriceSeries, period: int) -> float:
    """Calculate Simple Moving Average of the most recent values.

    Args:
        values: Prices, oldest first
        period: Number of periods for the moving average

    Returns:
        Mean of the last ``period`` values, or 0 when there are fewer
        than ``period`` values (callers treat 0 as "no signal")

    Example:
        >>> sma([10, 20, 30], 3)
        20.0
        >>> sma([1, 2], 5)
        0
    """
    require_period(period)
    if len(values) < period:
        return 0

    window = values[-period:]
    return sum(window) / period


def ema(values: PriceSeries, period: int) -> float:
    """Calculate Exponential Moving Average over the whole history.

    The recursion is seeded with the first element of the series, not
    with an SMA of the look-back window. The period only sets the
    multiplier, so every value in the series contributes.

    Args:
        values: Prices, oldest first
        period: Number of periods used for the multiplier 2/(period+1)

    Returns:
        Final EMA value, 0 for an empty series, the only element for a
        single-element series

    Example:
        >>> ema([5], 10)
        5
        >>> ema([], 10)
        0
    """
    require_period(period)
    if not values:
        return 0
    if len(values) == 1:
        return values[0]

    multiplier = 2 / (period + 1)
    result = values[0]

    for price in values[1:]:
        result = (price * multiplier) + (result * (1 - multiplier))

    return result


def sma_with_details(values: PriceSeries, period: int) -> IndicatorCalculationDetail:
    """Calculate SMA and explain the derivation.

    Args:
        values: Prices, oldest first
        period: Number of periods for the moving average

    Returns:
        IndicatorCalculationDetail with the summed window, the sum and a
        support/resistance reading against the latest price
    """
    require_period(period)
    label = f"SMA{period}"
    formula = f"{label} = (P1 + P2 + ... + P{period}) / {period}"

    if len(values) < period:
        return IndicatorCalculationDetail(
            formula=formula,
            variables={"Period": period, "Available Prices": len(values)},
            steps=[
                f"Need {period} prices, only {len(values)} available",
                f"{label} defaults to 0 (insufficient data)",
            ],
            result=0,
            interpretation=f"Not enough price history to calculate {label}",
            sufficient_data=False,
        )

    window = values[-period:]
    total = sum(window)
    result = total / period
    current_price = values[-1]

    variables: dict[str, float | str] = {"Period": period}
    for i, price in enumerate(window, start=1):
        variables[f"P{i}"] = price
    variables["Sum"] = total
    variables["Current Price"] = current_price
    variables[label] = result

    steps = [
        f"Take the last {period} closing prices",
        "Values: " + ", ".join(fmt(p) for p in window),
        f"Sum = {fmt(total)}",
        f"{label} = {fmt(total)} / {period} = {fmt(result)}",
    ]

    if current_price < result:
        interpretation = (
            f"Current price ({fmt(current_price)}) is below {label} ({fmt(result)}) "
            f"- potential support zone"
        )
    else:
        interpretation = (
            f"Current price ({fmt(current_price)}) is above {label} ({fmt(result)}) "
            f"- potential resistance zone"
        )

    return IndicatorCalculationDetail(
        formula=formula,
        variables=variables,
        steps=steps,
        result=result,
        interpretation=interpretation,
    )


def ema_with_details(values: PriceSeries, period: int) -> IndicatorCalculationDetail:
    """Calculate EMA and explain the recursion.

    The first few iterations are written out; the rest are summarized
    with the final value.
    """
    require_period(period)
    label = f"EMA{period}"
    multiplier = 2 / (period + 1)
    formula = f"{label} = Price x k + EMA(previous) x (1 - k), k = 2 / ({period} + 1)"

    if not values:
        return IndicatorCalculationDetail(
            formula=formula,
            variables={"Period": period, "Multiplier (k)": multiplier},
            steps=["No prices available", f"{label} defaults to 0"],
            result=0,
            interpretation=f"Not enough price history to calculate {label}",
            sufficient_data=False,
        )

    steps = [
        f"Multiplier k = 2 / ({period} + 1) = {multiplier:.4f}",
        f"Seed {label} with the first price: {fmt(values[0])}",
    ]
    result = values[0]

    for i in range(1, len(values)):
        previous = result
        result = (values[i] * multiplier) + (previous * (1 - multiplier))
        if i <= EMA_LOGGED_ITERATIONS:
            steps.append(
                f"Day {i + 1}: {fmt(values[i])} x {multiplier:.4f} + "
                f"{fmt(previous)} x {1 - multiplier:.4f} = {fmt(result)}"
            )

    remaining = len(values) - 1 - EMA_LOGGED_ITERATIONS
    if remaining > 0:
        steps.append(f"... {remaining} more iterations, final {label} = {fmt(result)}")

    current_price = values[-1]
    if current_price > result:
        interpretation = f"Price above {label} - short-term momentum is bullish"
    elif current_price < result:
        interpretation = f"Price below {label} - short-term momentum is bearish"
    else:
        interpretation = f"Price at {label} - no directional bias"

    return IndicatorCalculationDetail(
        formula=formula,
        variables={
            "Period": period,
            "Multiplier (k)": multiplier,
            "Initial Price": values[0],
            "Data Points": len(values),
            "Current Price": current_price,
            label: result,
        },
        steps=steps,
        result=result,
        interpretation=interpretation,
        sufficient_data=len(values) > 1,
    )
