"""MACD (Moving Average Convergence Divergence) indicator."""

from domain.indicators.base import PriceSeries, fmt
from domain.indicators.moving_averages import ema
from domain.models import IndicatorCalculationDetail, MACDResult

FAST_PERIOD = 12
SLOW_PERIOD = 26

# Stand-in for a 9-period EMA of the MACD line. A true signal line needs a
# rolling MACD history, which these single-value calculators do not keep.
SIGNAL_FACTOR = 0.9


def macd(closes: PriceSeries) -> MACDResult:
    """Calculate MACD indicator.

    MACD Line = EMA(12) - EMA(26)
    Signal Line = MACD Line * 0.9 (simplified)

    Args:
        closes: List of closing prices, oldest first

    Returns:
        MACDResult with the MACD line and signal values

    Example:
        >>> result = macd(list(range(10, 50)))
        >>> result.macd > 0
        True
    """
    ema12 = ema(closes, FAST_PERIOD)
    ema26 = ema(closes, SLOW_PERIOD)
    macd_line = ema12 - ema26
    return MACDResult(macd=macd_line, signal=macd_line * SIGNAL_FACTOR)


def macd_with_details(closes: PriceSeries) -> IndicatorCalculationDetail:
    """Calculate MACD with EMAs, signal line and histogram."""
    ema12 = ema(closes, FAST_PERIOD)
    ema26 = ema(closes, SLOW_PERIOD)
    macd_line = ema12 - ema26
    signal = macd_line * SIGNAL_FACTOR
    histogram = macd_line - signal

    steps = [
        f"EMA{FAST_PERIOD} = {fmt(ema12)}",
        f"EMA{SLOW_PERIOD} = {fmt(ema26)}",
        f"MACD = {fmt(ema12)} - {fmt(ema26)} = {fmt(macd_line, 4)}",
        f"Signal = MACD x {SIGNAL_FACTOR} = {fmt(signal, 4)} (simplified signal line)",
        f"Histogram = MACD - Signal = {fmt(histogram, 4)}",
    ]

    if macd_line > signal:
        interpretation = "MACD above signal line - bullish"
    else:
        interpretation = "MACD below signal line - bearish"
    if macd_line > 0:
        interpretation += "; MACD above zero, uptrend"
    else:
        interpretation += "; MACD below zero, downtrend"

    return IndicatorCalculationDetail(
        formula=f"MACD = EMA{FAST_PERIOD} - EMA{SLOW_PERIOD}; Signal = MACD x {SIGNAL_FACTOR}",
        variables={
            f"EMA{FAST_PERIOD}": ema12,
            f"EMA{SLOW_PERIOD}": ema26,
            "MACD": macd_line,
            "Signal": signal,
            "Histogram": histogram,
        },
        steps=steps,
        result=macd_line,
        interpretation=interpretation,
        sufficient_data=len(closes) > 1,
    )
