"""
Signal classification and static indicator texts.

Maps an indicator value to buy/sell/hold with fixed thresholds, and holds
the description, recommendation and explanation tables shown next to
each indicator.
"""

from types import MappingProxyType

from domain.indicators.base import PriceSeries
from domain.models import Signal

# Indicator names as they appear in records
SMA20 = "SMA20"
SMA50 = "SMA50"
EMA12 = "EMA12"
EMA26 = "EMA26"
RSI = "RSI"
MACD = "MACD"
BOLLINGER_UPPER = "Bollinger Upper"
BOLLINGER_LOWER = "Bollinger Lower"
STOCHASTIC_K = "Stochastic %K"
WILLIAMS_R = "Williams %R"


def classify_signal(indicator_name: str, value: float, prices: PriceSeries) -> Signal:
    """Classify an indicator value as buy, sell or hold.

    Args:
        indicator_name: Indicator record name (e.g. "RSI", "SMA20")
        value: Computed indicator value
        prices: Price series the value was computed from; the last
            element is compared against moving averages

    Returns:
        Signal for the value; unknown indicators are always HOLD

    Example:
        >>> classify_signal("RSI", 25, [100.0])
        <Signal.BUY: 'buy'>
    """
    if indicator_name == RSI:
        if value < 30:
            return Signal.BUY
        if value > 70:
            return Signal.SELL
        return Signal.HOLD

    if indicator_name in (SMA20, SMA50):
        if not prices:
            return Signal.HOLD
        return Signal.BUY if prices[-1] > value else Signal.SELL

    if indicator_name == MACD:
        return Signal.BUY if value > 0 else Signal.SELL

    if indicator_name == STOCHASTIC_K:
        if value < 20:
            return Signal.BUY
        if value > 80:
            return Signal.SELL
        return Signal.HOLD

    if indicator_name == WILLIAMS_R:
        if value < -80:
            return Signal.BUY
        if value > -20:
            return Signal.SELL
        return Signal.HOLD

    return Signal.HOLD


# ============================================================================
# Descriptions
# ============================================================================

DEFAULT_DESCRIPTION = "Technical indicator for market analysis"

DESCRIPTIONS = MappingProxyType({
    SMA20: "20-day Simple Moving Average - shows the average price over the last 20 days",
    SMA50: "50-day Simple Moving Average - shows the average price over the last 50 days",
    EMA12: "12-day Exponential Moving Average - gives more weight to recent prices",
    EMA26: "26-day Exponential Moving Average - gives more weight to recent prices",
    RSI: "Relative Strength Index - measures overbought/oversold conditions (0-100)",
    MACD: "Moving Average Convergence Divergence - shows relationship between two moving averages",
    BOLLINGER_UPPER: "Bollinger Band upper limit - price resistance level",
    BOLLINGER_LOWER: "Bollinger Band lower limit - price support level",
    STOCHASTIC_K: "Stochastic Oscillator measures momentum by comparing closing price to the price range",
    WILLIAMS_R: "Williams %R is a momentum indicator measuring overbought/oversold levels",
})


def get_description(indicator_name: str) -> str:
    return DESCRIPTIONS.get(indicator_name, DEFAULT_DESCRIPTION)


# ============================================================================
# Recommendations
# ============================================================================

DEFAULT_RECOMMENDATION = "Monitor market conditions"

RECOMMENDATIONS = MappingProxyType({
    Signal.BUY: MappingProxyType({
        RSI: "RSI below 30 suggests oversold conditions - consider buying",
        SMA20: "Price above 20-day SMA indicates upward momentum - bullish signal",
        SMA50: "Price above 50-day SMA indicates strong upward trend",
        MACD: "Positive MACD suggests bullish momentum",
    }),
    Signal.SELL: MappingProxyType({
        RSI: "RSI above 70 suggests overbought conditions - consider selling",
        SMA20: "Price below 20-day SMA indicates downward pressure - bearish signal",
        SMA50: "Price below 50-day SMA indicates downward trend",
        MACD: "Negative MACD suggests bearish momentum",
    }),
    Signal.HOLD: MappingProxyType({
        RSI: "RSI in neutral range (30-70) - wait for clearer signals",
        "default": "Indicator shows neutral conditions - monitor for changes",
    }),
})


def get_recommendation(signal: Signal, indicator_name: str) -> str:
    """Recommendation text for a signal, falling back to the signal default."""
    table = RECOMMENDATIONS.get(signal, {})
    return table.get(indicator_name) or table.get("default") or DEFAULT_RECOMMENDATION


# ============================================================================
# Long-form explanations
# ============================================================================

DEFAULT_EXPLANATION = "Detailed explanation not available for this indicator."

DETAILED_EXPLANATIONS = MappingProxyType({
    SMA20: """\
The 20-day Simple Moving Average (SMA20) is calculated by taking the average of the closing prices over the last 20 trading days. It's a lagging indicator that smooths out price fluctuations to identify trends.

How to interpret:
- When the current price is above SMA20, it suggests an upward trend
- When the current price is below SMA20, it suggests a downward trend
- The slope of the SMA line indicates the strength of the trend

Trading signals:
- Price crossing above SMA20 = Potential buy signal
- Price crossing below SMA20 = Potential sell signal
- SMA20 acting as support/resistance level""",

    SMA50: """\
The 50-day Simple Moving Average (SMA50) is calculated by averaging the closing prices over the last 50 trading days. It's more stable than shorter-period averages and better at identifying long-term trends.

How to interpret:
- SMA50 above SMA20 indicates a bearish trend
- SMA20 above SMA50 indicates a bullish trend
- Price above both SMAs suggests strong upward momentum

Golden Cross/Death Cross:
- Golden Cross: SMA20 crosses above SMA50 (bullish signal)
- Death Cross: SMA20 crosses below SMA50 (bearish signal)""",

    RSI: """\
The Relative Strength Index (RSI) is a momentum oscillator that measures the speed and change of price movements. It ranges from 0 to 100 and helps identify overbought and oversold conditions.

Key levels:
- RSI > 70: Overbought (potential sell signal)
- RSI < 30: Oversold (potential buy signal)
- RSI 30-70: Neutral zone

Advanced interpretation:
- RSI divergence: When price makes new highs/lows but RSI doesn't
- RSI trendlines can provide early signals
- Multiple timeframe RSI analysis for confirmation""",

    MACD: """\
Moving Average Convergence Divergence (MACD) is a trend-following momentum indicator that shows the relationship between two moving averages of prices.

Components:
- MACD Line: 12-day EMA minus 26-day EMA
- Signal Line: approximated here as 90% of the MACD line
- Histogram: MACD minus Signal line

Trading signals:
- MACD crossing above signal line = Bullish signal
- MACD crossing below signal line = Bearish signal
- MACD crossing above zero = Upward momentum
- MACD crossing below zero = Downward momentum""",

    BOLLINGER_UPPER: """\
Bollinger Bands consist of a middle line (20-day SMA) and two outer bands. The upper band is calculated as the middle line plus two standard deviations.

How to use:
- Upper band acts as dynamic resistance
- When price touches upper band, it may indicate overbought conditions
- Price consistently hitting upper band suggests strong upward trend
- Bollinger Band squeeze indicates low volatility (potential breakout coming)

Trading strategies:
- Bollinger Bounce: Price bounces off bands
- Bollinger Squeeze: Bands contract (low volatility)
- Band Walk: Price rides along upper/lower band""",

    BOLLINGER_LOWER: """\
The lower Bollinger Band is calculated as the 20-day simple moving average minus two standard deviations. It acts as a dynamic support level.

How to interpret:
- Lower band acts as dynamic support
- When price touches lower band, it may indicate oversold conditions
- Price consistently hitting lower band suggests strong downward trend
- Distance between bands indicates market volatility

Key concepts:
- Band contraction suggests decreasing volatility
- Band expansion suggests increasing volatility
- Price outside bands is considered extreme movement""",
})


def get_detailed_explanation(indicator_name: str) -> str:
    return DETAILED_EXPLANATIONS.get(indicator_name, DEFAULT_EXPLANATION)
