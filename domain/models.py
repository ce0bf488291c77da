"""
Domain models - pure data structures with validation.

These are immutable value objects created fresh per calculation.
All models are JSON-serializable and never mutated after construction.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


# ============================================================================
# Enums for domain models
# ============================================================================

class Signal(str, Enum):
    """Trading posture derived from an indicator value."""
    BUY = "buy"
    SELL = "sell"
    HOLD = "hold"


# ============================================================================
# Calculation records
# ============================================================================

class IndicatorCalculationDetail(BaseModel):
    """
    Explanation of a single indicator evaluation.

    Carries the formula, the named intermediate values in the order they
    were produced, a human-readable derivation and the final result.
    """
    model_config = {"frozen": True, "extra": "forbid"}

    formula: str = Field(description="Formula used for the calculation")
    variables: dict[str, float | str] = Field(
        default_factory=dict,
        description="Intermediate values, insertion ordered",
    )
    steps: list[str] = Field(default_factory=list, description="Derivation steps")
    result: float = Field(description="Final numeric result")
    interpretation: str = Field(description="Qualitative reading of the result")
    sufficient_data: bool = Field(
        default=True,
        description="False when the insufficient-data fallback was used",
    )


class BollingerBands(BaseModel):
    """Upper, middle and lower Bollinger band values."""
    model_config = {"frozen": True}

    upper: float
    middle: float
    lower: float


class MACDResult(BaseModel):
    """MACD line and its (simplified) signal line."""
    model_config = {"frozen": True}

    macd: float
    signal: float


class TechnicalIndicator(BaseModel):
    """
    Indicator record consumed by list and detail views.

    A read-only projection of one computed value plus its classification.
    """
    model_config = {"frozen": True, "extra": "forbid"}

    name: str = Field(min_length=1)
    value: float
    signal: Signal
    description: str
    recommendation: str
    formula: str | None = None
    calculation: IndicatorCalculationDetail | None = None


class IndicatorCalculationSummary(BaseModel):
    """Raw indicator numbers for chart overlays."""
    model_config = {"frozen": True}

    sma20: float
    sma50: float
    ema12: float
    ema26: float
    rsi: float
    macd: float
    macd_signal: float
    bollinger: BollingerBands


class IndicatorBundle(BaseModel):
    """Result of a full indicator calculation over one price series."""
    model_config = {"frozen": True}

    indicators: list[TechnicalIndicator]
    summary: IndicatorCalculationSummary

    def get(self, name: str) -> TechnicalIndicator | None:
        """Find an indicator by name."""
        for indicator in self.indicators:
            if indicator.name == name:
                return indicator
        return None


class StockAnalysis(BaseModel):
    """Indicators computed for one symbol over one period."""
    model_config = {"frozen": True}

    symbol: str
    period: str
    indicators: list[TechnicalIndicator]
    calculations: IndicatorCalculationSummary
    generated_at: datetime = Field(default_factory=datetime.now)
