"""
JSON API response types.

Structured responses for chart and list views.
Can be used with FastAPI, Flask, or any web framework.
"""

import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel

from domain import IndicatorCalculationDetail, StockAnalysis, TechnicalIndicator


# ============================================================================
# Response Models
# ============================================================================

class CalculationDetailResponse(BaseModel):
    """API response for an indicator derivation."""
    formula: str
    variables: dict[str, float | str]
    steps: list[str]
    result: float
    interpretation: str
    sufficient_data: bool


class IndicatorResponse(BaseModel):
    """API response for one indicator."""
    name: str
    value: float
    signal: str
    description: str
    recommendation: str
    formula: str | None = None
    calculation: CalculationDetailResponse | None = None


class BollingerResponse(BaseModel):
    upper: float
    middle: float
    lower: float


class SummaryResponse(BaseModel):
    """API response for chart overlay values."""
    sma20: float
    sma50: float
    ema12: float
    ema26: float
    rsi: float
    macd: float
    macd_signal: float
    bollinger: BollingerResponse


class AnalysisResponse(BaseModel):
    """Full analysis API response."""
    symbol: str
    period: str
    generated_at: datetime
    indicators: list[IndicatorResponse]
    calculations: SummaryResponse

    # Signal counts
    buy_signals: int
    sell_signals: int
    hold_signals: int


# ============================================================================
# Conversion Functions
# ============================================================================

def _detail_to_response(detail: IndicatorCalculationDetail) -> CalculationDetailResponse:
    return CalculationDetailResponse(
        formula=detail.formula,
        variables=dict(detail.variables),
        steps=list(detail.steps),
        result=detail.result,
        interpretation=detail.interpretation,
        sufficient_data=detail.sufficient_data,
    )


def _indicator_to_response(ind: TechnicalIndicator, include_details: bool) -> IndicatorResponse:
    """Convert TechnicalIndicator to API response."""
    return IndicatorResponse(
        name=ind.name,
        value=ind.value,
        signal=ind.signal.value,
        description=ind.description,
        recommendation=ind.recommendation,
        formula=ind.formula,
        calculation=(
            _detail_to_response(ind.calculation)
            if include_details and ind.calculation
            else None
        ),
    )


def analysis_to_response(analysis: StockAnalysis, include_details: bool = True) -> AnalysisResponse:
    """
    Convert StockAnalysis to API response.

    Args:
        analysis: Computed indicators for one symbol
        include_details: Include calculation details per indicator

    Returns:
        Structured API response
    """
    calc = analysis.calculations
    signals = [ind.signal.value for ind in analysis.indicators]

    return AnalysisResponse(
        symbol=analysis.symbol,
        period=analysis.period,
        generated_at=analysis.generated_at,
        indicators=[_indicator_to_response(i, include_details) for i in analysis.indicators],
        calculations=SummaryResponse(
            sma20=calc.sma20,
            sma50=calc.sma50,
            ema12=calc.ema12,
            ema26=calc.ema26,
            rsi=calc.rsi,
            macd=calc.macd,
            macd_signal=calc.macd_signal,
            bollinger=BollingerResponse(
                upper=calc.bollinger.upper,
                middle=calc.bollinger.middle,
                lower=calc.bollinger.lower,
            ),
        ),
        buy_signals=signals.count("buy"),
        sell_signals=signals.count("sell"),
        hold_signals=signals.count("hold"),
    )


def to_dict(analysis: StockAnalysis, include_details: bool = True) -> dict[str, Any]:
    """Convert StockAnalysis to JSON-serializable dict."""
    return analysis_to_response(analysis, include_details).model_dump(mode="json")


def to_json(analysis: StockAnalysis, include_details: bool = True, indent: int = 2) -> str:
    """Render StockAnalysis as a JSON string."""
    return json.dumps(to_dict(analysis, include_details), indent=indent, ensure_ascii=False)
