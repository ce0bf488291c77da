from .report import (
    ReportOptions,
    generate_markdown_report,
    write_report,
)
from .json_api import (
    AnalysisResponse,
    IndicatorResponse,
    CalculationDetailResponse,
    SummaryResponse,
    analysis_to_response,
    to_dict,
    to_json,
)

__all__ = [
    # Report generation
    "ReportOptions",
    "generate_markdown_report",
    "write_report",
    # JSON API
    "AnalysisResponse",
    "IndicatorResponse",
    "CalculationDetailResponse",
    "SummaryResponse",
    "analysis_to_response",
    "to_dict",
    "to_json",
]
