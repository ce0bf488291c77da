"""
Markdown report generator.

Transforms a StockAnalysis into a formatted markdown report.
Pure formatting logic - no I/O except final file writing.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import TextIO
import sys

from domain import IndicatorCalculationDetail, Signal, StockAnalysis, TechnicalIndicator
from domain.indicators import get_detailed_explanation


@dataclass
class ReportOptions:
    """What to include beyond the indicator table."""
    include_details: bool = False
    include_explanations: bool = False
    decimals: int = 2


# ============================================================================
# Formatting helpers
# ============================================================================

def _format_datetime(dt: datetime) -> str:
    """Format datetime with time."""
    return dt.strftime("%Y-%m-%d %H:%M")


def _format_number(value: float | str, decimals: int = 2) -> str:
    if isinstance(value, str):
        return value
    return f"{value:,.{decimals}f}"


def _signal_badge(signal: Signal) -> str:
    """Text badge for a signal."""
    return {
        Signal.BUY: "BUY ▲",
        Signal.SELL: "SELL ▼",
        Signal.HOLD: "HOLD ►",
    }.get(signal, signal.value.upper())


# ============================================================================
# Section Generators
# ============================================================================

def generate_header(analysis: StockAnalysis) -> str:
    """Generate report header."""
    lines = [
        f"# Technical Analysis: {analysis.symbol} ({analysis.period})",
        "",
        f"*Generated: {_format_datetime(analysis.generated_at)}*",
        "",
        "---",
        "",
    ]
    return "\n".join(lines)


def generate_indicator_table(analysis: StockAnalysis, options: ReportOptions) -> str:
    """Generate the indicator summary table."""
    lines = [
        "## Indicators",
        "",
        "| Indicator | Value | Signal | Recommendation |",
        "|-----------|-------|--------|----------------|",
    ]
    for ind in analysis.indicators:
        lines.append(
            f"| {ind.name} | {_format_number(ind.value, options.decimals)} "
            f"| {_signal_badge(ind.signal)} | {ind.recommendation} |"
        )
    lines.append("")
    return "\n".join(lines)


def generate_overlay_section(analysis: StockAnalysis, options: ReportOptions) -> str:
    """Generate the raw values used by chart overlays."""
    calc = analysis.calculations
    d = options.decimals
    lines = [
        "## Chart Overlays",
        "",
        f"- **SMA20 / SMA50:** {_format_number(calc.sma20, d)} / {_format_number(calc.sma50, d)}",
        f"- **EMA12 / EMA26:** {_format_number(calc.ema12, d)} / {_format_number(calc.ema26, d)}",
        f"- **RSI:** {_format_number(calc.rsi, d)}",
        f"- **MACD / Signal:** {_format_number(calc.macd, 4)} / {_format_number(calc.macd_signal, 4)}",
        (
            f"- **Bollinger:** {_format_number(calc.bollinger.lower, d)} | "
            f"{_format_number(calc.bollinger.middle, d)} | "
            f"{_format_number(calc.bollinger.upper, d)}"
        ),
        "",
    ]
    return "\n".join(lines)


def _detail_lines(detail: IndicatorCalculationDetail, decimals: int) -> list[str]:
    lines = [f"**Formula:** `{detail.formula}`", ""]

    if detail.variables:
        lines.append("| Variable | Value |")
        lines.append("|----------|-------|")
        for name, value in detail.variables.items():
            lines.append(f"| {name} | {_format_number(value, decimals)} |")
        lines.append("")

    if detail.steps:
        lines.append("**Steps:**")
        lines.append("")
        for i, step in enumerate(detail.steps, start=1):
            lines.append(f"{i}. {step}")
        lines.append("")

    lines.append(f"**Result:** {_format_number(detail.result, decimals)}")
    if not detail.sufficient_data:
        lines.append("")
        lines.append("*Not enough price history; a neutral fallback value is shown.*")
    lines.append("")
    lines.append(f"> {detail.interpretation}")
    lines.append("")
    return lines


def generate_indicator_section(ind: TechnicalIndicator, options: ReportOptions) -> str:
    """Generate the detail block for one indicator."""
    lines = [
        f"### {ind.name} - {_signal_badge(ind.signal)}",
        "",
        f"*{ind.description}*",
        "",
    ]

    if options.include_details and ind.calculation:
        lines.extend(_detail_lines(ind.calculation, options.decimals))

    if options.include_explanations:
        lines.append(get_detailed_explanation(ind.name))
        lines.append("")

    return "\n".join(lines)


def generate_footer(analysis: StockAnalysis) -> str:
    """Generate report footer."""
    lines = [
        "---",
        "",
        "*This report is for informational purposes only and does not constitute investment advice.*",
        "",
    ]
    return "\n".join(lines)


# ============================================================================
# Main Report Generation
# ============================================================================

def generate_markdown_report(
    analysis: StockAnalysis,
    options: ReportOptions | None = None,
) -> str:
    """
    Generate full markdown report.

    Args:
        analysis: Computed indicators for one symbol
        options: Optional sections (default: table and overlays only)

    Returns:
        Formatted markdown string
    """
    options = options or ReportOptions()

    parts = [
        generate_header(analysis),
        generate_indicator_table(analysis, options),
        generate_overlay_section(analysis, options),
    ]

    if options.include_details or options.include_explanations:
        parts.append("## Details\n")
        parts.extend(generate_indicator_section(ind, options) for ind in analysis.indicators)

    parts.append(generate_footer(analysis))
    return "\n".join(parts)


def write_report(
    content: str,
    output: TextIO | None = None,
    filepath: str | None = None,
) -> str:
    """
    Write rendered report content.

    Args:
        content: Rendered report
        output: File-like object to write to (default: stdout)
        filepath: Optional file path to write to

    Returns:
        The content written
    """
    if filepath:
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(content)
    elif output:
        output.write(content)
    else:
        sys.stdout.write(content)

    return content
