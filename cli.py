"""
StockLens CLI - technical indicator analysis from the command line.

Usage:
    python cli.py analyze SYMBOL [--period PERIOD] [--format FORMAT] [--details]
    python cli.py demo [--format FORMAT] [--details]
    python cli.py explain INDICATOR
"""

import argparse
import logging
import sys
from pathlib import Path

from adapters import fpt_sample_history
from config import ConfigError, PERIODS, StocklensConfig, load_config
from domain import StockAnalysis, analyze_history
from domain.indicators import get_detailed_explanation
from orchestration.analysis import AnalysisPipeline
from ports import AdapterError
from presentation.json_api import to_json
from presentation.report import ReportOptions, generate_markdown_report, write_report

logger = logging.getLogger(__name__)


def _configure_logging(config: StocklensConfig, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.logging.level)
    logging.basicConfig(level=level, format=config.logging.format)


def _render(analysis: StockAnalysis, args: argparse.Namespace, config: StocklensConfig) -> str:
    """Render an analysis in the requested format."""
    output_format = args.format or config.output.format
    include_details = args.details or config.output.include_details

    if output_format == "json":
        return to_json(analysis, include_details=include_details) + "\n"

    options = ReportOptions(
        include_details=include_details,
        include_explanations=args.explain or config.output.include_explanations,
        decimals=config.output.decimals,
    )
    return generate_markdown_report(analysis, options)


def _emit(content: str, args: argparse.Namespace) -> None:
    if args.output:
        write_report(content, filepath=args.output)
        print(f"Report written to {args.output}", file=sys.stderr)
    else:
        write_report(content)


def cmd_analyze(args: argparse.Namespace, config: StocklensConfig) -> int:
    """Fetch prices for a symbol and show its indicators."""
    if args.period == "CUSTOM" and not (args.start and args.end):
        print("Error: --period CUSTOM requires --start and --end", file=sys.stderr)
        return 1

    pipeline = AnalysisPipeline(config, dry_run=args.dry_run)

    try:
        analysis = pipeline.run(args.symbol, args.period, start=args.start, end=args.end)
    except AdapterError as e:
        logger.debug(f"Fetch failed: {e.to_dict()}")
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    _emit(_render(analysis, args, config), args)
    return 0


def cmd_demo(args: argparse.Namespace, config: StocklensConfig) -> int:
    """Analyze the built-in FPT.VN sample (offline)."""
    analysis = analyze_history(fpt_sample_history(), period="1M")
    _emit(_render(analysis, args, config), args)
    return 0


def cmd_explain(args: argparse.Namespace, config: StocklensConfig) -> int:
    """Show the long-form explanation for an indicator."""
    print(get_detailed_explanation(args.indicator))
    return 0


def _add_output_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-f", "--format",
        choices=["markdown", "json"],
        default=None,
        help="Output format (default: from config)",
    )
    parser.add_argument("-o", "--output", help="Output file path")
    parser.add_argument("--details", action="store_true", help="Show formulas and calculation steps")
    parser.add_argument("--explain", action="store_true", help="Include long-form explanations")


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="stocklens",
        description="Technical indicator analysis for stocks",
    )
    parser.add_argument("-c", "--config", type=Path, help="Path to a TOML config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Analyze command
    analyze_parser = subparsers.add_parser("analyze", help="Analyze a symbol")
    analyze_parser.add_argument("symbol", help="Ticker symbol, e.g. AAPL or FPT")
    analyze_parser.add_argument(
        "-p", "--period",
        type=str.upper,
        choices=PERIODS,
        default=None,
        help="History period (default: from config)",
    )
    analyze_parser.add_argument("--start", help="Start date for CUSTOM period (YYYY-MM-DD)")
    analyze_parser.add_argument("--end", help="End date for CUSTOM period (YYYY-MM-DD)")
    analyze_parser.add_argument("--dry-run", action="store_true", help="Use generated prices")
    _add_output_arguments(analyze_parser)
    analyze_parser.set_defaults(func=cmd_analyze)

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Analyze the built-in FPT.VN sample")
    _add_output_arguments(demo_parser)
    demo_parser.set_defaults(func=cmd_demo)

    # Explain command
    explain_parser = subparsers.add_parser("explain", help="Explain an indicator")
    explain_parser.add_argument("indicator", help="Indicator name, e.g. RSI or 'Bollinger Upper'")
    explain_parser.set_defaults(func=cmd_explain)

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    _configure_logging(config, args.verbose)
    return args.func(args, config)


if __name__ == "__main__":
    sys.exit(main())
