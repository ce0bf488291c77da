"""
Analysis pipeline: fetch -> calculate.

Resolves a price source, fetches the history for one symbol and runs
every indicator over it. Data-layer and empty-series errors propagate
to the caller.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from adapters import MockAdapter, YahooAdapter
from config import StocklensConfig, get_config
from domain import PriceHistory, StockAnalysis, analyze_history
from ports import PriceSource

logger = logging.getLogger(__name__)


@dataclass
class AnalysisStatus:
    """Timing and outcome of the last pipeline run."""
    source: str | None = None
    bars: int = 0
    last_close: float | None = None
    started_at: datetime = field(default_factory=datetime.now)
    completed_at: datetime | None = None

    @property
    def duration(self) -> float | None:
        if self.completed_at is None:
            return None
        return (self.completed_at - self.started_at).total_seconds()


class AnalysisPipeline:
    """
    Main orchestration pipeline.

    Coordinates fetching and indicator calculation for one symbol.
    """

    def __init__(
        self,
        config: StocklensConfig | None = None,
        dry_run: bool = False,
        source: PriceSource | None = None,
    ):
        self.config = config or get_config()
        self.dry_run = dry_run
        self._source = source
        self.status = AnalysisStatus()

    @property
    def source(self) -> PriceSource:
        """Price source, created on first use."""
        if self._source is None:
            if self.dry_run:
                self._source = MockAdapter(self.config)
            else:
                self._source = YahooAdapter(self.config)
        return self._source

    def fetch(
        self,
        symbol: str,
        period: str,
        start: str | None = None,
        end: str | None = None,
    ) -> PriceHistory:
        logger.info(f"Fetching {symbol} ({period}) from {self.source.source_name}")
        history = self.source.get_history(symbol, period, start=start, end=end)
        self.status.source = self.source.source_name
        self.status.bars = len(history)
        self.status.last_close = history.latest_close
        logger.debug(f"{history.symbol}: {len(history)} bars, last close {history.latest_close}")
        return history

    def run(
        self,
        symbol: str,
        period: str | None = None,
        start: str | None = None,
        end: str | None = None,
    ) -> StockAnalysis:
        """
        Execute fetch and analysis.

        Raises:
            AdapterError: If the price history cannot be fetched
            ValueError: If the history holds no prices
        """
        self.status = AnalysisStatus()
        period = (period or self.config.data.default_period).upper()

        history = self.fetch(symbol, period, start=start, end=end)
        analysis = analyze_history(history, period)

        self.status.completed_at = datetime.now()
        logger.info(
            f"Analysis of {analysis.symbol} complete: "
            f"{len(analysis.indicators)} indicators in {self.status.duration:.3f}s"
        )
        return analysis


def run_analysis(
    symbol: str,
    period: str | None = None,
    dry_run: bool = False,
    config: StocklensConfig | None = None,
) -> StockAnalysis:
    """
    Convenience function to analyze one symbol.

    Args:
        symbol: Ticker to analyze
        period: Period label (default: configured default period)
        dry_run: Use generated data instead of live prices
        config: Configuration (default: loaded configuration)

    Returns:
        StockAnalysis ready for presentation
    """
    return AnalysisPipeline(config, dry_run=dry_run).run(symbol, period)
