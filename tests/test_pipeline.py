"""
Tests for the analysis pipeline.
"""

import pytest

from adapters import MockAdapter, YahooAdapter
from config import StocklensConfig
from domain import PriceHistory
from orchestration.analysis import AnalysisPipeline, run_analysis
from ports import DataError


class EmptySource:
    """Price source that always returns an empty history."""

    source_name = "empty"

    def get_history(self, symbol, period="1M", start=None, end=None):
        return PriceHistory(symbol=symbol)


class FailingSource:
    source_name = "failing"

    def get_history(self, symbol, period="1M", start=None, end=None):
        raise DataError.empty(self.source_name)


@pytest.fixture
def config() -> StocklensConfig:
    return StocklensConfig()


class TestAnalysisPipeline:
    """Fetch and calculate."""

    def test_source_selection(self, config):
        assert isinstance(AnalysisPipeline(config, dry_run=True).source, MockAdapter)
        assert isinstance(AnalysisPipeline(config).source, YahooAdapter)

    def test_dry_run_uses_default_period(self, config):
        pipeline = AnalysisPipeline(config, dry_run=True)
        analysis = pipeline.run("aapl")

        assert analysis.symbol == "AAPL"
        assert analysis.period == "3M"
        assert pipeline.status.source == "mock"
        assert pipeline.status.bars == 90
        assert pipeline.status.duration is not None
        assert pipeline.status.last_close == pipeline.source.get_history("AAPL", "3M").closes[-1]
        assert len(analysis.indicators) == 8

    def test_explicit_period(self, config):
        analysis = AnalysisPipeline(config, dry_run=True).run("MSFT", "1w")
        assert analysis.period == "1W"
        # 7 bars: SMA20 falls back to 0
        assert analysis.calculations.sma20 == 0

    def test_empty_history_raises(self, config):
        pipeline = AnalysisPipeline(config, source=EmptySource())
        with pytest.raises(ValueError, match="No price data available"):
            pipeline.run("AAPL", "1M")

    def test_adapter_error_propagates(self, config):
        pipeline = AnalysisPipeline(config, source=FailingSource())
        with pytest.raises(DataError):
            pipeline.run("AAPL", "1M")

    def test_run_analysis(self, config):
        analysis = run_analysis("FPT", "1M", dry_run=True, config=config)
        assert analysis.symbol == "FPT"
        assert analysis.indicators[0].name == "SMA20"
