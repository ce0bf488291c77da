"""
Tests for the full indicator bundle and the per-symbol analysis.

Uses the built-in FPT.VN sample: 30 closes drifting from 95,000 down
to about 89,600.
"""

import pytest

from adapters.sample_data import FPT_CLOSES, fpt_sample_history
from domain import (
    PriceHistory,
    Signal,
    analyze_history,
    calculate_all_indicators,
    compute_indicator_bundle,
)
from domain.indicators import derive_lower_band_detail, bollinger_bands_with_details

STANDARD_ORDER = ["SMA20", "SMA50", "RSI", "MACD", "Bollinger Upper", "Bollinger Lower"]


@pytest.fixture
def fpt_prices() -> list[float]:
    return [float(c) for c in FPT_CLOSES]


class TestCalculateAllIndicators:
    """Tests for calculate_all_indicators."""

    def test_fixed_order(self, fpt_prices):
        bundle = calculate_all_indicators(fpt_prices)
        assert [i.name for i in bundle.indicators] == STANDARD_ORDER

    def test_texts_present(self, fpt_prices):
        bundle = calculate_all_indicators(fpt_prices)
        for indicator in bundle.indicators:
            assert indicator.description
            assert indicator.recommendation
            assert indicator.calculation is not None
            assert indicator.formula == indicator.calculation.formula

    def test_fpt_values(self, fpt_prices):
        bundle = calculate_all_indicators(fpt_prices)
        summary = bundle.summary

        assert summary.sma20 == pytest.approx(89690)
        assert summary.sma50 == 0
        # First 15 closes: gains 1,600, losses 7,000
        assert summary.rsi == pytest.approx(100 - 100 / (1 + 1600 / 7000))
        assert summary.macd < 0
        assert summary.macd_signal == pytest.approx(summary.macd * 0.9)
        assert summary.bollinger.lower < summary.bollinger.middle < summary.bollinger.upper

    def test_fpt_signals(self, fpt_prices):
        bundle = calculate_all_indicators(fpt_prices)

        assert bundle.get("SMA20").signal == Signal.SELL
        # SMA50 falls back to 0, which the latest price is always above
        assert bundle.get("SMA50").signal == Signal.BUY
        assert bundle.get("RSI").signal == Signal.BUY
        assert bundle.get("MACD").signal == Signal.SELL
        assert bundle.get("Bollinger Upper").signal == Signal.HOLD
        assert bundle.get("Bollinger Lower").signal == Signal.HOLD

    def test_bollinger_records(self, fpt_prices):
        bundle = calculate_all_indicators(fpt_prices)
        upper = bundle.get("Bollinger Upper")
        lower = bundle.get("Bollinger Lower")

        assert upper.value == bundle.summary.bollinger.upper
        assert lower.value == bundle.summary.bollinger.lower
        assert upper.recommendation == f"Upper resistance at {upper.value:.2f}"
        assert lower.recommendation == f"Lower support at {lower.value:.2f}"

        assert upper.calculation.result == upper.value
        assert lower.calculation.result == lower.value
        assert lower.calculation.steps == upper.calculation.steps
        assert "lower band" in lower.calculation.interpretation

    def test_lower_band_reading_omits_upper_value(self, fpt_prices):
        bundle = calculate_all_indicators(fpt_prices)
        upper = bundle.get("Bollinger Upper")
        lower = bundle.get("Bollinger Lower")

        # FPT closes at 89,600, inside the bands
        assert lower.value < fpt_prices[-1] < upper.value
        assert "lower band not reached" in lower.calculation.interpretation
        assert f"{upper.value:,.2f}" not in lower.calculation.interpretation
        assert f"{upper.value:,.2f}" not in upper.calculation.interpretation

    def test_empty_prices_raise(self):
        with pytest.raises(ValueError, match="No price data available"):
            calculate_all_indicators([])

    def test_single_price(self):
        bundle = calculate_all_indicators([100.0])
        summary = bundle.summary

        assert summary.sma20 == 0
        assert summary.sma50 == 0
        assert summary.rsi == 50
        assert summary.ema12 == 100.0
        assert summary.macd == 0
        assert len(bundle.indicators) == 6
        assert not bundle.get("RSI").calculation.sufficient_data

    def test_alias(self, fpt_prices):
        assert compute_indicator_bundle is calculate_all_indicators

    def test_get_unknown(self, fpt_prices):
        assert calculate_all_indicators(fpt_prices).get("VWAP") is None


class TestLowerBandDerivation:
    """Tests for derive_lower_band_detail."""

    def test_only_first_occurrence_renamed(self):
        upper = bollinger_bands_with_details(list(range(1, 21)))
        text = upper.interpretation + "; upper band again"
        upper = upper.model_copy(update={"interpretation": text})

        lower = derive_lower_band_detail(upper, 1.5)
        assert lower.interpretation.count("lower band") == 1
        assert lower.interpretation.endswith("upper band again")

    def test_upper_record_unchanged(self):
        upper = bollinger_bands_with_details(list(range(1, 21)))
        original = upper.interpretation
        derive_lower_band_detail(upper, -1.0)
        assert upper.interpretation == original


class TestAnalyzeHistory:
    """Tests for analyze_history."""

    def test_ohlc_adds_oscillators(self):
        analysis = analyze_history(fpt_sample_history(), period="1M")
        names = [i.name for i in analysis.indicators]

        assert names == STANDARD_ORDER + ["Stochastic %K", "Williams %R"]
        assert analysis.symbol == "FPT.VN"
        assert analysis.period == "1M"

    def test_close_only_history(self):
        history = PriceHistory(symbol="TEST", closes=[10.0, 11.0, 12.0])
        analysis = analyze_history(history)
        assert [i.name for i in analysis.indicators] == STANDARD_ORDER

    def test_oscillator_values(self):
        analysis = analyze_history(fpt_sample_history())
        stoch = analysis.indicators[6]
        wpr = analysis.indicators[7]

        # Last 14 bars: high 90,800, low 88,800, close 89,600
        assert stoch.value == pytest.approx((89600 - 88800) / 2000 * 100)
        assert wpr.value == pytest.approx((90800 - 89600) / 2000 * -100)
        assert stoch.signal == Signal.HOLD
        assert wpr.signal == Signal.HOLD

    def test_empty_history_raises(self):
        with pytest.raises(ValueError):
            analyze_history(PriceHistory(symbol="EMPTY"))

    def test_misaligned_ohlc_skips_oscillators(self):
        history = PriceHistory(
            symbol="TEST",
            highs=[11.0, 12.0],
            lows=[9.0, 10.0],
            closes=[10.0, 11.0, 12.0],
        )
        assert not history.ohlc().is_aligned()
        assert not history.has_ohlc()
        assert [i.name for i in analyze_history(history).indicators] == STANDARD_ORDER


class TestPriceHistory:
    """Tests for PriceHistory accessors."""

    def test_latest_close(self):
        assert fpt_sample_history().latest_close == 89600
        assert PriceHistory(symbol="EMPTY").latest_close is None

    def test_prices_are_closes(self):
        history = fpt_sample_history()
        assert history.prices is history.closes
        assert len(history) == 30
