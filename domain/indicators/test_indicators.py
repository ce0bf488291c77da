"""Tests for technical indicators library."""

import math

import pytest
from domain.indicators import (
    bollinger_bands,
    bollinger_bands_with_details,
    ema,
    ema_with_details,
    macd,
    macd_with_details,
    rsi,
    rsi_with_details,
    sma,
    sma_with_details,
    stochastic,
    stochastic_with_details,
    williams_r,
    williams_r_with_details,
)

RISING_HIGHS = [50, 51, 52, 53, 54, 55, 56, 57, 58, 59, 60, 61, 62, 63, 64]
RISING_LOWS = [48, 49, 50, 51, 52, 53, 54, 55, 56, 57, 58, 59, 60, 61, 62]
RISING_CLOSES = [49, 50, 51, 52, 53, 54, 55, 56, 57, 58, 59, 60, 61, 62, 63]


class TestMovingAverages:
    """Test moving average indicators."""

    def test_sma_basic(self):
        prices = [10, 11, 12, 13, 14, 15]
        assert sma(prices, 3) == 14.0

    def test_sma_reference_values(self):
        assert sma([10, 20, 30], 3) == 20
        assert sma([1, 2], 5) == 0
        assert ema([5], 10) == 5
        assert ema([], 10) == 0

    def test_deterministic(self):
        prices = [44, 44.34, 44.09, 43.61, 44.33, 44.83, 45.10, 45.42, 45.84, 46.08]
        assert ema(prices, 3) == ema(list(prices), 3)
        assert ema_with_details(prices, 3) == ema_with_details(prices, 3)

    def test_sma_uses_trailing_window(self):
        prices = [1000, 10, 20, 30]
        assert sma(prices, 3) == 20.0

    def test_sma_insufficient_data(self):
        assert sma([10, 11], 3) == 0

    def test_sma_rejects_non_positive_period(self):
        with pytest.raises(ValueError):
            sma([10, 11, 12], 0)

    def test_ema_basic(self):
        # k = 0.5: 10 -> 10.5 -> 11.25
        assert ema([10, 11, 12], 3) == pytest.approx(11.25)

    def test_ema_empty_and_single(self):
        assert ema([], 12) == 0
        assert ema([42.0], 12) == 42.0

    def test_ema_seeded_with_first_price(self):
        """Every price contributes, not only the last period values."""
        assert ema([100, 10, 10, 10], 2) != ema([10, 10, 10, 10], 2)

    def test_ema_rejects_negative_period(self):
        with pytest.raises(ValueError):
            ema([1, 2, 3], -1)

    def test_sma_with_details(self):
        detail = sma_with_details([10, 11, 12, 13, 14, 15], 3)
        assert detail.result == 14.0
        assert detail.variables["Sum"] == 42
        assert detail.variables["P1"] == 13
        assert detail.sufficient_data
        assert "resistance" in detail.interpretation

    def test_sma_with_details_price_below_average(self):
        detail = sma_with_details([15, 14, 10], 3)
        assert "support" in detail.interpretation

    def test_sma_with_details_insufficient(self):
        detail = sma_with_details([10, 11], 20)
        assert detail.result == 0
        assert not detail.sufficient_data

    def test_ema_with_details_logs_first_iterations(self):
        detail = ema_with_details(list(range(1, 21)), 12)
        assert detail.result == pytest.approx(ema(list(range(1, 21)), 12))
        assert any(step.startswith("... 14 more iterations") for step in detail.steps)
        assert "bullish" in detail.interpretation


class TestOscillators:
    """Test RSI and MACD."""

    def test_rsi_all_gains(self):
        assert rsi(list(range(1, 20))) == 100

    def test_rsi_all_losses(self):
        assert rsi(list(range(20, 0, -1))) == pytest.approx(0)

    def test_rsi_balanced(self):
        prices = [10, 11] * 8
        assert rsi(prices) == pytest.approx(50)

    def test_rsi_insufficient_data(self):
        assert rsi([100]) == 50
        assert rsi(list(range(14))) == 50

    def test_rsi_reads_oldest_window(self):
        """Only the first period + 1 prices are used."""
        prices = list(range(1, 16)) + [0] * 10
        assert rsi(prices) == 100

    def test_rsi_range(self):
        prices = [44, 44.34, 44.09, 43.61, 44.33, 44.83, 45.10, 45.42,
                  45.84, 46.08, 45.89, 46.03, 45.61, 46.28, 46.28, 46.00]
        value = rsi(prices)
        assert 0 <= value <= 100

    def test_rsi_with_details_infinite_rs(self):
        detail = rsi_with_details(list(range(1, 20)))
        assert detail.result == 100
        assert detail.variables["RS"] == "infinite"
        assert "overbought" in detail.interpretation

    def test_rsi_with_details_insufficient(self):
        detail = rsi_with_details([1, 2, 3])
        assert detail.result == 50
        assert not detail.sufficient_data

    def test_macd_flat_prices(self):
        result = macd([100.0] * 40)
        assert result.macd == pytest.approx(0)
        assert result.signal == pytest.approx(0)

    def test_macd_uptrend(self):
        result = macd(list(range(10, 50)))
        assert result.macd > 0
        assert result.signal == pytest.approx(result.macd * 0.9)

    def test_macd_with_details(self):
        prices = list(range(50, 10, -1))
        detail = macd_with_details(prices)
        assert detail.result == pytest.approx(macd(prices).macd)
        assert detail.variables["Histogram"] == pytest.approx(detail.result * 0.1)
        assert "downtrend" in detail.interpretation


class TestBollingerBands:
    """Test Bollinger Bands."""

    def test_bollinger_population_std(self):
        prices = list(range(1, 21))
        bands = bollinger_bands(prices)
        std = math.sqrt(399 / 12)  # population variance of 1..20
        assert bands.middle == pytest.approx(10.5)
        assert bands.upper == pytest.approx(10.5 + 2 * std)
        assert bands.lower == pytest.approx(10.5 - 2 * std)

    def test_bollinger_flat(self):
        bands = bollinger_bands([100] * 25)
        assert bands.upper == bands.middle == bands.lower == 100

    def test_bollinger_insufficient_data(self):
        bands = bollinger_bands([1, 2, 3])
        assert bands.upper == bands.middle == bands.lower == 0

    def test_bollinger_with_details(self):
        prices = list(range(1, 21))
        detail = bollinger_bands_with_details(prices)
        assert detail.result == pytest.approx(bollinger_bands(prices).upper)
        assert "upper band" in detail.interpretation
        assert detail.variables["Band Width (%)"] > 20
        assert "high volatility" in detail.interpretation

    def test_bollinger_with_details_above_upper(self):
        prices = [100] * 19 + [200]
        detail = bollinger_bands_with_details(prices)
        assert "overbought" in detail.interpretation


class TestStochastic:
    """Test Stochastic Oscillator and Williams %R."""

    def test_stochastic_basic(self):
        k, d = stochastic(RISING_HIGHS, RISING_LOWS, RISING_CLOSES, 14)
        # Trailing 14 bars: highest high 64, lowest low 49
        assert k == pytest.approx(14 / 15 * 100)
        assert d == pytest.approx(84.0)

    def test_stochastic_flat_range(self):
        k, d = stochastic([10] * 14, [10] * 14, [10] * 14, 14)
        assert k == 50
        assert d == pytest.approx(45)

    def test_stochastic_insufficient_data(self):
        assert stochastic([2, 3], [1, 2], [1.5, 2.5], 14) == (50, 50)

    def test_stochastic_with_details(self):
        detail = stochastic_with_details(RISING_HIGHS, RISING_LOWS, RISING_CLOSES, 14)
        assert detail.result == pytest.approx(14 / 15 * 100)
        assert detail.variables["Highest High"] == 64
        assert detail.variables["Lowest Low"] == 49
        assert "overbought" in detail.interpretation

    def test_williams_r_basic(self):
        assert williams_r(RISING_HIGHS, RISING_LOWS, RISING_CLOSES, 14) == pytest.approx(-100 / 15)

    def test_williams_r_flat_and_insufficient(self):
        assert williams_r([10] * 14, [10] * 14, [10] * 14, 14) == -50
        assert williams_r([2], [1], [1.5], 14) == -50

    def test_williams_r_with_details(self):
        detail = williams_r_with_details(RISING_HIGHS, RISING_LOWS, RISING_CLOSES, 14)
        assert detail.result == pytest.approx(-100 / 15)
        assert "overbought" in detail.interpretation

    def test_rejects_zero_period(self):
        with pytest.raises(ValueError):
            williams_r(RISING_HIGHS, RISING_LOWS, RISING_CLOSES, 0)
