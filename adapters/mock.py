"""
Mock price adapter for offline runs.

Generates a seeded random walk with consistent OHLC bars.
No network access.
"""

import random
from datetime import date, timedelta

from domain import PriceHistory

from .base import BaseAdapter

# Bars generated per period label; anything else gets a year
POINTS_BY_PERIOD = {"1W": 7, "1M": 30, "3M": 90}
DEFAULT_POINTS = 365

MAX_DAILY_MOVE = 0.05  # +/- 2.5% around the previous close
MAX_WICK = 0.03


def generate_mock_history(
    symbol: str,
    period: str = "1M",
    seed: int | None = None,
    today: date | None = None,
) -> PriceHistory:
    """
    Generate a random-walk price history.

    Args:
        symbol: Symbol to label the history with
        period: Period label, sets the number of bars
        seed: Random seed; the same seed gives the same history
        today: Date of the last bar (default: today)

    Returns:
        PriceHistory where every bar satisfies low <= open, close <= high
    """
    rng = random.Random(seed)
    today = today or date.today()
    points = POINTS_BY_PERIOD.get(period.upper(), DEFAULT_POINTS)

    history = PriceHistory(symbol=symbol.upper())
    current = rng.random() * 100 + 50

    for i in range(points):
        history.dates.append((today - timedelta(days=points - i)).isoformat())

        change = (rng.random() - 0.5) * current * MAX_DAILY_MOVE
        current = max(current + change, 1)

        open_ = history.closes[-1] if history.closes else current
        close = current

        # Wicks extend beyond the body, low never below a cent
        high = max(open_, close) + rng.random() * max(open_, close) * MAX_WICK
        low = max(min(open_, close) - rng.random() * min(open_, close) * MAX_WICK, 0.01)

        history.opens.append(round(open_, 2))
        history.highs.append(round(high, 2))
        history.lows.append(round(low, 2))
        history.closes.append(round(close, 2))
        history.volumes.append(float(rng.randint(1_000_000, 10_999_999)))

    return history


class MockAdapter(BaseAdapter):
    """Price source returning generated data, for dry runs and demos."""

    def __init__(self, config=None, seed: int | None = 42):
        super().__init__(config)
        self._seed = seed

    @property
    def source_name(self) -> str:
        return "mock"

    def _fetch_history(
        self,
        symbol: str,
        period: str,
        start: str | None,
        end: str | None,
    ) -> PriceHistory:
        return generate_mock_history(symbol, period, seed=self._seed)
