"""
Built-in FPT.VN sample used by the demo command.

Thirty daily bars around 89,600 VND, drifting down from 95,000.
"""

from datetime import date, timedelta

from domain import PriceHistory

FPT_SYMBOL = "FPT.VN"

FPT_CLOSES = [
    95000, 94200, 93800, 92500, 91200, 90800, 89900, 89200, 88800, 89100,
    89600, 90200, 89800, 89400, 89600, 90100, 89700, 89300, 89600, 89400,
    89200, 89800, 90200, 89900, 89600, 89300, 89700, 90000, 89800, 89600,
]

FPT_HIGHS = [
    95500, 94800, 94200, 93000, 91800, 91200, 90400, 89800, 89400, 89600,
    90200, 90800, 90400, 90000, 90200, 90700, 90300, 89900, 90200, 90000,
    89800, 90400, 90800, 90500, 90200, 89900, 90300, 90600, 90400, 90200,
]

FPT_LOWS = [
    94500, 93800, 93400, 92200, 90800, 90400, 89500, 88800, 88400, 88700,
    89200, 89800, 89400, 89000, 89200, 89700, 89300, 88900, 89200, 89000,
    88800, 89400, 89800, 89500, 89200, 88900, 89300, 89600, 89400, 89200,
]


def fpt_sample_history(today: date | None = None) -> PriceHistory:
    """FPT.VN sample as a PriceHistory ending today, 1M volume per bar."""
    today = today or date.today()
    count = len(FPT_CLOSES)
    closes = [float(c) for c in FPT_CLOSES]
    return PriceHistory(
        symbol=FPT_SYMBOL,
        dates=[(today - timedelta(days=count - 1 - i)).isoformat() for i in range(count)],
        opens=[closes[i - 1] if i else closes[0] for i in range(count)],
        highs=[float(h) for h in FPT_HIGHS],
        lows=[float(low) for low in FPT_LOWS],
        closes=closes,
        volumes=[1_000_000.0] * count,
    )
