"""Base types for technical indicators."""

from dataclasses import dataclass, field

# Oldest first; index -1 is the current observation.
PriceSeries = list[float]


@dataclass(frozen=True)
class OHLCSeries:
    """Aligned per-bar highs, lows and closes.

    Attributes:
        highs: List of high prices
        lows: List of low prices
        closes: List of closing prices

    Notes:
        high >= close >= low is assumed, never validated.

    Example:
        >>> data = OHLCSeries(
        ...     highs=[102.0, 103.0, 104.0],
        ...     lows=[99.0, 100.0, 101.0],
        ...     closes=[101.0, 102.0, 103.0],
        ... )
    """
    highs: list[float]
    lows: list[float]
    closes: list[float]

    def is_aligned(self) -> bool:
        return len(self.highs) == len(self.lows) == len(self.closes)


@dataclass
class PriceHistory:
    """Price history for one symbol as delivered by a data source.

    Attributes:
        symbol: Provider-formatted symbol (e.g. FPT.VN)
        dates: ISO dates (YYYY-MM-DD), oldest first
        opens: List of opening prices
        highs: List of high prices
        lows: List of low prices
        closes: List of closing prices
        volumes: List of volume data
    """
    symbol: str
    dates: list[str] = field(default_factory=list)
    opens: list[float] = field(default_factory=list)
    highs: list[float] = field(default_factory=list)
    lows: list[float] = field(default_factory=list)
    closes: list[float] = field(default_factory=list)
    volumes: list[float] = field(default_factory=list)

    @property
    def prices(self) -> PriceSeries:
        """Closing prices, the input to most calculators."""
        return self.closes

    @property
    def latest_close(self) -> float | None:
        return self.closes[-1] if self.closes else None

    def has_ohlc(self) -> bool:
        """True when highs and lows line up with closes."""
        return bool(self.closes) and self.ohlc().is_aligned()

    def ohlc(self) -> OHLCSeries:
        return OHLCSeries(highs=self.highs, lows=self.lows, closes=self.closes)

    def __len__(self) -> int:
        return len(self.closes)


def require_period(period: int) -> None:
    """Reject non-positive look-back periods."""
    if period <= 0:
        raise ValueError(f"period must be positive, got {period}")


def fmt(value: float, decimals: int = 2) -> str:
    """Format a number for derivation steps."""
    return f"{value:,.{decimals}f}"
