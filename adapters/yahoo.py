"""
Yahoo Finance adapter.

Free daily/weekly/monthly price history, no API key required.
Tries yfinance first, then the public chart endpoints directly.
"""

import logging
import math
from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, NamedTuple

import yfinance as yf

from domain import PriceHistory
from ports import AdapterError, DataError, FetchError

from .base import BaseAdapter

logger = logging.getLogger(__name__)

# Bare tickers that trade on the Ho Chi Minh exchange
VIETNAMESE_SYMBOLS = {
    "FPT": "FPT.VN",
    "VIC": "VIC.VN",
    "VCB": "VCB.VN",
    "VHM": "VHM.VN",
    "VRE": "VRE.VN",
    "HPG": "HPG.VN",
    "TCB": "TCB.VN",
    "MSN": "MSN.VN",
    "CTG": "CTG.VN",
    "GAS": "GAS.VN",
}


class PeriodParams(NamedTuple):
    """Yahoo range/interval for a period label."""
    range: str
    interval: str
    days: int | None  # None = full history


PERIOD_PARAMS = {
    "1W": PeriodParams("1wk", "1d", 7),
    "1M": PeriodParams("1mo", "1d", 30),
    "3M": PeriodParams("3mo", "1d", 90),
    "6M": PeriodParams("6mo", "1d", 180),
    "1Y": PeriodParams("1y", "1d", 365),
    "2Y": PeriodParams("2y", "1d", 730),
    # Weekly and monthly bars for the longer periods
    "3Y": PeriodParams("3y", "1wk", 1095),
    "5Y": PeriodParams("5y", "1wk", 1825),
    "MAX": PeriodParams("max", "1mo", None),
}

DEFAULT_PERIOD_PARAMS = PeriodParams("1mo", "1d", 30)


def get_period_params(
    period: str,
    start: str | None = None,
    end: str | None = None,
) -> PeriodParams:
    """
    Map a period label to Yahoo range and bar interval.

    CUSTOM picks the interval from the span between start and end
    (ISO dates): up to 30 days daily, up to a year daily, else weekly.
    Unknown labels fall back to one month of daily bars.
    """
    period = period.upper()
    if period != "CUSTOM":
        return PERIOD_PARAMS.get(period, DEFAULT_PERIOD_PARAMS)

    if not (start and end):
        logger.warning("CUSTOM period without start and end dates, fetching one month")
        return DEFAULT_PERIOD_PARAMS

    diff_days = max(abs((date.fromisoformat(end) - date.fromisoformat(start)).days), 1)
    if diff_days <= 30:
        return PeriodParams(f"{diff_days}d", "1d", diff_days)
    if diff_days <= 365:
        return PeriodParams(f"{math.ceil(diff_days / 30)}mo", "1d", diff_days)
    return PeriodParams(f"{math.ceil(diff_days / 365)}y", "1wk", diff_days)


def format_symbol(symbol: str, aliases: dict[str, str] | None = None) -> str:
    """Add the exchange suffix for known local tickers."""
    symbol = symbol.upper().strip()
    if aliases and symbol in aliases:
        return aliases[symbol]
    return VIETNAMESE_SYMBOLS.get(symbol, symbol)


def _clean(value: Any) -> float | None:
    """None for missing or NaN provider values."""
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None
    return number


def _at(column: list[Any], i: int) -> float | None:
    return _clean(column[i]) if i < len(column) else None


def build_history(
    symbol: str,
    dates: list[str],
    opens: list[Any],
    highs: list[Any],
    lows: list[Any],
    closes: list[Any],
    volumes: list[Any],
) -> PriceHistory:
    """
    Normalize raw provider columns into a PriceHistory.

    Bars without a close are dropped. Missing or zero open/high/low fall
    back to the close. Prices are rounded to 2 decimals.
    """
    history = PriceHistory(symbol=symbol)

    for i, day in enumerate(dates):
        close = _at(closes, i)
        if close is None:
            continue

        volume = _at(volumes, i)

        history.dates.append(day)
        history.opens.append(round(_at(opens, i) or close, 2))
        history.highs.append(round(_at(highs, i) or close, 2))
        history.lows.append(round(_at(lows, i) or close, 2))
        history.closes.append(round(close, 2))
        history.volumes.append(volume or 0)

    return history


class YahooAdapter(BaseAdapter):
    """
    Yahoo Finance price history adapter.

    Provider chain: yfinance, then the v8 chart endpoint on query1 and
    query2. The first provider returning bars wins.
    """

    CHART_URLS = [
        "https://query1.finance.yahoo.com/v8/finance/chart",
        "https://query2.finance.yahoo.com/v8/finance/chart",
    ]

    @property
    def source_name(self) -> str:
        return "yahoo"

    def _fetch_history(
        self,
        symbol: str,
        period: str,
        start: str | None,
        end: str | None,
    ) -> PriceHistory:
        formatted = format_symbol(symbol, self._config.data.symbol_aliases)
        params = get_period_params(period, start, end)

        providers: list[tuple[str, Callable[[], PriceHistory]]] = [
            ("yfinance", lambda: self._from_yfinance(formatted, params, start, end)),
        ]
        for url in self.CHART_URLS:
            providers.append(
                (url, lambda u=url: self._from_chart_api(u, formatted, params, start, end))
            )

        last_error: AdapterError | None = None
        for name, fetch in providers:
            try:
                history = fetch()
            except AdapterError as e:
                logger.warning(f"Price provider {name} failed for {formatted}: {e}")
                last_error = e
                continue

            if len(history) == 0:
                logger.warning(f"Price provider {name} returned no bars for {formatted}")
                last_error = DataError.empty(self.source_name, f"No price data found for {formatted}")
                continue

            return history

        raise last_error or FetchError(self.source_name, "All Yahoo Finance providers failed")

    def _from_yfinance(
        self,
        symbol: str,
        params: PeriodParams,
        start: str | None,
        end: str | None,
    ) -> PriceHistory:
        """Fetch bars through yfinance."""
        try:
            ticker = yf.Ticker(symbol)
            if start and end:
                frame = ticker.history(start=start, end=end, interval=params.interval, auto_adjust=False)
            elif params.days is None:
                frame = ticker.history(period="max", interval=params.interval, auto_adjust=False)
            else:
                since = date.today() - timedelta(days=params.days)
                frame = ticker.history(start=since.isoformat(), interval=params.interval, auto_adjust=False)
        except Exception as e:
            raise FetchError(self.source_name, f"yfinance error: {e}", cause=e) from e

        if frame is None or frame.empty:
            return PriceHistory(symbol=symbol)

        return build_history(
            symbol=symbol,
            dates=[ts.strftime("%Y-%m-%d") for ts in frame.index],
            opens=list(frame["Open"]),
            highs=list(frame["High"]),
            lows=list(frame["Low"]),
            closes=list(frame["Close"]),
            volumes=list(frame["Volume"]) if "Volume" in frame else [],
        )

    def _from_chart_api(
        self,
        base_url: str,
        symbol: str,
        params: PeriodParams,
        start: str | None,
        end: str | None,
    ) -> PriceHistory:
        """Fetch bars from a v8 chart endpoint."""
        if start and end:
            period1 = int(datetime.fromisoformat(start).replace(tzinfo=timezone.utc).timestamp())
            period2 = int(datetime.fromisoformat(end).replace(tzinfo=timezone.utc).timestamp())
            url = f"{base_url}/{symbol}?period1={period1}&period2={period2}&interval={params.interval}"
        else:
            url = f"{base_url}/{symbol}?range={params.range}&interval={params.interval}"

        data = self._http_get_json(url, headers={"Cache-Control": "no-cache"})
        return parse_chart_response(data, symbol, self.source_name)


def parse_chart_response(data: dict[str, Any], symbol: str, source: str = "yahoo") -> PriceHistory:
    """
    Convert a v8 chart JSON payload into a PriceHistory.

    Raises:
        DataError: If the payload has no result or no quote block
    """
    results = (data.get("chart") or {}).get("result") or []
    if not results:
        raise DataError.empty(source, f"No stock data available for symbol: {symbol}")

    result = results[0]
    timestamps = result.get("timestamp") or []
    quotes = (result.get("indicators") or {}).get("quote") or []
    if not quotes:
        raise DataError.missing(source, "indicators.quote")

    quote = quotes[0]
    dates = [
        datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%d")
        for ts in timestamps
    ]
    return build_history(
        symbol=(result.get("meta") or {}).get("symbol", symbol),
        dates=dates,
        opens=quote.get("open") or [],
        highs=quote.get("high") or [],
        lows=quote.get("low") or [],
        closes=quote.get("close") or [],
        volumes=quote.get("volume") or [],
    )
