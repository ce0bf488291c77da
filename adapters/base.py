"""
Base adapter with caching, rate limiting, and structured logging.

All price adapters inherit from BaseAdapter to get:
- Response caching with configurable TTL
- Rate limiting per source
- Structured logging at boundaries
- Common HTTP request handling
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Any
import json
import logging
import re
import time
import urllib.error
import urllib.request

from config import StocklensConfig, get_config
from domain import PriceHistory
from ports import AdapterError, FetchError, ParseError, RateLimitError, ValidationError

logger = logging.getLogger(__name__)

TICKER_PATTERN = re.compile(r"^[A-Z0-9.\-^=]{1,15}$")


class CacheEntry:
    """Single cache entry with TTL tracking."""

    __slots__ = ("data", "created_at", "ttl")

    def __init__(self, data: PriceHistory, ttl: timedelta):
        self.data = data
        self.created_at = datetime.now()
        self.ttl = ttl

    def is_valid(self) -> bool:
        return datetime.now() - self.created_at < self.ttl


class RateLimiter:
    """Sliding window rate limiter."""

    __slots__ = ("max_requests", "window_seconds", "requests")

    def __init__(self, max_requests: int, window_seconds: float = 60.0):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.requests: list[float] = []

    def acquire(self, source: str | None = None) -> None:
        """
        Acquire a request slot.

        Raises:
            RateLimitError: If rate limit exceeded
        """
        now = time.monotonic()

        # Prune old requests outside window
        cutoff = now - self.window_seconds
        self.requests = [t for t in self.requests if t > cutoff]

        if len(self.requests) >= self.max_requests:
            oldest = min(self.requests)
            retry_after = timedelta(seconds=oldest + self.window_seconds - now)
            raise RateLimitError(retry_after=retry_after, source=source)

        self.requests.append(now)


class BaseAdapter(ABC):
    """
    Base class for price history adapters.

    Provides:
    - Response caching with configurable TTL
    - Rate limiting
    - Error handling boilerplate
    """

    def __init__(self, config: StocklensConfig | None = None):
        self._config = config or get_config()
        self._cache: dict[str, CacheEntry] = {}
        self._rate_limiter = RateLimiter(
            max_requests=self._config.data.rate_limit_per_minute
        )

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Unique identifier for this data source."""
        ...

    def _cache_key(self, **kwargs) -> str:
        """Generate cache key from fetch parameters."""
        parts = [self.source_name]
        for k, v in sorted(kwargs.items()):
            parts.append(f"{k}={v}")
        return ":".join(parts)

    def _get_cached(self, key: str) -> PriceHistory | None:
        """Get cached history if valid."""
        entry = self._cache.get(key)
        if entry and entry.is_valid():
            logger.debug(f"Cache hit: {key}")
            return entry.data
        return None

    def _set_cached(self, key: str, data: PriceHistory) -> None:
        ttl = self._config.data.cache_ttl
        self._cache[key] = CacheEntry(data, ttl)
        logger.debug(f"Cached: {key} (TTL={ttl})")

    def get_history(
        self,
        symbol: str,
        period: str = "1M",
        start: str | None = None,
        end: str | None = None,
    ) -> PriceHistory:
        """
        Fetch price history with caching and rate limiting.

        Raises:
            ValidationError: If the symbol is malformed
            RateLimitError: If rate limit exceeded
            FetchError: If fetch fails
            DataError: If no prices are available
        """
        symbol = self._validate_ticker(symbol)
        period = period.upper()
        cache_key = self._cache_key(symbol=symbol, period=period, start=start, end=end)

        cached = self._get_cached(cache_key)
        if cached is not None:
            return cached

        self._rate_limiter.acquire(self.source_name)

        # Delegate to subclass implementation
        try:
            history = self._fetch_history(symbol, period, start, end)
        except AdapterError:
            raise
        except Exception as e:
            raise FetchError(self.source_name, str(e), cause=e) from e

        logger.info(f"{self.source_name}: {len(history)} bars for {history.symbol} ({period})")
        self._set_cached(cache_key, history)
        return history

    @abstractmethod
    def _fetch_history(
        self,
        symbol: str,
        period: str,
        start: str | None,
        end: str | None,
    ) -> PriceHistory:
        """
        Implementation-specific fetch logic.

        Subclasses implement this instead of get_history() to get
        automatic caching and rate limiting.
        """
        ...

    # ========================================================================
    # HTTP Helpers
    # ========================================================================

    def _http_get(
        self,
        url: str,
        headers: dict[str, str] | None = None,
    ) -> bytes:
        """
        Make HTTP GET request with standardized error handling.

        Raises:
            RateLimitError: On 429 response
            FetchError: On other HTTP or network errors
        """
        http = self._config.http
        req_headers = {"User-Agent": http.user_agent, "Accept": "application/json"}
        if headers:
            req_headers.update(headers)

        req = urllib.request.Request(url, headers=req_headers)

        logger.debug(
            f"HTTP GET {url}",
            extra={"source": self.source_name, "url": url},
        )
        start_time = time.monotonic()

        try:
            with urllib.request.urlopen(req, timeout=http.timeout_seconds) as resp:
                data = resp.read()
        except urllib.error.HTTPError as e:
            elapsed = time.monotonic() - start_time
            logger.warning(
                f"HTTP {e.code} from {url} ({elapsed:.2f}s)",
                extra={"source": self.source_name, "url": url, "status": e.code},
            )
            if e.code == 429:
                raise RateLimitError(source=self.source_name) from e
            raise FetchError.from_http_error(self.source_name, e.code, url=url) from e
        except (urllib.error.URLError, TimeoutError) as e:
            elapsed = time.monotonic() - start_time
            reason = getattr(e, "reason", e)
            logger.warning(
                f"Network error for {url}: {reason} ({elapsed:.2f}s)",
                extra={"source": self.source_name, "url": url, "error": str(reason)},
            )
            raise FetchError.from_network_error(self.source_name, e, url=url) from e

        elapsed = time.monotonic() - start_time
        logger.debug(
            f"HTTP 200 OK ({len(data)} bytes, {elapsed:.2f}s)",
            extra={
                "source": self.source_name,
                "url": url,
                "size": len(data),
                "elapsed_ms": int(elapsed * 1000),
            },
        )
        return data

    def _http_get_json(
        self,
        url: str,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """
        Make HTTP GET request and parse JSON response.

        Raises:
            FetchError: On HTTP or network errors
            ParseError: On JSON parse errors
        """
        data = self._http_get(url, headers)

        try:
            return json.loads(data.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(
                f"JSON parse error for {url}: {e}",
                extra={"source": self.source_name, "url": url},
            )
            raise ParseError(
                source=self.source_name,
                reason=str(e),
                raw_content=data.decode("utf-8", errors="replace")[:500],
                cause=e,
            ) from e

    # ========================================================================
    # Input Validation Helpers
    # ========================================================================

    def _validate_ticker(self, ticker: str) -> str:
        """
        Validate and normalize ticker symbol.

        Raises:
            ValidationError: If ticker is invalid
        """
        if not ticker or not ticker.strip():
            raise ValidationError.invalid_ticker(ticker, "Ticker cannot be empty")

        ticker = ticker.upper().strip()
        if not TICKER_PATTERN.match(ticker):
            raise ValidationError.invalid_ticker(
                ticker,
                "Must be 1-15 letters, numbers, dots, dashes, ^ or =",
            )
        return ticker
