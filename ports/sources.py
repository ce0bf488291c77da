"""
Price source port and error types.

This module defines the protocol for price history adapters
and the error types they raise, each carrying a structured code.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Protocol, runtime_checkable, Any

from domain import PriceHistory


# ============================================================================
# Error Codes
# ============================================================================

class ErrorCode(str, Enum):
    """Error codes for structured error handling."""

    # Network errors (1xx)
    NETWORK_TIMEOUT = "E101"
    NETWORK_CONNECTION = "E102"

    # HTTP errors (2xx)
    HTTP_CLIENT_ERROR = "E201"
    HTTP_SERVER_ERROR = "E202"
    HTTP_RATE_LIMITED = "E203"
    HTTP_NOT_FOUND = "E206"

    # Parse errors (3xx)
    PARSE_JSON = "E301"

    # Data errors (4xx)
    DATA_MISSING = "E401"
    DATA_INVALID = "E402"
    DATA_EMPTY = "E404"

    # Validation errors (5xx)
    VALIDATION_TICKER = "E501"
    VALIDATION_PARAM = "E502"

    UNKNOWN = "E999"


# ============================================================================
# Error Classes
# ============================================================================

class AdapterError(Exception):
    """
    Base exception for price source failures.

    Carries a code, the failing source and free-form context for logs.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN,
        source: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        self.code = code
        self.source = source
        self.context = context or {}
        self.cause = cause
        self.timestamp = datetime.now()

        parts = [f"[{code.value}]"]
        if source:
            parts.append(f"[{source}]")
        parts.append(message)

        self.message = message
        super().__init__(" ".join(parts))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "code": self.code.value,
            "message": self.message,
            "source": self.source,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "cause": str(self.cause) if self.cause else None,
        }


class RateLimitError(AdapterError):
    """Raised when the local request budget is exhausted."""

    def __init__(
        self,
        retry_after: timedelta | None = None,
        source: str | None = None,
    ):
        self.retry_after = retry_after

        msg = "Rate limit exceeded"
        context = {}
        if retry_after:
            msg += f", retry after {retry_after.total_seconds():.0f}s"
            context["retry_after_seconds"] = retry_after.total_seconds()

        super().__init__(
            message=msg,
            code=ErrorCode.HTTP_RATE_LIMITED,
            source=source,
            context=context,
        )


class FetchError(AdapterError):
    """Raised when a price history request fails."""

    def __init__(
        self,
        source: str,
        reason: str,
        code: ErrorCode = ErrorCode.UNKNOWN,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ):
        self.reason = reason
        self.url = url
        self.status_code = status_code

        context: dict[str, Any] = {"reason": reason}
        if url:
            context["url"] = url
        if status_code:
            context["status_code"] = status_code

        super().__init__(
            message=reason,
            code=code,
            source=source,
            context=context,
            cause=cause,
        )

    @classmethod
    def from_http_error(
        cls,
        source: str,
        status_code: int,
        url: str | None = None,
    ) -> "FetchError":
        """Create FetchError from an HTTP error status."""
        if status_code == 404:
            code = ErrorCode.HTTP_NOT_FOUND
        elif 400 <= status_code < 500:
            code = ErrorCode.HTTP_CLIENT_ERROR
        else:
            code = ErrorCode.HTTP_SERVER_ERROR

        return cls(
            source=source,
            reason=f"Price service unavailable (HTTP {status_code})",
            code=code,
            url=url,
            status_code=status_code,
        )

    @classmethod
    def from_network_error(
        cls,
        source: str,
        error: Exception,
        url: str | None = None,
    ) -> "FetchError":
        """Create FetchError from a network exception."""
        if "timed out" in str(error).lower() or isinstance(error, TimeoutError):
            code = ErrorCode.NETWORK_TIMEOUT
            reason = "Request timed out"
        else:
            code = ErrorCode.NETWORK_CONNECTION
            reason = "Unable to connect to stock data service"

        return cls(
            source=source,
            reason=reason,
            code=code,
            url=url,
            cause=error,
        )


class ParseError(AdapterError):
    """Raised when a provider response cannot be decoded."""

    def __init__(
        self,
        source: str,
        reason: str,
        raw_content: str | None = None,
        cause: Exception | None = None,
    ):
        context = {"format": "json"}
        if raw_content:
            context["raw_preview"] = raw_content[:200]

        super().__init__(
            message=f"Failed to parse json: {reason}",
            code=ErrorCode.PARSE_JSON,
            source=source,
            context=context,
            cause=cause,
        )


class DataError(AdapterError):
    """Raised when a response holds no usable prices."""

    def __init__(
        self,
        source: str,
        reason: str,
        code: ErrorCode = ErrorCode.DATA_INVALID,
        field: str | None = None,
    ):
        context = {"reason": reason}
        if field:
            context["field"] = field

        super().__init__(
            message=reason,
            code=code,
            source=source,
            context=context,
        )

    @classmethod
    def missing(cls, source: str, field: str) -> "DataError":
        """Create error for missing required field."""
        return cls(
            source=source,
            reason=f"Missing required field: {field}",
            code=ErrorCode.DATA_MISSING,
            field=field,
        )

    @classmethod
    def empty(cls, source: str, description: str = "No price data found") -> "DataError":
        """Create error for empty result set."""
        return cls(
            source=source,
            reason=description,
            code=ErrorCode.DATA_EMPTY,
        )


class ValidationError(AdapterError):
    """Raised when a request parameter is invalid."""

    def __init__(
        self,
        reason: str,
        field: str,
        value: Any = None,
        source: str | None = None,
        code: ErrorCode = ErrorCode.VALIDATION_PARAM,
    ):
        context = {"field": field}
        if value is not None:
            context["value"] = str(value)[:50]

        super().__init__(
            message=reason,
            code=code,
            source=source,
            context=context,
        )

    @classmethod
    def invalid_ticker(cls, ticker: str, reason: str = "Invalid format") -> "ValidationError":
        """Create error for invalid ticker symbol."""
        return cls(
            reason=f"Invalid ticker '{ticker}': {reason}",
            field="ticker",
            value=ticker,
            code=ErrorCode.VALIDATION_TICKER,
        )


@runtime_checkable
class PriceSource(Protocol):
    """
    Protocol for price history adapters.

    Implementations must:
    - Return prices oldest first
    - Raise DataError when nothing usable comes back
    - Fail explicitly with AdapterError subclasses
    """

    @property
    def source_name(self) -> str:
        """Unique identifier for this data source."""
        ...

    def get_history(
        self,
        symbol: str,
        period: str = "1M",
        start: str | None = None,
        end: str | None = None,
    ) -> PriceHistory:
        """
        Fetch price history for a symbol.

        Raises:
            ValidationError: If the symbol is malformed
            FetchError: If the fetch fails
            DataError: If no prices are available
        """
        ...
