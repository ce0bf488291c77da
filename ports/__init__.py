from .sources import (
    PriceSource,
    AdapterError,
    RateLimitError,
    FetchError,
    ParseError,
    DataError,
    ValidationError,
    ErrorCode,
)

__all__ = [
    "PriceSource",
    "AdapterError",
    "RateLimitError",
    "FetchError",
    "ParseError",
    "DataError",
    "ValidationError",
    "ErrorCode",
]
