"""
Configuration schema with validation.

All configuration is validated at load time using Pydantic.
"""

from datetime import timedelta
from typing import Literal

from pydantic import BaseModel, Field, field_validator

# Period labels accepted by the price sources
PERIODS = ("1W", "1M", "3M", "6M", "1Y", "2Y", "3Y", "5Y", "MAX", "CUSTOM")


class HttpConfig(BaseModel):
    """HTTP client configuration."""

    timeout_seconds: float = Field(default=10.0, ge=1.0, le=60.0)
    user_agent: str = Field(default="StockLens/1.0", min_length=1)


class DataConfig(BaseModel):
    """Price history source configuration."""

    default_period: str = Field(default="3M", description="Period fetched when none is given")
    cache_ttl_minutes: int = Field(default=5, ge=1, le=1440)
    rate_limit_per_minute: int = Field(default=60, ge=1, le=200)

    # Extra exchange suffixes, e.g. {"VNM": "VNM.VN"}
    symbol_aliases: dict[str, str] = Field(default_factory=dict)

    @field_validator("default_period")
    @classmethod
    def validate_period(cls, v: str) -> str:
        v = v.upper().strip()
        if v not in PERIODS:
            raise ValueError(f"default_period must be one of {', '.join(PERIODS)}")
        return v

    @field_validator("symbol_aliases")
    @classmethod
    def normalize_aliases(cls, v: dict[str, str]) -> dict[str, str]:
        return {k.upper().strip(): s.upper().strip() for k, s in v.items()}

    @property
    def cache_ttl(self) -> timedelta:
        return timedelta(minutes=self.cache_ttl_minutes)


class OutputConfig(BaseModel):
    """Output preferences."""

    format: Literal["markdown", "json"] = Field(default="markdown")
    include_details: bool = Field(default=False, description="Show formulas and steps")
    include_explanations: bool = Field(default=False)
    decimals: int = Field(default=2, ge=0, le=8)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="WARNING")
    format: str = Field(default="%(levelname)s: %(message)s", min_length=1)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.upper().strip()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return v


class StocklensConfig(BaseModel):
    """
    Root configuration model.

    All settings are validated on load.
    """

    http: HttpConfig = Field(default_factory=HttpConfig)
    data: DataConfig = Field(default_factory=DataConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
