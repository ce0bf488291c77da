"""
Configuration loader.

Loads configuration from:
1. Default values (built-in)
2. TOML config file (stocklens.toml or ~/.config/stocklens/config.toml)
3. Environment variables

Priority: env vars > config file > defaults
"""

import logging
import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .schema import StocklensConfig

logger = logging.getLogger(__name__)

# Config file search paths (in priority order)
CONFIG_PATHS = [
    Path("stocklens.toml"),                                   # Current directory
    Path(".stocklens.toml"),                                  # Hidden in current directory
    Path.home() / ".config" / "stocklens" / "config.toml",    # User config
]

# Environment variable prefix
ENV_PREFIX = "STOCKLENS_"

# Environment variable -> (section, field)
ENV_OVERRIDES = {
    "DEFAULT_PERIOD": ("data", "default_period"),
    "LOG_LEVEL": ("logging", "level"),
    "USER_AGENT": ("http", "user_agent"),
    "OUTPUT_FORMAT": ("output", "format"),
}


class ConfigError(Exception):
    """Configuration error with helpful message."""

    def __init__(self, message: str, source: str | None = None, field: str | None = None):
        self.source = source
        self.field = field
        super().__init__(message)

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.source:
            parts.append(f"Source: {self.source}")
        if self.field:
            parts.append(f"Field: {self.field}")
        return " | ".join(parts)


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load TOML file if it exists."""
    if not path.exists():
        return {}

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as e:
        raise ConfigError(f"Failed to parse TOML: {e}", source=str(path)) from e

    logger.info(f"Loaded config from: {path}")
    return data


def _find_config_file() -> Path | None:
    """Find the first existing config file."""
    for path in CONFIG_PATHS:
        if path.exists():
            return path
    return None


def _apply_env_overrides(config_data: dict[str, Any]) -> None:
    """Copy STOCKLENS_* variables into their config sections."""
    for name, (section, field) in ENV_OVERRIDES.items():
        value = os.environ.get(f"{ENV_PREFIX}{name}")
        if value is None:
            continue
        config_data.setdefault(section, {})[field] = value
        logger.debug(f"Config override from environment: {section}.{field}")


def load_config(config_path: Path | str | None = None) -> StocklensConfig:
    """
    Load and validate configuration.

    Args:
        config_path: Explicit path to config file (optional)

    Returns:
        Validated StocklensConfig

    Raises:
        ConfigError: If configuration is invalid
    """
    config_data: dict[str, Any] = {}

    # Load from config file
    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}", source=str(path))
        config_data = _load_toml_file(path)
    else:
        found_path = _find_config_file()
        if found_path:
            config_data = _load_toml_file(found_path)

    _apply_env_overrides(config_data)

    # Validate and create config
    try:
        return StocklensConfig(**config_data)
    except ValidationError as e:
        errors = e.errors()
        if errors:
            first_error = errors[0]
            field = ".".join(str(loc) for loc in first_error.get("loc", []))
            msg = first_error.get("msg", "Validation error")
            raise ConfigError(f"Invalid configuration: {msg}", field=field) from e
        raise ConfigError(f"Invalid configuration: {e}") from e


@lru_cache
def get_config() -> StocklensConfig:
    """
    Get singleton configuration instance.

    Uses LRU cache to ensure config is loaded only once.
    """
    return load_config()


def reload_config(config_path: Path | str | None = None) -> StocklensConfig:
    """
    Force reload configuration.

    Clears the cache and reloads from file/environment. An explicit path
    is loaded directly and not cached.
    """
    get_config.cache_clear()
    if config_path:
        return load_config(config_path)
    return get_config()
