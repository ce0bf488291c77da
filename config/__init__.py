from .loader import ConfigError, load_config, get_config, reload_config
from .schema import StocklensConfig, HttpConfig, DataConfig, OutputConfig, LoggingConfig, PERIODS

__all__ = [
    "ConfigError",
    "load_config",
    "get_config",
    "reload_config",
    "StocklensConfig",
    "HttpConfig",
    "DataConfig",
    "OutputConfig",
    "LoggingConfig",
    "PERIODS",
]
