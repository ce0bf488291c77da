"""
Tests for configuration loading and validation.
"""

from datetime import timedelta

import pytest

from config import ConfigError, StocklensConfig, get_config, load_config, reload_config
from config.loader import ENV_OVERRIDES, ENV_PREFIX


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run each test in an empty directory with no STOCKLENS_* variables."""
    monkeypatch.chdir(tmp_path)
    for name in ENV_OVERRIDES:
        monkeypatch.delenv(f"{ENV_PREFIX}{name}", raising=False)


class TestDefaults:
    """Built-in defaults."""

    def test_defaults(self):
        config = load_config()
        assert config == StocklensConfig()
        assert config.data.default_period == "3M"
        assert config.output.format == "markdown"
        assert config.logging.level == "WARNING"
        assert config.http.user_agent == "StockLens/1.0"

    def test_cache_ttl(self):
        assert StocklensConfig().data.cache_ttl == timedelta(minutes=5)


class TestTomlFile:
    """Loading from TOML files."""

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text(
            '[data]\n'
            'default_period = "1y"\n'
            'symbol_aliases = { vnm = "vnm.vn" }\n'
            '\n'
            '[output]\n'
            'format = "json"\n'
            'decimals = 4\n'
        )
        config = load_config(path)

        assert config.data.default_period == "1Y"
        assert config.data.symbol_aliases == {"VNM": "VNM.VN"}
        assert config.output.format == "json"
        assert config.output.decimals == 4

    def test_discovered_in_current_directory(self, tmp_path):
        (tmp_path / "stocklens.toml").write_text('[logging]\nlevel = "debug"\n')
        assert load_config().logging.level == "DEBUG"

    def test_missing_explicit_path(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "missing.toml")

    def test_malformed_toml(self, tmp_path):
        path = tmp_path / "broken.toml"
        path.write_text("[data\ndefault_period = ")
        with pytest.raises(ConfigError, match="Failed to parse TOML"):
            load_config(path)

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text('[data]\ndefault_period = "7D"\n')
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        assert exc_info.value.field == "data.default_period"

    def test_out_of_range(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("[http]\ntimeout_seconds = 0.1\n")
        with pytest.raises(ConfigError):
            load_config(path)


class TestEnvironment:
    """STOCKLENS_* overrides."""

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        (tmp_path / "stocklens.toml").write_text('[data]\ndefault_period = "1M"\n')
        monkeypatch.setenv("STOCKLENS_DEFAULT_PERIOD", "6m")
        monkeypatch.setenv("STOCKLENS_OUTPUT_FORMAT", "json")

        config = load_config()
        assert config.data.default_period == "6M"
        assert config.output.format == "json"

    def test_invalid_env_value(self, monkeypatch):
        monkeypatch.setenv("STOCKLENS_LOG_LEVEL", "LOUD")
        with pytest.raises(ConfigError):
            load_config()

    def test_reload_picks_up_changes(self, monkeypatch):
        reload_config()
        monkeypatch.setenv("STOCKLENS_USER_AGENT", "tests/1.0")
        assert reload_config().http.user_agent == "tests/1.0"
        get_config.cache_clear()
