"""
Tests for the command line interface.

All commands run offline: demo uses the built-in sample and analyze
runs with --dry-run.
"""

import json

import pytest

from cli import main
from config import get_config
from config.loader import ENV_OVERRIDES, ENV_PREFIX


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in ENV_OVERRIDES:
        monkeypatch.delenv(f"{ENV_PREFIX}{name}", raising=False)
    get_config.cache_clear()
    yield
    get_config.cache_clear()


class TestDemo:
    """stocklens demo"""

    def test_markdown(self, capsys):
        assert main(["demo"]) == 0
        out = capsys.readouterr().out
        assert "# Technical Analysis: FPT.VN (1M)" in out
        assert "| Stochastic %K |" in out

    def test_json(self, capsys):
        assert main(["demo", "--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["symbol"] == "FPT.VN"
        assert len(data["indicators"]) == 8
        assert data["indicators"][0]["calculation"] is None

    def test_json_with_details(self, capsys):
        assert main(["demo", "-f", "json", "--details"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["indicators"][0]["calculation"]["formula"].startswith("SMA20")

    def test_output_file(self, tmp_path, capsys):
        path = tmp_path / "fpt.md"
        assert main(["demo", "--output", str(path)]) == 0
        assert path.read_text(encoding="utf-8").startswith("# Technical Analysis: FPT.VN")
        assert "Report written to" in capsys.readouterr().err

    def test_format_from_config(self, tmp_path, capsys):
        (tmp_path / "stocklens.toml").write_text('[output]\nformat = "json"\n')
        assert main(["demo"]) == 0
        assert json.loads(capsys.readouterr().out)["period"] == "1M"


class TestAnalyze:
    """stocklens analyze"""

    def test_dry_run(self, capsys):
        assert main(["analyze", "AAPL", "--dry-run", "--period", "1m"]) == 0
        assert "# Technical Analysis: AAPL (1M)" in capsys.readouterr().out

    def test_invalid_ticker(self, capsys):
        assert main(["analyze", "NOT VALID", "--dry-run"]) == 1
        assert capsys.readouterr().err.startswith("Error: Invalid ticker")

    def test_custom_period_needs_dates(self, capsys):
        assert main(["analyze", "AAPL", "--dry-run", "--period", "custom", "--start", "2024-01-01"]) == 1
        assert "requires --start and --end" in capsys.readouterr().err

    def test_custom_period_with_dates(self, capsys):
        argv = ["analyze", "AAPL", "--dry-run", "-p", "CUSTOM", "--start", "2024-01-01", "--end", "2024-03-01"]
        assert main(argv) == 0
        assert "# Technical Analysis: AAPL (CUSTOM)" in capsys.readouterr().out

    def test_unknown_period_rejected(self):
        with pytest.raises(SystemExit):
            main(["analyze", "AAPL", "--period", "7D"])


class TestExplain:
    """stocklens explain"""

    def test_known(self, capsys):
        assert main(["explain", "RSI"]) == 0
        assert "Relative Strength Index" in capsys.readouterr().out

    def test_unknown(self, capsys):
        assert main(["explain", "VWAP"]) == 0
        assert "not available" in capsys.readouterr().out


class TestConfigErrors:
    """Configuration problems exit with status 2."""

    def test_missing_config_file(self, tmp_path, capsys):
        assert main(["--config", str(tmp_path / "missing.toml"), "demo"]) == 2
        assert "Configuration error" in capsys.readouterr().err

    def test_invalid_env(self, monkeypatch, capsys):
        monkeypatch.setenv("STOCKLENS_OUTPUT_FORMAT", "xml")
        assert main(["demo"]) == 2
