"""Shared fixtures."""

from datetime import datetime

import pytest

from adapters import fpt_sample_history
from domain import StockAnalysis, analyze_history


@pytest.fixture
def fpt_analysis() -> StockAnalysis:
    """Analysis of the FPT.VN sample with a fixed timestamp."""
    analysis = analyze_history(fpt_sample_history(), period="1M")
    return analysis.model_copy(update={"generated_at": datetime(2024, 5, 17, 9, 30)})
