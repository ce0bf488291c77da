from .base import BaseAdapter
from .yahoo import YahooAdapter
from .mock import MockAdapter, generate_mock_history
from .sample_data import fpt_sample_history

__all__ = [
    "BaseAdapter",
    "YahooAdapter",
    "MockAdapter",
    "generate_mock_history",
    "fpt_sample_history",
]
