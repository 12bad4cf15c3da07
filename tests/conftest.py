"""Shared fixtures for indicator tests."""

import pytest
import pandas as pd
import numpy as np

from klinechart.indicators.bar import Bar, bars_from_frame


@pytest.fixture
def sample_ohlcv():
    """Create sample OHLCV data for testing."""
    np.random.seed(42)
    n = 100
    close = 100 + np.cumsum(np.random.randn(n) * 2)
    return pd.DataFrame({
        "open": close - np.random.rand(n),
        "high": close + np.random.rand(n) * 2,
        "low": close - np.random.rand(n) * 2,
        "close": close,
        "volume": np.random.randint(1000, 10000, n).astype(float)
    })


@pytest.fixture
def sample_bars(sample_ohlcv):
    """Sample OHLCV data as a bar sequence."""
    return bars_from_frame(sample_ohlcv)


def make_bars(closes, volumes=None, spread=1.0):
    """Build bars around the given closes with high/low = close +/- spread."""
    volumes = volumes or [100.0] * len(closes)
    return [
        Bar(open=c, high=c + spread, low=c - spread, close=c, volume=v)
        for c, v in zip(closes, volumes)
    ]


@pytest.fixture
def bar_factory():
    """Factory building bars from a list of closes."""
    return make_bars
