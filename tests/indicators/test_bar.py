"""Tests for the bar data model and DataFrame adapters."""

import pytest
import pandas as pd
import numpy as np
from klinechart.indicators.bar import Bar, bars_from_frame, bars_to_frame, column
from klinechart.indicators.base_indicator import IndicatorError


class TestBar:
    """Tests for Bar dataclass."""

    def test_bar_creation(self):
        bar = Bar(open=1.0, high=2.0, low=0.5, close=1.5, volume=10.0)
        assert bar.ext == {}
        assert bar.time is None

    def test_ext_not_shared_between_bars(self):
        a = Bar(1.0, 1.0, 1.0, 1.0, 1.0)
        b = Bar(1.0, 1.0, 1.0, 1.0, 1.0)
        a.ext["X"] = 1.0
        assert b.ext == {}

    def test_value_lookup(self):
        bar = Bar(1.0, 1.0, 1.0, 1.0, 1.0, ext={"MA_5_Timeline": 3.0})
        assert bar.value("MA_5_Timeline") == 3.0
        assert bar.value("MA_10_Timeline") is None

    def test_column(self):
        bars = [Bar(1.0, 2.0, 0.0, 1.5, 10.0), Bar(2.0, 3.0, 1.0, 2.5, 20.0)]
        np.testing.assert_array_equal(column(bars, "close"), [1.5, 2.5])


class TestFrameAdapters:
    """Tests for bars_from_frame / bars_to_frame."""

    def test_bars_from_frame(self, sample_ohlcv):
        bars = bars_from_frame(sample_ohlcv)
        assert len(bars) == len(sample_ohlcv)
        assert bars[3].close == pytest.approx(sample_ohlcv["close"].iloc[3])
        assert bars[3].time == sample_ohlcv.index[3]

    def test_bars_from_frame_missing_column(self):
        df = pd.DataFrame({"close": [1.0], "high": [1.1]})
        with pytest.raises(IndicatorError, match="Missing required columns"):
            bars_from_frame(df)

    def test_bars_to_frame_all_keys(self):
        bars = [
            Bar(1.0, 1.0, 1.0, 1.0, 1.0, ext={"A": 1.0}),
            Bar(2.0, 2.0, 2.0, 2.0, 2.0, ext={"A": 2.0, "B": 5.0}),
        ]
        frame = bars_to_frame(bars)
        assert list(frame.columns) == ["open", "high", "low", "close", "volume", "A", "B"]
        assert np.isnan(frame["B"].iloc[0])
        assert frame["B"].iloc[1] == 5.0

    def test_bars_to_frame_selected_keys(self):
        bars = [Bar(1.0, 1.0, 1.0, 1.0, 1.0, ext={"A": 1.0, "B": None})]
        frame = bars_to_frame(bars, keys=["B"])
        assert "A" not in frame.columns
        assert np.isnan(frame["B"].iloc[0])

    def test_index_preserved(self, sample_ohlcv):
        sample_ohlcv.index = pd.date_range("2024-01-01", periods=len(sample_ohlcv))
        frame = bars_to_frame(bars_from_frame(sample_ohlcv))
        assert list(frame.index) == list(sample_ohlcv.index)
