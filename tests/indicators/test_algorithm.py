"""Tests for the algorithm variants and dispatch."""

from dataclasses import FrozenInstanceError

import pytest
import numpy as np
from klinechart.indicators.algorithm import (
    BUILTIN_ALGORITHMS,
    NoneIndicator,
    handle_algorithm,
)
from klinechart.indicators.base_indicator import IndicatorError
from klinechart.indicators.momentum_indicators import KDJIndicator
from klinechart.indicators.trend_indicators import (
    TimelineIndicator,
    MAIndicator,
    EMAIndicator,
    MACDIndicator,
    BOLLIndicator,
)


class TestVariants:
    """Tests for the immutable variant configurations."""

    def test_builtin_set(self):
        assert BUILTIN_ALGORITHMS == (
            NoneIndicator,
            TimelineIndicator,
            MAIndicator,
            EMAIndicator,
            KDJIndicator,
            MACDIndicator,
            BOLLIndicator,
        )

    def test_variants_are_frozen(self):
        ma = MAIndicator(5)
        with pytest.raises(FrozenInstanceError):
            ma.period = 10

    def test_variants_compare_by_value(self):
        assert MAIndicator(5) == MAIndicator(5)
        assert MAIndicator(5) != EMAIndicator(5)
        assert len({MACDIndicator(), MACDIndicator(12, 26, 9)}) == 1

    def test_none_key_is_empty(self):
        assert NoneIndicator().key("anything") == ""


class TestHandleAlgorithm:
    """Tests for handle_algorithm dispatch."""

    def test_none_leaves_bars_untouched(self, sample_bars):
        result = handle_algorithm(NoneIndicator(), sample_bars)
        assert result is sample_bars
        assert all(bar.ext == {} for bar in sample_bars)

    def test_none_accepts_empty_input(self):
        assert handle_algorithm(NoneIndicator(), []) == []

    @pytest.mark.parametrize("algorithm", [
        TimelineIndicator(),
        MAIndicator(5),
        EMAIndicator(5),
        KDJIndicator(),
        MACDIndicator(),
        BOLLIndicator(),
    ])
    def test_dispatch_returns_same_list(self, sample_bars, algorithm):
        result = handle_algorithm(algorithm, sample_bars)
        assert result is sample_bars
        assert sample_bars[0].ext

    @pytest.mark.parametrize("algorithm", [MAIndicator(5), KDJIndicator(), BOLLIndicator()])
    def test_empty_input_rejected(self, algorithm):
        with pytest.raises(IndicatorError, match="empty"):
            handle_algorithm(algorithm, [])

    def test_non_indicator_rejected(self, sample_bars):
        with pytest.raises(TypeError):
            handle_algorithm("MA", sample_bars)

    def test_rerun_is_idempotent(self, sample_bars):
        """Test running the same indicators twice yields identical values."""
        algorithms = [MAIndicator(5), EMAIndicator(12), MACDIndicator(), BOLLIndicator()]
        for algorithm in algorithms:
            handle_algorithm(algorithm, sample_bars)
        first = [dict(bar.ext) for bar in sample_bars]

        for algorithm in algorithms:
            handle_algorithm(algorithm, sample_bars)
        assert [bar.ext for bar in sample_bars] == first

    def test_multiple_instances_coexist(self, sample_bars):
        handle_algorithm(MAIndicator(5), sample_bars)
        handle_algorithm(MAIndicator(20), sample_bars)
        last = sample_bars[-1]
        expected_5 = np.mean([b.close for b in sample_bars[-5:]])
        expected_20 = np.mean([b.close for b in sample_bars[-20:]])
        assert last.ext["MA_5_Timeline"] == pytest.approx(expected_5)
        assert last.ext["MA_20_Timeline"] == pytest.approx(expected_20)
