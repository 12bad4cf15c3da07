"""Technical indicator calculation module.

Computes chart indicators over a sequence of OHLCV bars and stores the
results on each bar's extension store under deterministic keys:
- Price lines: Timeline, MA, EMA
- Momentum: KDJ
- Trend/volatility: MACD, BOLL
- Unified calculator for batch processing
"""

from .bar import Bar, bars_from_frame, bars_to_frame
from .keys import SeriesKey, build_key, moving_average_keys
from .base_indicator import BaseIndicator, IndicatorError, IndicatorResult
from .trend_indicators import (
    TimelineIndicator,
    MAIndicator,
    EMAIndicator,
    MACDIndicator,
    BOLLIndicator,
)
from .momentum_indicators import KDJIndicator
from .algorithm import Algorithm, NoneIndicator, BUILTIN_ALGORITHMS, handle_algorithm
from .indicator_calculator import IndicatorCalculator, IndicatorConfig

__all__ = [
    # Data model
    "Bar",
    "bars_from_frame",
    "bars_to_frame",
    # Keys
    "SeriesKey",
    "build_key",
    "moving_average_keys",
    # Base
    "BaseIndicator",
    "IndicatorError",
    "IndicatorResult",
    # Variants
    "Algorithm",
    "BUILTIN_ALGORITHMS",
    "NoneIndicator",
    "TimelineIndicator",
    "MAIndicator",
    "EMAIndicator",
    "KDJIndicator",
    "MACDIndicator",
    "BOLLIndicator",
    "handle_algorithm",
    # Calculator
    "IndicatorCalculator",
    "IndicatorConfig",
]
