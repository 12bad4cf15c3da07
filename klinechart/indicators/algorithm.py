"""Built-in algorithm variants and the single dispatch entry point."""

from dataclasses import dataclass
from typing import Union

import numpy as np

from .bar import Bar
from .base_indicator import BaseIndicator
from .momentum_indicators import KDJIndicator
from .trend_indicators import (
    TimelineIndicator,
    MAIndicator,
    EMAIndicator,
    MACDIndicator,
    BOLLIndicator,
)


@dataclass(frozen=True)
class NoneIndicator(BaseIndicator):
    """No-op algorithm: leaves the bars untouched."""

    @property
    def name(self) -> str:
        return "None"

    def key(self, name: str = "") -> str:
        return ""

    def compute(self, bars: list[Bar]) -> dict[str, np.ndarray]:
        return {}

    def validate(self, bars: list[Bar]) -> None:
        pass


Algorithm = Union[
    NoneIndicator,
    TimelineIndicator,
    MAIndicator,
    EMAIndicator,
    KDJIndicator,
    MACDIndicator,
    BOLLIndicator,
]

BUILTIN_ALGORITHMS = (
    NoneIndicator,
    TimelineIndicator,
    MAIndicator,
    EMAIndicator,
    KDJIndicator,
    MACDIndicator,
    BOLLIndicator,
)


def handle_algorithm(algorithm: BaseIndicator, bars: list[Bar]) -> list[Bar]:
    """Validate and run one algorithm over the bars.

    Accepts the built-in variants as well as any externally defined
    BaseIndicator subclass.

    Args:
        algorithm: Indicator configuration to apply
        bars: Bar sequence, mutated in place

    Returns:
        The same bar list with the algorithm's keys populated

    Raises:
        IndicatorError: If bars is empty or a parameter is invalid
        TypeError: If algorithm is not an indicator
    """
    if not isinstance(algorithm, BaseIndicator):
        raise TypeError(f"Not an indicator: {algorithm!r}")
    return algorithm(bars)
