"""Momentum-based technical indicators."""

from dataclasses import dataclass

import numpy as np

from .bar import Bar, column
from .base_indicator import BaseIndicator
from .keys import SeriesKey
from . import kernels


@dataclass(frozen=True)
class KDJIndicator(BaseIndicator):
    """KDJ Stochastic indicator (Chinese market variant).

    KDJ is based on Stochastic Oscillator with additional J line:
    - K: Smoothed RSV, K = (2 * prev K + RSV) / 3, starting from 50
    - D: Smoothed K, D = (2 * prev D + K) / 3, starting from 50
    - J: 3K - 2D (more sensitive, can exceed 0-100)

    Only fastk_period (the RSV lookback) affects the result; the two
    smoothing periods are kept for signature compatibility.

    Signals:
    - K crossing above D: Bullish
    - K crossing below D: Bearish
    - J < 0: Oversold extreme
    - J > 100: Overbought extreme
    """

    fastk_period: int = 9
    slowk_period: int = 3
    slowd_period: int = 3
    suffix: str = ""

    tag = SeriesKey.KDJ

    @property
    def name(self) -> str:
        return "KDJ"

    @property
    def params(self) -> dict[str, int]:
        return {
            "fastk_period": self.fastk_period,
            "slowk_period": self.slowk_period,
            "slowd_period": self.slowd_period,
        }

    def compute(self, bars: list[Bar]) -> dict[str, np.ndarray]:
        """Calculate K, D, J values.

        Args:
            bars: Bar sequence with high, low, close

        Returns:
            'K', 'D' and 'J' series
        """
        rsv = kernels.rsv(
            column(bars, "high"),
            column(bars, "low"),
            column(bars, "close"),
            self.fastk_period,
        )
        k, d, j = kernels.kdj(rsv)
        return {"K": k, "D": d, "J": j}
