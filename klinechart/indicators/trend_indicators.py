"""Price-line and trend-following indicators (Timeline, MA, EMA, MACD, BOLL)."""

import numbers
from dataclasses import dataclass

import numpy as np

from .bar import Bar, column
from .base_indicator import BaseIndicator, IndicatorError, IndicatorResult
from .keys import SeriesKey
from . import kernels


@dataclass(frozen=True)
class TimelineIndicator(BaseIndicator):
    """Time-share line: close price and volume copied verbatim."""

    suffix: str = ""

    tag = SeriesKey.TIMELINE

    @property
    def name(self) -> str:
        return SeriesKey.TIMELINE

    def compute(self, bars: list[Bar]) -> dict[str, np.ndarray]:
        return {
            SeriesKey.TIMELINE: column(bars, "close"),
            SeriesKey.VOLUME: column(bars, "volume"),
        }


@dataclass(frozen=True)
class MAIndicator(BaseIndicator):
    """Simple Moving Average indicator.

    SMA smooths price data by calculating the average over a fixed window.
    Used for trend identification and support/resistance levels. Price and
    volume are averaged separately; before `period` bars exist the average
    covers every bar so far.
    """

    period: int = 20
    suffix: str = ""

    tag = SeriesKey.MA

    @property
    def name(self) -> str:
        return f"MA_{self.period}"

    @property
    def params(self) -> dict[str, int]:
        return {"period": self.period}

    @property
    def key_params(self) -> tuple:
        return (self.period,)

    def compute(self, bars: list[Bar]) -> dict[str, np.ndarray]:
        """Calculate Simple Moving Average of close and volume.

        Args:
            bars: Bar sequence

        Returns:
            'Timeline' (price MA) and 'Volume' (volume MA) series
        """
        return {
            SeriesKey.TIMELINE: kernels.rolling_mean(column(bars, "close"), self.period),
            SeriesKey.VOLUME: kernels.rolling_mean(column(bars, "volume"), self.period),
        }


@dataclass(frozen=True)
class EMAIndicator(BaseIndicator):
    """Exponential Moving Average indicator.

    EMA gives more weight to recent prices, making it more responsive
    to new information than SMA. The first bar seeds the recurrence with
    its own close (and volume).
    """

    period: int = 20
    suffix: str = ""

    tag = SeriesKey.EMA

    @property
    def name(self) -> str:
        return f"EMA_{self.period}"

    @property
    def params(self) -> dict[str, int]:
        return {"period": self.period}

    @property
    def key_params(self) -> tuple:
        return (self.period,)

    def compute(self, bars: list[Bar]) -> dict[str, np.ndarray]:
        """Calculate Exponential Moving Average of close and volume.

        Args:
            bars: Bar sequence

        Returns:
            'Timeline' (price EMA) and 'Volume' (volume EMA) series
        """
        return {
            SeriesKey.TIMELINE: kernels.ema(column(bars, "close"), self.period),
            SeriesKey.VOLUME: kernels.ema(column(bars, "volume"), self.period),
        }


@dataclass(frozen=True)
class MACDIndicator(BaseIndicator):
    """Moving Average Convergence Divergence indicator.

    MACD shows the relationship between two EMAs and includes:
    - DIF: Difference between fast and slow EMAs
    - DEA: Signal line, EMA of DIF seeded at 0
    - BAR: Histogram, 2 * (DIF - DEA)

    Applying MACD also writes the fast and slow EMA keys it computed.
    """

    fast_period: int = 12
    slow_period: int = 26
    signal_period: int = 9
    suffix: str = ""

    tag = SeriesKey.MACD

    @property
    def name(self) -> str:
        return "MACD"

    @property
    def params(self) -> dict[str, int]:
        return {
            "fast_period": self.fast_period,
            "slow_period": self.slow_period,
            "signal_period": self.signal_period,
        }

    @property
    def fast_ema(self) -> EMAIndicator:
        return EMAIndicator(period=self.fast_period, suffix=self.suffix)

    @property
    def slow_ema(self) -> EMAIndicator:
        return EMAIndicator(period=self.slow_period, suffix=self.suffix)

    def _lines(self, fast: np.ndarray, slow: np.ndarray) -> dict[str, np.ndarray]:
        dif = fast - slow
        dea = kernels.ema(dif, self.signal_period, seed=0.0)
        return {"DIF": dif, "DEA": dea, "BAR": 2 * (dif - dea)}

    def compute(self, bars: list[Bar]) -> dict[str, np.ndarray]:
        """Calculate DIF, DEA and BAR from close prices.

        Args:
            bars: Bar sequence

        Returns:
            'DIF', 'DEA' and 'BAR' series
        """
        fast = self.fast_ema.compute(bars)[SeriesKey.TIMELINE]
        slow = self.slow_ema.compute(bars)[SeriesKey.TIMELINE]
        return self._lines(fast, slow)

    def apply(self, bars: list[Bar]) -> IndicatorResult:
        fast_ema, slow_ema = self.fast_ema, self.slow_ema
        fast = fast_ema.apply(bars)
        slow = slow_ema.apply(bars)

        result = self._store(bars, self._lines(
            fast.values[fast_ema.key(SeriesKey.TIMELINE)],
            slow.values[slow_ema.key(SeriesKey.TIMELINE)],
        ))
        result.values.update(fast.values)
        result.values.update(slow.values)
        return result


@dataclass(frozen=True)
class BOLLIndicator(BaseIndicator):
    """Bollinger Bands indicator.

    - BOLL: Middle band, MA of close over `period`
    - UP: Middle + k * standard deviation
    - LB: Middle - k * standard deviation

    The standard deviation is the population one over the same (shrinking)
    window as the middle band.
    """

    period: int = 20
    k: float = 2
    suffix: str = ""

    tag = SeriesKey.BOLL

    @property
    def name(self) -> str:
        return f"BOLL_{self.period}"

    @property
    def params(self) -> dict[str, int]:
        return {"period": self.period}

    def validate(self, bars: list[Bar]) -> None:
        super().validate(bars)
        if isinstance(self.k, bool) or not isinstance(self.k, numbers.Real) or self.k < 0:
            raise IndicatorError(
                f"Invalid parameter k={self.k!r} for {self.name}: "
                "must be a non-negative number"
            )

    def compute(self, bars: list[Bar]) -> dict[str, np.ndarray]:
        """Calculate middle, upper and lower bands.

        Args:
            bars: Bar sequence

        Returns:
            'BOLL', 'UP' and 'LB' series
        """
        mid = MAIndicator(period=self.period).compute(bars)[SeriesKey.TIMELINE]
        std = kernels.rolling_std(column(bars, "close"), self.period)
        return {
            "BOLL": mid,
            "UP": mid + self.k * std,
            "LB": mid - self.k * std,
        }
