"""Base class for all technical indicators."""

import numbers
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
import pandas as pd

from .keys import build_key

if TYPE_CHECKING:
    from .bar import Bar


class IndicatorError(ValueError):
    """Invalid indicator parameter or empty input."""
    pass


@dataclass
class IndicatorResult:
    """Container for the values one indicator run wrote to the bars.

    Attributes:
        name: Indicator identifier (e.g., 'MA_20', 'MACD')
        values: Calculated series keyed by fully qualified key (e.g. 'MA_20_Timeline')
        params: Parameters used for calculation
    """
    name: str
    values: dict[str, np.ndarray] = field(default_factory=dict)
    params: dict = field(default_factory=dict)

    def to_frame(self) -> pd.DataFrame:
        """Return the values as a DataFrame with one column per key."""
        return pd.DataFrame(self.values)


class BaseIndicator(ABC):
    """Abstract base class for all technical indicators.

    Built-in indicators are frozen dataclasses; third-party algorithms subclass
    this directly and can be registered with IndicatorCalculator.register().

    Subclasses must implement:
        - tag: Class attribute, leading part of every output key
        - name: Property returning indicator name
        - compute: Method producing sub-series values without touching the bars

    Usage:
        indicator = ConcreteIndicator()
        bars = indicator(bars)  # Validates, calculates and writes bar.ext
    """

    tag: str = ""
    suffix: str = ""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return indicator name."""
        pass

    @property
    def params(self) -> dict[str, int]:
        """Window/period parameters that must be positive integers."""
        return {}

    @property
    def key_params(self) -> tuple:
        """Parameters that become part of the output keys."""
        return ()

    def key(self, name: str = "") -> str:
        """Return the fully qualified key of one output sub-series."""
        return build_key(self.tag, self.key_params, name, self.suffix)

    @abstractmethod
    def compute(self, bars: "list[Bar]") -> dict[str, np.ndarray]:
        """Calculate indicator values.

        Args:
            bars: Bar sequence, oldest first

        Returns:
            Mapping of sub-series name (e.g. 'Timeline', 'K') to one value per bar
        """
        pass

    def validate(self, bars: "list[Bar]") -> None:
        """Check the bar sequence is non-empty and parameters are positive.

        Raises:
            IndicatorError: If bars is empty or a parameter is not a positive integer
        """
        if not bars:
            raise IndicatorError("Bar sequence is empty")

        for param, value in self.params.items():
            if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value <= 0:
                raise IndicatorError(
                    f"Invalid parameter {param}={value!r} for {self.name}: "
                    "must be a positive integer"
                )

    def apply(self, bars: "list[Bar]") -> IndicatorResult:
        """Compute values and write them into each bar's extension store."""
        return self._store(bars, self.compute(bars))

    def _store(self, bars: "list[Bar]", computed: dict[str, np.ndarray]) -> IndicatorResult:
        result = IndicatorResult(name=self.name, params=dict(self.params))
        for sub_name, values in computed.items():
            key = self.key(sub_name)
            for bar, value in zip(bars, values):
                bar.ext[key] = float(value)
            result.values[key] = values
        return result

    def calculate(self, bars: "list[Bar]") -> "list[Bar]":
        """Write indicator values to the bars and return the same list."""
        self.apply(bars)
        return bars

    def __call__(self, bars: "list[Bar]") -> "list[Bar]":
        """Validate input and calculate indicator.

        Args:
            bars: Bar sequence, mutated in place

        Returns:
            The same bar list with extension entries populated
        """
        self.validate(bars)
        return self.calculate(bars)
