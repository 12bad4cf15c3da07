"""Unified indicator calculator for batch processing."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import pandas as pd

from ..utils.config import Config
from ..utils.logger import get_logger
from .algorithm import handle_algorithm
from .bar import Bar, bars_from_frame, bars_to_frame
from .base_indicator import BaseIndicator, IndicatorError
from .momentum_indicators import KDJIndicator
from .trend_indicators import (
    TimelineIndicator,
    MAIndicator,
    EMAIndicator,
    MACDIndicator,
    BOLLIndicator,
)

logger = get_logger(__name__)


@dataclass
class IndicatorConfig:
    """Configuration for indicator calculation.

    All period/param fields are lists to support multiple parameter sets.
    E.g., ma_periods=[5, 20] will produce MA_5_* and MA_20_* keys.
    """
    timeline: bool = True
    ma_periods: list[int] = field(default_factory=lambda: [5, 10, 20])
    ema_periods: list[int] = field(default_factory=lambda: [12, 26])
    kdj_params_list: list[tuple[int, int, int]] = field(
        default_factory=lambda: [(9, 3, 3)]
    )
    macd_params_list: list[tuple[int, int, int]] = field(
        default_factory=lambda: [(12, 26, 9)]
    )
    boll_params_list: list[tuple[int, float]] = field(
        default_factory=lambda: [(20, 2)]
    )
    suffix: str = ""
    # Registered external indicators: name → list of param dicts
    extended: Dict[str, List[Dict[str, Any]]] = field(default_factory=dict)

    @staticmethod
    def from_config(config: Config, section: str = "indicators") -> "IndicatorConfig":
        """Build config from a YAML section.

        Example section:
            indicators:
              ma_periods: [5, 10]
              macd_params_list: [[12, 26, 9]]
              extended:
                my_indicator: [{window: 3}]

        Missing entries keep their defaults.
        """
        data = config.section(section)
        defaults = IndicatorConfig()

        def tuples(key: str, default: list) -> list:
            return [tuple(p) for p in data.get(key, default)]

        return IndicatorConfig(
            timeline=bool(data.get("timeline", defaults.timeline)),
            ma_periods=list(data.get("ma_periods", defaults.ma_periods)),
            ema_periods=list(data.get("ema_periods", defaults.ema_periods)),
            kdj_params_list=tuples("kdj_params_list", defaults.kdj_params_list),
            macd_params_list=tuples("macd_params_list", defaults.macd_params_list),
            boll_params_list=tuples("boll_params_list", defaults.boll_params_list),
            suffix=str(data.get("suffix", defaults.suffix) or ""),
            extended=dict(data.get("extended") or {}),
        )

    def _suffixes(self, params_list: list[tuple]) -> list[str]:
        """Suffix per parameter set; with several sets each one carries its parameters."""
        if len(params_list) <= 1:
            return [self.suffix] * len(params_list)
        return [
            "_".join(str(p) for p in (self.suffix, *params) if str(p))
            for params in params_list
        ]

    def algorithms(self, families: Optional[List[str]] = None) -> list[BaseIndicator]:
        """Expand the configuration into the ordered list of indicator variants.

        KDJ, MACD and BOLL keys do not contain their parameters, so when one
        of them has several parameter sets each set is suffixed with its
        parameters (e.g. MACD_DIF_12_26_9, MACD_DIF_5_10_3).

        Args:
            families: Built-in family names to include (default: all)
        """
        families = [f.lower() for f in families or IndicatorCalculator.AVAILABLE_INDICATORS]
        suffix = self.suffix
        algorithms: list[BaseIndicator] = []

        for family in families:
            if family == "timeline":
                if self.timeline:
                    algorithms.append(TimelineIndicator(suffix=suffix))
            elif family == "ma":
                algorithms.extend(MAIndicator(p, suffix=suffix) for p in self.ma_periods)
            elif family == "ema":
                algorithms.extend(EMAIndicator(p, suffix=suffix) for p in self.ema_periods)
            elif family == "kdj":
                algorithms.extend(
                    KDJIndicator(*params, suffix=s)
                    for params, s in zip(self.kdj_params_list, self._suffixes(self.kdj_params_list))
                )
            elif family == "macd":
                algorithms.extend(
                    MACDIndicator(*params, suffix=s)
                    for params, s in zip(self.macd_params_list, self._suffixes(self.macd_params_list))
                )
            elif family == "boll":
                algorithms.extend(
                    BOLLIndicator(*params, suffix=s)
                    for params, s in zip(self.boll_params_list, self._suffixes(self.boll_params_list))
                )
            else:
                raise IndicatorError(f"Unknown indicator family: {family}")

        return algorithms


class IndicatorCalculator:
    """Unified calculator for all technical indicators.

    Applies indicator variants in order and leaves results on each bar:
      Timeline_Timeline, MA_5_Timeline, EMA_12_Volume, KDJ_K, MACD_DIF, BOLL_UP, etc.
    """

    AVAILABLE_INDICATORS = ["timeline", "ma", "ema", "kdj", "macd", "boll"]

    # External indicators: name → factory(**params) returning a BaseIndicator
    _registry: Dict[str, Callable[..., BaseIndicator]] = {}

    def __init__(self, config: Optional[IndicatorConfig] = None):
        self.config = config or IndicatorConfig()

    @classmethod
    def register(cls, name: str, factory: Callable[..., BaseIndicator]) -> None:
        """Register an external indicator factory under a family name."""
        key = name.lower()
        if key in cls.AVAILABLE_INDICATORS:
            raise IndicatorError(f"Cannot override built-in indicator: {name}")
        cls._registry[key] = factory
        logger.debug(f"Registered external indicator '{key}'")

    @classmethod
    def unregister(cls, name: str) -> None:
        cls._registry.pop(name.lower(), None)

    def get_indicator_names(self) -> list[str]:
        return self.AVAILABLE_INDICATORS + sorted(self._registry)

    def run(
        self,
        bars: list[Bar],
        algorithms: Optional[List[BaseIndicator]] = None,
    ) -> list[Bar]:
        """Apply algorithms (default: the configured ones) to bars in order.

        Raises:
            IndicatorError: If bars is empty or a parameter is invalid
        """
        if algorithms is None:
            algorithms = self.config.algorithms() + self._extended_algorithms(
                self.config.extended
            )

        for algorithm in algorithms:
            try:
                handle_algorithm(algorithm, bars)
            except IndicatorError as e:
                logger.warning(f"{algorithm.name} rejected: {e}")
                raise
            logger.debug(f"Computed {algorithm.name} over {len(bars)} bars")

        logger.info(f"Computed {len(algorithms)} indicators over {len(bars)} bars")
        return bars

    def calculate_all(self, df: pd.DataFrame) -> pd.DataFrame:
        bars = self.run(bars_from_frame(df))
        return bars_to_frame(bars)

    def calculate_subset(
        self,
        df: pd.DataFrame,
        indicators: list[str]
    ) -> pd.DataFrame:
        names = [name.lower() for name in indicators]
        extended = {key.lower(): value for key, value in self.config.extended.items()}

        builtin = [name for name in names if name in self.AVAILABLE_INDICATORS]
        algorithms = self.config.algorithms(builtin) if builtin else []

        for name in names:
            if name in self.AVAILABLE_INDICATORS:
                continue
            if name not in self._registry:
                raise IndicatorError(f"Unknown indicator: {name}")
            param_sets = extended.get(name) or [{}]
            algorithms.extend(self._extended_algorithms({name: param_sets}))

        bars = self.run(bars_from_frame(df), algorithms)
        return bars_to_frame(bars)

    def _extended_algorithms(
        self, extended: Dict[str, List[Dict[str, Any]]]
    ) -> list[BaseIndicator]:
        """Instantiate registered external indicators for each param set."""
        algorithms = []
        for name, param_sets in extended.items():
            factory = self._registry.get(name.lower())
            if factory is None:
                raise IndicatorError(f"Unknown indicator: {name}")
            for params in param_sets or [{}]:
                algorithms.append(factory(**(params or {})))
        return algorithms
