"""OHLCV bar data model and DataFrame adapters."""

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

import numpy as np
import pandas as pd

from .base_indicator import IndicatorError

OHLCV_COLUMNS = ["open", "high", "low", "close", "volume"]


@dataclass
class Bar:
    """Single OHLCV observation with an extension store for indicator outputs.

    Attributes:
        open, high, low, close: Prices
        volume: Traded volume
        ext: Computed values keyed by series key (e.g. 'MA_5_Timeline')
        time: Optional label (timestamp, date string) carried through untouched
    """
    open: float
    high: float
    low: float
    close: float
    volume: float
    ext: dict[str, Optional[float]] = field(default_factory=dict)
    time: Any = None

    def value(self, key: str) -> Optional[float]:
        """Return the computed value for key, or None if not computed."""
        return self.ext.get(key)


def column(bars: list[Bar], attr: str) -> np.ndarray:
    """Collect one OHLCV attribute of every bar as a float array."""
    return np.array([getattr(bar, attr) for bar in bars], dtype=float)


def bars_from_frame(df: pd.DataFrame) -> list[Bar]:
    """Build bars from an OHLCV DataFrame; the index becomes Bar.time.

    Raises:
        IndicatorError: If a required column is missing
    """
    missing = set(OHLCV_COLUMNS) - set(df.columns)
    if missing:
        raise IndicatorError(f"Missing required columns: {missing}")

    return [
        Bar(
            open=float(row.open),
            high=float(row.high),
            low=float(row.low),
            close=float(row.close),
            volume=float(row.volume),
            time=index,
        )
        for index, row in zip(df.index, df[OHLCV_COLUMNS].itertuples(index=False))
    ]


def bars_to_frame(bars: list[Bar], keys: Optional[Iterable[str]] = None) -> pd.DataFrame:
    """Flatten bars into a DataFrame of OHLCV plus extension-store columns.

    Args:
        bars: Bar sequence
        keys: Extension keys to export; defaults to every key seen, in first-seen order

    Returns:
        DataFrame indexed by Bar.time; keys absent from a bar become NaN
    """
    if keys is None:
        seen: dict[str, None] = {}
        for bar in bars:
            for key in bar.ext:
                seen.setdefault(key, None)
        keys = list(seen)
    else:
        keys = list(keys)

    data = {col: column(bars, col) for col in OHLCV_COLUMNS}
    for key in keys:
        data[key] = np.array(
            [np.nan if bar.ext.get(key) is None else bar.ext[key] for bar in bars],
            dtype=float,
        )
    return pd.DataFrame(data, index=[bar.time for bar in bars], columns=OHLCV_COLUMNS + keys)
