"""Series kernels shared by the indicators.

Windowed kernels shrink the window at the start of the series: position i
aggregates over max(0, i + 1 - period)..i, so every position has a value.
"""

import numpy as np
import pandas as pd


def _rolling(values, period: int):
    return pd.Series(np.asarray(values, dtype=np.float64)).rolling(period, min_periods=1)


def rolling_mean(values, period: int) -> np.ndarray:
    """Trailing mean over at most `period` values."""
    return _rolling(values, period).mean().to_numpy()


def rolling_std(values, period: int) -> np.ndarray:
    """Trailing population standard deviation over at most `period` values."""
    return _rolling(values, period).std(ddof=0).to_numpy()


def highest(values, period: int) -> np.ndarray:
    return _rolling(values, period).max().to_numpy()


def lowest(values, period: int) -> np.ndarray:
    return _rolling(values, period).min().to_numpy()


def ema(values, period: int, seed=None) -> np.ndarray:
    """Exponential moving average, EMA[i] = EMA[i-1] + (x[i] - EMA[i-1]) * 2 / (period + 1).

    Args:
        values: Input series
        period: Smoothing period
        seed: Value standing in for EMA[-1]; when None, EMA[0] is the first observation

    Returns:
        EMA series, same length as values
    """
    arr = np.asarray(values, dtype=np.float64)
    if seed is None:
        return pd.Series(arr).ewm(span=period, adjust=False).mean().to_numpy()

    seeded = pd.Series(np.concatenate(([float(seed)], arr)))
    return seeded.ewm(span=period, adjust=False).mean().to_numpy()[1:]


def rsv(high, low, close, period: int) -> np.ndarray:
    """Raw stochastic value: (C - L) / (H - L) * 100 over the trailing period, 0 when H == L."""
    close = np.asarray(close, dtype=np.float64)
    h = highest(high, period)
    l = lowest(low, period)
    spread = h - l

    result = np.zeros_like(close)
    np.divide((close - l) * 100, spread, out=result, where=spread != 0)
    return result


def kdj(rsv_values, seed: float = 50.0) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """K, D, J lines from an RSV series.

    K[i] = (2 * K[i-1] + RSV[i]) / 3, D[i] = (2 * D[i-1] + K[i]) / 3,
    J[i] = 3 * K[i] - 2 * D[i], with K[-1] = D[-1] = seed.
    """
    arr = np.asarray(rsv_values, dtype=np.float64)
    k = np.empty_like(arr)
    d = np.empty_like(arr)

    prev_k = prev_d = seed
    for i in range(len(arr)):
        k[i] = (2 * prev_k + arr[i]) / 3
        d[i] = (2 * prev_d + k[i]) / 3
        prev_k, prev_d = k[i], d[i]

    return k, d, 3 * k - 2 * d
