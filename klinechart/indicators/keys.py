"""Series key naming for indicator outputs stored on bars."""

from typing import Iterable


class SeriesKey:
    """Key tags shared by indicators and the chart layer."""
    CANDLE = "Candle"
    TIMELINE = "Timeline"
    VOLUME = "Volume"
    MA = "MA"
    EMA = "EMA"
    KDJ = "KDJ"
    MACD = "MACD"
    BOLL = "BOLL"


def build_key(tag: str, params: Iterable = (), name: str = "", suffix: str = "") -> str:
    """Compose a fully qualified extension-store key.

    Non-empty parts are joined with '_' in the order tag, params, name, suffix.

    Examples:
        build_key("MA", (5,), "Timeline")      -> "MA_5_Timeline"
        build_key("KDJ", (), "K")              -> "KDJ_K"
        build_key("MA", (5,), "Volume", "sub") -> "MA_5_Volume_sub"
    """
    parts = [tag]
    parts.extend(str(p) for p in params)
    parts.append(name)
    parts.append(suffix)
    return "_".join(p for p in parts if p)


def moving_average_keys(
    periods: Iterable[int],
    value_key: str = SeriesKey.TIMELINE,
    is_ema: bool = False,
    suffix: str = "",
) -> list[str]:
    """Return the MA (or EMA) key of each period for a price or volume line."""
    tag = SeriesKey.EMA if is_ema else SeriesKey.MA
    return [build_key(tag, (n,), value_key, suffix) for n in periods]
