# spotpricelogic/utils.py
from __future__ import annotations
import numpy as np
import pandas as pd
from zoneinfo import ZoneInfo
from typing import cast

from . import canon
from .types import PriceFrame, Resolution


def safe_localize_series(ts: pd.Series | pd.Index, tz: str) -> pd.Series:
    """
    Parse timestamps into a tz-aware Series in ``tz``.

    Offset-carrying input (which may mix +01:00/+02:00 across a DST switch)
    is parsed via UTC; naive input is taken as wall-clock time in ``tz``.
    """
    s = pd.Series(ts)
    present = s.dropna()
    aware = (
        not present.empty and pd.Timestamp(present.iloc[0]).tzinfo is not None
    )
    if aware:
        return pd.to_datetime(s, errors="coerce", utc=True).dt.tz_convert(ZoneInfo(tz))
    return pd.to_datetime(s, errors="coerce").dt.tz_localize(
        ZoneInfo(tz), ambiguous="infer", nonexistent="shift_forward"
    )


def infer_cadence_minutes(
    idx: pd.DatetimeIndex, default: int = canon.DEFAULT_CADENCE_MIN
) -> int:
    """
    Infer cadence in minutes from a DatetimeIndex, ignoring duplicate timestamps.
    """
    ts = pd.DatetimeIndex(idx).sort_values().unique()
    if len(ts) < 2:
        return int(default)

    diffs = ts[1:] - ts[:-1]
    diffs_min = (diffs / np.timedelta64(1, "s")).to_numpy(dtype=float) / 60.0
    diffs_min = diffs_min[diffs_min > 0]
    if len(diffs_min) == 0:
        return int(default)

    rounded = np.rint(diffs_min).astype(int)
    vals, counts = np.unique(rounded, return_counts=True)
    return int(vals[np.argmax(counts)])


def resolution(df: pd.DataFrame) -> Resolution:
    """A frame of exactly 96 entries is one quarter-hourly day; anything else is hourly."""
    if len(df) == canon.QUARTER_HOURLY_SLOTS:
        return "quarter_hourly"
    return "hourly"


def build_price_frame(
    t_start: pd.DatetimeIndex | pd.Series,
    t_end: pd.DatetimeIndex | pd.Series,
    sek_per_kwh: np.ndarray | pd.Series | list[float],
    *,
    eur_per_kwh: np.ndarray | pd.Series | list[float] | None = None,
    exr: np.ndarray | pd.Series | list[float] | None = None,
    cadence_min: int | None = None,
) -> PriceFrame:
    idx = pd.DatetimeIndex(t_start, name=canon.INDEX_NAME)
    n = len(idx)
    if cadence_min is None:
        cadence_min = infer_cadence_minutes(idx)
    df = pd.DataFrame(
        {
            "t_end": pd.DatetimeIndex(t_end).array,
            "sek_per_kwh": np.asarray(sek_per_kwh, dtype=float),
            "eur_per_kwh": (
                np.full(n, np.nan)
                if eur_per_kwh is None
                else np.asarray(eur_per_kwh, dtype=float)
            ),
            "exr": np.full(n, np.nan) if exr is None else np.asarray(exr, dtype=float),
            "cadence_min": int(cadence_min),
        },
        index=idx,
    )
    out = df.sort_index()
    out.__class__ = PriceFrame
    return cast(PriceFrame, out)


def empty_price_frame(tz: str = canon.DEFAULT_TZ) -> PriceFrame:
    """
    Return an empty PriceFrame with the correct tz-aware index and required columns.
    """
    idx = pd.DatetimeIndex([], tz=ZoneInfo(tz), name=canon.INDEX_NAME)
    out = pd.DataFrame(
        {
            "t_end": pd.DatetimeIndex([], tz=ZoneInfo(tz)).array,
            "sek_per_kwh": np.array([], dtype=float),
            "eur_per_kwh": np.array([], dtype=float),
            "exr": np.array([], dtype=float),
            "cadence_min": np.array([], dtype=int),
        },
        index=idx,
    )
    out.__class__ = PriceFrame
    return cast(PriceFrame, out)


def concat_frames(frames: list[pd.DataFrame], tz: str = canon.DEFAULT_TZ) -> PriceFrame:
    """Concatenate per-day frames in chronological order, skipping empties."""
    parts = [f for f in frames if not f.empty]
    if not parts:
        return empty_price_frame(tz)
    out = pd.concat(parts, axis=0).sort_index()
    out.__class__ = PriceFrame
    return cast(PriceFrame, out)
