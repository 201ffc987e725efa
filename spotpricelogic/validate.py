from __future__ import annotations
import pandas as pd
from typing import cast

from . import canon, exceptions


def assert_canon(df: pd.DataFrame) -> None:
    if df.index.name != canon.INDEX_NAME:
        raise exceptions.CanonError(f"Index must be '{canon.INDEX_NAME}'.")
    tz_index = cast(pd.DatetimeIndex, df.index)
    if tz_index.tz is None:
        raise exceptions.CanonError("Index must be tz-aware.")
    for col in canon.REQUIRED_COLS:
        if col not in df.columns:
            raise exceptions.CanonError(f"Missing required column '{col}'.")
    if df.empty:
        return
    if not df.index.is_monotonic_increasing:
        raise exceptions.CanonError("Index must be sorted ascending.")
    if df.index.has_duplicates:
        raise exceptions.CanonError("Duplicate interval start times detected.")
    t_end = pd.DatetimeIndex(df["t_end"])
    if (t_end <= tz_index).any():
        raise exceptions.CanonError("Every interval must end after it starts.")
    # next interval may not start before the previous one ends
    if (tz_index[1:] < t_end[:-1]).any():
        raise exceptions.CanonError("Overlapping intervals detected.")


def assert_contiguous(df: pd.DataFrame) -> None:
    """Each interval must start exactly where the previous one ended."""
    assert_canon(df)
    if len(df) < 2:
        return
    idx = pd.DatetimeIndex(df.index)
    t_end = pd.DatetimeIndex(df["t_end"])
    gaps = idx[1:] != t_end[:-1]
    if gaps.any():
        first = idx[1:][gaps][0]
        raise exceptions.CanonError(f"Gap in price series before {first.isoformat()}.")


def assert_uniform_cadence(df: pd.DataFrame) -> None:
    if df.empty:
        return
    cadences = df["cadence_min"].unique()
    if len(cadences) > 1:
        raise exceptions.CanonError(
            "Mixed resolution within a single price series: "
            + ", ".join(str(int(c)) for c in sorted(cadences))
            + " minutes."
        )
