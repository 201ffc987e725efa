from __future__ import annotations
from typing import Any, Iterable, Mapping

import pandas as pd
from pydantic import ValidationError

from . import canon, exceptions, utils, validate
from .schema import FeedDay
from .types import PriceFrame, PricePoint


def _auto_rename(df: pd.DataFrame) -> pd.DataFrame:
    new = df.rename(columns=canon.FEED_FIELD_MAP)

    # 1) If index is already datetime-like, just name it t_start
    if isinstance(new.index, pd.DatetimeIndex):
        new.index.name = canon.INDEX_NAME
    # 2) Otherwise the start column becomes the index
    elif canon.INDEX_NAME in new.columns:
        new = new.set_index(canon.INDEX_NAME)
    else:
        raise ValueError(
            "No interval start column found and index is not datetime. "
            "Expected 't_start' or 'time_start'."
        )
    return new


def from_dataframe(df: pd.DataFrame, *, tz: str = canon.DEFAULT_TZ) -> PriceFrame:
    """
    Parse a provided DataFrame with feed-like or canon-like columns
    and normalise to canon:
      - index: tz-aware 't_start'
      - columns: t_end, sek_per_kwh, eur_per_kwh, exr, cadence_min
    """
    if df.empty:
        return utils.empty_price_frame(tz)

    df = _auto_rename(df)
    for col in ("t_end", "sek_per_kwh"):
        if col not in df.columns:
            raise ValueError(f"Missing required column: {col}")

    t_start = utils.safe_localize_series(df.index, tz)
    t_end = utils.safe_localize_series(df["t_end"].reset_index(drop=True), tz)

    out = utils.build_price_frame(
        pd.DatetimeIndex(t_start),
        pd.DatetimeIndex(t_end),
        df["sek_per_kwh"].to_numpy(dtype=float),
        eur_per_kwh=(
            df["eur_per_kwh"].to_numpy(dtype=float) if "eur_per_kwh" in df.columns else None
        ),
        exr=df["exr"].to_numpy(dtype=float) if "exr" in df.columns else None,
    )
    validate.assert_canon(out)
    return out


def from_records(
    records: Iterable[Mapping[str, Any]], *, tz: str = canon.DEFAULT_TZ
) -> PriceFrame:
    """
    Parse raw feed records (the decoded JSON list) into a PriceFrame.

    Each record is validated as a FeedRecord; malformed payloads raise FeedError.
    """
    try:
        day = FeedDay(records=list(records))
    except ValidationError as e:
        raise exceptions.FeedError(f"Malformed price payload: {e}") from e

    if not day.records:
        return utils.empty_price_frame(tz)

    t_start = utils.safe_localize_series(
        pd.Series([r.time_start for r in day.records]), tz
    )
    t_end = utils.safe_localize_series(pd.Series([r.time_end for r in day.records]), tz)
    widths = (t_end - t_start).dt.total_seconds() / 60.0

    out = utils.build_price_frame(
        pd.DatetimeIndex(t_start),
        pd.DatetimeIndex(t_end),
        [r.sek_per_kwh for r in day.records],
        eur_per_kwh=[
            float("nan") if r.eur_per_kwh is None else r.eur_per_kwh for r in day.records
        ],
        exr=[float("nan") if r.exr is None else r.exr for r in day.records],
        cadence_min=int(round(widths.median())),
    )
    try:
        validate.assert_canon(out)
    except exceptions.CanonError as e:
        raise exceptions.FeedError(f"Inconsistent price payload: {e}") from e
    return out


def to_points(df: pd.DataFrame) -> list[PricePoint]:
    """Expand a price frame into immutable PricePoint records."""
    return [
        PricePoint(start=ts, end=end, sek_per_kwh=float(price))
        for ts, end, price in zip(df.index, df["t_end"], df["sek_per_kwh"])
    ]
