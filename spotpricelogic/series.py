from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Optional

import pandas as pd

from . import canon, exceptions, utils, validate
from .feed import PriceFeed
from .types import PriceFrame, Zone

logger = logging.getLogger(__name__)

LOOKAHEAD = pd.Timedelta(hours=24)


def fetch_day(feed: PriceFeed, zone: Zone, day: date) -> PriceFrame:
    """Fetch one day's prices; raises DataUnavailable when the feed has none."""
    df = feed.get_prices(day, zone)
    if df.empty:
        raise exceptions.DataUnavailable(
            f"No prices available for {zone.value} on {day.isoformat()}"
        )
    return df


def filter_window(
    df: PriceFrame, start: pd.Timestamp, end: pd.Timestamp
) -> PriceFrame:
    """
    Keep intervals that still matter between ``start`` and ``end``:
    t_end not before ``start`` and t_start not after ``end``.
    """
    if df.empty:
        return df
    idx = pd.DatetimeIndex(df.index)
    t_end = pd.DatetimeIndex(df["t_end"])
    mask = (t_end >= start) & (idx <= end)
    return df.loc[mask]


def build_series(
    feed: PriceFeed,
    zone: Zone,
    day: date,
    *,
    now_relative: bool = False,
    now: Optional[pd.Timestamp] = None,
    tz: str = canon.DEFAULT_TZ,
) -> PriceFrame:
    """
    Concatenate ``day`` and the following day into one chronological series.

    With ``now_relative`` each day is first trimmed to the rolling window
    [now, now + 24h]. Missing prices for the reference day raise
    DataUnavailable; missing prices for the following day only shorten the
    series, since they are published in the early afternoon.
    """
    window: Optional[tuple[pd.Timestamp, pd.Timestamp]] = None
    if now_relative:
        now = pd.Timestamp.now(tz=tz) if now is None else pd.Timestamp(now)
        if now.tzinfo is None:
            now = now.tz_localize(tz)
        window = (now, now + LOOKAHEAD)

    frames: list[PriceFrame] = []
    for offset in (0, 1):
        target = day + timedelta(days=offset)
        try:
            df = fetch_day(feed, zone, target)
        except exceptions.DataUnavailable:
            if offset == 0:
                raise
            logger.warning(
                f"Prices for {zone.value} {target.isoformat()} not yet published; "
                "continuing with the reference day only"
            )
            continue
        if window is not None:
            df = filter_window(df, *window)
        frames.append(df)

    out = utils.concat_frames(frames, tz)
    validate.assert_canon(out)
    logger.debug(f"Built series of {len(out)} intervals for {zone.value} from {day.isoformat()}")
    return out
