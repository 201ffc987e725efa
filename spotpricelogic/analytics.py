from __future__ import annotations

from typing import Literal, cast

import numpy as np
import pandas as pd
from numpy.lib.stride_tricks import sliding_window_view

from . import canon, exceptions, utils
from .types import ChargingWindow, PriceFrame, PriceSpan


def _require_prices(df: pd.DataFrame) -> None:
    if df.empty:
        raise exceptions.NoData("No prices available.")


def _to_ore(sek: float) -> float:
    return float(sek) * canon.DISPLAY_FACTOR


def hourly_buckets(df: PriceFrame) -> PriceFrame:
    """
    Collapse one quarter-hourly day (96 rows) into 24 hourly buckets.

    Bucket h covers rows [4h, 4h+3]: it starts at row 4h's t_start, ends at
    row 4h+3's t_end and is priced at the mean of its four quarters.
    """
    _require_prices(df)
    n = len(df)
    exceptions.require(
        n % canon.QUARTERS_PER_HOUR == 0,
        f"Cannot bucket {n} quarter-hour rows into whole hours.",
        exceptions.CanonError,
    )
    step = canon.QUARTERS_PER_HOUR
    grouped = df.reset_index(drop=True).groupby(np.arange(n) // step)
    return utils.build_price_frame(
        pd.DatetimeIndex(df.index[::step]),
        pd.DatetimeIndex(df["t_end"].iloc[step - 1 :: step]),
        grouped["sek_per_kwh"].mean().to_numpy(),
        eur_per_kwh=grouped["eur_per_kwh"].mean().to_numpy(),
        exr=grouped["exr"].mean().to_numpy(),
        cadence_min=60,
    )


def _extreme_frame(df: PriceFrame) -> PriceFrame:
    if utils.resolution(df) == "quarter_hourly":
        return hourly_buckets(df)
    return df


def _extreme(df: PriceFrame, which: Literal["min", "max"]) -> PriceSpan:
    _require_prices(df)
    frame = _extreme_frame(df)
    prices = frame["sek_per_kwh"].to_numpy(dtype=float)
    # argmin/argmax return the first occurrence, so ties go to the earliest interval
    pos = int(np.argmin(prices) if which == "min" else np.argmax(prices))
    return PriceSpan(
        start=cast(pd.Timestamp, frame.index[pos]),
        end=cast(pd.Timestamp, frame["t_end"].iloc[pos]),
        price_ore=_to_ore(prices[pos]),
    )


def lowest(df: PriceFrame) -> PriceSpan:
    """Cheapest hour (quarter-hourly days are judged on hourly means)."""
    return _extreme(df, "min")


def highest(df: PriceFrame) -> PriceSpan:
    """Most expensive hour (quarter-hourly days are judged on hourly means)."""
    return _extreme(df, "max")


def average(df: PriceFrame) -> float:
    """Mean of every raw interval price, in öre. Never bucketed."""
    _require_prices(df)
    prices = df["sek_per_kwh"].to_numpy(dtype=float)
    return _to_ore(prices.sum() / len(prices))


def charging_window(df: PriceFrame, hours: int) -> ChargingWindow:
    """
    Cheapest run of ``hours`` consecutive entries.

    ``hours`` counts rows at the series' own resolution, so on a
    quarter-hourly series a 2h request covers two 15-minute slots.
    The earliest start wins when several runs cost the same.
    """
    exceptions.require(
        hours in canon.CHARGING_DURATIONS,
        f"Not a valid charging time: {hours}",
        exceptions.InvalidChargingDuration,
    )
    _require_prices(df)
    prices = df["sek_per_kwh"].to_numpy(dtype=float)
    if len(prices) < hours:
        raise exceptions.InsufficientData(
            f"Only {len(prices)} prices available, {hours} needed."
        )

    sums = sliding_window_view(prices, hours).sum(axis=1)
    best = int(np.argmin(sums))
    return ChargingWindow(
        start_index=best,
        length=hours,
        start=cast(pd.Timestamp, df.index[best]),
        average_ore=_to_ore(sums[best] / hours),
    )


def sorted_prices(df: PriceFrame) -> PriceFrame:
    """Every interval, most expensive first. Returns a new frame."""
    _require_prices(df)
    return cast(PriceFrame, df.sort_values("sek_per_kwh", ascending=False))
