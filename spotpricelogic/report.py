from __future__ import annotations

from typing import Callable, Optional

import pandas as pd

from . import analytics, canon, exceptions, formats, utils, validate
from .config import FormatConfig
from .types import PriceFrame

NO_PRICES = "Inga priser tillgängliga."

USAGE = [
    "Usage:",
    "--zone SE1/SE2/SE3/SE4",
    "--date YYYY-MM-DD",
    "--sorted prints a sorted list",
    "--charging 2h/4h/8h/",
]


def _cadence(df: pd.DataFrame) -> int:
    validate.assert_uniform_cadence(df)
    if df.empty:
        return canon.DEFAULT_CADENCE_MIN
    return utils.infer_cadence_minutes(
        pd.DatetimeIndex(df.index), default=int(df["cadence_min"].iloc[0])
    )


def _span_label(start: pd.Timestamp, end: pd.Timestamp) -> str:
    # bucketed quarter-hour days yield 60-minute spans
    minutes = int((end - start) / pd.Timedelta(minutes=1))
    return formats.format_span(start, end, minutes)


def _price(value: float, fmt: FormatConfig) -> str:
    return formats.format_number(value, fmt.locale, fmt.decimals)


def lowest_lines(df: PriceFrame, fmt: FormatConfig) -> list[str]:
    span = analytics.lowest(df)
    return [
        f"Lägsta pris: {_span_label(span.start, span.end)} {_price(span.price_ore, fmt)} öre"
    ]


def highest_lines(df: PriceFrame, fmt: FormatConfig) -> list[str]:
    span = analytics.highest(df)
    return [
        f"Högsta pris: {_span_label(span.start, span.end)} {_price(span.price_ore, fmt)} öre"
    ]


def average_lines(df: PriceFrame, fmt: FormatConfig) -> list[str]:
    return [f"Medelpris: {_price(analytics.average(df), fmt)} öre"]


def sorted_lines(df: PriceFrame, fmt: FormatConfig) -> list[str]:
    ordered = analytics.sorted_prices(df)
    cadence = _cadence(df)
    return [
        f"{formats.format_span(ts, end, cadence)} {_price(price * canon.DISPLAY_FACTOR, fmt)} öre"
        for ts, end, price in zip(ordered.index, ordered["t_end"], ordered["sek_per_kwh"])
    ]


def charging_lines(df: PriceFrame, hours: int, fmt: FormatConfig) -> list[str]:
    try:
        window = analytics.charging_window(df, hours)
    except exceptions.InsufficientData:
        return [f"För få priser för {hours} timmars laddning."]
    return [
        f"Påbörja laddning kl {formats.format_clock(window.start)} för {hours} timmars laddning",
        f"Medelpris för fönster: {_price(window.average_ore, fmt)} öre",
    ]


def _guarded(render: Callable[[], list[str]]) -> list[str]:
    # each section reports an empty series on its own
    try:
        return render()
    except exceptions.NoData:
        return [NO_PRICES]


def render(
    df: PriceFrame,
    *,
    charging: Optional[int] = None,
    sorted_: bool = False,
    fmt: Optional[FormatConfig] = None,
) -> list[str]:
    """
    Report lines for one run: the charging window if requested, otherwise
    the sorted listing if requested, otherwise lowest, highest and average.
    """
    fmt = fmt or FormatConfig()
    if charging:
        return _guarded(lambda: charging_lines(df, charging, fmt))
    if sorted_:
        return _guarded(lambda: sorted_lines(df, fmt))
    return [
        *_guarded(lambda: lowest_lines(df, fmt)),
        *_guarded(lambda: highest_lines(df, fmt)),
        *_guarded(lambda: average_lines(df, fmt)),
    ]
