from __future__ import annotations

from dataclasses import dataclass
from typing import Final

import pandas as pd


@dataclass(frozen=True)
class NumberSymbols:
    decimal: str
    group: str
    minus: str = "-"


# CLDR-style symbols for the locales we render
LOCALE_SYMBOLS: Final[dict[str, NumberSymbols]] = {
    "sv_SE": NumberSymbols(decimal=",", group="\u00a0", minus="\u2212"),
    "nb_NO": NumberSymbols(decimal=",", group="\u00a0", minus="\u2212"),
    "fi_FI": NumberSymbols(decimal=",", group="\u00a0", minus="\u2212"),
    "da_DK": NumberSymbols(decimal=",", group="."),
    "de_DE": NumberSymbols(decimal=",", group="."),
    "en_GB": NumberSymbols(decimal=".", group=","),
    "en_US": NumberSymbols(decimal=".", group=","),
}


def symbols_for(locale: str) -> NumberSymbols:
    """Look up number symbols; 'sv-SE', 'sv_SE.UTF-8' and 'sv' all resolve to sv_SE."""
    key = locale.split(".")[0].replace("-", "_")
    if key in LOCALE_SYMBOLS:
        return LOCALE_SYMBOLS[key]
    lang = key.split("_")[0].lower()
    for name, sym in LOCALE_SYMBOLS.items():
        if name.split("_")[0] == lang:
            return sym
    raise ValueError(f"Unsupported locale: {locale!r}")


def format_number(value: float, locale: str = "sv_SE", decimals: int = 2) -> str:
    """
    Render ``value`` with exactly ``decimals`` fraction digits and the
    locale's decimal and grouping separators, e.g. 1234.5 -> '1 234,50' (sv_SE).
    """
    sym = symbols_for(locale)
    text = f"{abs(value):,.{decimals}f}"
    int_part, _, frac = text.partition(".")
    int_part = int_part.replace(",", sym.group)
    out = f"{int_part}{sym.decimal}{frac}" if decimals > 0 else int_part
    # no sign on values that round to zero
    if value < 0 and float(text.replace(",", "")) != 0:
        out = sym.minus + out
    return out


def format_hour(ts: pd.Timestamp) -> str:
    return ts.strftime("%H")


def format_clock(ts: pd.Timestamp) -> str:
    return ts.strftime("%H:%M")


def format_span(start: pd.Timestamp, end: pd.Timestamp, cadence_min: int = 60) -> str:
    """'HH-HH' for whole hours, 'HH:MM-HH:MM' for finer intervals."""
    if cadence_min >= 60:
        return f"{format_hour(start)}-{format_hour(end)}"
    return f"{format_clock(start)}-{format_clock(end)}"
