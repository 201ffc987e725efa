"""Tests for locale-aware number rendering and interval labels."""

import pandas as pd
import pytest

from spotpricelogic import formats


@pytest.mark.parametrize(
    "value,locale,expected",
    [
        (200.0, "sv_SE", "200,00"),
        (1234.5, "sv_SE", "1 234,50"),
        (1234.5, "en_US", "1,234.50"),
        (1234.5, "de_DE", "1.234,50"),
        (0.125, "sv_SE", "0,12"),
        (7, "sv_SE", "7,00"),
        (-5.5, "sv_SE", "−5,50"),
        (-5.5, "en_GB", "-5.50"),
        (-0.001, "sv_SE", "0,00"),
    ],
)
def test_format_number(value, locale, expected):
    assert formats.format_number(value, locale) == expected


def test_format_number_decimals():
    assert formats.format_number(3.14159, "sv_SE", decimals=3) == "3,142"
    assert formats.format_number(3.6, "sv_SE", decimals=0) == "4"


@pytest.mark.parametrize("alias", ["sv-SE", "sv_SE.UTF-8", "sv"])
def test_locale_aliases(alias):
    assert formats.symbols_for(alias) == formats.LOCALE_SYMBOLS["sv_SE"]


def test_unknown_locale():
    with pytest.raises(ValueError):
        formats.format_number(1.0, "xx_XX")


def test_format_span():
    t0 = pd.Timestamp("2025-10-01 03:00", tz="Europe/Stockholm")
    assert formats.format_span(t0, t0 + pd.Timedelta(hours=1)) == "03-04"
    assert (
        formats.format_span(t0, t0 + pd.Timedelta(minutes=15), cadence_min=15)
        == "03:00-03:15"
    )
    assert formats.format_clock(t0) == "03:00"
