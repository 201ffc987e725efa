from datetime import date

import pandas as pd
import pytest

from spotpricelogic import utils

TZ = "Europe/Stockholm"


def _make_frame(prices, start="2025-10-01", minutes=60, tz=TZ):
    if len(prices) == 0:
        return utils.empty_price_frame(tz)
    idx = pd.date_range(start, periods=len(prices), freq=f"{minutes}min", tz=tz)
    return utils.build_price_frame(
        idx, idx + pd.Timedelta(minutes=minutes), prices, cadence_min=minutes
    )


class FakeFeed:
    """In-memory price feed keyed by date; records every request."""

    def __init__(self, frames=None):
        self.frames = frames or {}
        self.calls = []

    def get_prices(self, day, zone):
        self.calls.append((day, zone))
        return self.frames.get(day, utils.empty_price_frame(TZ))


@pytest.fixture
def make_frame():
    return _make_frame


@pytest.fixture
def fake_feed():
    return FakeFeed


@pytest.fixture
def hourly_rng():
    return pd.date_range("2025-10-01", periods=24, freq="1h", tz=TZ)


@pytest.fixture
def quarter_rng():
    return pd.date_range("2025-10-01", periods=96, freq="15min", tz=TZ)


@pytest.fixture
def today():
    return date(2025, 10, 1)


@pytest.fixture
def hourly_day():
    # flat 1.0 SEK/kWh with a cheap 03-04 and an expensive 18-19
    prices = [1.0] * 24
    prices[3] = 0.25
    prices[18] = 1.75
    return _make_frame(prices)


def feed_records(day="2025-10-01", hours=24, minutes=60, price=0.5, offset="+02:00"):
    """Raw records shaped like the price API's JSON."""
    start = pd.Timestamp(f"{day}T00:00:00{offset}")
    out = []
    for i in range(hours * 60 // minutes):
        t0 = start + pd.Timedelta(minutes=i * minutes)
        t1 = t0 + pd.Timedelta(minutes=minutes)
        out.append(
            {
                "SEK_per_kWh": price + i / 1000,
                "EUR_per_kWh": (price + i / 1000) / 11,
                "EXR": 11.0,
                "time_start": t0.isoformat(),
                "time_end": t1.isoformat(),
            }
        )
    return out


@pytest.fixture
def records():
    return feed_records
