from __future__ import annotations
from typing import Final

INDEX_NAME: Final[str] = "t_start"
REQUIRED_COLS: Final[list[str]] = [
    "t_end",
    "sek_per_kwh",
    "eur_per_kwh",
    "exr",
    "cadence_min",
]
DEFAULT_TZ: Final[str] = "Europe/Stockholm"
DEFAULT_CADENCE_MIN: Final[int] = 60

# Entries in one quarter-hourly day
QUARTER_HOURLY_SLOTS: Final[int] = 96
QUARTERS_PER_HOUR: Final[int] = 4

# SEK -> öre
DISPLAY_FACTOR: Final[int] = 100

CHARGING_DURATIONS: Final[tuple[int, ...]] = (2, 4, 8)
DEFAULT_ZONE: Final[str] = "SE1"

FEED_BASE_URL: Final[str] = "https://www.elprisetjustnu.se/api/v1/prices"
FEED_TIMEOUT_S: Final[float] = 10.0

# Raw feed field -> canon column
FEED_FIELD_MAP: dict[str, str] = {
    "time_start": INDEX_NAME,
    "time_end": "t_end",
    "SEK_per_kWh": "sek_per_kwh",
    "EUR_per_kWh": "eur_per_kwh",
    "EXR": "exr",
}
