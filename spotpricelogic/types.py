from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Literal

import pandas as pd

from . import exceptions

Resolution = Literal["hourly", "quarter_hourly"]


class Zone(str, Enum):
    """Swedish electricity price areas."""

    SE1 = "SE1"
    SE2 = "SE2"
    SE3 = "SE3"
    SE4 = "SE4"

    @classmethod
    def parse(cls, text: str) -> "Zone":
        """Case-insensitive lookup; raises InvalidZone for anything else."""
        key = text.strip().upper()
        try:
            return cls(key)
        except ValueError:
            raise exceptions.InvalidZone(f"invalid zone: {text}") from None


# Canon DataFrame
class PriceFrame(pd.DataFrame):
    """
    Strongly-typed canonical price dataframe.

    Expected:
      - DatetimeIndex named 't_start', tz-aware, ascending
      - Columns: ['t_end', 'sek_per_kwh', 'eur_per_kwh', 'exr', 'cadence_min']
    """

    @property
    def _constructor(self):
        return PriceFrame


@dataclass(frozen=True)
class PricePoint:
    start: pd.Timestamp  # inclusive
    end: pd.Timestamp  # exclusive
    sek_per_kwh: float

    def __post_init__(self):
        exceptions.require(
            self.start < self.end,
            f"PricePoint start {self.start} must be before end {self.end}",
            exceptions.CanonError,
        )


@dataclass(frozen=True)
class PriceSpan:
    """Result of a lowest/highest lookup, price in öre."""

    start: pd.Timestamp
    end: pd.Timestamp
    price_ore: float


@dataclass(frozen=True)
class ChargingWindow:
    start_index: int
    length: int  # entries at the series' native resolution
    start: pd.Timestamp
    average_ore: float
