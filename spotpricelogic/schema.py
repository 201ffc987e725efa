from __future__ import annotations
from datetime import datetime

from pydantic import BaseModel, Field, model_validator


class FeedRecord(BaseModel):
    """One interval as published by the price feed."""

    sek_per_kwh: float = Field(alias="SEK_per_kWh")
    eur_per_kwh: float | None = Field(default=None, alias="EUR_per_kWh")
    exr: float | None = Field(default=None, alias="EXR")
    time_start: datetime
    time_end: datetime
    model_config = {"frozen": True, "populate_by_name": True}

    @model_validator(mode="after")
    def _check_interval(self) -> "FeedRecord":
        if self.time_start.tzinfo is None or self.time_end.tzinfo is None:
            raise ValueError("time_start/time_end must carry a UTC offset")
        if self.time_start >= self.time_end:
            raise ValueError(
                f"time_start {self.time_start} is not before time_end {self.time_end}"
            )
        return self


class FeedDay(BaseModel):
    records: list[FeedRecord]
