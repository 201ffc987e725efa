"""
Client for the public elprisetjustnu.se spot price API.

One GET per (date, zone): ``{base_url}/{YYYY}/{MM}-{DD}_{ZONE}.json``.
A 404 means the day has not been published yet and yields an empty frame.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Protocol

import requests

from . import exceptions, ingest
from .config import FeedConfig
from .types import PriceFrame, Zone

logger = logging.getLogger(__name__)


class PriceFeed(Protocol):
    def get_prices(self, day: date, zone: Zone) -> PriceFrame: ...


class ElprisClient:
    """
    Fetches day-ahead prices for one Swedish price zone and date.

    Provides no caching or retries; each call is one HTTP request.
    """

    def __init__(
        self,
        config: Optional[FeedConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            config: Feed settings (base URL, timeout, timezone). Defaults to FeedConfig().
            session: Optional requests session, mainly for injecting a fake in tests.
        """
        self.config = config or FeedConfig()
        self._session = session or requests.Session()
        self._owns_session = session is None

    def url_for(self, day: date, zone: Zone) -> str:
        return f"{self.config.base_url}/{day:%Y}/{day:%m-%d}_{zone.value}.json"

    def get_prices(self, day: date, zone: Zone) -> PriceFrame:
        """
        Fetch prices for ``day`` in ``zone``.

        Returns:
            PriceFrame with 24 (hourly) or 96 (quarter-hourly) rows, or an
            empty frame when the day is not published.

        Raises:
            FeedError: On transport errors, non-404 HTTP errors or a malformed payload.
        """
        url = self.url_for(day, zone)
        logger.info(f"Fetching prices for {zone.value} {day.isoformat()} from {url}")
        try:
            response = self._session.get(url, timeout=self.config.timeout_s)
        except requests.RequestException as e:
            logger.error(f"Price request failed for {url}: {e}")
            raise exceptions.FeedError(f"Price request failed: {e}") from e

        if response.status_code == 404:
            logger.warning(f"No prices published for {zone.value} {day.isoformat()}")
            return ingest.from_records([], tz=self.config.tz)

        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            logger.error(f"Price feed returned HTTP {response.status_code} for {url}")
            raise exceptions.FeedError(
                f"Price feed returned HTTP {response.status_code}"
            ) from e

        try:
            payload = response.json()
        except ValueError as e:
            raise exceptions.FeedError(f"Price feed returned invalid JSON: {e}") from e
        if not isinstance(payload, list):
            raise exceptions.FeedError(
                f"Expected a JSON list of prices, got {type(payload).__name__}"
            )

        df = ingest.from_records(payload, tz=self.config.tz)
        logger.debug(f"Received {len(df)} price intervals for {zone.value} {day.isoformat()}")
        return df

    def close(self) -> None:
        if self._owns_session:
            self._session.close()
