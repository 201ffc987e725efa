"""Tests for the HTTP price feed client, with the session faked out."""

from datetime import date

import pytest
import requests

from spotpricelogic import exceptions
from spotpricelogic.config import FeedConfig
from spotpricelogic.feed import ElprisClient
from spotpricelogic.types import Zone


class FauxResponse:
    def __init__(self, status_code=200, payload=None, bad_json=False):
        self.status_code = status_code
        self._payload = payload
        self._bad_json = bad_json

    def json(self):
        if self._bad_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FauxSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []
        self.closed = False

    def get(self, url, timeout=None):
        self.requests.append((url, timeout))
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


def test_url_format():
    client = ElprisClient(session=FauxSession())
    url = client.url_for(date(2025, 3, 7), Zone.SE3)
    assert url == "https://www.elprisetjustnu.se/api/v1/prices/2025/03-07_SE3.json"


def test_hourly_payload_parsed(records):
    session = FauxSession(FauxResponse(payload=records()))
    client = ElprisClient(FeedConfig(timeout_s=3.0), session=session)
    df = client.get_prices(date(2025, 10, 1), Zone.SE1)
    assert len(df) == 24
    assert (df["cadence_min"] == 60).all()
    assert str(df.index.tz) == "Europe/Stockholm"
    assert df.index[0].hour == 0
    assert session.requests[0][1] == 3.0


def test_quarter_hour_payload_parsed(records):
    session = FauxSession(FauxResponse(payload=records(minutes=15)))
    df = ElprisClient(session=session).get_prices(date(2025, 10, 1), Zone.SE4)
    assert len(df) == 96
    assert (df["cadence_min"] == 15).all()


def test_not_published_returns_empty():
    session = FauxSession(FauxResponse(status_code=404))
    df = ElprisClient(session=session).get_prices(date(2025, 10, 2), Zone.SE2)
    assert df.empty


def test_server_error_raises():
    session = FauxSession(FauxResponse(status_code=503))
    with pytest.raises(exceptions.FeedError):
        ElprisClient(session=session).get_prices(date(2025, 10, 1), Zone.SE2)


def test_transport_error_raises():
    session = FauxSession(error=requests.ConnectionError("connection refused"))
    with pytest.raises(exceptions.FeedError):
        ElprisClient(session=session).get_prices(date(2025, 10, 1), Zone.SE2)


def test_invalid_json_raises():
    session = FauxSession(FauxResponse(bad_json=True))
    with pytest.raises(exceptions.FeedError):
        ElprisClient(session=session).get_prices(date(2025, 10, 1), Zone.SE2)


def test_non_list_payload_raises():
    session = FauxSession(FauxResponse(payload={"error": "nope"}))
    with pytest.raises(exceptions.FeedError):
        ElprisClient(session=session).get_prices(date(2025, 10, 1), Zone.SE2)


def test_injected_session_not_closed():
    session = FauxSession()
    ElprisClient(session=session).close()
    assert session.closed is False


def test_owned_session_closed(monkeypatch):
    created = []

    def _session():
        s = FauxSession()
        created.append(s)
        return s

    monkeypatch.setattr(requests, "Session", _session)
    ElprisClient().close()
    assert created and created[0].closed is True
