from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

import requests

from shop_checkin.core.result import Unavailable
from shop_checkin.network.ipinfo_client import IpInfoClient


@dataclass
class FakeResponse:
    status_code: int = 200
    body: Any = None
    raw_text: Optional[str] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        if self.raw_text is not None:
            raise ValueError("not json")
        return self.body


@dataclass
class FakeSession:
    response: Optional[FakeResponse] = None
    error: Optional[Exception] = None
    calls: list[dict] = field(default_factory=list)

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


def test_lookup_returns_payload_and_sends_token():
    session = FakeSession(response=FakeResponse(body={"ip": "1.2.3.4"}))
    client = IpInfoClient(base_url="https://ipinfo.io/", token="secret", timeout=2, session=session)

    assert client.lookup("1.2.3.4") == {"ip": "1.2.3.4"}
    assert session.calls == [{"url": "https://ipinfo.io/1.2.3.4", "params": {"token": "secret"}, "timeout": 2.0}]


def test_lookup_without_token_sends_no_params():
    session = FakeSession(response=FakeResponse(body={"ip": "1.2.3.4"}))
    IpInfoClient(session=session).lookup("1.2.3.4")

    assert session.calls[0]["params"] is None


def test_timeout_is_unavailable():
    session = FakeSession(error=requests.Timeout("slow"))

    result = IpInfoClient(session=session).lookup("1.2.3.4")

    assert isinstance(result, Unavailable)
    assert "Timeout" in result.reason


def test_connection_error_is_unavailable():
    session = FakeSession(error=requests.ConnectionError("down"))
    assert isinstance(IpInfoClient(session=session).lookup("1.2.3.4"), Unavailable)


def test_http_error_status_is_unavailable():
    session = FakeSession(response=FakeResponse(status_code=429, body={"error": "rate limited"}))

    result = IpInfoClient(session=session).lookup("1.2.3.4")

    assert result == Unavailable("http 429")


def test_invalid_json_is_unavailable():
    session = FakeSession(response=FakeResponse(raw_text="<html>"))
    assert IpInfoClient(session=session).lookup("1.2.3.4") == Unavailable("invalid json")


def test_non_object_payload_is_unavailable():
    session = FakeSession(response=FakeResponse(body=["1.2.3.4"]))
    assert IpInfoClient(session=session).lookup("1.2.3.4") == Unavailable("unexpected payload")
