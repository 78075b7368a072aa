from __future__ import annotations

import base64
from datetime import datetime, timezone
from typing import Any, Callable
from urllib.parse import parse_qsl, urlsplit

import pytest
import requests
from requests.adapters import HTTPAdapter

from ykotp.common.crypto import CryptoUtils

# From the protocol test vectors; not a real YubiCloud key.
TEST_SECRET_KEY = "mG5be6ZJU1qBGz24yPh/ESM3UdU="
TEST_OTP = "vvungrrdhvtklknvrtvuvbbkeidikkvgglrvdgrfcdft"


def format_t(when: datetime) -> str:
    """Format a time the way the validation server does."""
    when = when.astimezone(timezone.utc)
    return when.strftime("%Y-%m-%dT%H:%M:%SZ") + f"{when.microsecond // 1000:04d}"


def make_body(
    request_params: dict[str, str],
    status: str = "OK",
    secret_key: str | None = None,
    t: datetime | None = None,
    **overrides: str,
) -> str:
    """Build a server response answering request_params."""
    params = {
        "otp": request_params["otp"],
        "nonce": request_params["nonce"],
        "t": format_t(t or datetime.now(timezone.utc)),
        "status": status,
        "sl": "25",
    }
    params.update(overrides)
    if secret_key:
        h = CryptoUtils.sign(params, base64.b64decode(secret_key))
        params["h"] = base64.b64encode(h).decode()
    return "\n".join(f"{key}={value}" for key, value in params.items()) + "\n"


Handler = Callable[[dict[str, str]], "tuple[int, str] | str"]


class FakeAdapter(HTTPAdapter):
    """Transport spy: records requests and answers them with handler."""

    def __init__(self, handler: Handler):
        super().__init__()
        self.handler = handler
        self.calls: list[requests.PreparedRequest] = []
        self.timeouts: list[Any] = []

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:  # type: ignore[override]
        self.calls.append(request)
        self.timeouts.append(kwargs.get("timeout"))

        result = self.handler(dict(parse_qsl(urlsplit(request.url or "").query)))
        status_code, body = result if isinstance(result, tuple) else (200, result)

        response = requests.Response()
        response.status_code = status_code
        response._content = body.encode()
        response.url = request.url or ""
        response.request = request
        return response


@pytest.fixture
def fake_transport() -> Callable[[Handler], tuple[requests.Session, FakeAdapter]]:
    def factory(handler: Handler) -> tuple[requests.Session, FakeAdapter]:
        adapter = FakeAdapter(handler)
        session = requests.Session()
        session.mount("https://", adapter)
        return session, adapter

    return factory
