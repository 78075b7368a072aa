"""
Logging HTTP transport for debugging validation requests.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

import requests
from requests.adapters import HTTPAdapter

if TYPE_CHECKING:
    from requests import PreparedRequest

logger = logging.getLogger(__name__)

Logf = Callable[..., None]


def dump_request(request: PreparedRequest) -> str:
    lines = [f"{request.method} {request.url}"]
    lines.extend(f"{name}: {value}" for name, value in request.headers.items())
    body = request.body
    if body:
        lines.append("")
        lines.append(body.decode(errors="replace") if isinstance(body, bytes) else str(body))
    return "\n".join(lines)


def dump_response(response: requests.Response) -> str:
    lines = [f"HTTP {response.status_code} {response.reason}"]
    lines.extend(f"{name}: {value}" for name, value in response.headers.items())
    lines.append("")
    lines.append(response.content.decode(errors="replace"))
    return "\n".join(lines)


class LoggingAdapter(HTTPAdapter):
    """HTTPAdapter that logs every request and response it handles."""

    def __init__(self, logf: Logf | None = None, **kwargs: Any):
        super().__init__(**kwargs)
        self.logf: Logf = logf or logger.debug

    def send(self, request: PreparedRequest, **kwargs: Any) -> requests.Response:  # type: ignore[override]
        self.logf("Request:\n%s", dump_request(request))
        response = super().send(request, **kwargs)
        self.logf("Response:\n%s", dump_response(response))
        return response


def logging_session(logf: Logf | None = None) -> requests.Session:
    """Create a session whose traffic goes through LoggingAdapter."""
    session = requests.Session()
    adapter = LoggingAdapter(logf)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session
