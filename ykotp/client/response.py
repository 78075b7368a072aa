"""
Parsing and authentication of validation server responses.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Any

from ykotp.common.crypto import CryptoUtils
from ykotp.common.exceptions import ResponseParseError, SignatureError, StatusError
from ykotp.common.models import Response, Status

logger = logging.getLogger(__name__)

INT32_RANGE = 1 << 32

_INT_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)
_RFC3339_RE = re.compile(
    r"([0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2})(?:\.([0-9]+))?",
    re.ASCII,
)
_RFC3339_FORMAT = "%Y-%m-%dT%H:%M:%S"


def _to_int32(value: int) -> int:
    """Wrap value into the signed 32-bit range."""
    value %= INT32_RANGE
    if value >= INT32_RANGE >> 1:
        value -= INT32_RANGE
    return value


def _parse_int(line: str, value: str) -> int:
    if not _INT_RE.fullmatch(value):
        msg = f"invalid integer {value!r}"
        raise ResponseParseError(line, msg)
    return int(value)


def _decode_body(body: bytes) -> str:
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError as err:
        start = body.rfind(b"\n", 0, err.start) + 1
        end = body.find(b"\n", err.start)
        line = body[start : end if end >= 0 else len(body)]
        msg = "invalid UTF-8"
        raise ResponseParseError(
            line.decode("utf-8", errors="backslashreplace"), msg
        ) from err


def parse_t(line: str, value: str) -> datetime:
    """Parse the 't' field: an RFC3339 UTC time with milliseconds after the 'Z'.

    The server formats it as ``2020-01-06T02:52:13Z0998``, i.e. the milliseconds
    follow the zone designator without any separator.
    """
    stamp, sep, millis = value.partition("Z")
    match = _RFC3339_RE.fullmatch(stamp)
    if not sep or not match:
        raise ResponseParseError(line)

    try:
        ts = datetime.strptime(match.group(1), _RFC3339_FORMAT).replace(
            tzinfo=timezone.utc
        )
    except ValueError as err:
        raise ResponseParseError(line, str(err)) from err

    fraction = match.group(2)
    if fraction:
        ts += timedelta(microseconds=int(fraction[:6].ljust(6, "0")))

    return ts + timedelta(milliseconds=_parse_int(line, millis))


class ResponseParser:
    """Strict parser for the line-oriented ``key=value`` response format."""

    @staticmethod
    def parse(body: bytes | str) -> tuple[Response, dict[str, str]]:
        """Parse a response body.

        Returns the parsed response and every received ``key=value`` pair
        (including 'h'), which is what the server signed.
        """
        text = _decode_body(body) if isinstance(body, bytes) else body

        fields: dict[str, Any] = {}
        params: dict[str, str] = {}
        for raw_line in text.split("\n"):
            line = raw_line.removesuffix("\r")
            if not line:
                continue

            key, sep, value = line.partition("=")
            if not sep:
                raise ResponseParseError(line)

            if key == "otp":
                fields["otp"] = value
            elif key == "nonce":
                fields["nonce"] = value
            elif key == "h":
                try:
                    fields["h"] = base64.b64decode(value, validate=True)
                except binascii.Error as err:
                    raise ResponseParseError(line, str(err)) from err
            elif key == "t":
                fields["t"] = parse_t(line, value)
            elif key == "status":
                fields["status"] = value
            elif key == "timestamp":
                fields["timestamp"] = _to_int32(_parse_int(line, value))
            elif key == "sessioncounter":
                fields["session_counter"] = _parse_int(line, value)
            elif key == "sessionuse":
                fields["session_use"] = _parse_int(line, value)
            elif key == "sl":
                fields["sl"] = value
            else:
                msg = f"unknown key {key!r}"
                raise ResponseParseError(line, msg)

            params[key] = value

        if "status" not in fields:
            msg = "response has no status line"
            raise ResponseParseError(text.strip(), msg)

        return Response(**fields), params


class ResponseValidator:
    """Authenticates a parsed response and maps its status to an error."""

    def __init__(self, secret_key: bytes | None = None):
        self.secret_key = secret_key

    def verify_signature(self, response: Response, params: dict[str, str]) -> None:
        """Check 'h' over all other received parameters.

        Does nothing when no secret key is configured.
        """
        if self.secret_key is None:
            return

        if response.h is None:
            logger.warning("Response is not signed")
            msg = "missing signature 'h'"
            raise SignatureError(msg, response)

        signed = {key: value for key, value in params.items() if key != "h"}
        if not CryptoUtils.verify(signed, self.secret_key, response.h):
            logger.warning("Response signature mismatch")
            msg = "invalid signature"
            raise SignatureError(msg, response)

        logger.debug("Response signature verified")

    def validate(self, response: Response, params: dict[str, str]) -> Response:
        self.verify_signature(response, params)

        if response.status != Status.OK:
            raise StatusError(response.status, response)

        return response


def parse_and_validate_response(
    body: bytes | str, secret_key: bytes | None = None
) -> Response:
    """Parse a response body, authenticate it and check its status.

    Raises ResponseParseError without a response; SignatureError and
    StatusError carry the parsed response.
    """
    response, params = ResponseParser.parse(body)
    return ResponseValidator(secret_key).validate(response, params)
