"""
Custom exceptions for the OTP validation client.

Every error raised while validating an OTP derives from YubiOTPError. When a
server response was parsed before the failure was detected, it is attached as
``response`` so callers can still inspect it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ykotp.common.models import Response, Status


class YubiOTPError(Exception):
    """Base exception for validation failures."""

    def __init__(self, message: str, response: Response | None = None) -> None:
        super().__init__(message)
        self.response = response


class ConfigurationError(YubiOTPError):
    """Exception for invalid client configuration (secret key, URL)."""


class OTPLengthError(YubiOTPError):
    """Exception for OTPs rejected locally before any network call."""


class TransportError(YubiOTPError):
    """Exception for network failures and non-200 HTTP responses."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ResponseParseError(YubiOTPError):
    """Exception for a malformed response body."""

    def __init__(self, line: str, reason: str | None = None) -> None:
        msg = f"failed to parse response line {line!r}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.line = line


class SignatureError(YubiOTPError):
    """Exception for a missing or invalid response signature."""

    def __init__(self, message: str, response: Response | None = None) -> None:
        super().__init__(f"failed to validate response: {message}", response)


class StatusError(YubiOTPError):
    """Exception for a response whose status is not OK.

    ``status`` is the value the server sent: a Status member for known
    statuses, or the verbatim string for unrecognized ones.
    """

    def __init__(self, status: Status | str, response: Response | None = None) -> None:
        super().__init__(str(status), response)
        self.status = status


class ConsistencyError(YubiOTPError):
    """Exception for a response that does not answer the request that was sent."""

    def __init__(
        self,
        message: str,
        response: Response | None = None,
        expected: object = None,
        received: object = None,
    ) -> None:
        if expected is not None:
            message = f"{message}: expected {expected!r}, received {received!r}"
        elif received is not None:
            message = f"{message}: received {received!r}"
        super().__init__(message, response)
        self.expected = expected
        self.received = received


class StaleResponseError(ConsistencyError):
    """Exception for a response timestamp outside the tolerance window."""


class ModhexError(ValueError):
    """Exception for strings that are not valid modhex."""
