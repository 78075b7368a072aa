# YubiKey OTP validation client

from ykotp.client.client import OTPClient
from ykotp.common.exceptions import (
    ConfigurationError,
    ConsistencyError,
    OTPLengthError,
    ResponseParseError,
    SignatureError,
    StaleResponseError,
    StatusError,
    TransportError,
    YubiOTPError,
)
from ykotp.common.models import ClientConfig, Response, Status

__all__ = [
    "ClientConfig",
    "ConfigurationError",
    "ConsistencyError",
    "OTPClient",
    "OTPLengthError",
    "Response",
    "ResponseParseError",
    "SignatureError",
    "StaleResponseError",
    "Status",
    "StatusError",
    "TransportError",
    "YubiOTPError",
]
