# Validation protocol client
from ykotp.client.client import OTPClient as OTPClient
from ykotp.client.decode import OTPInfo as OTPInfo
from ykotp.client.decode import decode as decode
from ykotp.client.response import (
    parse_and_validate_response as parse_and_validate_response,
)
from ykotp.client.transport import logging_session as logging_session

__all__ = [
    "OTPClient",
    "OTPInfo",
    "decode",
    "logging_session",
    "parse_and_validate_response",
]
