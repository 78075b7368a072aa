"""
Configuration settings for the OTP validation client.
"""

from __future__ import annotations

import logging
import os


class Config:
    """Central configuration class for all client settings."""

    def __init__(self) -> None:
        # Protocol settings
        self.DEFAULT_URL: str = "https://api.yubico.com/wsapi/2.0/verify"
        self.USER_AGENT: str = "ykotp (https://github.com/ykotp/ykotp)"
        self.OTP_MIN_LEN: int = 32
        self.OTP_MAX_LEN: int = 48
        self.DECODE_OTP_LEN: int = 44  # 12 chars public id + 32 chars token
        self.NONCE_SIZE: int = 20  # bytes, hex-encoded to 40 chars
        self.TIMEOUT_CEILING: int = 10  # Seconds, sent as the timeout parameter
        self.REQUEST_TIMEOUT: float = 30.0  # HTTP timeout when no deadline is given
        self.TOLERANCE: float = 10.0  # Seconds of allowed clock skew for 't'

        # Credentials; the client ID "1" is accepted by YubiCloud
        self.CLIENT_ID: str = os.getenv("YUBIKEY_CLIENT_ID", "") or "1"
        self.SECRET_KEY: str = os.getenv("YUBIKEY_SECRET_KEY", "")
        self.URL: str = os.getenv("YUBIKEY_URL", "")

        # Logging
        self.LOG_LEVEL: int = logging.getLevelName(
            os.getenv("YUBIKEY_LOG_LEVEL", "WARNING").upper()
        )
        if not isinstance(self.LOG_LEVEL, int):
            self.LOG_LEVEL = logging.WARNING
