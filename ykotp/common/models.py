"""
Pydantic models for validation responses and client configuration.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Status(str, Enum):
    """Validation status, as returned by the server."""

    OK = "OK"
    BAD_OTP = "BAD_OTP"
    REPLAYED_OTP = "REPLAYED_OTP"
    BAD_SIGNATURE = "BAD_SIGNATURE"
    MISSING_PARAMETER = "MISSING_PARAMETER"
    NO_SUCH_CLIENT = "NO_SUCH_CLIENT"
    OPERATION_NOT_ALLOWED = "OPERATION_NOT_ALLOWED"
    BACKEND_ERROR = "BACKEND_ERROR"
    NOT_ENOUGH_ANSWERS = "NOT_ENOUGH_ANSWERS"
    REPLAYED_REQUEST = "REPLAYED_REQUEST"

    def __str__(self) -> str:
        return self.value


class Response(BaseModel):
    """Validation server's response.

    ``status`` is a Status member for every status the protocol defines;
    anything else the server sends is kept as the verbatim string.
    """

    model_config = ConfigDict(frozen=True)

    otp: str = ""
    nonce: str = ""
    h: bytes | None = None
    t: datetime | None = None
    status: Status | str = Field(union_mode="left_to_right")
    timestamp: int = 0  # unsigned 24 bit on the wire, stored as signed 32 bit
    session_counter: int = 0
    session_use: int = 0
    sl: str = ""

    @property
    def is_known_status(self) -> bool:
        return isinstance(self.status, Status)

    @property
    def ok(self) -> bool:
        return self.status == Status.OK


class ClientConfig(BaseModel):
    client_id: str = ""
    secret_key: str = ""
    url: str = ""
    tolerance: float | None = None
    log_level: int | None = None
