"""
Client for the YubiKey OTP validation protocol.
"""

from __future__ import annotations

import base64
import binascii
import logging
import time
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

import requests

from ykotp.client.response import parse_and_validate_response
from ykotp.common.config import Config
from ykotp.common.crypto import CryptoUtils
from ykotp.common.exceptions import (
    ConfigurationError,
    ConsistencyError,
    OTPLengthError,
    StaleResponseError,
    TransportError,
)
from ykotp.common.logging_utils import setup_logger

if TYPE_CHECKING:
    from ykotp.common.models import ClientConfig, Response

HTTP_OK = 200

logger = logging.getLogger(__name__)


class OTPClient:
    """Validation server client.

    Works with both YubiCloud and self-hosted servers. An instance holds only
    read-only configuration, so one client can serve concurrent validate()
    calls from several threads.

    See:
      * https://upgrade.yubico.com/getapikey/
      * https://developers.yubico.com/OTP/Specifications/OTP_validation_protocol.html
    """

    def __init__(
        self,
        client_id: str = "",
        secret_key: str = "",
        url: str = "",
        tolerance: float | None = None,
        session: requests.Session | None = None,
        log_level: int | None = None,
    ):
        self.config: Config = Config()

        self.client_id = client_id
        self.secret_key: bytes | None = self._decode_secret_key(secret_key)
        self.tolerance = timedelta(
            seconds=tolerance if tolerance is not None else self.config.TOLERANCE
        )
        self.session = session
        self.url = ""
        self.set_url(url)

        if log_level is not None:
            setup_logger(logger, log_level)

    @classmethod
    def from_config(
        cls, client_config: ClientConfig, session: requests.Session | None = None
    ) -> OTPClient:
        return cls(
            client_id=client_config.client_id,
            secret_key=client_config.secret_key,
            url=client_config.url,
            tolerance=client_config.tolerance,
            session=session,
            log_level=client_config.log_level,
        )

    @staticmethod
    def _decode_secret_key(secret_key: str) -> bytes | None:
        if not secret_key:
            return None
        try:
            return base64.b64decode(secret_key, validate=True)
        except binascii.Error as err:
            msg = f"secret key is not valid base64: {err}"
            raise ConfigurationError(msg) from err

    def set_url(self, url: str) -> None:
        """Set self-hosted validation server URL, or reset to YubiCloud if empty."""
        if not url:
            self.url = ""
            return

        try:
            parts = urlsplit(url)
        except ValueError as err:
            raise ConfigurationError(str(err)) from err
        if parts.scheme != "https" or not parts.netloc:
            msg = "URL must start with https://"
            raise ConfigurationError(msg)

        self.url = url

    @property
    def endpoint(self) -> str:
        return self.url or self.config.DEFAULT_URL

    def _timeouts(self, deadline: datetime | None) -> tuple[int, float]:
        """Return the timeout parameter for the server and the transport timeout.

        The server timeout is capped at the ceiling and by the whole seconds left
        until deadline; it is not clamped at zero.
        """
        timeout = self.config.TIMEOUT_CEILING
        if deadline is None:
            return timeout, self.config.REQUEST_TIMEOUT

        remaining = deadline.timestamp() - time.time()
        timeout = min(timeout, int(remaining))
        return timeout, remaining

    def build_params(self, otp: str, nonce: str, timeout: int) -> dict[str, str]:
        """Build the query parameters, signed when a secret key is configured."""
        params = {
            "otp": otp,
            "timestamp": "1",
            "nonce": nonce,
            "timeout": str(timeout),
        }
        if self.client_id:
            params["id"] = self.client_id

        if self.secret_key is not None:
            h = CryptoUtils.sign(params, self.secret_key)
            params["h"] = base64.b64encode(h).decode()

        return params

    def _get(self, params: dict[str, str], transport_timeout: float) -> bytes:
        if transport_timeout <= 0:
            msg = "deadline exceeded"
            raise TransportError(msg)

        http = self.session if self.session is not None else requests
        try:
            r = http.get(
                self.endpoint,
                params=params,
                headers={"User-Agent": self.config.USER_AGENT},
                timeout=transport_timeout,
            )
        except requests.RequestException as err:
            logger.warning("Validation request failed: %s", err)
            raise TransportError(str(err)) from err

        if r.status_code != HTTP_OK:
            msg = f"response code {r.status_code}"
            raise TransportError(msg, r.status_code)

        return r.content

    def check_freshness(self, response: Response) -> None:
        now = datetime.now(timezone.utc)
        if response.t is None or now > response.t + self.tolerance:
            msg = "response is too old"
            raise StaleResponseError(msg, response, received=response.t)
        if now < response.t - self.tolerance:
            msg = "response is from the future"
            raise StaleResponseError(msg, response, received=response.t)

    def validate(self, otp: str, deadline: datetime | None = None) -> Response:
        """Call validation server to check OTP.

        Raises a YubiOTPError subclass on any failure. When the server response
        was parsed, it is available as the exception's ``response`` even though
        validation failed.
        """
        if len(otp) < self.config.OTP_MIN_LEN:
            msg = "otp is too short"
            raise OTPLengthError(msg)
        if len(otp) > self.config.OTP_MAX_LEN:
            msg = "otp is too long"
            raise OTPLengthError(msg)

        nonce = CryptoUtils.generate_nonce(self.config.NONCE_SIZE)
        timeout, transport_timeout = self._timeouts(deadline)
        params = self.build_params(otp, nonce, timeout)

        # A single host is enough since YubiCloud moved to one endpoint
        logger.info("Validating OTP with %s", self.endpoint)
        body = self._get(params, transport_timeout)

        res = parse_and_validate_response(body, self.secret_key)

        if res.otp != otp:
            msg = "unexpected OTP"
            raise ConsistencyError(msg, res, expected=otp, received=res.otp)
        if res.nonce != nonce:
            msg = "unexpected nonce"
            raise ConsistencyError(msg, res, expected=nonce, received=res.nonce)

        self.check_freshness(res)

        logger.info("OTP is valid (sl=%s)", res.sl)
        return res
