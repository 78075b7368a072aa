"""
Basic usage example of OTPClient.

This example demonstrates how to create an OTPClient instance from the
environment, validate an OTP read from the terminal and inspect the result.
"""

import logging
import sys
from datetime import datetime, timedelta, timezone

from ykotp import OTPClient, StatusError, YubiOTPError
from ykotp.common.config import Config
from ykotp.common.models import ClientConfig


def main() -> None:
    # Configure logging
    logging.basicConfig(level=logging.INFO)
    logger = logging.getLogger(__name__)

    config = Config()
    client = OTPClient.from_config(
        ClientConfig(
            client_id=config.CLIENT_ID,
            secret_key=config.SECRET_KEY,
            url=config.URL,
        )
    )

    otp = input("Please touch the YubiKey button.\n").strip()
    deadline = datetime.now(timezone.utc) + timedelta(seconds=5)

    try:
        res = client.validate(otp, deadline=deadline)
    except StatusError as err:
        logger.info("Server rejected OTP: %s (sl=%s)", err.status, err.response and err.response.sl)
        sys.exit(1)
    except YubiOTPError:
        logger.exception("Validation failed")
        sys.exit(1)

    logger.info("OTP is valid: status=%s t=%s sl=%s", res.status, res.t, res.sl)


if __name__ == "__main__":
    main()
