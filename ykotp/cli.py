"""
Command-line interface for YubiKey OTP validation.
"""

from __future__ import annotations

import logging

import click

from ykotp.client.client import OTPClient
from ykotp.client.decode import decode as decode_otp
from ykotp.client.transport import logging_session
from ykotp.common.config import Config
from ykotp.common.exceptions import YubiOTPError
from ykotp.common.logging_utils import setup_logger
from ykotp.common.models import ClientConfig

logger = logging.getLogger("ykotp")


@click.group()
def cli() -> None:
    """YubiKey OTP validation CLI"""


@cli.command()
@click.argument("otp", required=False)
@click.option(
    "--client-id",
    default=None,
    help="Client ID (default: from YUBIKEY_CLIENT_ID env or '1')",
)
@click.option(
    "--secret-key",
    default=None,
    help="Base64 secret key (default: from YUBIKEY_SECRET_KEY env, unsigned if unset)",
)
@click.option(
    "--url",
    default=None,
    help="Self-hosted https:// validation URL (default: from YUBIKEY_URL env or YubiCloud)",
)
@click.option("--verbose", "-v", is_flag=True, help="Log HTTP requests and responses")
def validate(
    otp: str | None,
    client_id: str | None,
    secret_key: str | None,
    url: str | None,
    verbose: bool,  # noqa: FBT001
) -> None:
    """Validate an OTP against the validation server"""
    config = Config()
    log_level = logging.DEBUG if verbose else config.LOG_LEVEL
    setup_logger(logger, log_level)

    client_config = ClientConfig(
        client_id=client_id or config.CLIENT_ID,
        secret_key=secret_key if secret_key is not None else config.SECRET_KEY,
        url=url if url is not None else config.URL,
    )
    if client_config.secret_key:
        logger.info("Secret key is set, enabling signing.")
    else:
        logger.info("Secret key is not set, skipping signing.")

    if not otp:
        otp = click.prompt("Please touch the YubiKey button.", hide_input=False)

    session = logging_session() if verbose else None
    try:
        client = OTPClient.from_config(client_config, session=session)
        res = client.validate(otp.strip())
    except YubiOTPError as err:
        if err.response is not None:
            click.echo(repr(err.response))
        raise click.ClickException(str(err)) from err

    click.echo(repr(res))
    click.echo("OTP is valid")


@cli.command()
@click.argument("otp")
@click.option(
    "--aes-key",
    default="",
    help="Hex-encoded AES key of the token, to reveal the private ID",
)
def decode(otp: str, aes_key: str) -> None:
    """Decode public and private IDs from an OTP"""
    try:
        info = decode_otp(otp, aes_key)
    except ValueError as err:
        raise click.ClickException(str(err)) from err

    click.echo(f"Public ID (modhex): {info.public_id_modhex}")
    click.echo(f"Public ID (hex): {info.public_id_hex}")
    click.echo(f"Public ID (dec): {info.public_id_dec}")
    if info.private_id is not None:
        click.echo(f"Private ID (modhex): {info.private_id_modhex}")
        click.echo(f"Private ID (hex): {info.private_id_hex}")
        click.echo(f"Private ID (dec): {info.private_id_dec}")


if __name__ == "__main__":
    cli()
