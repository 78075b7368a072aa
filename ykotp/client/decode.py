"""Decoding of public and private identifiers embedded in an OTP.
"""

from __future__ import annotations

from dataclasses import dataclass

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ykotp.common.config import Config
from ykotp.common.exceptions import ModhexError

MODHEX_ALPHABET = "cbdefghijklnrtuv"
_HEX_ALPHABET = "0123456789abcdef"
_TO_HEX = str.maketrans(MODHEX_ALPHABET, _HEX_ALPHABET)
_TO_MODHEX = str.maketrans(_HEX_ALPHABET, MODHEX_ALPHABET)

PUBLIC_ID_SIZE = 6
PRIVATE_ID_SIZE = 6


def modhex_encode(data: bytes) -> str:
    return data.hex().translate(_TO_MODHEX)


def modhex_decode(value: str) -> bytes:
    """Decode a modhex string into bytes."""
    value = value.lower()
    bad = set(value) - set(MODHEX_ALPHABET)
    if bad:
        msg = f"invalid modhex character(s): {''.join(sorted(bad))}"
        raise ModhexError(msg)
    if len(value) % 2:
        msg = "modhex string has odd length"
        raise ModhexError(msg)
    return bytes.fromhex(value.translate(_TO_HEX))


@dataclass
class OTPInfo:
    """Identifiers extracted from an OTP."""

    public_id: bytes
    private_id: bytes | None = None

    @property
    def public_id_modhex(self) -> str:
        return modhex_encode(self.public_id)

    @property
    def public_id_hex(self) -> str:
        return self.public_id.hex()

    @property
    def public_id_dec(self) -> int:
        return int.from_bytes(self.public_id, "big")

    @property
    def private_id_modhex(self) -> str | None:
        return modhex_encode(self.private_id) if self.private_id is not None else None

    @property
    def private_id_hex(self) -> str | None:
        return self.private_id.hex() if self.private_id is not None else None

    @property
    def private_id_dec(self) -> int | None:
        if self.private_id is None:
            return None
        return int.from_bytes(self.private_id, "big")


def decode(otp: str, aes_key_hex: str = "") -> OTPInfo:
    """Extract the public ID from an OTP and, given the AES key, its private ID."""
    expected_len = Config().DECODE_OTP_LEN
    if len(otp) != expected_len:
        msg = f"not a {expected_len}-character long OTP"
        raise ValueError(msg)

    otp_bytes = modhex_decode(otp)
    info = OTPInfo(public_id=otp_bytes[:PUBLIC_ID_SIZE])
    if not aes_key_hex:
        return info

    key = bytes.fromhex(aes_key_hex)
    decryptor = Cipher(algorithms.AES(key), modes.ECB()).decryptor()  # noqa: S305
    token = decryptor.update(otp_bytes[PUBLIC_ID_SIZE:]) + decryptor.finalize()

    info.private_id = token[:PRIVATE_ID_SIZE]
    return info
