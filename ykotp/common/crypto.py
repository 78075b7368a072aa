"""Common cryptographic utilities.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


class CryptoUtils:
    """Utility class for cryptographic operations."""

    @staticmethod
    def canonicalize(params: Mapping[str, str]) -> bytes:
        """Serialize parameters as sorted ``key=value`` pairs joined by ``&``.

        Values are not percent-encoded: the server signs the raw strings, so
        '+' and '/' in base64 values must stay as they are.
        """
        return "&".join(f"{key}={params[key]}" for key in sorted(params)).encode()

    @staticmethod
    def sign(params: Mapping[str, str], secret_key: bytes) -> bytes:
        """Calculate HMAC-SHA1 over the canonical form of params."""
        return hmac.new(
            secret_key, CryptoUtils.canonicalize(params), hashlib.sha1
        ).digest()

    @staticmethod
    def verify(params: Mapping[str, str], secret_key: bytes, signature: bytes) -> bool:
        """Check signature against params in constant time."""
        return hmac.compare_digest(CryptoUtils.sign(params, secret_key), signature)

    @staticmethod
    def generate_nonce(size: int = 20) -> str:
        """Generate a random hex-encoded request nonce."""
        return secrets.token_hex(size)
