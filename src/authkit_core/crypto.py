"""Opaque token generation.

Produces cryptographically random strings with no decodable structure;
they can only be verified by a server-side lookup.
"""

import secrets
import uuid
from typing import Protocol


class TokenGenerator(Protocol):
    """Source of opaque random tokens."""

    def generate_base64url_token(self, byte_length: int) -> str: ...

    def generate_hex_token(self, byte_length: int) -> str: ...

    def generate_uuid(self) -> str: ...


class CryptoTokenGenerator:
    """Token generator backed by the OS CSPRNG (``secrets``)."""

    def generate_base64url_token(self, byte_length: int) -> str:
        """Return ``byte_length`` random bytes as unpadded base64url text."""
        _check_length(byte_length)
        return secrets.token_urlsafe(byte_length)

    def generate_hex_token(self, byte_length: int) -> str:
        """Return ``byte_length`` random bytes as lowercase hex."""
        _check_length(byte_length)
        return secrets.token_hex(byte_length)

    def generate_uuid(self) -> str:
        return str(uuid.uuid4())


def _check_length(byte_length: int) -> None:
    if byte_length <= 0:
        msg = f"byte_length must be positive, got {byte_length}"
        raise ValueError(msg)
