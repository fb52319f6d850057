"""Signed token codec.

Provides stateless signing and verification of short-lived JWTs. Expiry
enforcement is delegated to PyJWT; this module only translates its
exceptions so callers can tell an expired token from a forged one.
"""

from datetime import timedelta
from typing import Any, Protocol

import jwt

from authkit_core.exceptions import ConfigurationError
from authkit_core.time import parse_duration, utc_now

TEMPORAL_CLAIMS = ("iat", "exp")


class SignedTokenError(Exception):
    """Base exception for signed token verification failures."""

    def __init__(self, message: str = "Signed token verification failed"):
        self.message = message
        super().__init__(self.message)


class SignedTokenExpiredError(SignedTokenError):
    """Raised when the token's ``exp`` claim has passed."""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message)


class SignedTokenInvalidError(SignedTokenError):
    """Raised for bad signatures, structural corruption or missing claims."""

    def __init__(self, message: str = "Token is invalid"):
        super().__init__(message)


class SignedTokenCodec(Protocol):
    """Signing primitive used by the access token service."""

    def sign(self, payload: dict[str, Any], *, expires_in: str) -> str: ...

    def verify(self, token: str) -> dict[str, Any]: ...


class JwtCodec:
    """HMAC-signed JWT codec.

    Examples
    --------
    >>> codec = JwtCodec("your-secret-key")
    >>> token = codec.sign({"userId": "123"}, expires_in="1h")
    >>> codec.verify(token)["userId"]
    '123'
    """

    DEFAULT_ALGORITHM = "HS256"

    def __init__(self, secret: str, algorithm: str = DEFAULT_ALGORITHM):
        """Initialize the codec.

        Parameters
        ----------
        secret
            Secret key for signing tokens. Must be kept secure.
        algorithm
            HMAC algorithm passed to PyJWT (default HS256)
        """
        if not secret:
            msg = "JWT secret key cannot be empty"
            raise ConfigurationError(msg)

        self._secret = secret
        self._algorithm = algorithm

    def sign(self, payload: dict[str, Any], *, expires_in: str) -> str:
        """Sign ``payload`` into a token expiring after ``expires_in``.

        Any ``iat``/``exp`` already present on the payload is dropped so it
        cannot conflict with the freshly computed values.

        Raises
        ------
        ConfigurationError
            If ``expires_in`` is a number or a malformed duration string
        """
        lifetime: timedelta = parse_duration(expires_in)

        claims = {k: v for k, v in payload.items() if k not in TEMPORAL_CLAIMS}
        now = utc_now()
        claims["iat"] = now
        claims["exp"] = now + lifetime

        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> dict[str, Any]:
        """Verify ``token`` and return its claims.

        Raises
        ------
        SignedTokenExpiredError
            If the token has expired
        SignedTokenInvalidError
            If the signature or structure is invalid
        """
        try:
            return jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except jwt.ExpiredSignatureError as e:
            raise SignedTokenExpiredError from e
        except jwt.InvalidTokenError as e:
            raise SignedTokenInvalidError(f"Invalid token: {e}") from e

    @staticmethod
    def decode_unverified(token: str) -> dict[str, Any]:
        """Decode claims without checking signature or expiry.

        Only for diagnostics; never trust the result.
        """
        try:
            return jwt.decode(token, options={"verify_signature": False})
        except jwt.InvalidTokenError as e:
            raise SignedTokenInvalidError(f"Invalid token: {e}") from e
