"""Access token service.

Issues and verifies short-lived signed tokens bound to a user id.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from authkit_core.exceptions import ExpiredAccessTokenError, MissingAccessTokenError
from authkit_core.token import (
    SignedTokenCodec,
    SignedTokenExpiredError,
    SignedTokenInvalidError,
)

USER_ID_CLAIM = "userId"


@dataclass(frozen=True)
class AccessTokenClaims:
    """Decoded access token. Never persisted."""

    user_id: str
    issued_at: datetime | None = None
    expires_at: datetime | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "AccessTokenClaims":
        user_id = payload.get(USER_ID_CLAIM)
        if not user_id:
            msg = f"Access token payload has no '{USER_ID_CLAIM}' claim"
            raise SignedTokenInvalidError(msg)
        return cls(
            user_id=str(user_id),
            issued_at=_timestamp(payload.get("iat")),
            expires_at=_timestamp(payload.get("exp")),
        )


def _timestamp(value: Any) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


class AccessTokenService:
    """Issue and verify access tokens.

    Examples
    --------
    >>> service = AccessTokenService(JwtCodec("secret"), expires_in="15m")
    >>> token = service.generate("user-123")
    >>> service.verify(token).user_id
    'user-123'
    """

    DEFAULT_EXPIRES_IN = "10m"

    def __init__(
        self,
        codec: SignedTokenCodec,
        expires_in: str = DEFAULT_EXPIRES_IN,
    ):
        self._codec = codec
        self._expires_in = expires_in

    @property
    def expires_in(self) -> str:
        return self._expires_in

    def generate(self, user_id: str) -> str:
        """Return a signed token embedding ``user_id``."""
        return self._codec.sign({USER_ID_CLAIM: user_id}, expires_in=self._expires_in)

    def verify(self, token: str | None) -> AccessTokenClaims:
        """Verify ``token`` and return its claims.

        Raises
        ------
        MissingAccessTokenError
            If ``token`` is None or empty
        ExpiredAccessTokenError
            If the token has expired
        SignedTokenInvalidError
            Propagated unchanged for bad signatures or corrupted tokens
        """
        if not token:
            raise MissingAccessTokenError

        try:
            payload = self._codec.verify(token)
        except SignedTokenExpiredError as e:
            raise ExpiredAccessTokenError from e

        return AccessTokenClaims.from_payload(payload)
