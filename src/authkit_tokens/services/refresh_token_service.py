"""Refresh token service.

Issues, verifies and revokes long-lived opaque tokens backed by a
``RefreshTokenRepository``. Unlike access tokens these are stateful:
a refresh token is only as good as its stored record.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

from authkit_core.crypto import TokenGenerator
from authkit_core.exceptions import (
    AuthDomainError,
    AuthUnexpectedError,
    RefreshTokenInvalidError,
    UnexpectedErrorCode,
)
from authkit_core.time import generate_expired_date, parse_duration, utc_now
from authkit_tokens.repositories import (
    RefreshTokenCreateInput,
    RefreshTokenRecord,
    RefreshTokenRepository,
    RefreshTokenUpdateInput,
    RefreshTokenWhereUnique,
)

logger = logging.getLogger(__name__)


class FindUniqueUserById(Protocol):
    """Host-application lookup confirming a token owner still exists."""

    async def __call__(self, user_id: str) -> Any | None: ...


ExpiryCalculator = Callable[[str], datetime]


@dataclass(frozen=True)
class RefreshTokenSubject:
    """Owner resolved from a verified refresh token."""

    user_id: str


class RefreshTokenService:
    """
    Service for refresh token lifecycle management.

    Each call to ``create`` computes a fresh ``expires_at`` from the
    configured duration, so every token gets its own validity window.
    """

    TOKEN_BYTES = 40

    def __init__(  # noqa: PLR0913
        self,
        repository: RefreshTokenRepository,
        generator: TokenGenerator,
        find_unique_user_by_id: FindUniqueUserById,
        expires_in: str = "7d",
        expiry_calculator: ExpiryCalculator = generate_expired_date,
    ):
        self._repository = repository
        self._generator = generator
        self._find_unique_user_by_id = find_unique_user_by_id
        self._expires_in = expires_in
        self._expiry_calculator = expiry_calculator

        # Validates the duration eagerly
        parse_duration(self._expires_in)

    @property
    def expires_in(self) -> str:
        return self._expires_in

    async def create(self, user_id: str, tx: Any = None) -> RefreshTokenRecord:
        """Create and persist a new refresh token for ``user_id``.

        Parameters
        ----------
        user_id
            Owner of the token
        tx
            Optional repository transaction handle

        Raises
        ------
        AuthUnexpectedError
            REFRESHTOKEN_CREATE_FAILED if the repository fails
        """
        try:
            data = RefreshTokenCreateInput(
                token=self._generator.generate_base64url_token(self.TOKEN_BYTES),
                user_id=user_id,
                expires_at=self._expiry_calculator(self._expires_in),
            )
            record = await self._repository.create(data, tx=tx)
        except Exception as e:
            raise AuthUnexpectedError(
                UnexpectedErrorCode.REFRESHTOKEN_CREATE_FAILED,
                cause=e,
            ) from e

        logger.debug("Refresh token created for user: %s", user_id)
        return record

    async def verify(self, token: str) -> RefreshTokenSubject:
        """Resolve the owner of a usable refresh token.

        Raises
        ------
        RefreshTokenInvalidError
            If the token is unknown, expired, revoked or its user is gone
        AuthUnexpectedError
            REFRESHTOKEN_VERIFY_FAILED for any other failure
        """
        if not token:
            raise RefreshTokenInvalidError("Refresh token is missing")

        try:
            record = await self._repository.find_unique(
                RefreshTokenWhereUnique.by_token(token),
            )
            if record is None or not record.is_valid(utc_now()):
                msg = "Refresh token does not exist, has expired or was revoked"
                raise RefreshTokenInvalidError(msg)

            user = await self._find_unique_user_by_id(record.user_id)
            if user is None:
                logger.warning(
                    "Refresh token presented for missing user: %s",
                    record.user_id,
                )
                msg = "Refresh token owner no longer exists"
                raise RefreshTokenInvalidError(msg)

            return RefreshTokenSubject(user_id=record.user_id)
        except AuthDomainError:
            raise
        except Exception as e:
            raise AuthUnexpectedError(
                UnexpectedErrorCode.REFRESHTOKEN_VERIFY_FAILED,
                cause=e,
            ) from e

    async def revoke(self, token: str) -> RefreshTokenRecord:
        """Mark a refresh token as revoked.

        Revoking an already-revoked token is a no-op that returns the
        record with its original ``revoked_at``. The repository applies
        the write only to an unrevoked record, so concurrent calls agree
        on a single timestamp.

        Raises
        ------
        AuthUnexpectedError
            REFRESHTOKEN_REVOKE_FAILED if the token does not exist or the
            repository fails
        """
        revoked_at = utc_now()
        try:
            record = await self._repository.update(
                RefreshTokenWhereUnique.by_token(token),
                RefreshTokenUpdateInput(revoked_at=revoked_at),
            )
        except Exception as e:
            raise AuthUnexpectedError(
                UnexpectedErrorCode.REFRESHTOKEN_REVOKE_FAILED,
                cause=e,
            ) from e

        if record.revoked_at == revoked_at:
            logger.info("Refresh token revoked for user: %s", record.user_id)
        else:
            logger.debug("Refresh token already revoked for user: %s", record.user_id)
        return record
