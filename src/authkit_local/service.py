"""Local (identifier + password) authentication service."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Generic

from authkit_core.exceptions import (
    AuthDomainError,
    AuthUnexpectedError,
    DomainErrorCode,
    UnexpectedErrorCode,
)
from authkit_core.hasher import Hasher
from authkit_local.identifier import parse_identifier
from authkit_local.repositories import NewLocalUser, UserRepository
from authkit_local.repositories.user_repository import UserT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateUserInput:
    """Sign-up data: raw identifier, plaintext password, extra profile fields."""

    identifier: str
    password: str
    profile: Mapping[str, Any] = field(default_factory=dict)


def _lookup_key(identifier: str) -> str:
    """Normalize ``identifier`` for lookups, falling back to the raw value.

    Lookups never fail on a malformed identifier; such a value simply
    matches no stored user.
    """
    try:
        return parse_identifier(identifier).value
    except AuthDomainError:
        return identifier


class LocalAuthService(Generic[UserT]):
    """
    Application service for password-based authentication.

    Validates identifiers, hashes and verifies passwords and delegates
    storage to the host application's ``UserRepository``. Domain errors
    propagate unchanged; anything else is wrapped in an
    ``AuthUnexpectedError`` carrying the operation's code.
    """

    def __init__(self, user_repository: UserRepository[UserT], hasher: Hasher):
        self._user_repo = user_repository
        self._hasher = hasher

    async def create_user(self, data: CreateUserInput) -> UserT:
        """Register a new local user.

        Raises
        ------
        AuthDomainError
            ``INVALID_IDENTIFIER`` or ``AUTH_USED_IDENTIFIER``
        AuthUnexpectedError
            ``AUTH_USER_CREATION_FAILED`` on any other failure
        """
        try:
            identifier = parse_identifier(data.identifier)

            existing = await self._user_repo.find_by_identifier(identifier.value)
            if existing is not None:
                raise AuthDomainError(
                    DomainErrorCode.AUTH_USED_IDENTIFIER,
                    data.identifier,
                )

            password_hash = await self._hasher.hash(data.password)
            user = await self._user_repo.create(
                NewLocalUser(
                    identifier=identifier.value,
                    identifier_type=identifier.type,
                    password=password_hash,
                    profile=data.profile,
                ),
            )
        except AuthDomainError:
            raise
        except Exception as e:
            raise AuthUnexpectedError(
                UnexpectedErrorCode.AUTH_USER_CREATION_FAILED,
                cause=e,
            ) from e

        logger.info("Local user created (%s)", identifier.type.value)
        return user

    async def verify_password(self, identifier: str, password: str) -> UserT:
        """Return the user if ``password`` matches their stored hash.

        Raises
        ------
        AuthDomainError
            ``INCORRECT_CREDENTIALS`` for an unknown user or wrong password,
            ``USER_NOT_LOCAL`` if the user has no password
        AuthUnexpectedError
            ``LOGIN_FAILED`` on any other failure
        """
        try:
            user = await self._user_repo.find_by_identifier(_lookup_key(identifier))
            if user is None:
                raise AuthDomainError(
                    DomainErrorCode.INCORRECT_CREDENTIALS,
                    "identifier does not exist",
                )

            if not user.password:
                raise AuthDomainError(
                    DomainErrorCode.USER_NOT_LOCAL,
                    "identifier is not registered locally",
                )

            if not await self._hasher.compare(password, user.password):
                raise AuthDomainError(
                    DomainErrorCode.INCORRECT_CREDENTIALS,
                    f"password for identifier {identifier} does not match",
                )
        except AuthDomainError:
            raise
        except Exception as e:
            raise AuthUnexpectedError(UnexpectedErrorCode.LOGIN_FAILED, cause=e) from e

        return user

    async def reset_password(self, identifier: str, new_password: str) -> UserT:
        """Store a new password hash for ``identifier``."""
        try:
            password_hash = await self._hasher.hash(new_password)
            user = await self._user_repo.update(
                _lookup_key(identifier),
                {"password": password_hash},
            )
        except AuthDomainError:
            raise
        except Exception as e:
            raise AuthUnexpectedError(
                UnexpectedErrorCode.PASSWORD_RESET_FAILED,
                cause=e,
            ) from e

        logger.info("Password reset for local user")
        return user

    async def find_user_by_identifier(self, identifier: str) -> UserT | None:
        try:
            return await self._user_repo.find_by_identifier(_lookup_key(identifier))
        except AuthDomainError:
            raise
        except Exception as e:
            raise AuthUnexpectedError(
                UnexpectedErrorCode.FINDING_USER_FAILED,
                cause=e,
                meta={"identifier": identifier},
            ) from e
