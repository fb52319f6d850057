"""Configuration for the auth tokens module."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from authkit_core.time import parse_duration
from authkit_tokens.repositories import RefreshTokenRepository
from authkit_tokens.services import FindUniqueUserById

if TYPE_CHECKING:
    from authkit_config import Settings


class InfoLogger(Protocol):
    """Anything with an ``info(msg)`` method, e.g. a ``logging.Logger``."""

    def info(self, msg: str) -> None: ...


@dataclass(frozen=True)
class AuthModuleConfig:
    """Everything needed to build the token services.

    Attributes
    ----------
    jwt_secret
        Secret key used for access token signing and verification
    refresh_token_repository
        Persistence for refresh token records
    find_unique_user_by_id
        Lookup confirming a refresh token's owner still exists
    access_token_expires_in
        Access token lifetime, e.g. ``"15m"``
    refresh_token_expires_in
        Refresh token lifetime, e.g. ``"7d"``
    logger
        Optional sink for service initialization notices. When omitted,
        notices go to the ``authkit_tokens.container`` logger at INFO;
        call ``authkit_config.configure_logging()`` (or configure logging
        yourself) to have them printed to the console.
    revoke_on_rotation
        Revoke the redeemed refresh token during ``refresh``
    """

    jwt_secret: str
    refresh_token_repository: RefreshTokenRepository
    find_unique_user_by_id: FindUniqueUserById
    access_token_expires_in: str = "10m"
    refresh_token_expires_in: str = "7d"
    logger: InfoLogger | None = None
    revoke_on_rotation: bool = False

    def __post_init__(self) -> None:
        parse_duration(self.access_token_expires_in)
        parse_duration(self.refresh_token_expires_in)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        refresh_token_repository: RefreshTokenRepository,
        find_unique_user_by_id: FindUniqueUserById,
        logger: InfoLogger | None = None,
    ) -> AuthModuleConfig:
        """Build a config from environment-loaded settings."""
        return cls(
            jwt_secret=settings.jwt_secret_key.get_secret_value(),
            refresh_token_repository=refresh_token_repository,
            find_unique_user_by_id=find_unique_user_by_id,
            access_token_expires_in=settings.access_token_expires_in,
            refresh_token_expires_in=settings.refresh_token_expires_in,
            logger=logger,
            revoke_on_rotation=settings.revoke_on_rotation,
        )
