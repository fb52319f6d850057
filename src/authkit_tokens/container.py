"""Lazy service container for the auth tokens module.

``AuthTokensContainer`` holds an ``AuthModuleConfig`` and builds each
token service on first access, caching it for the container's lifetime.
Applications should create one container in their composition root and
pass it (or the services it yields) explicitly.

For applications that prefer ambient access, a process-wide default
container is exposed through module-level functions:

Examples
--------
>>> init_auth_tokens_module(AuthModuleConfig(
...     jwt_secret=settings.jwt_secret_key.get_secret_value(),
...     refresh_token_repository=repo,
...     find_unique_user_by_id=users.find_by_id,
... ))
>>> tokens = await get_auth_tokens_service().generate("user-123")

The default container is meant to be configured once at startup; nothing
guards ``init_auth_tokens_module`` against concurrent service access.
"""

import logging

from authkit_core.crypto import CryptoTokenGenerator
from authkit_core.exceptions import ConfigurationError
from authkit_core.time import generate_expired_date
from authkit_core.token import JwtCodec
from authkit_tokens.config import AuthModuleConfig
from authkit_tokens.services import (
    AccessTokenService,
    AuthTokensService,
    RefreshTokenService,
)

logger = logging.getLogger(__name__)

MODULE_NAME = "AuthTokensModule"


class AuthTokensContainer:
    """Holds configuration and lazily-built token services."""

    def __init__(self, config: AuthModuleConfig | None = None):
        self._config = config
        self._access_token_service: AccessTokenService | None = None
        self._refresh_token_service: RefreshTokenService | None = None
        self._auth_tokens_service: AuthTokensService | None = None
        self._logged_services: set[str] = set()

    @property
    def is_configured(self) -> bool:
        return self._config is not None

    @property
    def config(self) -> AuthModuleConfig:
        """The stored configuration.

        Raises
        ------
        ConfigurationError
            If ``configure`` has not been called
        """
        if self._config is None:
            msg = (
                f"{MODULE_NAME} has not been initialized. "
                "Call init_auth_tokens_module() (or configure()) first."
            )
            raise ConfigurationError(msg)
        return self._config

    def configure(self, config: AuthModuleConfig) -> None:
        """Store ``config``. No service is built until first accessed.

        Services built from a previous configuration are discarded.
        """
        if self._has_services():
            logger.warning(
                "%s reconfigured after services were built; discarding them",
                MODULE_NAME,
            )
            self.reset()
        self._config = config

    def access_token_service(self) -> AccessTokenService:
        if self._access_token_service is None:
            config = self.config
            self._access_token_service = AccessTokenService(
                JwtCodec(config.jwt_secret),
                expires_in=config.access_token_expires_in,
            )
            self._log_once("AccessTokenService")
        return self._access_token_service

    def refresh_token_service(self) -> RefreshTokenService:
        if self._refresh_token_service is None:
            config = self.config
            self._refresh_token_service = RefreshTokenService(
                repository=config.refresh_token_repository,
                generator=CryptoTokenGenerator(),
                find_unique_user_by_id=config.find_unique_user_by_id,
                expires_in=config.refresh_token_expires_in,
                expiry_calculator=generate_expired_date,
            )
            self._log_once("RefreshTokenService")
        return self._refresh_token_service

    def auth_tokens_service(self) -> AuthTokensService:
        """Return the orchestrator, building its dependencies as needed."""
        if self._auth_tokens_service is None:
            access = self.access_token_service()
            refresh = self.refresh_token_service()
            self._auth_tokens_service = AuthTokensService(
                refresh,
                access,
                revoke_on_rotation=self.config.revoke_on_rotation,
            )
            self._log_once("AuthTokensService")
        return self._auth_tokens_service

    def reset(self) -> None:
        """Drop built services and the log guard. Configuration is kept."""
        self._access_token_service = None
        self._refresh_token_service = None
        self._auth_tokens_service = None
        self._logged_services.clear()

    def _has_services(self) -> bool:
        return any(
            service is not None
            for service in (
                self._access_token_service,
                self._refresh_token_service,
                self._auth_tokens_service,
            )
        )

    def _log_once(self, service_name: str) -> None:
        if service_name in self._logged_services:
            return
        message = f"[{MODULE_NAME}] {service_name} initialized"
        sink = self._config.logger if self._config and self._config.logger else logger
        sink.info(message)
        self._logged_services.add(service_name)


_default_container = AuthTokensContainer()


def get_default_container() -> AuthTokensContainer:
    """Return the process-wide container used by the module-level API."""
    return _default_container


def init_auth_tokens_module(config: AuthModuleConfig) -> None:
    """Configure the default container. Must run before any accessor."""
    _default_container.configure(config)


def get_access_token_service() -> AccessTokenService:
    return _default_container.access_token_service()


def get_refresh_token_service() -> RefreshTokenService:
    return _default_container.refresh_token_service()


def get_auth_tokens_service() -> AuthTokensService:
    return _default_container.auth_tokens_service()


def reset_auth_tokens_module_for_tests() -> None:
    """Discard the default container's services (configuration survives)."""
    _default_container.reset()
