"""Settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. AUTHKIT_ENV_FILE environment variable (path to a .env file)
3. .env in the current working directory

Every variable carries the ``AUTHKIT_`` prefix, e.g.
``AUTHKIT_JWT_SECRET_KEY`` or ``AUTHKIT_REFRESH_TOKEN_EXPIRES_IN``.

Uses pydantic-settings for automatic type coercion and validation.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from authkit_core.exceptions import ConfigurationError
from authkit_core.time import parse_duration


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. AUTHKIT_ENV_FILE env var (relative paths resolve against the cwd)
    2. .env in the current working directory
    """
    env_file_path = os.environ.get("AUTHKIT_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if not path.is_absolute():
            path = Path.cwd() / path
        if path.exists():
            return path

    local_env = Path.cwd() / ".env"
    if local_env.exists():
        return local_env

    return None


class Settings(BaseSettings):
    """authkit configuration loaded from environment variables.

    Values are loaded from:
    1. OS environment variables (highest priority)
    2. .env file (AUTHKIT_ENV_FILE or ./.env)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="AUTHKIT_",
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Security (MUST be set)
    jwt_secret_key: SecretStr

    # Token lifetimes, as duration strings ("10m", "7d")
    access_token_expires_in: str = "10m"
    refresh_token_expires_in: str = "7d"
    revoke_on_rotation: bool = False

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./authkit.db"

    # Local auth
    bcrypt_rounds: int = 10

    # Google OAuth
    google_client_id: str = ""
    google_client_secret: SecretStr | None = None
    google_redirect_uri: str = ""

    # Facebook OAuth
    facebook_app_id: str = ""
    facebook_app_secret: SecretStr | None = None
    facebook_redirect_uri: str = ""

    # Outbound HTTP (OAuth providers)
    http_timeout: float = 10.0

    # Logging
    log_level: str = "INFO"

    @field_validator("access_token_expires_in", "refresh_token_expires_in")
    @classmethod
    def _validate_duration(cls, v: str) -> str:
        """Reject lifetimes the duration parser cannot read."""
        try:
            parse_duration(v)
        except ConfigurationError as e:
            raise ValueError(e.message) from e
        return v

    @field_validator("jwt_secret_key")
    @classmethod
    def _validate_jwt_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value():
            msg = "jwt_secret_key must not be empty"
            raise ValueError(msg)
        return v

    @field_validator("bcrypt_rounds")
    @classmethod
    def _validate_bcrypt_rounds(cls, v: int) -> int:
        # bcrypt accepts cost factors 4..31
        if not 4 <= v <= 31:
            msg = f"bcrypt_rounds must be between 4 and 31, got {v}"
            raise ValueError(msg)
        return v

    @property
    def google_enabled(self) -> bool:
        return bool(self.google_client_id and self.google_client_secret)

    @property
    def facebook_enabled(self) -> bool:
        return bool(self.facebook_app_id and self.facebook_app_secret)


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings.

    ``AUTHKIT_JWT_SECRET_KEY`` must be provided via environment variables
    or a .env file.
    """
    return Settings()  # type: ignore[call-arg]  # pydantic-settings loads from env


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
