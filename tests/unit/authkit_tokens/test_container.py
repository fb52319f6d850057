"""Unit tests for AuthTokensContainer and the module-level accessors."""

import logging
from unittest.mock import AsyncMock, Mock

import pytest

from authkit_config import configure_logging
from authkit_core.exceptions import ConfigurationError
from authkit_tokens import (
    AccessTokenService,
    AuthModuleConfig,
    AuthTokensContainer,
    AuthTokensService,
    RefreshTokenService,
    get_access_token_service,
    get_auth_tokens_service,
    get_default_container,
    get_refresh_token_service,
    init_auth_tokens_module,
    reset_auth_tokens_module_for_tests,
)
from authkit_tokens.persistence.memory import InMemoryRefreshTokenRepository

TEST_SECRET = "test-secret-key-12345"


def _config(**overrides) -> AuthModuleConfig:
    values = {
        "jwt_secret": TEST_SECRET,
        "refresh_token_repository": InMemoryRefreshTokenRepository(),
        "find_unique_user_by_id": AsyncMock(return_value={"id": "user-1"}),
    }
    values.update(overrides)
    return AuthModuleConfig(**values)


class TestAuthModuleConfig:
    """Tests for configuration validation."""

    def test_defaults(self):
        config = _config()

        assert config.access_token_expires_in == "10m"
        assert config.refresh_token_expires_in == "7d"
        assert config.revoke_on_rotation is False
        assert config.logger is None

    @pytest.mark.parametrize(
        "field",
        ["access_token_expires_in", "refresh_token_expires_in"],
    )
    def test_malformed_duration_raises(self, field):
        with pytest.raises(ConfigurationError):
            _config(**{field: "forever"})

    def test_numeric_duration_raises(self):
        """Test that a bare number is refused at configuration time."""
        with pytest.raises(ConfigurationError):
            _config(access_token_expires_in=600)


class TestAuthTokensContainer:
    """Tests for lazy construction and caching."""

    def test_unconfigured_access_raises(self):
        container = AuthTokensContainer()

        assert container.is_configured is False
        with pytest.raises(ConfigurationError, match="has not been initialized"):
            container.auth_tokens_service()

    def test_services_are_built_lazily_and_cached(self):
        container = AuthTokensContainer(_config())

        access = container.access_token_service()
        refresh = container.refresh_token_service()
        orchestrator = container.auth_tokens_service()

        assert isinstance(access, AccessTokenService)
        assert isinstance(refresh, RefreshTokenService)
        assert isinstance(orchestrator, AuthTokensService)
        assert container.access_token_service() is access
        assert container.refresh_token_service() is refresh
        assert container.auth_tokens_service() is orchestrator

    def test_services_use_configured_durations(self):
        container = AuthTokensContainer(
            _config(access_token_expires_in="5m", refresh_token_expires_in="30d"),
        )

        assert container.access_token_service().expires_in == "5m"
        assert container.refresh_token_service().expires_in == "30d"

    def test_empty_secret_fails_on_first_access(self):
        container = AuthTokensContainer(_config(jwt_secret=""))

        with pytest.raises(ConfigurationError, match="cannot be empty"):
            container.access_token_service()

    def test_reset_drops_services_but_keeps_config(self):
        """Test that a reset container rebuilds from the same configuration."""
        config = _config()
        container = AuthTokensContainer(config)
        first = container.auth_tokens_service()

        container.reset()

        assert container.is_configured
        assert container.config is config
        assert container.auth_tokens_service() is not first

    def test_reconfigure_discards_built_services(self, caplog):
        container = AuthTokensContainer(_config())
        first = container.access_token_service()

        with caplog.at_level(logging.WARNING, logger="authkit_tokens.container"):
            container.configure(_config(access_token_expires_in="1h"))

        second = container.access_token_service()
        assert second is not first
        assert second.expires_in == "1h"
        assert "reconfigured" in caplog.text

    def test_initialization_is_logged_once_per_service(self):
        """Test that each service announces itself once to the configured logger."""
        logger = Mock()
        container = AuthTokensContainer(_config(logger=logger))

        container.auth_tokens_service()
        container.auth_tokens_service()
        container.access_token_service()

        messages = [call.args[0] for call in logger.info.call_args_list]
        assert messages == [
            "[AuthTokensModule] AccessTokenService initialized",
            "[AuthTokensModule] RefreshTokenService initialized",
            "[AuthTokensModule] AuthTokensService initialized",
        ]

    def test_initialization_logs_to_module_logger_by_default(self, caplog):
        container = AuthTokensContainer(_config())

        with caplog.at_level(logging.INFO, logger="authkit_tokens.container"):
            container.access_token_service()

        assert "[AuthTokensModule] AccessTokenService initialized" in caplog.text

    def test_configure_logging_prints_default_notices(self, capsys):
        """Test that the default sink reaches the console once logging is set up."""
        configure_logging("INFO")
        try:
            AuthTokensContainer(_config()).access_token_service()
        finally:
            configure_logging.cache_clear()
            logging.getLogger().handlers.clear()

        out = capsys.readouterr().out
        assert "[AuthTokensModule] AccessTokenService initialized" in out

    def test_reset_rearms_initialization_log(self):
        logger = Mock()
        container = AuthTokensContainer(_config(logger=logger))
        container.access_token_service()

        container.reset()
        container.access_token_service()

        assert logger.info.call_count == 2

    @pytest.mark.asyncio
    async def test_built_services_issue_tokens(self):
        container = AuthTokensContainer(_config())

        pair = await container.auth_tokens_service().generate("user-1")

        claims = container.access_token_service().verify(pair.access_token)
        assert claims.user_id == "user-1"


class TestModuleLevelAccessors:
    """Tests for the process-wide default container."""

    def test_same_instance_until_reset(self):
        """Test that the accessor caches and reset yields a new instance."""
        init_auth_tokens_module(_config())

        first = get_auth_tokens_service()
        assert get_auth_tokens_service() is first

        reset_auth_tokens_module_for_tests()

        assert get_auth_tokens_service() is not first

    def test_accessors_share_default_container(self):
        init_auth_tokens_module(_config())
        container = get_default_container()

        assert get_access_token_service() is container.access_token_service()
        assert get_refresh_token_service() is container.refresh_token_service()
