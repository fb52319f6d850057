"""Provider registry for social login."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from authkit_social.exceptions import UnsupportedProviderError
from authkit_social.providers import (
    FacebookAuthStrategy,
    GoogleAuthStrategy,
    SocialAuthProvider,
)
from authkit_social.types import (
    FacebookAuthConfig,
    GoogleAuthConfig,
    Provider,
    SocialTokensResult,
    SocialUserResult,
)

if TYPE_CHECKING:
    import httpx

    from authkit_config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SocialAuthResult:
    tokens: SocialTokensResult
    user: SocialUserResult


class SocialAuthContext:
    """Dispatches a login to the strategy registered for its provider."""

    def __init__(self, providers: Iterable[SocialAuthProvider]):
        self._providers = {p.provider: p for p in providers}

    @property
    def providers(self) -> list[Provider]:
        return list(self._providers)

    def get_strategy(self, provider: Provider | str) -> SocialAuthProvider:
        """Return the strategy for ``provider``.

        Raises
        ------
        UnsupportedProviderError
            If the name is unknown or no strategy was registered for it
        """
        try:
            key = Provider(provider)
        except ValueError as e:
            raise UnsupportedProviderError(str(provider)) from e

        strategy = self._providers.get(key)
        if strategy is None:
            logger.warning("No social auth strategy registered for %s", key.value)
            raise UnsupportedProviderError(key.value)
        return strategy

    async def authenticate(
        self,
        code: str,
        provider: Provider | str,
    ) -> SocialAuthResult:
        """Exchange ``code`` and fetch the user's profile."""
        strategy = self.get_strategy(provider)
        logger.info("Starting social authentication via %s", strategy.provider.value)

        tokens = await strategy.get_tokens(code)
        user = await strategy.get_user(tokens)

        logger.info(
            "Social authentication via %s completed for provider user %s",
            strategy.provider.value,
            user.id,
        )
        return SocialAuthResult(tokens=tokens, user=user)

    async def close(self) -> None:
        for strategy in self._providers.values():
            await strategy.close()


def create_social_auth_context(
    settings: Settings,
    client: httpx.AsyncClient | None = None,
) -> SocialAuthContext:
    """Build a context with every provider that has credentials configured."""
    providers: list[SocialAuthProvider] = []
    if settings.google_enabled:
        providers.append(
            GoogleAuthStrategy(
                GoogleAuthConfig.from_settings(settings),
                client=client,
                timeout=settings.http_timeout,
            ),
        )
    if settings.facebook_enabled:
        providers.append(
            FacebookAuthStrategy(
                FacebookAuthConfig.from_settings(settings),
                client=client,
                timeout=settings.http_timeout,
            ),
        )
    return SocialAuthContext(providers)
