"""Social login use case: provider profile in, application tokens out."""

import logging
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

from authkit_social.context import SocialAuthContext
from authkit_social.types import Provider, SocialUserResult
from authkit_tokens.services import AuthTokensService

logger = logging.getLogger(__name__)


class AppUser(Protocol):
    """Host application user: anything with a string ``id``."""

    id: str


AppUserT = TypeVar("AppUserT", bound=AppUser)


class HandleSocialUser(Protocol[AppUserT]):
    """Finds or creates the application user for a provider profile."""

    async def __call__(
        self,
        user: SocialUserResult,
        provider: Provider,
    ) -> AppUserT: ...


@dataclass(frozen=True)
class SocialAuthLoginResult(Generic[AppUserT]):
    access_token: str
    refresh_token: str
    user: SocialUserResult
    app_user: AppUserT


class SocialAuthLogin(Generic[AppUserT]):
    """
    Orchestrates the social login flow:

    1. Authenticate with the provider (code exchange, profile lookup)
    2. Map the provider profile to an application user
    3. Issue an access/refresh token pair for that user
    """

    def __init__(
        self,
        context: SocialAuthContext,
        auth_tokens_service: AuthTokensService,
        handle_social_user: HandleSocialUser[AppUserT],
    ):
        self._context = context
        self._auth_tokens_service = auth_tokens_service
        self._handle_social_user = handle_social_user

    async def execute(
        self,
        code: str,
        provider: Provider | str,
    ) -> SocialAuthLoginResult[AppUserT]:
        """Run the login flow for ``provider``. Failures are logged and re-raised."""
        try:
            result = await self._context.authenticate(code, provider)
            app_user = await self._handle_social_user(
                result.user,
                Provider(provider),
            )
            pair = await self._auth_tokens_service.generate(app_user.id)
        except Exception as e:
            logger.warning("Social login via %s failed: %s", provider, e)
            raise

        logger.info(
            "Social login via %s completed for user %s",
            Provider(provider).value,
            app_user.id,
        )
        return SocialAuthLoginResult(
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
            user=result.user,
            app_user=app_user,
        )
