"""Facebook Login provider."""

import logging

import httpx

from authkit_social.providers.base import SocialAuthProvider
from authkit_social.types import (
    FacebookAuthConfig,
    Provider,
    SocialTokensResult,
    SocialUserResult,
)

logger = logging.getLogger(__name__)

TOKEN_URL = "https://graph.facebook.com/v6.0/oauth/access_token"
PROFILE_URL = "https://graph.facebook.com/me"
PROFILE_FIELDS = "id,name,email,locale,picture"


class FacebookAuthStrategy(SocialAuthProvider):
    """Authorization-code login with Facebook."""

    provider = Provider.FACEBOOK

    def __init__(
        self,
        config: FacebookAuthConfig,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        super().__init__(client=client, timeout=timeout)
        self._config = config

    async def get_tokens(self, code: str) -> SocialTokensResult:
        logger.debug("Exchanging code for Facebook OAuth tokens")
        data = await self._request_json(
            "GET",
            TOKEN_URL,
            params={
                "client_id": self._config.app_id,
                "client_secret": self._config.app_secret.get_secret_value(),
                "redirect_uri": self._config.redirect_uri,
                "code": code,
            },
        )
        return self._parse_tokens(data)

    async def get_user(self, tokens: SocialTokensResult) -> SocialUserResult:
        logger.debug("Fetching user profile from Facebook")
        profile = await self._request_json(
            "GET",
            PROFILE_URL,
            params={"fields": PROFILE_FIELDS, "access_token": tokens.access_token},
        )

        picture = profile.get("picture") or {}
        email = profile.get("email")
        return self._parse_user(
            {
                "id": profile.get("id"),
                "email": email,
                # Facebook only shares confirmed addresses
                "verified_email": bool(email),
                "name": profile.get("name") or "",
                "picture_url": (picture.get("data") or {}).get("url"),
                "locale": profile.get("locale"),
            },
        )
