"""Google OAuth 2.0 provider."""

import logging

import httpx

from authkit_social.providers.base import SocialAuthProvider
from authkit_social.types import (
    GoogleAuthConfig,
    Provider,
    SocialTokensResult,
    SocialUserResult,
)

logger = logging.getLogger(__name__)

TOKEN_URL = "https://oauth2.googleapis.com/token"
USERINFO_URL = "https://www.googleapis.com/oauth2/v1/userinfo"


class GoogleAuthStrategy(SocialAuthProvider):
    """Authorization-code login with Google."""

    provider = Provider.GOOGLE

    def __init__(
        self,
        config: GoogleAuthConfig,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        super().__init__(client=client, timeout=timeout)
        self._config = config

    async def get_tokens(self, code: str) -> SocialTokensResult:
        logger.debug("Exchanging code for Google OAuth tokens")
        data = await self._request_json(
            "POST",
            TOKEN_URL,
            data={
                "code": code,
                "client_id": self._config.client_id,
                "client_secret": self._config.client_secret.get_secret_value(),
                "redirect_uri": self._config.redirect_uri,
                "grant_type": "authorization_code",
            },
        )
        tokens = self._parse_tokens(data)
        logger.debug(
            "Google token exchange completed (type=%s, expires_in=%s)",
            tokens.token_type,
            tokens.expires_in,
        )
        return tokens

    async def get_user(self, tokens: SocialTokensResult) -> SocialUserResult:
        logger.debug("Fetching user profile from Google")
        headers = {}
        if tokens.id_token:
            headers["Authorization"] = f"Bearer {tokens.id_token}"

        profile = await self._request_json(
            "GET",
            USERINFO_URL,
            params={"alt": "json", "access_token": tokens.access_token},
            headers=headers,
        )
        # v1 userinfo returns "id"; the OpenID flavour returns "sub"
        return self._parse_user(
            {
                "id": profile.get("sub") or profile.get("id"),
                "email": profile.get("email"),
                "verified_email": bool(profile.get("verified_email")),
                "name": profile.get("name") or "",
                "picture_url": profile.get("picture"),
                "locale": profile.get("locale"),
            },
        )
