"""Unit tests for the Google and Facebook strategies."""

import json
from urllib.parse import parse_qs

import httpx
import pytest
from pydantic import SecretStr

from authkit_social import (
    FacebookAuthConfig,
    FacebookAuthStrategy,
    GoogleAuthConfig,
    GoogleAuthStrategy,
    SocialProviderError,
    SocialTokensResult,
)

GOOGLE_CONFIG = GoogleAuthConfig(
    client_id="google-client",
    client_secret=SecretStr("google-secret"),
    redirect_uri="https://app.example.com/auth/google/callback",
)
FACEBOOK_CONFIG = FacebookAuthConfig(
    app_id="fb-app",
    app_secret=SecretStr("fb-secret"),
    redirect_uri="https://app.example.com/auth/facebook/callback",
)


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestGoogleAuthStrategy:
    """Tests for GoogleAuthStrategy."""

    @pytest.mark.asyncio
    async def test_get_tokens_posts_form(self):
        """Exchanges the code with a form-encoded POST."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["form"] = parse_qs(request.content.decode())
            return httpx.Response(
                200,
                json={
                    "access_token": "ya29.token",
                    "expires_in": 3599,
                    "token_type": "Bearer",
                    "id_token": "id.token",
                    "scope": "openid email",
                },
            )

        async with _client(handler) as client:
            tokens = await GoogleAuthStrategy(GOOGLE_CONFIG, client=client).get_tokens("auth-code")

        assert seen["method"] == "POST"
        assert seen["url"] == "https://oauth2.googleapis.com/token"
        assert seen["form"] == {
            "code": ["auth-code"],
            "client_id": ["google-client"],
            "client_secret": ["google-secret"],
            "redirect_uri": ["https://app.example.com/auth/google/callback"],
            "grant_type": ["authorization_code"],
        }
        assert tokens.access_token == "ya29.token"
        assert tokens.id_token == "id.token"
        assert tokens.expires_in == 3599

    @pytest.mark.asyncio
    async def test_get_user_maps_profile(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["params"] = dict(request.url.params)
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(
                200,
                json={
                    "sub": "google-123",
                    "email": "ada@example.com",
                    "verified_email": True,
                    "name": "Ada Lovelace",
                    "picture": "https://example.com/ada.png",
                    "locale": "en",
                },
            )

        tokens = SocialTokensResult(access_token="ya29.token", id_token="id.token")
        async with _client(handler) as client:
            user = await GoogleAuthStrategy(GOOGLE_CONFIG, client=client).get_user(tokens)

        assert seen["params"] == {"alt": "json", "access_token": "ya29.token"}
        assert seen["auth"] == "Bearer id.token"
        assert user.id == "google-123"
        assert user.email == "ada@example.com"
        assert user.verified_email is True
        assert user.name == "Ada Lovelace"
        assert user.picture_url == "https://example.com/ada.png"
        assert user.locale == "en"

    @pytest.mark.asyncio
    async def test_error_response_raises_provider_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400,
                json={"error": "invalid_grant", "error_description": "Bad Request"},
            )

        async with _client(handler) as client:
            strategy = GoogleAuthStrategy(GOOGLE_CONFIG, client=client)
            with pytest.raises(SocialProviderError) as exc_info:
                await strategy.get_tokens("expired-code")

        assert exc_info.value.provider == "google"
        assert exc_info.value.status_code == 400
        assert "invalid_grant" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_token_response_without_access_token_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"token_type": "Bearer"})

        async with _client(handler) as client:
            with pytest.raises(SocialProviderError, match="access token"):
                await GoogleAuthStrategy(GOOGLE_CONFIG, client=client).get_tokens("code")

    @pytest.mark.asyncio
    async def test_transport_error_raises_provider_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(SocialProviderError) as exc_info:
                await GoogleAuthStrategy(GOOGLE_CONFIG, client=client).get_tokens("code")

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_non_json_body_raises_provider_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>oops</html>")

        async with _client(handler) as client:
            with pytest.raises(SocialProviderError, match="not valid JSON"):
                await GoogleAuthStrategy(GOOGLE_CONFIG, client=client).get_tokens("code")

    @pytest.mark.asyncio
    async def test_injected_client_is_not_closed(self):
        client = _client(lambda request: httpx.Response(200, json={}))
        strategy = GoogleAuthStrategy(GOOGLE_CONFIG, client=client)

        await strategy.close()

        assert client.is_closed is False
        await client.aclose()


class TestFacebookAuthStrategy:
    """Tests for FacebookAuthStrategy."""

    @pytest.mark.asyncio
    async def test_get_tokens_uses_query_params(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["params"] = dict(request.url.params)
            return httpx.Response(
                200,
                json={"access_token": "fb-token", "token_type": "bearer", "expires_in": 5183944},
            )

        async with _client(handler) as client:
            tokens = await FacebookAuthStrategy(FACEBOOK_CONFIG, client=client).get_tokens("fb-code")

        assert seen["method"] == "GET"
        assert seen["path"] == "/v6.0/oauth/access_token"
        assert seen["params"] == {
            "client_id": "fb-app",
            "client_secret": "fb-secret",
            "redirect_uri": "https://app.example.com/auth/facebook/callback",
            "code": "fb-code",
        }
        assert tokens.access_token == "fb-token"

    @pytest.mark.asyncio
    async def test_get_user_maps_profile(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["params"] = dict(request.url.params)
            return httpx.Response(
                200,
                json={
                    "id": "fb-123",
                    "name": "Grace Hopper",
                    "email": "grace@example.com",
                    "picture": {"data": {"url": "https://example.com/grace.jpg"}},
                },
            )

        tokens = SocialTokensResult(access_token="fb-token")
        async with _client(handler) as client:
            user = await FacebookAuthStrategy(FACEBOOK_CONFIG, client=client).get_user(tokens)

        assert seen["params"] == {
            "fields": "id,name,email,locale,picture",
            "access_token": "fb-token",
        }
        assert user.id == "fb-123"
        assert user.verified_email is True
        assert user.picture_url == "https://example.com/grace.jpg"
        assert user.locale is None

    @pytest.mark.asyncio
    async def test_user_without_email_is_unverified(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=json.dumps({"id": "fb-9", "name": "No Mail"}))

        tokens = SocialTokensResult(access_token="fb-token")
        async with _client(handler) as client:
            user = await FacebookAuthStrategy(FACEBOOK_CONFIG, client=client).get_user(tokens)

        assert user.email is None
        assert user.verified_email is False
        assert user.picture_url is None

    @pytest.mark.asyncio
    async def test_graph_error_message_is_surfaced(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400,
                json={"error": {"message": "Invalid verification code format.", "code": 100}},
            )

        async with _client(handler) as client:
            with pytest.raises(SocialProviderError, match="Invalid verification code"):
                await FacebookAuthStrategy(FACEBOOK_CONFIG, client=client).get_tokens("bad")
