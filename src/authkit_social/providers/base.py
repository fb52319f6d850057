"""Base class for OAuth2 authorization-code providers."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx
from pydantic import ValidationError

from authkit_social.exceptions import SocialProviderError
from authkit_social.types import Provider, SocialTokensResult, SocialUserResult

logger = logging.getLogger(__name__)


def _error_detail(response: httpx.Response) -> str:
    """Pull a human-readable message out of a provider error response.

    Handles both ``{"error": "invalid_grant"}`` and
    ``{"error": {"message": "..."}}`` bodies.
    """
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] if response.text else f"HTTP {response.status_code}"

    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if isinstance(error, str):
        description = body.get("error_description")
        return f"{error}: {description}" if description else error
    return f"HTTP {response.status_code}"


class SocialAuthProvider(ABC):
    """
    One identity provider's code exchange and profile lookup.

    A provider either owns its ``httpx.AsyncClient`` (created lazily and
    closed by ``close``) or uses one injected by the caller, which the
    caller then closes.
    """

    provider: Provider

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        self._client = client
        self._owns_client = client is None
        self._timeout = timeout

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def close(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> SocialAuthProvider:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @abstractmethod
    async def get_tokens(self, code: str) -> SocialTokensResult:
        """Exchange an authorization code for provider tokens."""

    @abstractmethod
    async def get_user(self, tokens: SocialTokensResult) -> SocialUserResult:
        """Fetch the user's profile with the tokens from ``get_tokens``."""

    async def _request_json(self, method: str, url: str, **kwargs: Any) -> Any:
        """Send a request and return the decoded JSON body.

        Raises
        ------
        SocialProviderError
            On transport errors, non-2xx responses or a non-JSON body
        """
        client = await self._get_client()
        try:
            response = await client.request(method, url, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            detail = _error_detail(e.response)
            logger.warning(
                "%s returned error %d: %s",
                self.provider.value,
                e.response.status_code,
                detail,
            )
            raise SocialProviderError(
                self.provider.value,
                detail,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.warning("%s request failed: %s", self.provider.value, e)
            raise SocialProviderError(
                self.provider.value,
                str(e) or type(e).__name__,
            ) from e
        except ValueError as e:
            raise SocialProviderError(
                self.provider.value,
                "Response body is not valid JSON",
            ) from e

    def _parse_tokens(self, data: Any) -> SocialTokensResult:
        try:
            return SocialTokensResult.model_validate(data)
        except ValidationError as e:
            raise SocialProviderError(
                self.provider.value,
                "Token response is missing an access token",
            ) from e

    def _parse_user(self, data: dict[str, Any]) -> SocialUserResult:
        try:
            return SocialUserResult.model_validate(data)
        except ValidationError as e:
            raise SocialProviderError(
                self.provider.value,
                "Profile response is missing the user id",
            ) from e
