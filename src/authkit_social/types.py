"""Schemas shared by the social login providers."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, SecretStr

if TYPE_CHECKING:
    from authkit_config import Settings


class Provider(str, Enum):
    """Supported OAuth2 identity providers."""

    GOOGLE = "google"
    FACEBOOK = "facebook"


class SocialTokensResult(BaseModel):
    """Token response from a provider's authorization-code exchange."""

    access_token: str = Field(..., min_length=1, description="Provider access token")
    token_type: str | None = Field(None, description="Usually 'Bearer'")
    expires_in: int | None = Field(None, description="Lifetime in seconds")
    refresh_token: str | None = Field(None, description="Provider refresh token")
    scope: str | None = Field(None, description="Granted scopes")
    id_token: str | None = Field(None, description="OpenID Connect ID token")

    model_config = ConfigDict(extra="allow")


class SocialUserResult(BaseModel):
    """Provider profile normalized to a common shape."""

    id: str = Field(..., description="Provider-scoped user id")
    email: str | None = Field(None, description="Email, if the user shared one")
    verified_email: bool = Field(False, description="Whether the email is verified")
    name: str = Field("", description="Display name")
    picture_url: str | None = Field(None, description="Profile picture URL")
    locale: str | None = Field(None, description="Preferred locale")


class GoogleAuthConfig(BaseModel):
    """OAuth client registered in the Google Cloud console."""

    client_id: str
    client_secret: SecretStr
    redirect_uri: str

    @classmethod
    def from_settings(cls, settings: Settings) -> GoogleAuthConfig:
        return cls(
            client_id=settings.google_client_id,
            client_secret=settings.google_client_secret or SecretStr(""),
            redirect_uri=settings.google_redirect_uri,
        )


class FacebookAuthConfig(BaseModel):
    """Facebook app credentials."""

    app_id: str
    app_secret: SecretStr
    redirect_uri: str

    @classmethod
    def from_settings(cls, settings: Settings) -> FacebookAuthConfig:
        return cls(
            app_id=settings.facebook_app_id,
            app_secret=settings.facebook_app_secret or SecretStr(""),
            redirect_uri=settings.facebook_redirect_uri,
        )
