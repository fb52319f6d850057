"""OAuth2 provider strategies."""

from authkit_social.providers.base import SocialAuthProvider
from authkit_social.providers.facebook import FacebookAuthStrategy
from authkit_social.providers.google import GoogleAuthStrategy

__all__ = [
    "FacebookAuthStrategy",
    "GoogleAuthStrategy",
    "SocialAuthProvider",
]
