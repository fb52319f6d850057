"""Token services.

Provides access tokens, refresh tokens and their orchestration.
"""

from authkit_tokens.services.access_token_service import (
    AccessTokenClaims,
    AccessTokenService,
)
from authkit_tokens.services.auth_tokens_service import (
    AuthTokenPair,
    AuthTokensService,
)
from authkit_tokens.services.refresh_token_service import (
    FindUniqueUserById,
    RefreshTokenService,
    RefreshTokenSubject,
)

__all__ = [
    "AccessTokenClaims",
    "AccessTokenService",
    "AuthTokenPair",
    "AuthTokensService",
    "FindUniqueUserById",
    "RefreshTokenService",
    "RefreshTokenSubject",
]
