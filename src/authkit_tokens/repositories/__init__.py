"""Repository interfaces for authkit_tokens.

The actual implementations live in ``authkit_tokens.persistence`` or in
the consuming application's infrastructure layer.
"""

from authkit_tokens.repositories.refresh_token_repository import (
    RefreshTokenCreateInput,
    RefreshTokenRecord,
    RefreshTokenRepository,
    RefreshTokenUpdateInput,
    RefreshTokenWhereUnique,
)

__all__ = [
    "RefreshTokenCreateInput",
    "RefreshTokenRecord",
    "RefreshTokenRepository",
    "RefreshTokenUpdateInput",
    "RefreshTokenWhereUnique",
]
