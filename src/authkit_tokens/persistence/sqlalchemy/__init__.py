"""SQLAlchemy implementation for authkit_tokens persistence.

Provides:
- AuthTokensBase: Declarative base for token models
- RefreshTokenModel: SQLAlchemy model for refresh tokens
- RefreshTokenRepositorySQLAlchemy: Repository implementation

Note: The consuming application should include AuthTokensBase.metadata
in its Alembic migrations to create the refresh_tokens table, or call
``authkit db init`` for a quick start.
"""

from authkit_tokens.persistence.sqlalchemy.base import AuthTokensBase
from authkit_tokens.persistence.sqlalchemy.models import RefreshTokenModel
from authkit_tokens.persistence.sqlalchemy.repositories import (
    RefreshTokenRepositorySQLAlchemy,
)

__all__ = [
    "AuthTokensBase",
    "RefreshTokenModel",
    "RefreshTokenRepositorySQLAlchemy",
]
