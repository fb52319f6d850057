"""Persistence implementations for authkit_tokens.

This package contains storage-specific implementations of the
repository interfaces defined in authkit_tokens.repositories.

Structure:
    persistence/
    ├── memory/         # Dict-backed implementation (tests, demos)
    └── sqlalchemy/     # SQLAlchemy/SQL database implementation

Usage:
    from authkit_tokens.persistence.sqlalchemy import (
        RefreshTokenRepositorySQLAlchemy,
        RefreshTokenModel,
        AuthTokensBase,
    )
"""
