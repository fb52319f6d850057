"""SQLAlchemy declarative base for authkit_tokens models.

This provides a separate Base for token models. The consuming application
should include AuthTokensBase.metadata in its migration configuration.

Examples
--------
# In Alembic env.py:
from myapp.models import Base
from authkit_tokens.persistence.sqlalchemy import AuthTokensBase

target_metadata = [Base.metadata, AuthTokensBase.metadata]
"""

from sqlalchemy.orm import DeclarativeBase


class AuthTokensBase(DeclarativeBase):
    """Declarative base for authkit_tokens models."""
