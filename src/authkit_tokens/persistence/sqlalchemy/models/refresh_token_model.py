"""SQLAlchemy model for refresh tokens."""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from authkit_core.time import utc_now
from authkit_tokens.persistence.sqlalchemy.base import AuthTokensBase


class RefreshTokenModel(AuthTokensBase):
    """
    SQLAlchemy model for refresh tokens.

    Rows are never deleted by the token services; a refresh issues a new
    row and logout only sets ``revoked_at``.

    Table: refresh_tokens
    """

    __tablename__ = "refresh_tokens"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    # Opaque lookup key (40 random bytes, base64url ~54 chars)
    token: Mapped[str] = mapped_column(
        String(128),
        unique=True,
        nullable=False,
        index=True,
    )

    # No FK: the user table belongs to the host application
    user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )

    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    revoked_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )

    def __repr__(self) -> str:
        return f"<RefreshTokenModel(id={self.id}, user_id={self.user_id})>"
