"""Abstract repository interface for refresh tokens.

This interface defines the contract for refresh-token persistence.
Implementations can use SQLAlchemy, an in-memory dict, Redis or any
other storage.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from authkit_core.repository import BaseRepository


@dataclass(frozen=True)
class RefreshTokenRecord:
    """Immutable refresh token data returned by repositories.

    ``user_id`` is a weak reference to a user owned by the host
    application; the token system never manages that relationship.
    """

    id: str
    token: str
    user_id: str
    expires_at: datetime
    created_at: datetime
    updated_at: datetime
    revoked_at: datetime | None = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now

    def is_revoked(self) -> bool:
        return self.revoked_at is not None

    def is_valid(self, now: datetime) -> bool:
        """A token is usable iff it was never revoked and has not expired."""
        return not self.is_revoked() and not self.is_expired(now)


@dataclass(frozen=True)
class RefreshTokenCreateInput:
    token: str
    user_id: str
    expires_at: datetime
    revoked_at: datetime | None = None


@dataclass(frozen=True)
class RefreshTokenUpdateInput:
    """Partial update. ``None`` fields are left untouched.

    ``revoked_at`` is write-once: repositories keep an existing value and
    only set it on a record that was never revoked, as a single atomic
    write.
    """

    revoked_at: datetime | None = None
    expires_at: datetime | None = None

    def changes(self) -> dict[str, Any]:
        return {
            name: value
            for name, value in (
                ("revoked_at", self.revoked_at),
                ("expires_at", self.expires_at),
            )
            if value is not None
        }


@dataclass(frozen=True)
class RefreshTokenWhereUnique:
    """Unique lookup key: exactly one of ``token`` or ``id``."""

    token: str | None = field(default=None)
    id: str | None = field(default=None)

    def __post_init__(self) -> None:
        if (self.token is None) == (self.id is None):
            msg = "Exactly one of 'token' or 'id' must be given"
            raise ValueError(msg)

    @classmethod
    def by_token(cls, token: str) -> "RefreshTokenWhereUnique":
        return cls(token=token)

    @classmethod
    def by_id(cls, record_id: str) -> "RefreshTokenWhereUnique":
        return cls(id=record_id)

    def matches(self, record: RefreshTokenRecord) -> bool:
        if self.token is not None:
            return record.token == self.token
        return record.id == self.id


class RefreshTokenRepository(
    BaseRepository[
        RefreshTokenRecord,
        RefreshTokenWhereUnique,
        RefreshTokenCreateInput,
        RefreshTokenUpdateInput,
    ],
):
    """
    Repository interface for refresh token records.

    The token services use ``create``, ``find_unique`` and ``update``;
    the remaining CRUD methods come from ``BaseRepository``.

    Example implementation:
        class RedisRefreshTokenRepository(RefreshTokenRepository):
            async def find_unique(self, where):
                raw = await self._redis.get(f"rt:{where.token}")
                ...
    """
