"""In-memory implementation of RefreshTokenRepository.

Useful for tests, demos and single-process deployments that accept
losing sessions on restart.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import replace
from typing import Any, TypeVar
from uuid import uuid4

from authkit_core.repository import Filter, OrderBy, RecordNotFoundError
from authkit_core.time import utc_now
from authkit_tokens.repositories import (
    RefreshTokenCreateInput,
    RefreshTokenRecord,
    RefreshTokenRepository,
    RefreshTokenUpdateInput,
    RefreshTokenWhereUnique,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InMemoryRefreshTokenRepository(RefreshTokenRepository):
    """Dict-backed repository keyed by record id."""

    def __init__(self) -> None:
        self._records: dict[str, RefreshTokenRecord] = {}

    def _find(self, where: RefreshTokenWhereUnique) -> RefreshTokenRecord | None:
        return next((r for r in self._records.values() if where.matches(r)), None)

    @staticmethod
    def _matches(record: RefreshTokenRecord, where: Filter | None) -> bool:
        if not where:
            return True
        return all(getattr(record, key) == value for key, value in where.items())

    @staticmethod
    def _sorted(
        records: list[RefreshTokenRecord],
        order_by: OrderBy | None,
    ) -> list[RefreshTokenRecord]:
        # Apply keys last-to-first so the first key wins (stable sort)
        for key, direction in reversed(list((order_by or {}).items())):
            records = sorted(
                records,
                key=lambda r: getattr(r, key),
                reverse=direction == "desc",
            )
        return records

    async def create(
        self,
        data: RefreshTokenCreateInput,
        tx: Any = None,
    ) -> RefreshTokenRecord:
        if any(r.token == data.token for r in self._records.values()):
            msg = "Refresh token value already exists"
            raise ValueError(msg)

        now = utc_now()
        record = RefreshTokenRecord(
            id=str(uuid4()),
            token=data.token,
            user_id=data.user_id,
            expires_at=data.expires_at,
            created_at=now,
            updated_at=now,
            revoked_at=data.revoked_at,
        )
        self._records[record.id] = record
        return record

    async def update(
        self,
        where: RefreshTokenWhereUnique,
        data: RefreshTokenUpdateInput,
        tx: Any = None,
    ) -> RefreshTokenRecord:
        existing = self._find(where)
        if existing is None:
            raise RecordNotFoundError(where)

        changes = data.changes()
        if existing.is_revoked():
            changes.pop("revoked_at", None)
        if not changes:
            return existing

        updated = replace(existing, **changes, updated_at=utc_now())
        self._records[updated.id] = updated
        return updated

    async def find_many(
        self,
        offset: int,
        limit: int,
        order_by: OrderBy | None = None,
        where: Filter | None = None,
    ) -> list[RefreshTokenRecord]:
        matching = [r for r in self._records.values() if self._matches(r, where)]
        return self._sorted(matching, order_by)[offset : offset + limit]

    async def find_first(
        self,
        where: Filter,
        order_by: OrderBy | None = None,
    ) -> RefreshTokenRecord | None:
        found = await self.find_many(0, 1, order_by=order_by, where=where)
        return found[0] if found else None

    async def delete(
        self,
        where: RefreshTokenWhereUnique,
        tx: Any = None,
    ) -> RefreshTokenRecord | None:
        existing = self._find(where)
        if existing is None:
            return None
        del self._records[existing.id]
        return existing

    async def find_unique(
        self,
        where: RefreshTokenWhereUnique,
    ) -> RefreshTokenRecord | None:
        return self._find(where)

    async def count(self, where: Filter | None = None) -> int:
        return sum(1 for r in self._records.values() if self._matches(r, where))

    async def create_transaction(self, callback: Callable[[Any], Awaitable[T]]) -> T:
        """Run ``callback`` and restore the previous state if it raises."""
        snapshot = dict(self._records)
        try:
            return await callback(self)
        except Exception:
            logger.debug("Rolling back in-memory refresh token transaction")
            self._records = snapshot
            raise
