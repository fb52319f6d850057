"""SQLAlchemy implementation of RefreshTokenRepository."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from authkit_core.repository import Filter, OrderBy, RecordNotFoundError
from authkit_core.time import ensure_tz_aware, utc_now
from authkit_tokens.persistence.sqlalchemy.models import RefreshTokenModel
from authkit_tokens.repositories import (
    RefreshTokenCreateInput,
    RefreshTokenRecord,
    RefreshTokenRepository,
    RefreshTokenUpdateInput,
    RefreshTokenWhereUnique,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RefreshTokenRepositorySQLAlchemy(RefreshTokenRepository):
    """
    SQLAlchemy implementation of RefreshTokenRepository.

    Writes are flushed but not committed; the caller owns the session
    and decides when to commit.
    """

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session.

        Parameters
        ----------
        session
            SQLAlchemy async session
        """
        self._session = session

    def _session_for(self, tx: Any) -> AsyncSession:
        return tx if tx is not None else self._session

    def _to_record(self, model: RefreshTokenModel) -> RefreshTokenRecord:
        """Map SQLAlchemy model to the repository data object.

        SQLite drops tzinfo on round-trip, so timestamps are normalized
        to aware UTC here.
        """
        return RefreshTokenRecord(
            id=str(model.id),
            token=model.token,
            user_id=model.user_id,
            expires_at=ensure_tz_aware(model.expires_at),
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
            revoked_at=(
                ensure_tz_aware(model.revoked_at) if model.revoked_at else None
            ),
        )

    @staticmethod
    def _unique_clause(where: RefreshTokenWhereUnique):
        if where.token is not None:
            return RefreshTokenModel.token == where.token
        return RefreshTokenModel.id == where.id

    @staticmethod
    def _filter_clauses(where: Filter | None) -> list:
        return [
            getattr(RefreshTokenModel, key) == value
            for key, value in (where or {}).items()
        ]

    @staticmethod
    def _order_clauses(order_by: OrderBy | None) -> list:
        clauses = []
        for key, direction in (order_by or {}).items():
            column = getattr(RefreshTokenModel, key)
            clauses.append(column.desc() if direction == "desc" else column.asc())
        return clauses

    async def _find_model(
        self,
        where: RefreshTokenWhereUnique,
        session: AsyncSession,
        refresh: bool = False,
    ) -> RefreshTokenModel | None:
        stmt = select(RefreshTokenModel).where(self._unique_clause(where))
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(
        self,
        data: RefreshTokenCreateInput,
        tx: Any = None,
    ) -> RefreshTokenRecord:
        session = self._session_for(tx)
        model = RefreshTokenModel(
            token=data.token,
            user_id=data.user_id,
            expires_at=data.expires_at,
            revoked_at=data.revoked_at,
        )
        session.add(model)
        await session.flush()
        return self._to_record(model)

    async def update(
        self,
        where: RefreshTokenWhereUnique,
        data: RefreshTokenUpdateInput,
        tx: Any = None,
    ) -> RefreshTokenRecord:
        """Apply a partial update.

        ``revoked_at`` is written with ``UPDATE ... WHERE revoked_at IS
        NULL`` so concurrent revocations cannot overwrite each other; the
        losing writer gets the stored record back unchanged.
        """
        session = self._session_for(tx)
        changes = data.changes()
        revoked_at = changes.pop("revoked_at", None)

        if revoked_at is not None:
            stmt = (
                update(RefreshTokenModel)
                .where(
                    self._unique_clause(where),
                    RefreshTokenModel.revoked_at.is_(None),
                )
                .values(revoked_at=revoked_at, updated_at=utc_now())
                .execution_options(synchronize_session=False)
            )
            await session.execute(stmt)

        model = await self._find_model(where, session, refresh=True)
        if model is None:
            raise RecordNotFoundError(where)

        if changes:
            for name, value in changes.items():
                setattr(model, name, value)
            model.updated_at = utc_now()
            await session.flush()
        return self._to_record(model)

    async def find_many(
        self,
        offset: int,
        limit: int,
        order_by: OrderBy | None = None,
        where: Filter | None = None,
    ) -> list[RefreshTokenRecord]:
        stmt = (
            select(RefreshTokenModel)
            .where(*self._filter_clauses(where))
            .order_by(*self._order_clauses(order_by))
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_record(m) for m in result.scalars().all()]

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
        session = self._session_for(tx)
        model = await self._find_model(where, session)
        if model is None:
            return None

        record = self._to_record(model)
        await session.delete(model)
        await session.flush()
        logger.info("Deleted refresh token %s for user: %s", record.id, record.user_id)
        return record

    async def find_unique(
        self,
        where: RefreshTokenWhereUnique,
    ) -> RefreshTokenRecord | None:
        model = await self._find_model(where, self._session)
        return self._to_record(model) if model else None

    async def count(self, where: Filter | None = None) -> int:
        stmt = (
            select(func.count())
            .select_from(RefreshTokenModel)
            .where(*self._filter_clauses(where))
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def create_transaction(self, callback: Callable[[Any], Awaitable[T]]) -> T:
        """Run ``callback(session)`` inside a SAVEPOINT.

        The savepoint is rolled back if the callback raises; the outer
        transaction stays usable.
        """
        async with self._session.begin_nested():
            return await callback(self._session)
