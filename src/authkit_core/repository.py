"""Generic repository contract shared by authkit persistence adapters.

This interface defines the CRUD surface every adapter (SQLAlchemy,
in-memory, key-value store, ...) implements. Services only use the
subset they need; the rest exists so one adapter can serve the host
application's admin and retention tooling too.
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any, Generic, Literal, TypeVar

ModelT = TypeVar("ModelT")
WhereT = TypeVar("WhereT")
CreateT = TypeVar("CreateT")
UpdateT = TypeVar("UpdateT")
ResultT = TypeVar("ResultT")

SortOrder = Literal["asc", "desc"]
OrderBy = dict[str, SortOrder]
Filter = dict[str, Any]


class RecordNotFoundError(LookupError):
    """Raised when an update targets a record that does not exist."""

    def __init__(self, where: object):
        self.where = where
        super().__init__(f"No record matches {where!r}")


class BaseRepository(ABC, Generic[ModelT, WhereT, CreateT, UpdateT]):
    """Abstract CRUD repository.

    ``tx`` parameters carry an adapter-specific transaction handle obtained
    from ``create_transaction``; ``None`` means "use the default session".
    """

    @abstractmethod
    async def create(self, data: CreateT, tx: Any = None) -> ModelT:
        """Persist a new record and return it."""

    @abstractmethod
    async def update(self, where: WhereT, data: UpdateT, tx: Any = None) -> ModelT:
        """
        Apply a partial update to the record matching ``where``.

        Raises
        ------
        RecordNotFoundError
            If no record matches
        """

    @abstractmethod
    async def find_many(
        self,
        offset: int,
        limit: int,
        order_by: OrderBy | None = None,
        where: Filter | None = None,
    ) -> list[ModelT]:
        """Return a page of records matching the equality filter ``where``."""

    @abstractmethod
    async def find_first(
        self,
        where: Filter,
        order_by: OrderBy | None = None,
    ) -> ModelT | None:
        """Return the first record matching ``where``, or None."""

    @abstractmethod
    async def delete(self, where: WhereT, tx: Any = None) -> ModelT | None:
        """Delete the record matching ``where``; return it, or None if absent."""

    @abstractmethod
    async def find_unique(self, where: WhereT) -> ModelT | None:
        """Return the record matching a unique key, or None."""

    @abstractmethod
    async def count(self, where: Filter | None = None) -> int:
        """Count records matching ``where`` (all records if None)."""

    @abstractmethod
    async def create_transaction(
        self,
        callback: Callable[[Any], Awaitable[ResultT]],
    ) -> ResultT:
        """Run ``callback(tx)`` atomically and return its result."""
