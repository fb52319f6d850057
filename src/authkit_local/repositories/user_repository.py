"""User repository interface for local authentication."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, TypeVar

from authkit_local.identifier import IdentifierType


class LocalUser(Protocol):
    """Minimal shape of a host user: a stored password hash, if any.

    Users created through social login have no password and cannot sign
    in locally.
    """

    password: str | None


UserT = TypeVar("UserT", bound=LocalUser)


@dataclass(frozen=True)
class NewLocalUser:
    """Validated data handed to ``UserRepository.create``.

    ``password`` is already hashed. ``profile`` carries any extra fields
    the host application accepted at sign-up.
    """

    identifier: str
    identifier_type: IdentifierType
    password: str
    profile: Mapping[str, Any] = field(default_factory=dict)


class UserRepository(ABC, Generic[UserT]):
    """Storage for users that can sign in with a password.

    The host application owns the user table; implementations adapt it
    to these three operations.
    """

    @abstractmethod
    async def find_by_identifier(self, identifier: str) -> UserT | None:
        """Find a user by normalized email or phone number."""

    @abstractmethod
    async def create(self, data: NewLocalUser) -> UserT:
        """Persist a new user."""

    @abstractmethod
    async def update(self, identifier: str, data: Mapping[str, Any]) -> UserT:
        """Apply a partial update to the user with ``identifier``."""
