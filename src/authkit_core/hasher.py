"""Password hashing using bcrypt."""

import asyncio
from abc import ABC, abstractmethod

import bcrypt


class Hasher(ABC):
    """Hashing contract used by local authentication.

    Implementations can wrap bcrypt, argon2 or anything else; the
    services only rely on these two coroutines.
    """

    @abstractmethod
    async def hash(self, text: str) -> str:
        """Return a salted hash of ``text``."""

    @abstractmethod
    async def compare(self, text: str, hashed: str) -> bool:
        """Return True if ``text`` matches ``hashed``."""


class BcryptHasher(Hasher):
    """bcrypt implementation of ``Hasher``.

    Hashing is CPU-bound, so each call runs in a worker thread to keep
    the event loop responsive.

    Examples
    --------
    >>> hasher = BcryptHasher()
    >>> hashed = await hasher.hash("my_secure_password")
    >>> await hasher.compare("my_secure_password", hashed)
    True
    """

    DEFAULT_ROUNDS = 10

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        """Initialize the hasher.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations)
        """
        self._rounds = rounds

    async def hash(self, text: str) -> str:
        return await asyncio.to_thread(self._hash_sync, text)

    async def compare(self, text: str, hashed: str) -> bool:
        return await asyncio.to_thread(self._compare_sync, text, hashed)

    def _hash_sync(self, text: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(text.encode("utf-8"), salt).decode("utf-8")

    def _compare_sync(self, text: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(text.encode("utf-8"), hashed.encode("utf-8"))
        except (ValueError, TypeError):
            # Invalid hash format
            return False
