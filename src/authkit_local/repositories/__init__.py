"""Repository interfaces for authkit_local."""

from authkit_local.repositories.user_repository import (
    LocalUser,
    NewLocalUser,
    UserRepository,
)

__all__ = [
    "LocalUser",
    "NewLocalUser",
    "UserRepository",
]
