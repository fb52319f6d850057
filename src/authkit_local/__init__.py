"""authkit local - password authentication against host-owned users.

Architecture:
    authkit_local/
    ├── identifier.py       # Email / E.164 phone parsing
    ├── repositories/       # UserRepository interface
    └── service.py          # LocalAuthService

Usage:
    from authkit_core import BcryptHasher
    from authkit_local import CreateUserInput, LocalAuthService

    service = LocalAuthService(MyUserRepository(session), BcryptHasher())
    user = await service.create_user(
        CreateUserInput(identifier="ada@example.com", password="s3cret!"),
    )
"""

from authkit_local.identifier import Identifier, IdentifierType, parse_identifier
from authkit_local.repositories import LocalUser, NewLocalUser, UserRepository
from authkit_local.service import CreateUserInput, LocalAuthService

__all__ = [
    "CreateUserInput",
    "Identifier",
    "IdentifierType",
    "LocalAuthService",
    "LocalUser",
    "NewLocalUser",
    "UserRepository",
    "parse_identifier",
]
