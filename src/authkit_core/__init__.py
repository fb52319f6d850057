"""authkit core - primitives shared by every authkit package.

This package is independent of any application domain. It provides:
- The domain/unexpected error taxonomy
- Duration parsing and UTC time helpers
- Signed token (JWT) codec
- Opaque random token generation
- Password hashing (bcrypt)
- The generic repository contract

Architecture:
    authkit_core/
    ├── exceptions.py   # Error kinds, codes and exception classes
    ├── time.py         # utc_now, parse_duration, generate_expired_date
    ├── token.py        # JwtCodec and codec exceptions
    ├── crypto.py       # CryptoTokenGenerator
    ├── hasher.py       # Hasher interface, BcryptHasher
    └── repository.py   # BaseRepository, RecordNotFoundError
"""

from authkit_core.crypto import CryptoTokenGenerator, TokenGenerator
from authkit_core.exceptions import (
    AuthDomainError,
    AuthError,
    AuthUnexpectedError,
    ConfigurationError,
    DomainErrorCode,
    ErrorKind,
    ExpiredAccessTokenError,
    MissingAccessTokenError,
    RefreshTokenInvalidError,
    UnexpectedErrorCode,
)
from authkit_core.hasher import BcryptHasher, Hasher
from authkit_core.repository import BaseRepository, RecordNotFoundError
from authkit_core.time import (
    ensure_tz_aware,
    generate_expired_date,
    parse_duration,
    utc_now,
)
from authkit_core.token import (
    JwtCodec,
    SignedTokenCodec,
    SignedTokenError,
    SignedTokenExpiredError,
    SignedTokenInvalidError,
)

__all__ = [
    # Errors
    "AuthDomainError",
    "AuthError",
    "AuthUnexpectedError",
    "ConfigurationError",
    "DomainErrorCode",
    "ErrorKind",
    "ExpiredAccessTokenError",
    "MissingAccessTokenError",
    "RefreshTokenInvalidError",
    "UnexpectedErrorCode",
    # Time
    "ensure_tz_aware",
    "generate_expired_date",
    "parse_duration",
    "utc_now",
    # Signed tokens
    "JwtCodec",
    "SignedTokenCodec",
    "SignedTokenError",
    "SignedTokenExpiredError",
    "SignedTokenInvalidError",
    # Opaque tokens
    "CryptoTokenGenerator",
    "TokenGenerator",
    # Hashing
    "BcryptHasher",
    "Hasher",
    # Repositories
    "BaseRepository",
    "RecordNotFoundError",
]
