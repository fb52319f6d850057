"""Authentication error taxonomy.

Every failure raised by the authkit packages falls in one of two kinds:

- ``ErrorKind.DOMAIN``: expected, business-meaningful conditions
  (missing/expired access token, invalid refresh token, wrong password).
  They propagate to the caller unwrapped.
- ``ErrorKind.UNEXPECTED``: infrastructure failures (repository down,
  network error). They are wrapped with a stable code and keep the
  original exception as ``cause``.

Callers branch on ``error.kind`` and ``error.code`` instead of sniffing
concrete exception types, although the named subclasses are available
for ``except`` clauses too.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Tag distinguishing expected failures from infrastructure failures."""

    DOMAIN = "domain"
    UNEXPECTED = "unexpected"


class DomainErrorCode(str, Enum):
    """Stable codes for expected authentication failures."""

    MISSING_ACCESS_TOKEN = "MISSING_ACCESS_TOKEN"
    EXPIRED_ACCESS_TOKEN = "EXPIRED_ACCESS_TOKEN"
    REFRESH_TOKEN_INVALID = "REFRESH_TOKEN_INVALID"
    AUTH_USED_IDENTIFIER = "AUTH_USED_IDENTIFIER"
    INCORRECT_CREDENTIALS = "INCORRECT_CREDENTIALS"
    USER_NOT_LOCAL = "USER_NOT_LOCAL"
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"


class UnexpectedErrorCode(str, Enum):
    """Stable codes for wrapped infrastructure failures."""

    REFRESHTOKEN_CREATE_FAILED = "REFRESHTOKEN_CREATE_FAILED"
    REFRESHTOKEN_VERIFY_FAILED = "REFRESHTOKEN_VERIFY_FAILED"
    REFRESHTOKEN_REVOKE_FAILED = "REFRESHTOKEN_REVOKE_FAILED"
    AUTH_USER_CREATION_FAILED = "AUTH_USER_CREATION_FAILED"
    LOGIN_FAILED = "LOGIN_FAILED"
    PASSWORD_RESET_FAILED = "PASSWORD_RESET_FAILED"
    FINDING_USER_FAILED = "FINDING_USER_FAILED"


class AuthError(Exception):
    """Base exception for all authentication errors."""

    kind: ErrorKind

    def __init__(self, code: str, message: str | None = None):
        self.code = code
        self.message = message or code
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.message == self.code:
            return self.code
        return f"{self.code}: {self.message}"


class AuthDomainError(AuthError):
    """An expected failure with a stable, user-facing code."""

    kind = ErrorKind.DOMAIN

    def __init__(
        self,
        code: DomainErrorCode,
        message: str | None = None,
        meta: dict | None = None,
    ):
        super().__init__(code.value, message)
        self.meta = meta or {}


class AuthUnexpectedError(AuthError):
    """An infrastructure failure wrapped with a stable code.

    The original exception is kept on ``cause`` and chained as
    ``__cause__`` so tracebacks show both.
    """

    kind = ErrorKind.UNEXPECTED

    def __init__(
        self,
        code: UnexpectedErrorCode,
        cause: BaseException | None = None,
        message: str | None = None,
        meta: dict | None = None,
    ):
        if message is None and cause is not None:
            message = f"{type(cause).__name__}: {cause}"
        super().__init__(code.value, message)
        self.cause = cause
        self.meta = meta or {}
        self.__cause__ = cause


class MissingAccessTokenError(AuthDomainError):
    """Raised when an access token is absent or empty."""

    def __init__(self, message: str = "Access token is missing"):
        super().__init__(DomainErrorCode.MISSING_ACCESS_TOKEN, message)


class ExpiredAccessTokenError(AuthDomainError):
    """Raised when an access token's expiry has passed."""

    def __init__(self, message: str = "Access token has expired"):
        super().__init__(DomainErrorCode.EXPIRED_ACCESS_TOKEN, message)


class RefreshTokenInvalidError(AuthDomainError):
    """Raised when a refresh token is unknown, expired, revoked or orphaned.

    All of these collapse to the same code so callers cannot tell which
    condition applied.
    """

    def __init__(self, message: str = "Refresh token is invalid"):
        super().__init__(DomainErrorCode.REFRESH_TOKEN_INVALID, message)


class ConfigurationError(Exception):
    """Raised for misconfiguration: bad durations, empty secrets, use before init."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
