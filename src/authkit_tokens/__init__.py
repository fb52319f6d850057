"""authkit tokens - access/refresh token lifecycle.

This package issues short-lived signed access tokens and long-lived
opaque refresh tokens backed by a pluggable repository. It handles:
- Access token signing and verification
- Refresh token creation, verification and revocation
- Token pair issuance, rotation and logout
- A lazy service container configured once at startup

Architecture:
    authkit_tokens/
    ├── services/           # Access, refresh and orchestrating services
    ├── repositories/       # Refresh token records and abstract repository
    ├── persistence/        # Implementations by technology
    │   ├── memory/         # Dict-backed implementation
    │   └── sqlalchemy/     # SQLAlchemy implementation
    ├── config.py           # AuthModuleConfig
    └── container.py        # AuthTokensContainer and module-level accessors

Usage:
    from authkit_tokens import AuthModuleConfig, AuthTokensContainer
    from authkit_tokens.persistence.sqlalchemy import (
        RefreshTokenRepositorySQLAlchemy,
    )

    container = AuthTokensContainer(AuthModuleConfig(
        jwt_secret=secret,
        refresh_token_repository=RefreshTokenRepositorySQLAlchemy(session),
        find_unique_user_by_id=users.find_by_id,
    ))
    pair = await container.auth_tokens_service().generate(user_id)
"""

from authkit_tokens.config import AuthModuleConfig, InfoLogger
from authkit_tokens.container import (
    AuthTokensContainer,
    get_access_token_service,
    get_auth_tokens_service,
    get_default_container,
    get_refresh_token_service,
    init_auth_tokens_module,
    reset_auth_tokens_module_for_tests,
)
from authkit_tokens.repositories import (
    RefreshTokenCreateInput,
    RefreshTokenRecord,
    RefreshTokenRepository,
    RefreshTokenUpdateInput,
    RefreshTokenWhereUnique,
)
from authkit_tokens.services import (
    AccessTokenClaims,
    AccessTokenService,
    AuthTokenPair,
    AuthTokensService,
    FindUniqueUserById,
    RefreshTokenService,
    RefreshTokenSubject,
)

__all__ = [
    # Configuration
    "AuthModuleConfig",
    "InfoLogger",
    # Container
    "AuthTokensContainer",
    "get_access_token_service",
    "get_auth_tokens_service",
    "get_default_container",
    "get_refresh_token_service",
    "init_auth_tokens_module",
    "reset_auth_tokens_module_for_tests",
    # Repositories
    "RefreshTokenCreateInput",
    "RefreshTokenRecord",
    "RefreshTokenRepository",
    "RefreshTokenUpdateInput",
    "RefreshTokenWhereUnique",
    # Services
    "AccessTokenClaims",
    "AccessTokenService",
    "AuthTokenPair",
    "AuthTokensService",
    "FindUniqueUserById",
    "RefreshTokenService",
    "RefreshTokenSubject",
]
