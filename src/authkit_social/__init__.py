"""authkit social - OAuth2 authorization-code login.

Architecture:
    authkit_social/
    ├── providers/          # Google and Facebook strategies (httpx)
    ├── context.py          # SocialAuthContext, provider dispatch
    ├── login.py            # SocialAuthLogin use case
    ├── types.py            # Provider enum, pydantic result/config models
    └── exceptions.py       # Provider errors

Usage:
    from authkit_social import SocialAuthLogin, create_social_auth_context

    login = SocialAuthLogin(
        create_social_auth_context(get_settings()),
        container.auth_tokens_service(),
        handle_social_user=users.upsert_from_social_profile,
    )
    result = await login.execute(code, "google")
"""

from authkit_social.context import (
    SocialAuthContext,
    SocialAuthResult,
    create_social_auth_context,
)
from authkit_social.exceptions import (
    SocialAuthError,
    SocialProviderError,
    UnsupportedProviderError,
)
from authkit_social.login import (
    HandleSocialUser,
    SocialAuthLogin,
    SocialAuthLoginResult,
)
from authkit_social.providers import (
    FacebookAuthStrategy,
    GoogleAuthStrategy,
    SocialAuthProvider,
)
from authkit_social.types import (
    FacebookAuthConfig,
    GoogleAuthConfig,
    Provider,
    SocialTokensResult,
    SocialUserResult,
)

__all__ = [
    # Use cases
    "SocialAuthContext",
    "SocialAuthLogin",
    "SocialAuthLoginResult",
    "SocialAuthResult",
    "HandleSocialUser",
    "create_social_auth_context",
    # Providers
    "FacebookAuthStrategy",
    "GoogleAuthStrategy",
    "SocialAuthProvider",
    # Types
    "FacebookAuthConfig",
    "GoogleAuthConfig",
    "Provider",
    "SocialTokensResult",
    "SocialUserResult",
    # Exceptions
    "SocialAuthError",
    "SocialProviderError",
    "UnsupportedProviderError",
]
