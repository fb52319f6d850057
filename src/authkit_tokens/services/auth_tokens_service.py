"""Auth tokens service.

Composes the access and refresh token services into the three session
operations a host application needs: issue, rotate and log out.
"""

import logging
from dataclasses import dataclass

from authkit_core.exceptions import RefreshTokenInvalidError
from authkit_tokens.services.access_token_service import AccessTokenService
from authkit_tokens.services.refresh_token_service import RefreshTokenService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthTokenPair:
    access_token: str
    refresh_token: str


class AuthTokensService:
    """
    Application-facing token orchestration.

    There is no session state beyond the refresh token record itself:
    - ``generate`` issues a fresh pair (login, registration, rotation)
    - ``refresh`` redeems a refresh token for a new pair
    - ``logout`` revokes a refresh token

    By default ``refresh`` leaves the redeemed token valid until it
    expires or is revoked. Pass ``revoke_on_rotation=True`` to revoke it
    as part of the rotation, after the new pair has been issued; a failed
    issue leaves the redeemed token usable.
    """

    def __init__(
        self,
        refresh_token_service: RefreshTokenService,
        access_token_service: AccessTokenService,
        revoke_on_rotation: bool = False,
    ):
        self._refresh_service = refresh_token_service
        self._access_service = access_token_service
        self._revoke_on_rotation = revoke_on_rotation

    async def generate(self, user_id: str) -> AuthTokenPair:
        """Issue a new refresh/access token pair for ``user_id``.

        The refresh record is created first; if that fails no access
        token is signed.
        """
        refresh_token = await self._refresh_service.create(user_id)
        access_token = self._access_service.generate(user_id)
        return AuthTokenPair(
            access_token=access_token,
            refresh_token=refresh_token.token,
        )

    async def refresh(self, token: str | None) -> AuthTokenPair:
        """Redeem ``token`` for a brand-new token pair.

        Raises
        ------
        RefreshTokenInvalidError
            If ``token`` is empty or does not verify
        AuthUnexpectedError
            If the underlying repository fails
        """
        if not token:
            raise RefreshTokenInvalidError("Refresh token is missing")

        subject = await self._refresh_service.verify(token)
        if not subject.user_id:
            raise RefreshTokenInvalidError

        pair = await self.generate(subject.user_id)

        # Revoke only once the replacement pair exists
        if self._revoke_on_rotation:
            await self._refresh_service.revoke(token)

        logger.debug("Tokens refreshed for user: %s", subject.user_id)
        return pair

    async def logout(self, token: str) -> None:
        """Revoke ``token``. Revocation failures propagate unchanged."""
        await self._refresh_service.revoke(token)
