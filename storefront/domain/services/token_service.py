# storefront/domain/services/token_service.py

"""
Refresh token lifecycle.

Pairs a short-lived signed access token with a long-lived, opaque,
single-use refresh token. Every refresh rotates: the presented token is
marked used and a new one is issued, so presenting a rotated token again
fails with RefreshTokenInvalidException. Reacting to such a reuse (e.g.
revoking every token of the user) is left to the caller.

Validity is always re-checked against the stored record; nothing is
cached between calls, so a revocation is visible to the very next refresh.
"""

import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable, Optional
from uuid import UUID

from storefront.application.ports.outbound import (
    IRefreshTokenRepository,
    IAccessTokenIssuer,
    IUserLookup,
)
from storefront.domain.exceptions import (
    RefreshTokenExpiredException,
    RefreshTokenInvalidException,
    RefreshTokenNotFoundException,
)
from storefront.domain.models.refresh_token_domain_model import RefreshToken, TokenPair, utcnow
from storefront.domain.models.user_domain_model import UserIdentity
from storefront.domain.services.auth_service import (
    AuthService,
    DEFAULT_REFRESH_TOKEN_LIFETIME,
    duration_to_seconds,
    parse_duration,
)

logger = logging.getLogger(__name__)

# 64 random bytes, hex encoded (512 bits of entropy)
REFRESH_TOKEN_BYTES = 64


class TokenLifecycleManager:
    """
    Issues, rotates and revokes token pairs.

    Attributes:
        expires_in: Access token lifetime in seconds
        refresh_lifetime: Lifetime applied to new refresh tokens
    """

    def __init__(
            self,
            token_repository: IRefreshTokenRepository,
            token_issuer: IAccessTokenIssuer,
            user_lookup: IUserLookup,
            access_expiration: Optional[str] = "15m",
            refresh_expiration: Optional[str] = "7d",
            clock: Callable[[], datetime] = utcnow,
    ):
        self.tokens = token_repository
        self.issuer = token_issuer
        self.users = user_lookup
        self.clock = clock
        self.expires_in = duration_to_seconds(access_expiration)
        self.refresh_lifetime = parse_duration(refresh_expiration) or DEFAULT_REFRESH_TOKEN_LIFETIME

    @staticmethod
    def is_valid(record: RefreshToken, now: Optional[datetime] = None) -> bool:
        """Pure predicate: not expired, not revoked and not used."""
        return record.is_valid(now)

    async def issue_token_pair(self, user: UserIdentity) -> TokenPair:
        """
        Issue a signed access token and persist a fresh refresh token.

        Args:
            user: Identity embedded in the access token

        Returns:
            The new token pair
        """
        payload = AuthService.create_token_payload(user)
        access_token = self.issuer.sign(payload, timedelta(seconds=self.expires_in))

        record = await self.tokens.create(
            RefreshToken(
                token=secrets.token_hex(REFRESH_TOKEN_BYTES),
                user_id=user.id,
                expires_at=self.clock() + self.refresh_lifetime,
                is_revoked=False,
                is_used=False,
            )
        )

        return TokenPair(
            access_token=access_token,
            refresh_token=record.token,
            expires_in=self.expires_in,
            user_id=user.id,
        )

    async def refresh(self, presented_token: str) -> TokenPair:
        """
        Exchange a refresh token for a new token pair (rotation).

        Args:
            presented_token: Refresh token sent by the client

        Returns:
            A new token pair for the owner of the presented token

        Raises:
            RefreshTokenNotFoundException: No stored token matches
            RefreshTokenExpiredException: The token is past its expiration
            RefreshTokenInvalidException: The token was used or revoked
        """
        record = await self.tokens.get_by_token(presented_token)
        if record is None:
            raise RefreshTokenNotFoundException()

        if record.is_expired(self.clock()):
            raise RefreshTokenExpiredException()

        if record.is_revoked or record.is_used:
            if record.is_used:
                logger.warning(f"Reuse of rotated refresh token for user {record.user_id}")
            raise RefreshTokenInvalidException()

        # Only one concurrent caller wins the used=false -> true transition
        if not await self.tokens.mark_used(presented_token):
            logger.warning(f"Lost rotation race for refresh token of user {record.user_id}")
            raise RefreshTokenInvalidException()

        user = await self.users.get_identity(record.user_id)
        if user is None:
            raise RefreshTokenNotFoundException(detail="Refresh token owner no longer exists")

        return await self.issue_token_pair(user)

    async def revoke(self, token: str) -> bool:
        """Revoke a single token. Revoking twice is not an error."""
        return await self.tokens.revoke(token)

    async def revoke_all(self, user_id: UUID) -> int:
        """Revoke every non-revoked token of the user ("log out everywhere")."""
        count = await self.tokens.revoke_all_for_user(user_id)
        logger.info(f"Revoked {count} refresh tokens for user {user_id}")
        return count
