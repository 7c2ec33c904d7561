# storefront/application/use_cases/auth_use_cases.py

"""
Service for user authentication.

Registration, login, token rotation and logout. Token handling is
delegated to TokenLifecycleManager, wired here to the session-bound
persistence adapters.
"""

import logging
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.adapters.configuration.config import settings
from storefront.adapters.outbound.persistence.models import User
from storefront.adapters.outbound.persistence.repositories.refresh_token_repository import (
    AsyncRefreshTokenRepository,
)
from storefront.adapters.outbound.persistence.repositories.user_repository import (
    AsyncUserIdentityLookup,
    to_identity,
    user_repository,
)
from storefront.adapters.outbound.security.auth_user_manager import UserAuthManager
from storefront.application.dtos.user_dto import (
    AuthResponse,
    LoginRequest,
    UserCreate,
    UserOutput,
)
from storefront.domain.exceptions import RefreshTokenNotFoundException
from storefront.domain.models.refresh_token_domain_model import TokenPair
from storefront.domain.services.token_service import TokenLifecycleManager

logger = logging.getLogger(__name__)


class AsyncAuthService:
    """
    Service for user authentication.

    This class implements the business logic related to
    user authentication, including registration, login, and token refresh.
    """

    def __init__(self, db_session: AsyncSession):
        """
        Initialize the service with a database session.

        Args:
            db_session: Active SQLAlchemy session
        """
        self.db = db_session
        self.tokens = TokenLifecycleManager(
            token_repository=AsyncRefreshTokenRepository(db_session),
            token_issuer=UserAuthManager.token_issuer,
            user_lookup=AsyncUserIdentityLookup(db_session),
            access_expiration=settings.JWT_ACCESS_EXPIRATION,
            refresh_expiration=settings.JWT_REFRESH_EXPIRATION,
        )

    @staticmethod
    def _auth_response(user: User, pair: TokenPair) -> AuthResponse:
        return AuthResponse(
            user=UserOutput.model_validate(user),
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
            token_type=pair.token_type,
            expires_in=pair.expires_in,
        )

    async def register_user(self, user_input: UserCreate) -> AuthResponse:
        """
        Register a new customer and log them in.

        Raises:
            ResourceAlreadyExistsException: If the email or username is already in use
        """
        user = await user_repository.create_with_password(self.db, obj_in=user_input)
        logger.info(f"User registered: {user.email}")

        pair = await self.tokens.issue_token_pair(to_identity(user))
        return self._auth_response(user, pair)

    async def login_user(self, credentials: LoginRequest) -> AuthResponse:
        """
        Authenticate a user and issue a token pair.

        Raises:
            InvalidCredentialsException: If credentials are invalid
        """
        user = await user_repository.authenticate(
            self.db,
            email=credentials.email,
            password=credentials.password
        )

        pair = await self.tokens.issue_token_pair(to_identity(user))
        return self._auth_response(user, pair)

    async def refresh_token(self, refresh_token: str) -> AuthResponse:
        """
        Rotate a refresh token into a new token pair.

        Raises:
            RefreshTokenNotFoundException: Unknown token
            RefreshTokenExpiredException: Token expired
            RefreshTokenInvalidException: Token already used or revoked
        """
        pair = await self.tokens.refresh(refresh_token)

        user = await user_repository.get(self.db, pair.user_id)
        if user is None:
            raise RefreshTokenNotFoundException(detail="Refresh token owner no longer exists")

        return self._auth_response(user, pair)

    async def logout(self, refresh_token: str) -> bool:
        """Revoke one refresh token. Unknown or already revoked tokens are not an error."""
        return await self.tokens.revoke(refresh_token)

    async def logout_all(self, user_id: UUID) -> int:
        """Revoke every active refresh token of the user."""
        return await self.tokens.revoke_all(user_id)
