# storefront/adapters/inbound/api/deps.py

"""
FastAPI dependencies shared by the endpoints: the database session and
the authenticated user behind a bearer access token.
"""

import logging
from typing import Optional
from uuid import UUID
from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.adapters.outbound.persistence.database import get_db
from storefront.adapters.outbound.persistence.models import User
from storefront.adapters.outbound.persistence.repositories.user_repository import user_repository
from storefront.adapters.outbound.security.auth_user_manager import UserAuthManager

logger = logging.getLogger(__name__)

# auto_error is off so a missing header gets the same 401 body as a bad token
bearer_scheme = HTTPBearer(auto_error=False)

get_session = get_db


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
        credentials: HTTPAuthorizationCredentials = Security(bearer_scheme),
        db: AsyncSession = Depends(get_session),
) -> User:
    """
    Resolve the bearer access token to an active user.

    Raises:
        HTTPException: 401 when the header is missing, the token does not
            verify, or its subject is unknown or deactivated
    """
    if credentials is None:
        raise _unauthorized("Not authenticated.")

    payload = await UserAuthManager.verify_access_token(credentials.credentials)

    subject = payload.get("sub")
    try:
        user_id = UUID(subject)
    except (ValueError, TypeError):
        logger.warning(f"Access token subject is not a UUID: {subject!r}")
        raise _unauthorized("Invalid token: 'sub' is not a valid UUID.")

    user = await user_repository.get(db, user_id)
    if user is None or not user.is_active:
        logger.warning(f"Access token for missing or inactive user {user_id}")
        raise _unauthorized("User not found or inactive.")
    return user


async def get_optional_user(
        credentials: HTTPAuthorizationCredentials = Security(bearer_scheme),
        db: AsyncSession = Depends(get_session),
) -> Optional[User]:
    """
    Same as ``get_current_user`` for requests that may also come from
    guests: no header means no user, while a bad token is still a 401.
    """
    if credentials is None:
        return None
    return await get_current_user(credentials, db)
