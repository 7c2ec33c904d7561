# storefront/adapters/inbound/api/v1/endpoints/auth_endpoint.py

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.application.use_cases.auth_use_cases import AsyncAuthService
from storefront.adapters.outbound.persistence.models import User
from storefront.adapters.inbound.api.deps import get_session, get_current_user
from storefront.application.dtos.user_dto import (
    AuthResponse,
    LoginRequest,
    LogoutAllResponse,
    LogoutResponse,
    RefreshTokenRequest,
    UserCreate,
)

logger = logging.getLogger(__name__)
router = APIRouter()

AUTH_RESPONSE_EXAMPLE = {
    "user": {
        "id": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
        "username": "jdoe",
        "email": "jdoe@example.com",
        "full_name": "John Doe",
        "role": "customer",
        "is_active": True,
        "created_at": "2024-01-01T00:00:00",
        "updated_at": "2024-01-01T00:00:00"
    },
    "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
    "refresh_token": "9f2c...e41a",
    "token_type": "bearer",
    "expires_in": 900
}


def _error_doc(description: str, detail: str, code: str) -> dict:
    return {
        "description": description,
        "content": {"application/json": {"example": {"detail": detail, "code": code, "errors": {}}}},
    }


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register User - Creates a customer account",
    description="""
    Creates a new customer account and returns a token pair.

    The password must meet the following criteria:
    - Minimum of 6 characters
    - At least one letter
    - At least one number
    """,
    responses={
        201: {
            "description": "User created successfully",
            "content": {"application/json": {"example": AUTH_RESPONSE_EXAMPLE}}
        },
        409: _error_doc(
            "Email or username already in use",
            "A user with this email or username already exists",
            "RESOURCE_ALREADY_EXISTS",
        ),
    }
)
async def register_user(
        user_input: UserCreate,
        db: AsyncSession = Depends(get_session),
):
    return await AsyncAuthService(db).register_user(user_input)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login User - Issues a token pair",
    description=(
            "Authenticates a user (email/password) and returns an access token "
            "with a single-use refresh token. Inactive users cannot log in."
    ),
    responses={
        401: _error_doc(
            "Invalid credentials or inactive user", "Incorrect email or password", "INVALID_CREDENTIALS"
        ),
    }
)
async def login_user(
        credentials: LoginRequest,
        db: AsyncSession = Depends(get_session),
):
    return await AsyncAuthService(db).login_user(credentials)


@router.post(
    "/refresh-token",
    response_model=AuthResponse,
    summary="Refresh Token - Rotates a refresh token",
    description=(
            "Exchanges a refresh token for a new token pair. The presented token "
            "is consumed: sending it again fails."
    ),
    responses={
        401: _error_doc(
            "Unknown, used or revoked refresh token",
            "Refresh token is no longer valid",
            "REFRESH_TOKEN_INVALID",
        ),
        410: _error_doc("Refresh token expired", "Refresh token has expired", "REFRESH_TOKEN_EXPIRED"),
    }
)
async def refresh_token(
        token_request: RefreshTokenRequest,
        db: AsyncSession = Depends(get_session),
):
    return await AsyncAuthService(db).refresh_token(token_request.refresh_token)


@router.post(
    "/logout",
    response_model=LogoutResponse,
    summary="Logout - Revokes one refresh token",
)
async def logout(
        token_request: RefreshTokenRequest,
        db: AsyncSession = Depends(get_session),
        _: User = Depends(get_current_user),
):
    revoked = await AsyncAuthService(db).logout(token_request.refresh_token)
    return LogoutResponse(revoked=revoked)


@router.post(
    "/logout-all",
    response_model=LogoutAllResponse,
    summary="Logout Everywhere - Revokes every refresh token of the user",
)
async def logout_all(
        db: AsyncSession = Depends(get_session),
        current_user: User = Depends(get_current_user),
):
    count = await AsyncAuthService(db).logout_all(current_user.id)
    logger.info(f"User {current_user.email} logged out from {count} sessions")
    return LogoutAllResponse(revoked=count)
