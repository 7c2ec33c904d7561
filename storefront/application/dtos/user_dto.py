# storefront/application/dtos/user_dto.py

"""
DTOs for user data.

Validation and serialization of registration, login, profile
and authentication payloads.
"""

from uuid import UUID
from datetime import datetime
from typing import Optional
from pydantic import (
    field_validator,
    EmailStr,
    Field,
)

from storefront.application.dtos.base_dto import CustomBaseModel
from storefront.domain.models.user_domain_model import UserRole
from storefront.shared.utils.input_validation import InputValidator


class UserBase(CustomBaseModel):
    """
    Attributes shared by the user DTOs.
    """
    email: EmailStr = Field(
        ...,
        description="User email. Must be a valid, unique email.",
    )

    @field_validator("email")
    def validate_email_security(cls, v):
        is_valid, error_msg = InputValidator.validate_email(v)
        if not is_valid:
            raise ValueError(error_msg)
        return v.lower()


class UserCreate(UserBase):
    """
    DTO for registering a new user.
    """
    username: str = Field(..., description="Unique user handle.")
    full_name: str = Field(..., description="User display name.")
    password: str = Field(
        ..., description="Password with at least 6 characters, one letter and one digit."
    )

    @field_validator("username")
    def validate_username(cls, v):
        is_valid, error_msg = InputValidator.validate_username(v)
        if not is_valid:
            raise ValueError(error_msg)
        return v

    @field_validator("full_name")
    def validate_full_name(cls, v):
        is_valid, error_msg = InputValidator.validate_name(v)
        if not is_valid:
            raise ValueError(error_msg)
        return InputValidator.sanitize_name(v)

    @field_validator("password")
    def validate_password_security(cls, v):
        is_valid, error_msg = InputValidator.validate_password(v)
        if not is_valid:
            raise ValueError(error_msg)
        return v


class LoginRequest(CustomBaseModel):
    """
    DTO for email/password login.
    """
    email: EmailStr = Field(..., description="User email.")
    password: str = Field(..., description="User password.")


class UserOutput(CustomBaseModel):
    """
    User data returned by the API, without sensitive fields.
    """
    id: UUID = Field(..., description="Unique identifier of the user.")
    username: str = Field(..., description="Unique user handle.")
    email: str = Field(..., description="User email.")
    full_name: str = Field(..., description="User display name.")
    role: UserRole = Field(..., description="User role.")
    is_active: bool = Field(..., description="Whether the user is active.")
    created_at: datetime = Field(..., description="Creation timestamp.")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp.")


class RefreshTokenRequest(CustomBaseModel):
    """
    DTO carrying a refresh token.
    """
    refresh_token: str = Field(..., min_length=1, description="Refresh token issued at login.")


class AuthResponse(CustomBaseModel):
    """
    Token pair returned by register, login and refresh.
    """
    user: UserOutput = Field(..., description="Authenticated user.")
    access_token: str = Field(..., description="Signed JWT access token.")
    refresh_token: str = Field(..., description="Opaque single-use refresh token.")
    token_type: str = Field("bearer", description="Token type for the Authorization header.")
    expires_in: int = Field(..., description="Access token lifetime in seconds.")


class LogoutResponse(CustomBaseModel):
    """Result of a single-token logout."""
    revoked: bool = Field(..., description="Whether a refresh token matched.")


class LogoutAllResponse(CustomBaseModel):
    """Result of logging out from every session."""
    revoked: int = Field(..., description="Number of refresh tokens revoked.")
