# storefront/domain/__init__.py

"""
Main module for the application's domain components.

This module exports the domain exceptions.
"""

from storefront.domain.exceptions import (
    DomainException,
    ResourceNotFoundException,
    ResourceAlreadyExistsException,
    ResourceInUseException,
    PermissionDeniedException,
    InvalidCredentialsException,
    DatabaseOperationException,
    InvalidInputException,
    RefreshTokenNotFoundException,
    RefreshTokenExpiredException,
    RefreshTokenInvalidException,
    InvalidOperationException,
    CycleDetectedException,
)
