# storefront/domain/exceptions.py

"""
Domain exceptions for the application.

Every failure raised by the domain and application layers is a
DomainException carrying an ``internal_code``. The inbound adapters
translate that code into an HTTP status (see AsyncExceptionMiddleware),
so nothing in here depends on the web framework.
"""

from typing import Any, Dict, Optional


class DomainException(Exception):
    """
    Base exception for all application errors.
    """

    default_detail = "Domain error"
    default_code = "DOMAIN_ERROR"

    def __init__(
            self,
            detail: Any = None,
            internal_code: Optional[str] = None,
            details: Optional[Dict[str, Any]] = None,
    ):
        self.detail = detail if detail is not None else self.default_detail
        self.internal_code = internal_code or self.default_code
        self.details = details or {}
        super().__init__(self.detail)


class ResourceNotFoundException(DomainException):
    """Resource not found."""

    default_detail = "Resource not found"
    default_code = "RESOURCE_NOT_FOUND"

    def __init__(self, detail: str = None, resource_id: Any = None):
        resource_info = f" (ID: {resource_id})" if resource_id is not None else ""
        super().__init__(detail=f"{detail or self.default_detail}{resource_info}")
        self.resource_id = resource_id


class ResourceAlreadyExistsException(DomainException):
    """Resource already exists."""

    default_detail = "Resource already exists"
    default_code = "RESOURCE_ALREADY_EXISTS"


class ResourceInUseException(DomainException):
    """Resource is still referenced by other entities."""

    default_detail = "Resource is in use"
    default_code = "RESOURCE_IN_USE"


class PermissionDeniedException(DomainException):
    """Permission denied."""

    default_detail = "Permission denied"
    default_code = "PERMISSION_DENIED"

    def __init__(self, detail: str = None, role: Optional[str] = None):
        role_info = f" (Required role: {role})" if role else ""
        super().__init__(detail=f"{detail or self.default_detail}{role_info}")


class InvalidCredentialsException(DomainException):
    """Invalid credentials."""

    default_detail = "Invalid credentials"
    default_code = "INVALID_CREDENTIALS"


class DatabaseOperationException(DomainException):
    """Error while running a database operation."""

    default_detail = "Error executing database operation"
    default_code = "DATABASE_OPERATION_ERROR"

    def __init__(self, detail: str = None, original_error: Optional[Exception] = None):
        error_info = f": {str(original_error)}" if original_error else ""
        super().__init__(detail=f"{detail or self.default_detail}{error_info}")
        self.original_error = original_error


class InvalidInputException(DomainException):
    """Invalid input data."""

    default_detail = "Invalid input data"
    default_code = "INVALID_INPUT"

    def __init__(self, detail: str = None, fields: Optional[Dict[str, str]] = None):
        field_errors = ""
        if fields:
            field_errors = ": " + ", ".join([f"{field}: {error}" for field, error in fields.items()])
        super().__init__(detail=f"{detail or self.default_detail}{field_errors}", details=fields)


########################################################################
# Refresh token lifecycle
########################################################################

class RefreshTokenNotFoundException(DomainException):
    """No stored refresh token matches the presented value."""

    default_detail = "Invalid refresh token"
    default_code = "REFRESH_TOKEN_NOT_FOUND"


class RefreshTokenExpiredException(DomainException):
    """The refresh token is past its expiration."""

    default_detail = "Refresh token has expired"
    default_code = "REFRESH_TOKEN_EXPIRED"


class RefreshTokenInvalidException(DomainException):
    """The refresh token was already used (rotated) or revoked."""

    default_detail = "Refresh token is no longer valid"
    default_code = "REFRESH_TOKEN_INVALID"


########################################################################
# Category hierarchy
########################################################################

class InvalidOperationException(DomainException):
    """Operation not allowed on the current state of the resource."""

    default_detail = "Invalid operation"
    default_code = "INVALID_OPERATION"


class CycleDetectedException(DomainException):
    """The requested parent assignment would create a circular hierarchy."""

    default_detail = "Circular reference detected in category hierarchy"
    default_code = "CYCLE_DETECTED"
