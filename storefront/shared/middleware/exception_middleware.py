# storefront/shared/middleware/exception_middleware.py

"""
Centralized exception handling.

Every error leaving a route is rendered as ``{"detail", "code"}`` JSON,
plus ``errors`` for domain exceptions. Domain codes are mapped to HTTP
statuses through DOMAIN_STATUS_CODES; the remaining branches cover
failures that escape the repositories untranslated.
"""

import re
import time
import logging
from typing import Any, Callable, Dict, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from starlette.middleware.base import BaseHTTPMiddleware
from jose.exceptions import JWTError, ExpiredSignatureError

from storefront.domain.exceptions import DomainException
from storefront.adapters.configuration.config import settings

logger = logging.getLogger(__name__)

# internal_code -> HTTP status; unknown codes map to 400
DOMAIN_STATUS_CODES = {
    "RESOURCE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "RESOURCE_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "RESOURCE_IN_USE": status.HTTP_400_BAD_REQUEST,
    "PERMISSION_DENIED": status.HTTP_403_FORBIDDEN,
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "DATABASE_OPERATION_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "INVALID_INPUT": status.HTTP_400_BAD_REQUEST,
    "REFRESH_TOKEN_NOT_FOUND": status.HTTP_401_UNAUTHORIZED,
    "REFRESH_TOKEN_EXPIRED": status.HTTP_410_GONE,
    "REFRESH_TOKEN_INVALID": status.HTTP_401_UNAUTHORIZED,
    "INVALID_OPERATION": status.HTTP_400_BAD_REQUEST,
    "CYCLE_DETECTED": status.HTTP_400_BAD_REQUEST,
}

_CONSTRAINT_PATTERNS = [
    r'constraint "(.*?)"',
    r'CONSTRAINT (.*?) FOREIGN KEY',
    r'UNIQUE constraint failed: (.*)',
    r'violates unique constraint "(.*?)"',
]


def _error(status_code: int, detail: str, code: str, errors: Optional[Dict[str, Any]] = None) -> JSONResponse:
    body = {"detail": detail, "code": code}
    if errors is not None:
        body["errors"] = errors
    return JSONResponse(status_code=status_code, content=body)


def _public(exc: Exception, masked: str) -> str:
    # Raw driver and traceback text never leaves a production server
    return masked if settings.ENVIRONMENT == "production" else str(exc)


def extract_constraint_name(error_message: str) -> Optional[str]:
    """Name of the violated constraint, when the driver message carries one."""
    for pattern in _CONSTRAINT_PATTERNS:
        match = re.search(pattern, error_message)
        if match:
            return match.group(1)
    return None


class AsyncExceptionMiddleware(BaseHTTPMiddleware):
    """
    Turns exceptions into JSON error responses and stamps successful
    responses with ``X-Process-Time``.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        started = time.time()
        where = f"{request.method} {request.url.path} from {request.client.host if request.client else 'N/A'}"

        try:
            response = await call_next(request)
        except DomainException as exc:
            status_code = DOMAIN_STATUS_CODES.get(exc.internal_code, status.HTTP_400_BAD_REQUEST)
            if status_code >= 500:
                logger.error(f"{exc.internal_code} on {where}: {exc}")
                detail = _public(exc, "Internal database error")
            else:
                logger.warning(f"{exc.internal_code} on {where}: {exc}")
                detail = str(exc)
            return _error(status_code, detail, exc.internal_code, exc.details)

        except IntegrityError as exc:
            constraint = extract_constraint_name(str(exc))
            logger.error(f"Integrity error on {where}: constraint={constraint or 'N/A'}")
            code = f"INTEGRITY_ERROR_{constraint}" if constraint else "INTEGRITY_ERROR"
            return _error(status.HTTP_409_CONFLICT, _public(exc, "Database integrity error"), code)

        except SQLAlchemyError as exc:
            logger.error(f"{type(exc).__name__} on {where}")
            return _error(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                _public(exc, "Internal database error"),
                "DATABASE_ERROR",
            )

        except (JWTError, ExpiredSignatureError) as exc:
            reason = "Expired token" if isinstance(exc, ExpiredSignatureError) else "Invalid token"
            logger.warning(f"{reason} on {where}")
            return _error(status.HTTP_401_UNAUTHORIZED, f"{reason}. Please login again.", "INVALID_TOKEN")

        except ValueError as exc:
            logger.warning(f"ValueError on {where}: {exc}")
            return _error(status.HTTP_400_BAD_REQUEST, str(exc), "VALIDATION_ERROR")

        except Exception as exc:
            logger.exception(f"Unhandled {type(exc).__name__} on {where}")
            return _error(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                _public(exc, "Internal server error"),
                "INTERNAL_SERVER_ERROR",
            )

        response.headers["X-Process-Time"] = str(time.time() - started)
        return response
