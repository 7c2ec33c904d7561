# storefront/shared/middleware/security_headers_middleware.py

"""
Middleware for adding HTTP security headers to API responses.
"""

import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from storefront.adapters.configuration.config import settings

# Configure logger
logger = logging.getLogger(__name__)

DOCS_PATHS = ("/", "/docs", "/redoc", "/openapi.json")

API_CSP = (
    "default-src 'none'; "
    "frame-ancestors 'none'; "
    "base-uri 'none'"
)

PERMISSIONS_POLICY = (
    "accelerometer=(), "
    "camera=(), "
    "geolocation=(), "
    "gyroscope=(), "
    "microphone=(), "
    "payment=(), "
    "usb=()"
)


class AsyncSecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Adds security headers to every JSON API response.

    Documentation routes keep the browser defaults so Swagger UI
    and ReDoc can load their assets.
    """

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        path = request.url.path
        is_docs_route = path in DOCS_PATHS or path.startswith(("/docs/", "/redoc/"))

        if not is_docs_route:
            response.headers["X-Content-Type-Options"] = "nosniff"
            response.headers["X-Frame-Options"] = "DENY"
            response.headers["Content-Security-Policy"] = API_CSP
            response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
            response.headers["Permissions-Policy"] = PERMISSIONS_POLICY

            # Token responses must never be cached
            response.headers["Cache-Control"] = "no-store"
            response.headers["Pragma"] = "no-cache"

        if "Server" in response.headers:
            response.headers["Server"] = "Storefront API"

        if settings.ENVIRONMENT == "production" and settings.USE_HTTPS:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response
