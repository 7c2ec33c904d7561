# storefront/shared/middleware/__init__.py

from storefront.shared.middleware.exception_middleware import AsyncExceptionMiddleware
from storefront.shared.middleware.logging_middleware import AsyncRequestLoggingMiddleware
from storefront.shared.middleware.security_headers_middleware import AsyncSecurityHeadersMiddleware

__all__ = [
    "AsyncExceptionMiddleware",
    "AsyncRequestLoggingMiddleware",
    "AsyncSecurityHeadersMiddleware",
]
