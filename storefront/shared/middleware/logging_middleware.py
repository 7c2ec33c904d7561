# storefront/shared/middleware/logging_middleware.py

"""
Middleware for HTTP request logging.

Logs one line per request and one per response, tagged with a request
id that is echoed back in the ``X-Request-ID`` header.
"""

import time
import uuid
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from storefront.adapters.configuration.config import settings

# Configure logger
logger = logging.getLogger(__name__)


class AsyncRequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for request logging.

    Query strings and client addresses are only logged outside production.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]

        if settings.ENVIRONMENT == "production":
            logger.info(f"[{request_id}] Request: {request.method} {request.url.path}")
        else:
            query_params = dict(request.query_params)
            logger.info(
                f"[{request_id}] Request: {request.method} {request.url.path} | "
                f"Query: {query_params if query_params else 'N/A'} | "
                f"Client: {request.client.host if request.client else 'N/A'}"
            )

        start_time = time.perf_counter()
        response = await call_next(request)
        process_time = time.perf_counter() - start_time

        logger.info(
            f"[{request_id}] Response: {response.status_code} for "
            f"{request.method} {request.url.path} | Time: {process_time:.4f}s"
        )

        response.headers["X-Request-ID"] = request_id
        return response
