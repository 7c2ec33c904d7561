# storefront/main.py

import logging
import asyncio
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from fastapi.openapi.utils import get_openapi
from contextlib import asynccontextmanager

from storefront.adapters.configuration.config import settings
from storefront.adapters.outbound.persistence.database import create_tables, get_db_context
from storefront.adapters.outbound.persistence.repositories.refresh_token_repository import (
    AsyncRefreshTokenRepository,
)
from storefront.adapters.outbound.persistence.seeds import run_all_seeds
from storefront.shared.utils.time import utcnow

# ─── LOGGING ──────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


# ─── REFRESH TOKEN CLEANUP ────────────────────────────────────────────────────
async def purge_expired_refresh_tokens() -> int:
    """Delete every refresh token whose expiry has passed."""
    async with get_db_context() as db:
        purged = await AsyncRefreshTokenRepository(db).delete_expired(utcnow())
    logger.info(f"Purged {purged} expired refresh tokens")
    return purged


async def refresh_token_janitor(interval_hours: int):
    """Purge expired refresh tokens every ``interval_hours`` until cancelled."""
    interval = interval_hours * 3600
    while True:
        await asyncio.sleep(interval)
        try:
            await purge_expired_refresh_tokens()
        except Exception:
            # keep the loop alive; the next run retries
            logger.exception("Refresh token purge failed")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup: schema, seeds and the refresh token janitor.
    Shutdown: stop the janitor.
    """
    logger.info(f"Starting {app.title} ({settings.ENVIRONMENT})")

    await create_tables()
    async with get_db_context() as db:
        await run_all_seeds(db)

    janitor = asyncio.create_task(refresh_token_janitor(settings.TOKEN_CLEANUP_INTERVAL_HOURS))
    app.state.cleanup_task = janitor

    yield

    logger.info("Stopping refresh token janitor")
    janitor.cancel()
    try:
        await janitor
    except asyncio.CancelledError:
        pass


app = FastAPI(
    title="Storefront API",
    description="E-commerce backend: authentication and catalog",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
    openapi_url="/openapi.json" if settings.SCHEMA_VISIBILITY else None,
)

# Middlewares (the last one added runs first)
from storefront.shared.middleware import (
    AsyncExceptionMiddleware,
    AsyncRequestLoggingMiddleware,
    AsyncSecurityHeadersMiddleware
)

app.add_middleware(AsyncSecurityHeadersMiddleware)
app.add_middleware(AsyncRequestLoggingMiddleware)
app.add_middleware(AsyncExceptionMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
from storefront.adapters.inbound.api.v1.router import api_router as api_v1_router

app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/", include_in_schema=False)
async def redirect_to_docs():
    return RedirectResponse(url="/docs")


def custom_openapi():
    """OpenAPI document without FastAPI's generic 422 entries."""
    if app.openapi_schema is None:
        schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )
        components = schema.get("components", {}).get("schemas", {})
        components.pop("HTTPValidationError", None)
        components.pop("ValidationError", None)
        for operations in schema.get("paths", {}).values():
            for operation in operations.values():
                operation.get("responses", {}).pop("422", None)
        app.openapi_schema = schema
    return app.openapi_schema


app.openapi = custom_openapi
