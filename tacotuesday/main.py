"""
Taco Tuesday API — FastAPI application entry point.
Lifespan: create DB tables → verify connectivity.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tacotuesday import __version__
from tacotuesday.config import settings
from tacotuesday.database import check_db_connectivity, engine
from tacotuesday.errors import register_exception_handlers
from tacotuesday.models import Base
from tacotuesday.routers import health, restaurants, reviews

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Resource segments are matched without regard to case: /api/restaurants/3
# reaches the same route as /api/Restaurants/3.
_RESOURCE_SEGMENTS = {"restaurants": "Restaurants", "reviews": "Reviews"}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.
    1. Create all tables (idempotent — IF NOT EXISTS).
    2. Verify DB connectivity.
    """
    logger.info("Starting Taco Tuesday API (env=%s)", settings.app_env)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created/verified.")

    if not await check_db_connectivity():
        logger.error("Database connectivity check FAILED at startup.")
    else:
        logger.info("Database connectivity verified.")

    yield

    logger.info("Shutting down Taco Tuesday API.")
    await engine.dispose()


app = FastAPI(
    title="Taco Tuesday",
    description="Restaurants and star-rated reviews.",
    version=__version__,
    lifespan=lifespan,
)

# ── CORS ─────────────────────────────────────────────────────────────────────

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def canonical_resource_path(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Rewrite /api/<resource> to the canonical casing before routing."""
    parts = request.scope["path"].split("/")
    if len(parts) > 2 and parts[1].lower() == "api":
        parts[1] = "api"
        parts[2] = _RESOURCE_SEGMENTS.get(parts[2].lower(), parts[2])
        request.scope["path"] = "/".join(parts)
    return await call_next(request)


# ── Routers ──────────────────────────────────────────────────────────────────

app.include_router(health.router)
app.include_router(restaurants.router)
app.include_router(reviews.router)

# ── Exception handlers ───────────────────────────────────────────────────────

register_exception_handlers(app)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return a machine-readable error for any unhandled exception."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )
