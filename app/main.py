"""FastAPI application entry point.

Creates the app, configures middleware, owns the outbound HTTP client and
rate limiter, and wires up routers.
"""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.check import router as check_router
from app.api.health import router as health_router
from app.config import settings
from app.middleware.rate_limit import RateLimitMiddleware
from app.middleware.security import SecurityHeadersMiddleware
from app.services.range_provider import HttpRangeProvider
from app.services.rate_limit import FixedWindowRateLimiter

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown lifecycle."""
    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    # Startup
    client = httpx.AsyncClient(timeout=settings.BREACH_REQUEST_TIMEOUT)
    app.state.range_provider = HttpRangeProvider(client)
    logger.info("Range provider ready at %s", settings.BREACH_API_URL)
    yield
    # Shutdown
    app.state.range_provider = None
    await client.aclose()


app = FastAPI(
    title=settings.APP_NAME,
    lifespan=lifespan,
)
app.state.range_provider = None
app.state.rate_limiter = FixedWindowRateLimiter()

# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Middleware (order matters: outermost middleware runs first)
# ---------------------------------------------------------------------------
app.add_middleware(RateLimitMiddleware)
app.add_middleware(SecurityHeadersMiddleware)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
app.include_router(health_router, prefix="/api", tags=["health"])
app.include_router(check_router, prefix="/api", tags=["check"])
