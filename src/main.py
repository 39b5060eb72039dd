"""
FreestyleHelper - Main Application

Single-process FastAPI application that serves:
- The scaffold generator page via a Jinja2 template
- Static files (CSS, JS)
- REST API endpoints for song scaffolds and rhyme lookups
- Health check endpoint

The Swedish rhyme cache is created once per process and shared by every
request through ``app.state``.  It is not shared between processes.
"""

import random
import sys
import time
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from loguru import logger

from src.config import (
    APP_ENV,
    APP_HOST,
    APP_PORT,
    APP_VERSION,
    DEBUG,
    LOG_LEVEL,
    RHYME_CACHE_TTL_SECONDS,
    STATIC_DIR,
    TEMPLATES_DIR,
)
from src.routes.api import router as api_router
from src.routes.pages import router as pages_router
from src.services.english_rhymes import EnglishRhymeService
from src.services.rhyme_cache import RhymeCache
from src.services.swedish_rhymes import SwedishRhymeService

# ---------------------------------------------------------------------------
# Logging setup: stdout only
# ---------------------------------------------------------------------------
logger.remove()

logger.add(
    sys.stdout,
    level="DEBUG" if DEBUG else LOG_LEVEL,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    colorize=True,
)


def build_rhyme_services(rng: Optional[random.Random] = None) -> Dict[str, Any]:
    """Create the per-language rhyme services with a fresh Swedish cache."""
    rng = rng or random.Random()
    cache = RhymeCache(ttl_seconds=RHYME_CACHE_TTL_SECONDS)
    return {
        "en": EnglishRhymeService(rng=rng),
        "sv": SwedishRhymeService(cache=cache, rng=rng),
    }


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and shutdown."""
    logger.info("🚀 Starting FreestyleHelper v{}", APP_VERSION)
    logger.info("📋 Environment: {} | Debug: {}", APP_ENV, DEBUG)
    logger.success("✅ Application ready — listening on {}:{}", APP_HOST, APP_PORT)

    yield

    logger.info(
        "🛑 Shutting down FreestyleHelper ({} cached Swedish words dropped)",
        len(app.state.rhyme_services["sv"].cache),
    )


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------
def create_app(
    rhyme_services: Optional[Dict[str, Any]] = None,
    rng: Optional[random.Random] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``rhyme_services`` and ``rng`` can be supplied to replace the live
    services, e.g. with ones backed by a mock transport.
    """

    app = FastAPI(
        title="FreestyleHelper",
        description=(
            "A lyric-writing aid that builds song scaffolds with numbered lines, "
            "rhyme groups and rhyme suggestions in English and Swedish."
        ),
        version=APP_VERSION,
        lifespan=lifespan,
        docs_url="/docs" if DEBUG else None,
        redoc_url="/redoc" if DEBUG else None,
    )

    app.state.rng = rng or random.Random()
    app.state.rhyme_services = rhyme_services or build_rhyme_services(app.state.rng)

    # ------------------------------------------------------------------
    # Jinja2 templates
    # ------------------------------------------------------------------
    app.state.templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

    # ------------------------------------------------------------------
    # Static files
    # ------------------------------------------------------------------
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    # ------------------------------------------------------------------
    # Request logging middleware
    # ------------------------------------------------------------------
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log every incoming HTTP request with timing information."""
        start = time.time()
        try:
            response = await call_next(request)
        except Exception as exc:
            duration = round(time.time() - start, 3)
            logger.error(
                "❌ {method} {path} — unhandled error after {duration}s: {exc}",
                method=request.method,
                path=request.url.path,
                duration=duration,
                exc=exc,
            )
            raise

        duration = round(time.time() - start, 3)
        status = response.status_code

        if status >= 500:
            log = logger.error
        elif status >= 400:
            log = logger.warning
        elif request.url.path.startswith("/static"):
            log = logger.debug
        else:
            log = logger.info

        log(
            "📤 {method} {path} — {status} [{duration}s]",
            method=request.method,
            path=request.url.path,
            status=status,
            duration=duration,
        )
        return response

    # ------------------------------------------------------------------
    # Register routers
    # ------------------------------------------------------------------
    app.include_router(api_router)  # /api/*  JSON endpoints
    app.include_router(pages_router)  # /*      HTML pages (must be last)

    return app


# ---------------------------------------------------------------------------
# Create the app instance (used by Uvicorn)
# ---------------------------------------------------------------------------
app = create_app()


# ---------------------------------------------------------------------------
# Direct execution (development)
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host=APP_HOST,
        port=APP_PORT,
        reload=DEBUG,
        log_level="debug" if DEBUG else "info",
    )
