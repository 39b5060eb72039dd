"""
FreestyleHelper - JSON API Routes

Provides the REST API endpoints for:
- Song scaffold generation (structure + rhyme scheme + rhyme suggestions)
- Single-word rhyme lookup
- Listing the available song structures and rhyme schemes
- Health check

Errors use the shape ``{"status": "error", "message": ...}``: 400 for an
unsupported language, 500 for anything unexpected.
"""

import time
from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse
from loguru import logger

from src.config import APP_VERSION, DEFAULT_RHYME_LIMIT, SUPPORTED_LANGUAGES
from src.services.song_generator import generate_song
from src.services.song_structures import RHYME_SCHEMES, SONG_STRUCTURES

router = APIRouter(prefix="/api", tags=["API"])

# Track startup time for health check
_START_TIME = time.time()

LANGUAGE_ERROR = 'Language must be "en" (English) or "sv" (Swedish)'


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"status": "error", "message": message})


def _rhyme_service(request: Request, lang: str):
    return request.app.state.rhyme_services[lang]


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@router.get("/health")
async def health_check(request: Request):
    """Health check endpoint for the service."""
    uptime = round(time.time() - _START_TIME, 2)
    swedish = request.app.state.rhyme_services.get("sv")
    cache_size = len(swedish.cache) if swedish is not None else 0

    return {
        "status": "ok",
        "version": APP_VERSION,
        "uptime_seconds": uptime,
        "languages": sorted(SUPPORTED_LANGUAGES),
        "swedish_cache_entries": cache_size,
    }


# ---------------------------------------------------------------------------
# Song scaffold
# ---------------------------------------------------------------------------
@router.get("/generate_song")
async def api_generate_song(
    request: Request,
    lang: Optional[str] = Query(None),
    structure: Optional[str] = Query(None),
    scheme: Optional[str] = Query(None),
):
    """Generate a song scaffold with rhyme suggestions for every line."""
    if lang not in SUPPORTED_LANGUAGES:
        logger.warning("⚠️ Rejected song request with unsupported lang={!r}", lang)
        return _error(400, LANGUAGE_ERROR)

    try:
        song = await generate_song(
            _rhyme_service(request, lang),
            structure=structure,
            scheme=scheme,
            rng=request.app.state.rng,
        )
    except Exception:
        logger.exception("❌ Error in generate_song endpoint")
        return _error(500, "Internal server error")

    return {"status": "success", "language": lang, "song": song}


# ---------------------------------------------------------------------------
# Rhymes
# ---------------------------------------------------------------------------
@router.get("/rhymes")
async def api_rhymes(
    request: Request,
    word: str = Query(..., max_length=64),
    lang: Optional[str] = Query(None),
    limit: int = Query(DEFAULT_RHYME_LIMIT, ge=1, le=50),
):
    """Look up rhymes for a single word."""
    if lang not in SUPPORTED_LANGUAGES:
        return _error(400, LANGUAGE_ERROR)

    try:
        result = await _rhyme_service(request, lang).acquire(word, limit=limit)
    except Exception:
        logger.exception("❌ Error looking up rhymes for '{}'", word)
        return _error(500, "Internal server error")

    return {"status": "success", "language": lang, **result.to_dict()}


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------
@router.get("/structures")
async def api_list_structures():
    """List the available song structures."""
    return {
        "structures": [
            {"name": s["name"], "parts": s["parts"]} for s in SONG_STRUCTURES
        ]
    }


@router.get("/schemes")
async def api_list_schemes():
    """List the available rhyme schemes."""
    return {
        "schemes": [
            {
                "name": s["name"],
                "description": s["description"],
                "pattern": s["pattern"],
            }
            for s in RHYME_SCHEMES
        ]
    }
