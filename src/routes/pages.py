"""
FreestyleHelper - Page Routes

Serves the single browser-facing page.  The page itself only holds the form;
the client script in ``/static`` calls ``/api/generate_song`` and renders the
scaffold.
"""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from src.config import APP_VERSION, SUPPORTED_LANGUAGES
from src.services.song_structures import RHYME_SCHEMES, SONG_STRUCTURES

router = APIRouter(tags=["Pages"])


# ---------------------------------------------------------------------------
# Home
# ---------------------------------------------------------------------------
@router.get("/", response_class=HTMLResponse)
async def home(request: Request):
    """Landing page with the scaffold generator form."""
    context = {
        "page_title": "FreestyleHelper",
        "version": APP_VERSION,
        "languages": SUPPORTED_LANGUAGES,
        "structures": [s["name"] for s in SONG_STRUCTURES],
        "schemes": [s["name"] for s in RHYME_SCHEMES],
    }
    return request.app.state.templates.TemplateResponse(request, "index.html", context)
