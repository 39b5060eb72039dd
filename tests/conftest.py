"""
FreestyleHelper - Pytest Configuration & Shared Fixtures

Provides reusable fixtures for:
- A controllable clock for cache expiry tests
- Seeded random sources
- Sample rhyme dictionary HTML pages (primary, secondary, tertiary layouts)
- Stub fetchers and httpx mock transports standing in for remote services
- A FastAPI test client wired to mocked rhyme services
"""

import random
from typing import Callable, Dict, List, Optional, Union

import httpx
import pytest
from fastapi.testclient import TestClient

from src.main import create_app
from src.services.english_rhymes import DatamuseClient, EnglishRhymeService
from src.services.rhyme_cache import RhymeCache
from src.services.rhyme_models import FetchErrorKind, RhymeFetchError
from src.services.swedish_rhymes import SwedishRhymeFetcher, SwedishRhymeService

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class FakeClock:
    """Manually advanced clock returning epoch seconds."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubFetcher:
    """
    In-memory stand-in for SwedishRhymeFetcher.

    ``pages`` maps a word to the rhymes it returns or to a FetchErrorKind to
    raise.  Unknown words return an empty list.  Every call is recorded.
    """

    def __init__(self, pages: Optional[Dict[str, Union[List[str], FetchErrorKind]]] = None):
        self.pages = pages or {}
        self.calls: List[str] = []

    async def fetch(self, word: str) -> List[str]:
        self.calls.append(word)
        page = self.pages.get(word, [])
        if isinstance(page, FetchErrorKind):
            raise RhymeFetchError(page, f"stubbed {page.value}")
        return list(page)


def rhyme_page(words: List[str], container: str = "ol", css_class: str = "rhyme-list") -> str:
    """Build a rhyme dictionary page listing ``words`` in one container."""
    items = "".join(f"<li>{w}</li>" for w in words)
    return (
        "<html><body>"
        "<nav><ul><li>Hem</li><li>Om</li></ul></nav>"
        f'<main><{container} class="{css_class}">{items}</{container}></main>'
        "<footer><ul><li>Kontakt</li></ul></footer>"
        "</body></html>"
    )


def html_transport(pages: Dict[str, Union[str, int]]) -> httpx.MockTransport:
    """
    Mock transport for the rhyme dictionary.

    ``pages`` maps the last URL path segment (decoded word) to an HTML body,
    or to an HTTP status code to answer with.  Unknown words get a 404.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        word = request.url.path.rsplit("/", 1)[-1]
        page = pages.get(word, 404)
        if isinstance(page, int):
            return httpx.Response(page, text="error")
        return httpx.Response(200, text=page, headers={"content-type": "text/html"})

    return httpx.MockTransport(handler)


def datamuse_transport(
    results: Dict[str, List[str]], calls: Optional[List[Dict[str, str]]] = None
) -> httpx.MockTransport:
    """
    Mock transport for the Datamuse API.

    ``results`` maps a Datamuse relation parameter (``rel_rhy``, ``ml``, ...)
    to the words it returns.  Query params of every call are appended to
    ``calls`` when given.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        params = dict(request.url.params)
        if calls is not None:
            calls.append(params)
        for param, words in results.items():
            if param in params:
                return httpx.Response(200, json=[{"word": w, "score": 100} for w in words])
        return httpx.Response(200, json=[])

    return httpx.MockTransport(handler)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source so shuffles and picks are reproducible."""
    return random.Random(1234)


@pytest.fixture
def cache(clock: FakeClock) -> RhymeCache:
    return RhymeCache(ttl_seconds=24 * 60 * 60, clock=clock)


@pytest.fixture
def make_client() -> Callable[..., TestClient]:
    """
    Factory for a TestClient whose rhyme services talk to mock transports.

    Accepts ``sv_pages`` (see html_transport) and ``en_results`` (see
    datamuse_transport).
    """

    def _make(
        sv_pages: Optional[Dict[str, Union[str, int]]] = None,
        en_results: Optional[Dict[str, List[str]]] = None,
        seed: int = 7,
    ) -> TestClient:
        rng = random.Random(seed)
        services = {
            "en": EnglishRhymeService(
                client=DatamuseClient(transport=datamuse_transport(en_results or {})),
                rng=rng,
            ),
            "sv": SwedishRhymeService(
                fetcher=SwedishRhymeFetcher(transport=html_transport(sv_pages or {})),
                cache=RhymeCache(),
                rng=rng,
            ),
        }
        return TestClient(create_app(rhyme_services=services, rng=rng))

    return _make
