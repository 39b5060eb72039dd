"""
FreestyleHelper - Swedish Rhyme Service

Scrapes Swedish rhymes from an online rhyme dictionary (rimlexikon.se).

Pipeline for one word:
    1. Serve from the in-memory cache while the entry is fresh
    2. Fetch the dictionary page for the word (primary fetch)
    3. If that yields fewer than five candidates, fetch up to two randomly
       chosen inflected forms of the word as well (best-effort)
    4. Merge and de-duplicate, drop the word itself, cache the merged list
    5. Serve a shuffled, truncated view of the list

Remote failures never escape :meth:`SwedishRhymeService.acquire`: they are
classified and turned into a localized note on an empty result.  Concurrent
lookups of the same uncached word share a single fetch chain.
"""

import asyncio
import random
from typing import Dict, List, Optional
from urllib.parse import quote

import httpx
from loguru import logger

from src.config import (
    DEFAULT_RHYME_LIMIT,
    HTTP_USER_AGENT,
    SWEDISH_ACCEPT_LANGUAGE,
    SWEDISH_FETCH_TIMEOUT,
    SWEDISH_RHYME_URL,
)
from src.services.rhyme_cache import RhymeCache
from src.services.rhyme_extractor import extract_rhymes
from src.services.rhyme_models import (
    NO_RHYMES,
    RhymeFetchError,
    RhymeResult,
    RhymeSource,
    classify_http_error,
    dedupe_rhymes,
    normalize_word,
    note_for,
)
from src.services.word_forms import word_variations

LANGUAGE = "sv"

# Below this many primary candidates, inflected forms are looked up too
MIN_PRIMARY_RESULTS = 5
MAX_VARIATION_FETCHES = 2


# ---------------------------------------------------------------------------
# Remote fetcher
# ---------------------------------------------------------------------------


class SwedishRhymeFetcher:
    """Fetches and parses the rhyme dictionary page for a single word.

    Does not retry.  Every failure is raised as a classified RhymeFetchError.
    """

    def __init__(
        self,
        url_template: str = SWEDISH_RHYME_URL,
        timeout: float = SWEDISH_FETCH_TIMEOUT,
        user_agent: str = HTTP_USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url_template = url_template
        self.timeout = timeout
        self.user_agent = user_agent
        self._transport = transport

    def build_url(self, word: str) -> str:
        return self.url_template.format(word=quote(word, safe=""))

    async def fetch(self, word: str) -> List[str]:
        url = self.build_url(word)
        headers = {
            "User-Agent": self.user_agent,
            "Accept": "text/html,application/xhtml+xml",
            "Accept-Language": SWEDISH_ACCEPT_LANGUAGE,
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                resp = await client.get(url, headers=headers)
                resp.raise_for_status()
        except httpx.HTTPError as e:
            kind = classify_http_error(e)
            raise RhymeFetchError(kind, f"Fetching rhymes for '{word}' failed: {e}") from e

        return extract_rhymes(resp.text, word)


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class SwedishRhymeService:
    """Cache-backed Swedish rhyme lookup with variation fallback."""

    language = LANGUAGE

    def __init__(
        self,
        fetcher: Optional[SwedishRhymeFetcher] = None,
        cache: Optional[RhymeCache] = None,
        rng: Optional[random.Random] = None,
    ):
        self.fetcher = fetcher or SwedishRhymeFetcher()
        self.cache = cache if cache is not None else RhymeCache()
        self.rng = rng or random.Random()
        self._inflight: Dict[str, "asyncio.Future[List[str]]"] = {}

    async def acquire(self, raw_word: str, limit: int = DEFAULT_RHYME_LIMIT) -> RhymeResult:
        word = normalize_word(raw_word)

        entry = self.cache.lookup(word)
        if entry is not None:
            logger.debug("📦 Cache hit for '{}' ({} rhymes)", word, len(entry.rhymes))
            return RhymeResult(
                word=word,
                rhymes=self._serve(entry.rhymes, limit),
                note=None if entry.rhymes else note_for(LANGUAGE, NO_RHYMES),
                source=RhymeSource.CACHE,
            )

        try:
            merged = await self._acquire_shared(word)
        except RhymeFetchError as e:
            logger.warning("⚠️ Swedish rhyme lookup for '{}' failed ({}): {}", word, e.kind.value, e)
            return RhymeResult(
                word=word,
                note=note_for(LANGUAGE, e.kind.value),
                source=RhymeSource.LIVE,
                error=e.kind.value,
            )

        if not merged:
            logger.info("ℹ️ No Swedish rhymes found for '{}'", word)
            return RhymeResult(
                word=word,
                note=note_for(LANGUAGE, NO_RHYMES),
                source=RhymeSource.LIVE,
            )

        return RhymeResult(
            word=word,
            rhymes=self._serve(merged, limit),
            source=RhymeSource.LIVE,
        )

    async def _acquire_shared(self, word: str) -> List[str]:
        """Join the running fetch chain for ``word`` or start a new one."""
        future = self._inflight.get(word)
        if future is None:
            future = asyncio.ensure_future(self._fetch_and_store(word))
            # Retrieve the outcome even when every waiter was cancelled
            future.add_done_callback(lambda f: f.cancelled() or f.exception())
            self._inflight[word] = future
        else:
            logger.debug("⏳ Joining in-flight lookup for '{}'", word)

        # A cancelled waiter must not cancel the chain other callers share
        return await asyncio.shield(future)

    async def _fetch_and_store(self, word: str) -> List[str]:
        try:
            primary = await self.fetcher.fetch(word)
            candidates = list(primary)

            if len(primary) < MIN_PRIMARY_RESULTS:
                logger.debug(
                    "🔁 Only {} primary rhymes for '{}', trying word forms",
                    len(primary),
                    word,
                )
                candidates.extend(await self._fetch_variations(word))

            merged = dedupe_rhymes(candidates, exclude=word)
            self.cache.store(word, merged)
            logger.info("🎤 Cached {} Swedish rhymes for '{}'", len(merged), word)
            return merged
        finally:
            self._inflight.pop(word, None)

    async def _fetch_variations(self, word: str) -> List[str]:
        variations = dedupe_rhymes(word_variations(word), exclude=word)
        if not variations:
            return []

        chosen = self.rng.sample(variations, min(MAX_VARIATION_FETCHES, len(variations)))
        found: List[str] = []
        for variation in chosen:
            try:
                found.extend(await self.fetcher.fetch(variation))
            except RhymeFetchError as e:
                logger.debug("Variation '{}' of '{}' failed: {}", variation, word, e.kind.value)
        return found

    def _serve(self, rhymes: List[str], limit: int) -> List[str]:
        shuffled = list(rhymes)
        self.rng.shuffle(shuffled)
        return shuffled[: max(limit, 0)]
