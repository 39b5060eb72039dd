"""
FreestyleHelper - English Rhyme Service

Looks up English rhymes through the Datamuse word API
(https://www.datamuse.com/api/), which needs no key.

Each lookup picks a relation at random so repeated lookups feel varied:
perfect rhymes 60% of the time, otherwise near rhymes, sound-alikes or
homophones.  When the chosen relation is thin the service falls back to
perfect rhymes and then to loosely related words.
"""

import random
from typing import Dict, List, Optional, Tuple

import httpx
from loguru import logger

from src.config import DATAMUSE_API_URL, DATAMUSE_TIMEOUT, DEFAULT_RHYME_LIMIT, HTTP_USER_AGENT
from src.services.rhyme_models import (
    NO_RHYMES,
    TRANSPORT,
    FetchErrorKind,
    RhymeFetchError,
    RhymeResult,
    RhymeSource,
    classify_http_error,
    dedupe_rhymes,
    normalize_word,
    note_for,
)

LANGUAGE = "en"

PERFECT = "perfect"
RELATED = "related"

# relation name -> (Datamuse query parameter, description shown to the user)
RELATIONS: Dict[str, Tuple[str, str]] = {
    PERFECT: ("rel_rhy", "Perfect rhymes"),
    "near": ("rel_nry", "Near rhymes"),
    "sounds_like": ("sl", "Words that sound similar"),
    "homophone": ("rel_hom", "Homophones"),
    RELATED: ("ml", "Related words (no close rhymes found)"),
}

PERFECT_PROBABILITY = 0.6
ALTERNATIVE_RELATIONS = ["near", "sounds_like", "homophone"]

# A relation with fewer results than this is considered thin
MIN_RESULTS = 5


class DatamuseClient:
    """Minimal async client for the Datamuse ``/words`` endpoint."""

    def __init__(
        self,
        api_url: str = DATAMUSE_API_URL,
        timeout: float = DATAMUSE_TIMEOUT,
        user_agent: str = HTTP_USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url
        self.timeout = timeout
        self.user_agent = user_agent
        self._transport = transport

    async def words(self, param: str, word: str, max_results: int) -> List[str]:
        params = {param: word, "max": str(max_results)}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.get(
                    self.api_url,
                    params=params,
                    headers={"User-Agent": self.user_agent, "Accept": "application/json"},
                )
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as e:
            raise RhymeFetchError(classify_http_error(e), f"Datamuse query failed: {e}") from e
        except ValueError as e:
            raise RhymeFetchError(FetchErrorKind.FAILED, f"Datamuse returned invalid JSON: {e}") from e

        if not isinstance(data, list):
            return []
        return [item["word"] for item in data if isinstance(item, dict) and item.get("word")]


class EnglishRhymeService:
    """Datamuse-backed English rhyme lookup with relation fallbacks."""

    language = LANGUAGE

    def __init__(
        self,
        client: Optional[DatamuseClient] = None,
        rng: Optional[random.Random] = None,
    ):
        self.client = client or DatamuseClient()
        self.rng = rng or random.Random()

    def choose_relation(self) -> str:
        if self.rng.random() < PERFECT_PROBABILITY:
            return PERFECT
        return self.rng.choice(ALTERNATIVE_RELATIONS)

    async def acquire(self, raw_word: str, limit: int = DEFAULT_RHYME_LIMIT) -> RhymeResult:
        word = normalize_word(raw_word)
        relation = self.choose_relation()

        try:
            candidates = await self._query(relation, word, limit)
            if len(candidates) >= MIN_RESULTS:
                return self._result(word, candidates, relation, limit)

            if relation != PERFECT:
                logger.debug(
                    "🔁 Only {} {} results for '{}', falling back to perfect rhymes",
                    len(candidates),
                    relation,
                    word,
                )
                relation = PERFECT
                candidates = await self._query(PERFECT, word, limit)

            if not candidates:
                logger.debug("🔁 No rhymes for '{}', falling back to related words", word)
                relation = RELATED
                candidates = await self._query(RELATED, word, limit)
        except RhymeFetchError as e:
            logger.warning("⚠️ Datamuse lookup for '{}' failed ({}): {}", word, e.kind.value, e)
            return RhymeResult(
                word=word,
                note=note_for(LANGUAGE, TRANSPORT),
                source=RhymeSource.LIVE,
                error=e.kind.value,
            )

        if not candidates:
            logger.info("ℹ️ No English rhymes or related words for '{}'", word)
            return RhymeResult(word=word, note=note_for(LANGUAGE, NO_RHYMES), source=RhymeSource.LIVE)

        return self._result(word, candidates, relation, limit)

    async def _query(self, relation: str, word: str, limit: int) -> List[str]:
        param, _ = RELATIONS[relation]
        found = await self.client.words(param, word, max_results=2 * limit)
        return dedupe_rhymes(found, exclude=word)

    def _result(self, word: str, candidates: List[str], relation: str, limit: int) -> RhymeResult:
        shuffled = list(candidates)
        self.rng.shuffle(shuffled)
        return RhymeResult(
            word=word,
            rhymes=shuffled[: max(limit, 0)],
            note=RELATIONS[relation][1],
            source=RhymeSource.LIVE,
            relation=relation,
        )
