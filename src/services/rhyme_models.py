"""
FreestyleHelper - Rhyme Models

Shared types for the rhyme acquisition services:
    - Word normalization (the canonical cache / lookup key)
    - RhymeResult, the transient per-request view of a lookup
    - RhymeFetchError and its classification of remote failures
    - Localized user-facing notes keyed by language and status code

Both the English and the Swedish services report failures the same way: a
structured code in ``RhymeResult.error`` and a human-readable note looked up
from ``NOTES`` in the request language.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

import httpx


def normalize_word(word: str) -> str:
    """Lowercase and trim a word.  Idempotent."""
    return (word or "").strip().lower()


class RhymeSource(str, Enum):
    CACHE = "cache"
    LIVE = "live"


class FetchErrorKind(str, Enum):
    """Classification of a failed remote rhyme lookup."""

    TIMEOUT = "timeout"
    UNREACHABLE = "unreachable"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    UNAVAILABLE = "unavailable"
    FAILED = "failed"


class RhymeFetchError(Exception):
    """Raised by a fetcher when the remote source could not deliver rhymes."""

    def __init__(self, kind: FetchErrorKind, message: str = ""):
        super().__init__(message or kind.value)
        self.kind = kind


def classify_http_error(exc: Exception) -> FetchErrorKind:
    """Map an httpx exception onto a FetchErrorKind."""
    if isinstance(exc, httpx.TimeoutException):
        return FetchErrorKind.TIMEOUT
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        if status == 404:
            return FetchErrorKind.NOT_FOUND
        if status == 429:
            return FetchErrorKind.RATE_LIMITED
        if status >= 500:
            return FetchErrorKind.UNAVAILABLE
        return FetchErrorKind.FAILED
    # ConnectError covers DNS resolution failures as well as refused connections
    if isinstance(exc, (httpx.ConnectError, httpx.NetworkError)):
        return FetchErrorKind.UNREACHABLE
    return FetchErrorKind.FAILED


# ---------------------------------------------------------------------------
# User-facing notes
# ---------------------------------------------------------------------------
NO_RHYMES = "no_rhymes"
TRANSPORT = "transport"

NOTES: Dict[str, Dict[str, str]] = {
    "sv": {
        FetchErrorKind.TIMEOUT.value: "Rimlexikonet svarade inte i tid. Försök igen om en stund.",
        FetchErrorKind.UNREACHABLE.value: "Kunde inte nå rimlexikonet. Kontrollera nätverksanslutningen.",
        FetchErrorKind.NOT_FOUND.value: "Ordet hittades inte i rimlexikonet.",
        FetchErrorKind.RATE_LIMITED.value: "För många förfrågningar till rimlexikonet. Vänta en stund och försök igen.",
        FetchErrorKind.UNAVAILABLE.value: "Rimlexikonet är tillfälligt otillgängligt.",
        FetchErrorKind.FAILED.value: "Kunde inte hämta rim just nu.",
        NO_RHYMES: "Inga rim hittades för detta ord.",
    },
    "en": {
        TRANSPORT: "Could not reach the rhyme service. Please try again later.",
        NO_RHYMES: "No rhymes or related words found.",
    },
}


def note_for(lang: str, code: str) -> str:
    """Return the localized note for ``code``, falling back to the generic one."""
    table = NOTES.get(lang, NOTES["en"])
    if code in table:
        return table[code]
    if lang == "sv":
        return table[FetchErrorKind.FAILED.value]
    return table[TRANSPORT]


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------


@dataclass
class RhymeResult:
    """Outcome of a rhyme lookup for one word.

    ``rhymes`` is authoritative when non-empty; ``note`` explains an empty or
    partial outcome and ``error`` holds the structured failure code.
    """

    word: str
    rhymes: List[str] = field(default_factory=list)
    note: Optional[str] = None
    source: Optional[RhymeSource] = None
    error: Optional[str] = None
    # Datamuse relation that produced English rhymes
    relation: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "rhymes": list(self.rhymes),
            "note": self.note,
            "source": self.source.value if self.source else None,
            "error": self.error,
            "relation": self.relation,
        }


def dedupe_rhymes(candidates: List[str], exclude: str) -> List[str]:
    """Drop duplicates (first occurrence wins), empties and the query word."""
    seen = set()
    result: List[str] = []
    for candidate in candidates:
        if not candidate or candidate == exclude or candidate in seen:
            continue
        seen.add(candidate)
        result.append(candidate)
    return result
