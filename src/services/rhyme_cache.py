"""
FreestyleHelper - Rhyme Cache

Process-local, in-memory cache of rhyme lists keyed by normalized word.

Entries expire a fixed time after they were written.  Expiry is lazy: a
stale entry is deleted the next time it is looked up and never swept in the
background.  There is no size bound.

The cache is not guarded by a lock.  It is only touched from the asyncio
event loop, where no two coroutines interleave between a lookup and a store.
"""

import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from loguru import logger

DEFAULT_TTL_SECONDS = 24 * 60 * 60


@dataclass
class CacheEntry:
    rhymes: List[str] = field(default_factory=list)
    written_at: float = 0.0


class RhymeCache:
    """Time-bounded rhyme cache with an injectable TTL and clock."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def lookup(self, key: str) -> Optional[CacheEntry]:
        """Return the fresh entry for ``key`` or None, evicting it if stale."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        age = self._clock() - entry.written_at
        if age >= self.ttl_seconds:
            logger.debug("🗑️ Cache entry for '{}' expired ({:.0f}s old)", key, age)
            del self._entries[key]
            return None

        return entry

    def store(self, key: str, rhymes: List[str]) -> None:
        self._entries[key] = CacheEntry(rhymes=list(rhymes), written_at=self._clock())

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return self.lookup(key) is not None

    def __len__(self) -> int:
        return len(self._entries)
