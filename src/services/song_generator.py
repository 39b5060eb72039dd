"""
FreestyleHelper - Song Scaffold Generator

Turns a song structure and rhyme scheme into a writing scaffold:

    song
      └── parts (Verse, Chorus, ...)
            ├── rhymeScheme {name, description, scheme}
            └── lines
                  index, rhymeGroup, seedWord, rhymeSuggestions,
                  visualLength, note

Every distinct rhyme group of a part gets its own random seed word and one
rhyme lookup; all lines in that group share the result.  A failed lookup
only empties the suggestions of its group, the scaffold is still returned.
"""

import random
from typing import Any, Dict, List, Optional, Protocol

from loguru import logger

from src.config import DEFAULT_RHYME_LIMIT, SUGGESTIONS_PER_LINE
from src.services.rhyme_models import RhymeResult
from src.services.song_structures import (
    generate_rhyme_scheme,
    generate_song_structure,
    get_random_seed_word,
)

# Target syllable count drawn for each line
MIN_VISUAL_LENGTH = 5
MAX_VISUAL_LENGTH = 10


class RhymeService(Protocol):
    language: str

    async def acquire(self, raw_word: str, limit: int = DEFAULT_RHYME_LIMIT) -> RhymeResult: ...


def _unique_in_order(items: List[str]) -> List[str]:
    return list(dict.fromkeys(items))


async def _build_part(
    part: Dict[str, Any],
    scheme_name: Optional[str],
    rhyme_service: RhymeService,
    rng: random.Random,
) -> Dict[str, Any]:
    bars = part["bars"]
    rhyme_scheme = generate_rhyme_scheme(bars, scheme_name, rng)

    groups: Dict[str, Dict[str, Any]] = {}
    for group in _unique_in_order(rhyme_scheme["scheme"]):
        seed_word = get_random_seed_word(rhyme_service.language, rng)
        result = await rhyme_service.acquire(seed_word)
        groups[group] = {
            "seedWord": seed_word,
            "rhymes": result.rhymes,
            "note": result.note,
        }

    lines = []
    for i, group in enumerate(rhyme_scheme["scheme"]):
        info = groups[group]
        lines.append(
            {
                "index": i + 1,
                "rhymeGroup": group,
                "seedWord": info["seedWord"],
                "rhymeSuggestions": info["rhymes"][:SUGGESTIONS_PER_LINE],
                "visualLength": rng.randint(MIN_VISUAL_LENGTH, MAX_VISUAL_LENGTH),
                "note": info["note"],
            }
        )

    return {
        "type": part["type"],
        "bars": bars,
        "rhymeScheme": {
            "name": rhyme_scheme["name"],
            "description": rhyme_scheme["description"],
            "scheme": rhyme_scheme["scheme"],
        },
        "lines": lines,
    }


async def generate_song(
    rhyme_service: RhymeService,
    structure: Optional[str] = None,
    scheme: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> Dict[str, Any]:
    """
    Generate a song scaffold in the language of ``rhyme_service``.

    Parameters
    ----------
    rhyme_service : RhymeService
        English or Swedish rhyme service; decides the seed word language.
    structure : str, optional
        Song structure name.  Random when missing or unknown.
    scheme : str, optional
        Rhyme scheme name applied to every part.  When missing or unknown
        each part draws its own random scheme.
    rng : random.Random, optional
        Random source for structure, scheme, seed word and line length picks.
    """
    rng = rng or random.Random()
    song_structure = generate_song_structure(structure, rng)

    logger.info(
        "🎼 Generating '{}' scaffold ({} parts, lang={})",
        song_structure["name"],
        len(song_structure["parts"]),
        rhyme_service.language,
    )

    parts = []
    for part in song_structure["parts"]:
        parts.append(await _build_part(part, scheme, rhyme_service, rng))

    return {"name": song_structure["name"], "parts": parts}
