"""
FreestyleHelper - Song Structures, Rhyme Schemes and Seed Words

Static template tables used to lay out a song scaffold:
    - Song structures: an ordered list of parts, each with a type and bar count
    - Rhyme schemes: a letter pattern tiled across the bars of a part
    - Seed words: the words rhymes are looked up for, per language

Names are matched case-insensitively.  An unknown or missing name falls back
to a random choice from the table.
"""

import random
import string
from typing import Any, Dict, List, Optional

# ---------------------------------------------------------------------------
# Song structures
# ---------------------------------------------------------------------------

SONG_STRUCTURES: List[Dict[str, Any]] = [
    {
        "name": "16 Bar Verse",
        "parts": [{"type": "Verse", "bars": 16}],
    },
    {
        "name": "8 Bar Hook",
        "parts": [{"type": "Hook", "bars": 8}],
    },
    {
        "name": "Verse-Hook",
        "parts": [
            {"type": "Verse", "bars": 16},
            {"type": "Hook", "bars": 8},
        ],
    },
    {
        "name": "Verse-Chorus-Verse",
        "parts": [
            {"type": "Verse", "bars": 16},
            {"type": "Chorus", "bars": 8},
            {"type": "Verse", "bars": 16},
        ],
    },
    {
        "name": "Pop Song",
        "parts": [
            {"type": "Intro", "bars": 4},
            {"type": "Verse", "bars": 8},
            {"type": "Pre-Chorus", "bars": 4},
            {"type": "Chorus", "bars": 8},
            {"type": "Verse", "bars": 8},
            {"type": "Chorus", "bars": 8},
            {"type": "Bridge", "bars": 4},
            {"type": "Chorus", "bars": 8},
        ],
    },
    {
        "name": "Freestyle Cypher",
        "parts": [{"type": "Verse", "bars": 32}],
    },
]


# ---------------------------------------------------------------------------
# Rhyme schemes
# ---------------------------------------------------------------------------

# A progressive scheme moves on to fresh letters on every repetition of its
# pattern (AABB CCDD ...); a plain scheme reuses the same groups throughout.
RHYME_SCHEMES: List[Dict[str, Any]] = [
    {
        "name": "AAAA",
        "description": "Monorhyme: every line rhymes with every other line.",
        "pattern": ["A", "A", "A", "A"],
        "progressive": False,
    },
    {
        "name": "AABB",
        "description": "Paired lines rhyme with each other.",
        "pattern": ["A", "A", "B", "B"],
        "progressive": False,
    },
    {
        "name": "ABAB",
        "description": "Alternate rhyme: every other line rhymes.",
        "pattern": ["A", "B", "A", "B"],
        "progressive": False,
    },
    {
        "name": "ABBA",
        "description": "Enclosed rhyme: the outer lines rhyme, as do the inner lines.",
        "pattern": ["A", "B", "B", "A"],
        "progressive": False,
    },
    {
        "name": "AAAB",
        "description": "Three rhyming lines followed by a punchline.",
        "pattern": ["A", "A", "A", "B"],
        "progressive": False,
    },
    {
        "name": "Couplets",
        "description": "Rhyming couplets with a new rhyme sound for every pair.",
        "pattern": ["A", "A"],
        "progressive": True,
    },
]

LETTERS = string.ascii_uppercase


# ---------------------------------------------------------------------------
# Seed words
# ---------------------------------------------------------------------------

SEED_WORDS: Dict[str, List[str]] = {
    "en": [
        "time",
        "night",
        "love",
        "fire",
        "heart",
        "street",
        "dream",
        "game",
        "light",
        "mind",
        "flow",
        "rain",
        "gold",
        "crown",
        "road",
        "soul",
        "sky",
        "beat",
        "stone",
        "fly",
    ],
    "sv": [
        "tid",
        "dag",
        "natt",
        "hjärta",
        "kärlek",
        "väg",
        "sol",
        "stad",
        "dröm",
        "ljus",
        "liv",
        "hav",
        "vind",
        "eld",
        "röst",
        "springa",
        "gata",
        "stjärna",
        "sommar",
        "minne",
    ],
}


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def _find_by_name(table: List[Dict[str, Any]], name: Optional[str]) -> Optional[Dict[str, Any]]:
    if not name:
        return None
    wanted = name.strip().lower()
    for item in table:
        if item["name"].lower() == wanted:
            return item
    return None


def generate_song_structure(
    name: Optional[str] = None, rng: Optional[random.Random] = None
) -> Dict[str, Any]:
    """Return a copy of the named song structure, or a random one."""
    rng = rng or random.Random()
    structure = _find_by_name(SONG_STRUCTURES, name) or rng.choice(SONG_STRUCTURES)
    return {
        "name": structure["name"],
        "parts": [dict(part) for part in structure["parts"]],
    }


def _group_label(index: int) -> str:
    """Rhyme group label for the ``index``-th distinct group: A..Z, A2..Z2, ..."""
    letter = LETTERS[index % len(LETTERS)]
    cycle = index // len(LETTERS)
    return letter if cycle == 0 else f"{letter}{cycle + 1}"


def _tile_pattern(pattern: List[str], bars: int, progressive: bool) -> List[str]:
    if not progressive:
        return [pattern[i % len(pattern)] for i in range(bars)]

    distinct = sorted(set(pattern))
    scheme = []
    for i in range(bars):
        repetition = i // len(pattern)
        letter = pattern[i % len(pattern)]
        scheme.append(_group_label(repetition * len(distinct) + distinct.index(letter)))
    return scheme


def generate_rhyme_scheme(
    bars: int, name: Optional[str] = None, rng: Optional[random.Random] = None
) -> Dict[str, Any]:
    """
    Build the rhyme scheme for a part of ``bars`` lines.

    Returns ``{name, description, scheme}`` where ``scheme`` holds one rhyme
    group label per bar.
    """
    rng = rng or random.Random()
    template = _find_by_name(RHYME_SCHEMES, name) or rng.choice(RHYME_SCHEMES)
    return {
        "name": template["name"],
        "description": template["description"],
        "scheme": _tile_pattern(template["pattern"], max(bars, 0), template["progressive"]),
    }


def get_random_seed_word(lang: str, rng: Optional[random.Random] = None) -> str:
    rng = rng or random.Random()
    return rng.choice(SEED_WORDS[lang])
