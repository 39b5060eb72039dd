"""
FreestyleHelper - Swedish Word Forms

Generates plausible inflected forms of a Swedish word.  The rhyme dictionary
often has few entries for a given form, so the orchestrator looks up a couple
of these variants as well to widen the search.

The rules are plain suffix substitutions, not a morphological analyser: some
outputs will not be real words, and the dictionary simply returns nothing
for those.
"""

from typing import List

MIN_WORD_LENGTH = 4

# (suffix, replacement) pairs applied to the end of the word
SUFFIX_RULES = [
    # Indefinite -> definite singular
    ("ning", "ningen"),
    ("het", "heten"),
    ("are", "aren"),
    ("else", "elsen"),
    ("e", "en"),
    ("a", "an"),
    # Plural -> definite plural
    ("ar", "arna"),
    ("er", "erna"),
    ("or", "orna"),
    # -era verbs: present, past, supine
    ("era", "erar"),
    ("era", "erade"),
    ("era", "erat"),
]

# Present, past and supine endings added to the stem of an -a infinitive
INFINITIVE_MARKER = "a"
INFINITIVE_ENDINGS = ["ar", "er", "ade", "at"]


def word_variations(word: str) -> List[str]:
    """
    Return suffix-substituted variants of ``word``.

    Words shorter than four letters yield an empty list.  The output may
    contain duplicates; callers de-duplicate.
    """
    if len(word) < MIN_WORD_LENGTH:
        return []

    variations: List[str] = []
    for suffix, replacement in SUFFIX_RULES:
        if word.endswith(suffix):
            variations.append(word[: -len(suffix)] + replacement)

    if word.endswith(INFINITIVE_MARKER):
        stem = word[: -len(INFINITIVE_MARKER)]
        variations.extend(stem + ending for ending in INFINITIVE_ENDINGS)

    return variations
