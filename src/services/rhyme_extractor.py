"""
FreestyleHelper - HTML Rhyme Extractor

Pulls candidate rhymes out of a rhyme dictionary page.

The page layout has changed over time, so extraction runs an ordered chain
of strategies and keeps the first one that produces any candidates:

    1. primary: the dictionary's rhyme list (``ol.rhyme-list``)
    2. secondary: container classes used by older / alternative layouts
    3. tertiary: any list item outside navigation, header and footer
"""

from typing import Callable, List, Sequence, Tuple

from bs4 import BeautifulSoup, Tag
from loguru import logger

PRIMARY_SELECTOR = "ol.rhyme-list li"

SECONDARY_SELECTORS = [
    "ul.rhyme-list li",
    "ol.rhymes li",
    "ul.rhymes li",
    "div.rhyme-results li",
    "div.rimord li",
]

# Landmarks whose list items are site chrome rather than rhymes
LANDMARK_TAGS = {"nav", "header", "footer"}

Strategy = Callable[[BeautifulSoup], Sequence[Tag]]


def _select_primary(soup: BeautifulSoup) -> Sequence[Tag]:
    return soup.select(PRIMARY_SELECTOR)


def _select_secondary(soup: BeautifulSoup) -> Sequence[Tag]:
    return soup.select(", ".join(SECONDARY_SELECTORS))


def is_inside_landmark(element: Tag) -> bool:
    """True if ``element`` is nested in a nav/header/footer element."""
    return any(parent.name in LANDMARK_TAGS for parent in element.parents)


def _select_any_list_item(soup: BeautifulSoup) -> Sequence[Tag]:
    return [li for li in soup.find_all("li") if not is_inside_landmark(li)]


STRATEGIES: List[Tuple[str, Strategy]] = [
    ("primary", _select_primary),
    ("secondary", _select_secondary),
    ("tertiary", _select_any_list_item),
]


def _candidate_texts(elements: Sequence[Tag], query_word: str) -> List[str]:
    texts = []
    for element in elements:
        text = element.get_text().strip()
        if not text or text == query_word:
            continue
        texts.append(text)
    return texts


def extract_rhymes(html: str, query_word: str) -> List[str]:
    """
    Extract rhyme candidates from ``html`` in document order.

    Entries that are empty or exactly equal to ``query_word`` are dropped.
    Duplicates are kept.
    """
    if not html:
        return []

    soup = BeautifulSoup(html, "html.parser")

    for name, strategy in STRATEGIES:
        candidates = _candidate_texts(strategy(soup), query_word)
        if candidates:
            logger.debug(
                "🔎 Extracted {} candidates for '{}' using {} selectors",
                len(candidates),
                query_word,
                name,
            )
            return candidates

    return []
