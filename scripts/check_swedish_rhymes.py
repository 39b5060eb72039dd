#!/usr/bin/env python3
"""
check_swedish_rhymes.py — Smoke-test the Swedish rhyme scraper

Runs the live Swedish rhyme pipeline against a set of words that exercise
common words, å/ä/ö, rare words, misspellings and degenerate input, then
prints what came back.  Each word is looked up twice so the second pass
shows whether the cache served it.

Usage:
    python scripts/check_swedish_rhymes.py
    python scripts/check_swedish_rhymes.py tid dag kärlek
    python scripts/check_swedish_rhymes.py --json

Flags:
    --limit N   Number of rhymes to request per word (default 10)
    --json      Output results as JSON
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, List

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.services.swedish_rhymes import SwedishRhymeService  # noqa: E402

# (word, description)
DEFAULT_TEST_WORDS = [
    ("tid", "Common word (time)"),
    ("dag", "Common word (day)"),
    ("sätt", "Common word with ä (way)"),
    ("kärlek", "Common word with ä (love)"),
    ("åska", "Word with å (thunder)"),
    ("röst", "Word with ö (voice)"),
    ("sjö", "Short word with ö (lake)"),
    ("krimskrams", "Less common word (trinkets)"),
    ("pergament", "Less common word (parchment)"),
    ("xylofon", "Word with uncommon letter x"),
    ("quiz", "Foreign word"),
    ("orange", "Word known for having few rhymes"),
    ("måndag", "Weekday (Monday)"),
    ("tidx", "Misspelled word"),
    ("gobbledygook", "Non-Swedish word"),
    (" tid ", "Word with extra spaces (should be trimmed)"),
    ("TID", "Uppercase word (should be case-insensitive)"),
    ("", "Empty string"),
    ("123", "Numbers"),
]


async def run_checks(words: List[tuple], limit: int) -> List[Dict[str, Any]]:
    service = SwedishRhymeService()
    report = []
    for word, description in words:
        first = await service.acquire(word, limit=limit)
        second = await service.acquire(word, limit=limit)
        report.append(
            {
                "word": word,
                "description": description,
                "result": first.to_dict(),
                "second_source": second.source.value if second.source else None,
            }
        )
    return report


def print_report(report: List[Dict[str, Any]]) -> None:
    print("🔍 SWEDISH RHYME SCRAPER CHECK")
    print("=" * 40)
    found = 0
    for entry in report:
        result = entry["result"]
        print(f"\n\"{entry['word']}\" ({entry['description']})")
        if result["rhymes"]:
            found += 1
            preview = ", ".join(result["rhymes"][:5])
            more = "..." if len(result["rhymes"]) > 5 else ""
            print(f"  ✅ {len(result['rhymes'])} rhymes: {preview}{more}")
        else:
            print(f"  ⚠️ No rhymes. Note: {result['note'] or 'none'}")
        if result["error"]:
            print(f"  ❌ Error code: {result['error']}")
        if entry["second_source"] == "cache":
            print("  📦 Second lookup served from cache")

    print("\n" + "=" * 40)
    print(f"Words with rhymes: {found}/{len(report)}")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Smoke-test the Swedish rhyme scraper against live data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("words", nargs="*", help="Words to check (default: built-in list)")
    parser.add_argument("--limit", type=int, default=10, help="Rhymes per word")
    parser.add_argument("--json", action="store_true", help="Output results as JSON")
    args = parser.parse_args()

    words = [(w, "Command line") for w in args.words] or DEFAULT_TEST_WORDS
    report = asyncio.run(run_checks(words, args.limit))

    if args.json:
        print(json.dumps(report, ensure_ascii=False, indent=2))
    else:
        print_report(report)

    return 0


if __name__ == "__main__":
    sys.exit(main())
