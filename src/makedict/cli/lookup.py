#!/usr/bin/env python3
"""
mkdict-lookup - Query a built dictionary.

Usage:
    mkdict-lookup por_eng obras viver
    mkdict-lookup por_eng obras --limit 3
    mkdict-lookup por_eng obras --json
    mkdict-lookup por_eng --dict path/to/por_eng.tsv obras
"""

import argparse
import sys
from pathlib import Path

import orjson

from makedict.cli.common import DIM, RED, setup_logging
from makedict.config import load_config
from makedict.errors import MakedictError
from makedict.languages import LanguagePair
from makedict.merge_index import DictionaryIndex


def main() -> int:
    parser = argparse.ArgumentParser(description="Look up words in a built dictionary")
    parser.add_argument("pair", help="Language pair, e.g. por_eng")
    parser.add_argument("words", nargs="+", help="Source-language words")
    parser.add_argument("--dict", type=Path, help="Exported TSV (default: <output_dir>/<pair>.tsv)")
    parser.add_argument("--config", type=Path, help="Sources YAML (default: schema/sources.yaml)")
    parser.add_argument("--limit", "-n", type=int, default=0, help="Show at most N variants")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of text")
    args = parser.parse_args()

    setup_logging()

    try:
        pair = LanguagePair.parse(args.pair)
        path = args.dict or load_config(args.config).settings.output_dir / f"{pair.identifier}.tsv"
        if not path.exists():
            print(f"{RED('Error')}: dictionary not found: {path}")
            print("Run 'mkdict-build' first.")
            return 1
        index = DictionaryIndex.load(path, pair)
    except MakedictError as e:
        print(f"{RED('Error')}: {e}")
        return 1

    results = {}
    for word in args.words:
        suggestions = index.lookup(word.lower())
        if args.limit:
            suggestions = suggestions[: args.limit]
        results[word] = suggestions

    if args.json:
        payload = {w: [{"variant": s.variant, "score": s.score} for s in sugg] for w, sugg in results.items()}
        sys.stdout.write(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8") + "\n")
        return 0

    for word, suggestions in results.items():
        if not suggestions:
            print(f"{word} -->  {DIM('(not found)')}")
            continue
        rendered = ", ".join(f"{s.variant} ({s.score})" for s in suggestions)
        print(f"{word} -->  {rendered}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
