#!/usr/bin/env python3
"""
mkdict-build - Build ranked bilingual dictionaries.

Fetches (or reads from cache) every corpus of the requested pairs, detects
each corpus's column layout, merges them, and writes one TSV per pair:

    <output_dir>/<pair>.tsv     word<TAB>variant<TAB>score<TAB>...

All pairs build concurrently under one deadline. Either every dictionary is
written or none is.

Usage:
    mkdict-build                         # All configured pairs
    mkdict-build por_eng spa_eng         # Selected pairs
    mkdict-build por_eng --wordlist words.txt
"""

import argparse
import functools
import sys
from pathlib import Path

from makedict.classifier import LangidClassifier
from makedict.cli.common import BOLD, DIM, GREEN, RED, YELLOW, setup_logging
from makedict.config import load_config
from makedict.coverage import score_wordlist
from makedict.errors import BuildTimeout, MakedictError
from makedict.orchestrator import describe_failure, prepare_dicts
from makedict.sources import CorpusFetcher


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Build bilingual dictionaries from configured corpora",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("pairs", nargs="*", help="Language pairs to build (default: all)")
    parser.add_argument("--config", type=Path, help="Sources YAML (default: schema/sources.yaml)")
    parser.add_argument("--output-dir", "-o", type=Path, help="Override the output directory")
    parser.add_argument("--cache-dir", type=Path, help="Override the cache directory")
    parser.add_argument("--deadline", type=float, help="Batch deadline in seconds")
    parser.add_argument("--workers", type=int, help="Maximum concurrent pair builds")
    parser.add_argument("--wordlist", type=Path, help="Report coverage against this word list")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args()

    setup_logging(args.verbose)

    try:
        config = load_config(args.config)
        sources = config.sources_for(args.pairs)
    except (MakedictError, KeyError) as e:
        print(f"{RED('Error')}: {e}")
        return 1

    if not sources:
        print("No language pairs configured.")
        return 0

    settings = config.settings
    output_dir = args.output_dir or settings.output_dir
    deadline = args.deadline or settings.deadline_seconds
    fetcher = CorpusFetcher(args.cache_dir or settings.cache_dir)
    classifier_factory = functools.partial(
        LangidClassifier, min_confidence=settings.min_confidence
    )

    print(f"\n{BOLD(f'Building {len(sources)} dictionaries')} (deadline {deadline:g}s)")

    try:
        dictionaries = prepare_dicts(
            sources,
            fetcher,
            deadline=deadline,
            classifier_factory=classifier_factory,
            max_workers=args.workers or settings.max_workers,
            sample_stride=settings.sample_stride,
        )
    except MakedictError as e:
        print(f"\n{RED('ERROR')} {describe_failure(e)}")
        print("No dictionaries were written.")
        if isinstance(e, BuildTimeout):
            print(DIM("Waiting for running builds to finish their current corpus before exiting."))
        return 1
    except KeyboardInterrupt:
        print(f"\n\n{YELLOW('Interrupted.')} No dictionaries were written.")
        return 130

    for index in dictionaries:
        path = index.export(output_dir / f"{index.pair.identifier}.tsv")
        print(f"  {GREEN(index.pair.identifier):12} {index.size():,} words -> {path}")

        if args.wordlist:
            report = score_wordlist(args.wordlist, index)
            print(f"  {'':12} word list coverage: {report}")

    print(f"\n{GREEN('OK')} Complete")
    return 0


if __name__ == "__main__":
    sys.exit(main())
