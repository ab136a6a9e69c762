#!/usr/bin/env python3
"""
mkdict-fetch - Download corpus sources into the local cache.

Warms the cache used by mkdict-build so the build itself never waits on the
network. Sources come from schema/sources.yaml (or $MAKEDICT_SOURCES).

Usage:
    mkdict-fetch                 # Fetch every configured pair
    mkdict-fetch por_eng         # Fetch one pair
    mkdict-fetch --list          # List pairs and cache status
    mkdict-fetch --force         # Re-download even if cached
"""

import argparse
import sys
from pathlib import Path
from typing import Dict, List

from makedict.cli.common import BOLD, DIM, GREEN, RED, YELLOW, format_size, setup_logging
from makedict.config import BuildConfig, load_config
from makedict.errors import FetchError, MakedictError
from makedict.sources import CorpusFetcher


def list_sources(config: BuildConfig, fetcher: CorpusFetcher) -> None:
    """Print configured pairs and which sources are already cached."""
    print(f"\n{BOLD('Configured pairs:')}\n")
    for pair_id, urls in config.pairs.items():
        cached = sum(1 for url in urls if fetcher.is_cached(url))
        print(f"  {GREEN(pair_id):12} {cached}/{len(urls)} cached")
        for url in urls:
            mark = GREEN("*") if fetcher.is_cached(url) else " "
            print(f"    {mark} {DIM(url)}")
    print()


def fetch_pairs(
    sources: Dict[str, List[str]],
    fetcher: CorpusFetcher,
    *,
    force: bool = False,
    continue_on_error: bool = False,
) -> int:
    """Fetch every URL; returns the number of failures."""
    failed = 0
    total = sum(len(urls) for urls in sources.values())
    done = 0

    for pair_id, urls in sources.items():
        for url in urls:
            done += 1
            print(f"[{done}/{total}] {BOLD(pair_id)} {DIM(url)}")

            if fetcher.is_cached(url) and not force:
                print("      -> Already cached")
                continue
            if force:
                path = fetcher.cache_path(url)
                if path is not None and path.exists():
                    path.unlink()

            try:
                body = fetcher.fetch(url)
            except FetchError as e:
                print(f"      -> {RED('ERROR')} {e.reason}")
                failed += 1
                if not continue_on_error:
                    return failed
                continue

            if body:
                print(f"      -> {GREEN('OK')} {format_size(len(body))}")
            else:
                print(f"      -> {YELLOW('EMPTY')} will be skipped at build time")

    return failed


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Fetch corpus sources into the makedict cache",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("pairs", nargs="*", help="Language pairs to fetch (default: all)")
    parser.add_argument("--config", type=Path, help="Sources YAML (default: schema/sources.yaml)")
    parser.add_argument("--cache-dir", type=Path, help="Override the cache directory")
    parser.add_argument("--list", "-l", action="store_true", help="List configured sources")
    parser.add_argument("--force", "-f", action="store_true", help="Re-download even if cached")
    parser.add_argument(
        "--continue-on-error",
        action="store_true",
        help="Continue fetching other sources if one fails",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args()

    setup_logging(args.verbose)

    try:
        config = load_config(args.config)
        sources = config.sources_for(args.pairs)
    except (MakedictError, KeyError) as e:
        print(f"{RED('Error')}: {e}")
        return 1

    fetcher = CorpusFetcher(args.cache_dir or config.settings.cache_dir)

    if args.list:
        list_sources(config, fetcher)
        return 0

    if not sources:
        print("No sources to fetch.")
        return 0

    try:
        failed = fetch_pairs(
            sources, fetcher, force=args.force, continue_on_error=args.continue_on_error
        )
    except KeyboardInterrupt:
        print(f"\n\n{YELLOW('Interrupted.')} Re-run to fetch the remaining sources.")
        return 130

    if failed:
        print(f"\n{RED('ERROR')} {failed} source(s) failed")
        return 1
    print(f"\n{GREEN('OK')} Cache ready: {fetcher.cache_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
