"""
sources.py - Retrieve corpus files, with an on-disk cache.

Corpora are gzip-compressed TSV files on public mirrors (OPUS dic.gz).
Each URL is cached once, decompressed, under

    <cache_dir>/source_cache_<sha1(url)>

so repeated builds never hit the network. The orchestrator only ever sees the
final bytes; an empty result means "no corpus available" and is skipped.
"""

import gzip
import hashlib
import logging
import zlib
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional

import requests

from makedict.errors import FetchError


logger = logging.getLogger(__name__)

USER_AGENT = "makedict/0.1 (bilingual dictionary builder)"
REQUEST_TIMEOUT_SECONDS = 60
GZIP_MAGIC = b"\x1f\x8b"
CACHE_PREFIX = "source_cache_"


@dataclass
class Corpus:
    """Raw bytes of one source, labelled for diagnostics."""

    source: str
    data: bytes

    def __repr__(self) -> str:
        return f"Corpus({self.source}, {len(self.data):,} bytes)"


def cache_file_name(url: str) -> str:
    """Cache file name for ``url``: prefix + hex SHA-1 of the URL."""
    return CACHE_PREFIX + hashlib.sha1(url.encode("utf-8")).hexdigest()


def maybe_decompress(url: str, body: bytes) -> bytes:
    """Gunzip ``body`` if it starts with the gzip magic number."""
    if not body.startswith(GZIP_MAGIC):
        return body
    try:
        return gzip.decompress(body)
    except (OSError, EOFError, zlib.error) as e:
        raise FetchError(url, f"gzip: {e}") from e


class CorpusFetcher:
    """HTTP fetcher with a write-through file cache.

    Pass ``session`` to share a connection pool or to substitute a fake in
    tests; it only needs a requests-compatible ``get``.
    """

    def __init__(
        self,
        cache_dir: Optional[Path] = None,
        session: Optional[requests.Session] = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ):
        self.cache_dir = Path(cache_dir) if cache_dir is not None else None
        self.session = session or requests.Session()
        self.timeout = timeout

    def cache_path(self, url: str) -> Optional[Path]:
        if self.cache_dir is None:
            return None
        return self.cache_dir / cache_file_name(url)

    def read_cache(self, url: str) -> Optional[bytes]:
        path = self.cache_path(url)
        if path is None or not path.exists():
            return None
        logger.debug(f"Cache hit for {url}: {path}")
        return path.read_bytes()

    def write_cache(self, url: str, content: bytes) -> None:
        path = self.cache_path(url)
        if path is None:
            return
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".part")
        tmp.write_bytes(content)
        tmp.replace(path)

    def download(self, url: str) -> bytes:
        """GET ``url`` and return the decompressed body."""
        logger.info(f"Loading dictionary source from {url}")
        try:
            response = self.session.get(
                url,
                headers={"User-Agent": USER_AGENT},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(url, str(e)) from e

        return maybe_decompress(url, response.content)

    def fetch(self, url: str) -> bytes:
        """Cached bytes for ``url``, downloading on a miss."""
        cached = self.read_cache(url)
        if cached is not None:
            return cached

        body = self.download(url)
        self.write_cache(url, body)
        return body

    def is_cached(self, url: str) -> bool:
        path = self.cache_path(url)
        return path is not None and path.exists()

    def iter_corpora(self, urls: Iterable[str]) -> Iterator[Corpus]:
        """Fetch ``urls`` lazily, one at a time, in order."""
        for url in urls:
            yield Corpus(url, self.fetch(url))
