"""
orchestrator.py - Build dictionaries for one or many language pairs.

build_one merges the corpora of one pair, in order, into a fresh
DictionaryIndex. Corpora that are empty or whose columns cannot be resolved
are skipped with a warning; anything else aborts the pair.

build_many / prepare_dicts run one build per pair on a thread pool under a
single deadline. The coordinating thread is the only one that touches the
result set: each task hands its index back through its own future. The batch
either returns every dictionary or raises exactly one error:

  - the first task error to complete (PairBuildError)
  - BuildTimeout once the deadline passes

Tasks still running after a failure or timeout are not killed. They see the
cancellation event before pulling their next corpus (so no further download
starts) and stop there; whatever they produce is discarded. Pool threads are
not daemons: the interpreter still joins them at exit, so a process returns
from a timed-out batch promptly but exits only once each straggler finishes
the corpus it was ingesting.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from concurrent.futures import TimeoutError as FuturesTimeout
from typing import Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Union

from makedict.classifier import Classifier, LangidClassifier
from makedict.errors import (
    AmbiguousFormat,
    BuildCancelled,
    BuildTimeout,
    EmptyCorpus,
    FetchError,
    MakedictError,
    PairBuildError,
)
from makedict.format_detect import DEFAULT_SAMPLE_STRIDE, detect_format
from makedict.languages import LanguagePair
from makedict.merge_index import DictionaryIndex
from makedict.sources import Corpus, CorpusFetcher


logger = logging.getLogger(__name__)

DEFAULT_DEADLINE_SECONDS = 30.0

ClassifierFactory = Callable[[], Classifier]
PairKey = Union[str, LanguagePair]
BuildTask = Callable[[threading.Event], DictionaryIndex]


def _as_pair(key: PairKey) -> LanguagePair:
    return key if isinstance(key, LanguagePair) else LanguagePair.parse(key)


def _as_corpus(item: Union[Corpus, bytes], position: int) -> Corpus:
    if isinstance(item, Corpus):
        return item
    return Corpus(f"corpus[{position}]", item)


def _unless_cancelled(
    pair: LanguagePair,
    corpora: Iterable[Union[Corpus, bytes]],
    cancel: Optional[threading.Event],
) -> Iterator[Union[Corpus, bytes]]:
    """Yield from ``corpora``, checking ``cancel`` before each item is produced."""
    items = iter(corpora)
    while True:
        if cancel is not None and cancel.is_set():
            raise BuildCancelled(f"{pair.identifier} cancelled")
        try:
            item = next(items)
        except StopIteration:
            return
        yield item


def _new_classifier(pair: LanguagePair, factory: ClassifierFactory) -> Classifier:
    try:
        return factory()
    except Exception as e:
        raise PairBuildError(pair.identifier, None, e) from e


def build_one(
    pair: PairKey,
    corpora: Iterable[Union[Corpus, bytes]],
    classifier: Classifier,
    cancel: Optional[threading.Event] = None,
    sample_stride: int = DEFAULT_SAMPLE_STRIDE,
) -> DictionaryIndex:
    """Detect and merge each corpus of ``pair`` in order.

    ``corpora`` may be lazy (e.g. CorpusFetcher.iter_corpora); errors raised
    while producing the next corpus abort the pair like ingest errors do.
    """
    pair = _as_pair(pair)
    index = DictionaryIndex.for_pair(pair)
    languages = [pair.source, pair.target]
    source: Optional[str] = None

    try:
        for position, item in enumerate(_unless_cancelled(pair, corpora, cancel)):
            corpus = _as_corpus(item, position)
            source = corpus.source
            try:
                if not corpus.data:
                    raise EmptyCorpus(source)
                mapping = detect_format(corpus.data, languages, classifier, sample_stride)
            except (EmptyCorpus, AmbiguousFormat) as e:
                logger.warning(f"[{pair.identifier}] skipping {source}: {e}")
                continue

            added = index.ingest(corpus.data, mapping, pair.source, pair.target)
            logger.info(
                f"[{pair.identifier}] {source}: format {mapping}, "
                f"{added:,} records, {index.size():,} words total"
            )
    except PairBuildError:
        raise
    except FetchError as e:
        raise PairBuildError(pair.identifier, e.url, e) from e
    except Exception as e:
        raise PairBuildError(pair.identifier, source, e) from e

    return index


def _run_batch(
    tasks: Mapping[LanguagePair, BuildTask],
    deadline: float,
    max_workers: Optional[int] = None,
) -> List[DictionaryIndex]:
    if not tasks:
        return []

    cancel = threading.Event()
    workers = max_workers or len(tasks)
    executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="makedict")
    futures: Dict[Future, LanguagePair] = {
        executor.submit(task, cancel): pair for pair, task in tasks.items()
    }
    results: Dict[LanguagePair, DictionaryIndex] = {}
    clean = False

    try:
        for future in as_completed(futures, timeout=deadline):
            pair = futures[future]
            error = future.exception()
            if error is not None:
                logger.error(f"[{pair.identifier}] build failed: {error}")
                raise error
            results[pair] = future.result()
        clean = True
    except FuturesTimeout:
        pending = [p.identifier for p in tasks if p not in results]
        logger.error(f"Batch deadline of {deadline:g}s exceeded; pending: {', '.join(pending)}")
        raise BuildTimeout(deadline, pending) from None
    finally:
        if not clean:
            cancel.set()
        executor.shutdown(wait=clean, cancel_futures=not clean)

    return [results[pair] for pair in tasks]


def build_many(
    corpora_by_pair: Mapping[PairKey, Sequence[Union[Corpus, bytes]]],
    deadline: float = DEFAULT_DEADLINE_SECONDS,
    classifier_factory: ClassifierFactory = LangidClassifier,
    max_workers: Optional[int] = None,
    sample_stride: int = DEFAULT_SAMPLE_STRIDE,
) -> List[DictionaryIndex]:
    """Build every pair concurrently from already fetched corpora."""
    pairs = {_as_pair(key): corpora for key, corpora in corpora_by_pair.items()}

    def make_task(pair: LanguagePair, corpora) -> BuildTask:
        def task(cancel: threading.Event) -> DictionaryIndex:
            classifier = _new_classifier(pair, classifier_factory)
            return build_one(pair, corpora, classifier, cancel, sample_stride)
        return task

    return _run_batch(
        {pair: make_task(pair, corpora) for pair, corpora in pairs.items()},
        deadline,
        max_workers,
    )


def prepare_dicts(
    sources_by_pair: Mapping[str, Sequence[str]],
    fetcher: CorpusFetcher,
    deadline: float = DEFAULT_DEADLINE_SECONDS,
    classifier_factory: ClassifierFactory = LangidClassifier,
    max_workers: Optional[int] = None,
    sample_stride: int = DEFAULT_SAMPLE_STRIDE,
) -> List[DictionaryIndex]:
    """Fetch and build every pair concurrently.

    All pair identifiers are validated before any download starts.
    """
    pairs = {LanguagePair.parse(key): list(urls) for key, urls in sources_by_pair.items()}

    def make_task(pair: LanguagePair, urls: List[str]) -> BuildTask:
        def task(cancel: threading.Event) -> DictionaryIndex:
            classifier = _new_classifier(pair, classifier_factory)
            return build_one(pair, fetcher.iter_corpora(urls), classifier, cancel, sample_stride)
        return task

    return _run_batch(
        {pair: make_task(pair, urls) for pair, urls in pairs.items()},
        deadline,
        max_workers,
    )


def describe_failure(error: MakedictError) -> str:
    """One-line summary of a batch failure for CLI output."""
    if isinstance(error, PairBuildError):
        cause = type(error.cause).__name__
        where = f" / {error.source}" if error.source else ""
        return f"{error.pair}{where}: {cause}: {error.cause}"
    return f"{type(error).__name__}: {error}"
