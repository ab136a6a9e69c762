"""
Exception hierarchy for makedict.

Per-corpus problems that a multi-corpus build can survive (EmptyCorpus,
AmbiguousFormat) are raised like any other error; the orchestrator decides
whether to skip the corpus or abort the pair.
"""

from typing import Optional, Sequence


class MakedictError(Exception):
    """Base class for all makedict errors."""


class InvalidLanguagePair(MakedictError):
    """Language pair identifier is not two codes joined by '_'."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(
            f"invalid language pair {identifier!r}: expected two ISO 639-3 "
            f"codes separated by '_' (e.g. 'por_eng')"
        )


class MalformedRecord(MakedictError):
    """A record could not be split into columns, or a column is missing."""

    def __init__(self, record, line_number: Optional[int] = None, reason: str = "invalid line"):
        self.record = record
        self.line_number = line_number
        self.reason = reason
        where = f" at line {line_number}" if line_number is not None else ""
        super().__init__(f"{reason}{where}: {record!r}")


class AmbiguousFormat(MakedictError):
    """Column detection could not assign one distinct column per language."""


class NoLanguagesProvided(MakedictError):
    """Format detection was asked to find zero languages."""

    def __init__(self):
        super().__init__("no languages provided")


class EmptyCorpus(MakedictError):
    """A corpus source produced zero bytes."""

    def __init__(self, source: str):
        self.source = source
        super().__init__(f"empty corpus: {source}")


class UnsupportedLanguage(MakedictError):
    """The classifier has no model for a requested language code."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"unsupported language code: {code!r}")


class FetchError(MakedictError):
    """Retrieving or decompressing a corpus failed."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"failed to fetch {url}: {reason}")


class BuildCancelled(MakedictError):
    """A pair build noticed the batch cancellation token and stopped."""


class PairBuildError(MakedictError):
    """A fatal error while building one language pair.

    The wrapped exception is available as ``cause`` and as ``__cause__``.
    """

    def __init__(self, pair: str, source: Optional[str], cause: BaseException):
        self.pair = pair
        self.source = source
        self.cause = cause
        where = f" (corpus {source})" if source else ""
        super().__init__(f"building {pair} failed{where}: {cause}")


class BuildTimeout(MakedictError):
    """The batch deadline elapsed before every pair finished."""

    def __init__(self, deadline: float, pending: Sequence[str] = ()):
        self.deadline = deadline
        self.pending = list(pending)
        detail = f"; still running: {', '.join(self.pending)}" if self.pending else ""
        super().__init__(f"timeout after {deadline:g}s{detail}")
