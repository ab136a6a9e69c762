"""
line_parser.py - Split a raw TSV corpus into records.

Corpora are expected to be tab separated, but some mirrors ship files that
use a single space between columns. The parser starts with a tab and switches
to a space the first time a record does not split on tabs. The switch is
permanent for the remainder of that corpus.

Blank lines are skipped. Sampling (every Nth non-blank record) is used by
format detection to avoid classifying every line of a large corpus.
"""

import logging
from typing import Callable, Iterator, Optional, Tuple

from makedict.errors import MalformedRecord


logger = logging.getLogger(__name__)

TAB = "\t"
SPACE = " "

Record = Tuple[str, ...]


class LineParser:
    """Stateful splitter for a single corpus.

    The current separator is the only state. Create one parser per corpus;
    two corpora never share a parser.
    """

    def __init__(self, separator: str = TAB):
        self.separator = separator

    def split(self, line: str, line_number: Optional[int] = None) -> Record:
        """Split one line, falling back to a space separator if needed."""
        fields = line.split(self.separator)
        if len(fields) >= 2:
            return tuple(fields)

        fields = line.split(SPACE)
        if len(fields) < 2:
            raise MalformedRecord(line, line_number)

        if self.separator != SPACE:
            logger.info(f"No tab in line {line_number}, switching separator to space")
            self.separator = SPACE
        return tuple(fields)

    def iter_records(
        self, corpus: bytes, sample_stride: Optional[int] = None
    ) -> Iterator[Tuple[int, Record]]:
        """Yield (line_number, record) for every non-blank (sampled) line."""
        stride = sample_stride if sample_stride and sample_stride > 0 else None
        position = 0

        for line_number, raw in enumerate(corpus.split(b"\n"), 1):
            line = raw.rstrip(b"\r").decode("utf-8", errors="replace")
            if not line.strip():
                continue

            sampled = stride is None or position % stride == 0
            position += 1
            if not sampled:
                continue

            yield line_number, self.split(line, line_number)

    def parse(
        self,
        corpus: bytes,
        on_record: Callable[[Record], None],
        sample_stride: Optional[int] = None,
    ) -> None:
        """Feed each record to ``on_record``; its exceptions abort parsing."""
        for _, record in self.iter_records(corpus, sample_stride):
            on_record(record)


def parse(
    corpus: bytes,
    on_record: Callable[[Record], None],
    sample_stride: Optional[int] = None,
) -> None:
    """Parse ``corpus`` with a fresh tab-first parser."""
    LineParser().parse(corpus, on_record, sample_stride)
