"""
format_detect.py - Guess which column of a bilingual TSV holds which language.

Source dictionaries come without headers and with varying column layouts
(OPUS files, for instance, carry a frequency column in front of the two word
columns). Detection samples every Nth record, classifies every cell, and
assigns each language the column it was seen in most often.

Resolution rules:
  - the most frequent column wins; ties go to the lowest column index
  - a language never observed cannot be placed -> AmbiguousFormat
  - two languages on the same column -> AmbiguousFormat
"""

import logging
from collections import Counter
from typing import Dict, Iterable, List

from makedict.classifier import Classifier
from makedict.errors import AmbiguousFormat, NoLanguagesProvided
from makedict.languages import normalize_code
from makedict.line_parser import LineParser, Record


logger = logging.getLogger(__name__)

# Source dictionaries usually contain thousands of lines
DEFAULT_SAMPLE_STRIDE = 100

ColumnMapping = Dict[str, int]


def most_frequent_column(columns: Iterable[int]) -> int:
    """Mode of ``columns``; ties resolve to the lowest column index."""
    counts = Counter(columns)
    if not counts:
        raise ValueError("no columns observed")
    best = max(counts.values())
    return min(column for column, count in counts.items() if count == best)


def detect_format(
    corpus: bytes,
    languages: Iterable[str],
    classifier: Classifier,
    sample_stride: int = DEFAULT_SAMPLE_STRIDE,
) -> ColumnMapping:
    """Resolve one distinct column per language from a sample of ``corpus``."""
    wanted = sorted({normalize_code(lang) for lang in languages})
    if not wanted:
        raise NoLanguagesProvided()

    observed: Dict[str, List[int]] = {lang: [] for lang in wanted}

    def tally(record: Record) -> None:
        for column, cell in enumerate(record):
            language = classifier.classify(cell, wanted)
            if language is None or language not in observed:
                continue
            observed[language].append(column)

    LineParser().parse(corpus, tally, sample_stride=sample_stride)

    mapping: ColumnMapping = {}
    owners: Dict[int, str] = {}
    for lang in wanted:
        columns = observed[lang]
        if not columns:
            raise AmbiguousFormat(f"language {lang} not detected in any column")

        column = most_frequent_column(columns)
        if column in owners:
            raise AmbiguousFormat(
                f"same column {column} detected for {owners[column]} and {lang}"
            )
        owners[column] = lang
        mapping[lang] = column

    logger.debug(f"Detected format {mapping} from {sum(map(len, observed.values()))} hits")
    return mapping
