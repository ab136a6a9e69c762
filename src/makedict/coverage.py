"""
Score a built dictionary against a plain word list.

The word list is one word per line (blank lines and '#' comments ignored).
Coverage is the number of listed words that exist in the dictionary, a quick
sanity check that a build is usable for a spell-checker's vocabulary.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from makedict.merge_index import DictionaryIndex
from makedict.progress_display import ProgressDisplay


logger = logging.getLogger(__name__)


@dataclass
class CoverageReport:
    total: int = 0
    found: int = 0
    missing: List[str] = field(default_factory=list)

    @property
    def ratio(self) -> float:
        return self.found / self.total if self.total else 0.0

    def __str__(self) -> str:
        return f"{self.found:,}/{self.total:,} words ({self.ratio:.1%})"


def score_wordlist(path: Path, index: DictionaryIndex, keep_missing: int = 20) -> CoverageReport:
    """Count how many words of ``path`` exist in ``index`` (lowercased)."""
    report = CoverageReport()

    with ProgressDisplay(f"Scoring {Path(path).name}", update_interval=10000) as progress:
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                word = line.strip().lower()
                if not word or word.startswith("#"):
                    continue

                report.total += 1
                if index.exists(word):
                    report.found += 1
                elif len(report.missing) < keep_missing:
                    report.missing.append(word)
                progress.update(Checked=report.total, Found=report.found)

    logger.info(f"Word list coverage for {index.pair.identifier}: {report}")
    return report
