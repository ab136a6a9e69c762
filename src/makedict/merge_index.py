"""
merge_index.py - Frequency-ranked bilingual dictionary.

Each language pair gets one DictionaryIndex. Every (word, variant) sighting
across all ingested corpora adds one to that variant's score, so the most
widely attested translations rank first.

Ranking: score descending, ties by variant text ascending.

Export format (one line per word, words in lexical order):
  word<TAB>variant_1<TAB>score_1<TAB>variant_2<TAB>score_2...
"""

import logging
from pathlib import Path
from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple

import orjson

from makedict.errors import MalformedRecord
from makedict.languages import LanguagePair, normalize_code
from makedict.line_parser import LineParser
from makedict.progress_display import ProgressDisplay


logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "\t"


class Suggestion(NamedTuple):
    variant: str
    score: int


def normalize_field(text: str) -> str:
    """Lowercase and collapse inner whitespace so a field never carries a
    tab or line break into the exported TSV."""
    return " ".join(text.lower().split())


def _rank_key(item: Tuple[str, int]) -> Tuple[int, str]:
    variant, score = item
    return -score, variant


class DictionaryIndex:
    """Word -> {variant: score} for one language pair.

    Only ingestion mutates the index; lookups and exports read a consistent
    state because a corpus is applied only after it parsed completely.
    """

    def __init__(self, source_lang: str, target_lang: str):
        self.source_lang = normalize_code(source_lang)
        self.target_lang = normalize_code(target_lang)
        self._entries: Dict[str, Dict[str, int]] = {}

    @classmethod
    def for_pair(cls, pair: LanguagePair) -> "DictionaryIndex":
        return cls(pair.source, pair.target)

    @property
    def pair(self) -> LanguagePair:
        return LanguagePair(self.source_lang, self.target_lang)

    def __repr__(self) -> str:
        return f"DictionaryIndex({self.pair.identifier}: {self.size():,} words)"

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, word: str) -> bool:
        return self.exists(word)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_variant(self, word: str, variant: str) -> None:
        """Record one sighting of ``variant`` as a translation of ``word``.

        Both are normalized with normalize_field first.
        """
        word, variant = normalize_field(word), normalize_field(variant)
        variants = self._entries.setdefault(word, {})
        variants[variant] = variants.get(variant, 0) + 1

    def ingest(
        self,
        corpus: bytes,
        mapping: Dict[str, int],
        source_lang: Optional[str] = None,
        target_lang: Optional[str] = None,
    ) -> int:
        """Merge every record of ``corpus`` using the resolved column mapping.

        The whole corpus is parsed before anything is added, so a malformed
        record leaves the index unchanged. Returns the number of records added.
        """
        source_lang = normalize_code(source_lang or self.source_lang)
        target_lang = normalize_code(target_lang or self.target_lang)

        try:
            source_column = mapping[source_lang]
            target_column = mapping[target_lang]
        except KeyError as e:
            raise MalformedRecord(mapping, reason=f"no column for language {e.args[0]}") from None

        staged: List[Tuple[str, str]] = []
        needed = max(source_column, target_column) + 1

        for line_number, record in LineParser().iter_records(corpus):
            if len(record) < needed:
                raise MalformedRecord(
                    record, line_number,
                    reason=f"expected at least {needed} columns, got {len(record)}",
                )
            staged.append((record[source_column], record[target_column]))

        for word, variant in staged:
            self.add_variant(word, variant)

        logger.debug(f"Ingested {len(staged):,} records into {self.pair.identifier}")
        return len(staged)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def lookup(self, word: str) -> List[Suggestion]:
        """Variants of ``word`` ranked by score; [] if the word is unknown."""
        return self._ranked(normalize_field(word))

    def _ranked(self, key: str) -> List[Suggestion]:
        variants = self._entries.get(key)
        if not variants:
            return []
        return [Suggestion(v, s) for v, s in sorted(variants.items(), key=_rank_key)]

    def exists(self, word: str) -> bool:
        return normalize_field(word) in self._entries

    def size(self) -> int:
        """Number of distinct source words."""
        return len(self._entries)

    def words(self) -> List[str]:
        return sorted(self._entries)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export_lines(self) -> Iterator[str]:
        """Yield one TSV line (without newline) per word."""
        for word in self.words():
            fields = [word]
            for variant, score in self._ranked(word):
                fields.append(variant)
                fields.append(str(score))
            yield FIELD_SEPARATOR.join(fields)

    def export(self, path: Path) -> Path:
        """Write the ranked dictionary to ``path`` as TSV."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        logger.info(f"Writing {self.size():,} words to {path}")
        with ProgressDisplay(f"Writing {path.name}", update_interval=10000) as progress:
            with open(path, "w", encoding="utf-8") as f:
                for count, line in enumerate(self.export_lines(), 1):
                    f.write(line + "\n")
                    progress.update(Words=count)

        return path

    @classmethod
    def load(cls, path: Path, pair: LanguagePair) -> "DictionaryIndex":
        """Read an exported dictionary back into memory."""
        index = cls.for_pair(pair)
        with open(path, "r", encoding="utf-8") as f:
            for line_number, line in enumerate(f, 1):
                line = line.rstrip("\n")
                if not line:
                    continue
                fields = line.split(FIELD_SEPARATOR)
                if len(fields) % 2 != 1:
                    raise MalformedRecord(line, line_number, reason="unpaired variant/score")
                word, rest = fields[0], fields[1:]
                variants = index._entries.setdefault(word, {})
                for variant, score in zip(rest[::2], rest[1::2]):
                    try:
                        variants[variant] = variants.get(variant, 0) + int(score)
                    except ValueError:
                        raise MalformedRecord(line, line_number, reason=f"bad score {score!r}") from None
        return index

    def to_json(self) -> bytes:
        """{word: {variant: score}} with variants in rank order."""
        payload = {
            word: {s.variant: s.score for s in self._ranked(word)}
            for word in self.words()
        }
        return orjson.dumps(payload)
