"""
makedict - bilingual dictionary builder.

Merges many headerless bilingual TSV corpora into one ranked
word -> translations index per language pair:

    from makedict import LangidClassifier, build_one

    index = build_one("por_eng", [corpus_a, corpus_b], LangidClassifier())
    index.lookup("obras")   # [Suggestion(variant='works', score=12), ...]
"""

from makedict.classifier import Classifier, LangidClassifier
from makedict.errors import (
    AmbiguousFormat,
    BuildCancelled,
    BuildTimeout,
    EmptyCorpus,
    FetchError,
    InvalidLanguagePair,
    MakedictError,
    MalformedRecord,
    NoLanguagesProvided,
    PairBuildError,
    UnsupportedLanguage,
)
from makedict.format_detect import detect_format
from makedict.languages import LanguagePair
from makedict.line_parser import LineParser
from makedict.merge_index import DictionaryIndex, Suggestion
from makedict.orchestrator import build_many, build_one, prepare_dicts
from makedict.sources import Corpus, CorpusFetcher

__version__ = "0.1.0"

__all__ = [
    "AmbiguousFormat",
    "BuildCancelled",
    "BuildTimeout",
    "Classifier",
    "Corpus",
    "CorpusFetcher",
    "DictionaryIndex",
    "EmptyCorpus",
    "FetchError",
    "InvalidLanguagePair",
    "LangidClassifier",
    "LanguagePair",
    "LineParser",
    "MakedictError",
    "MalformedRecord",
    "NoLanguagesProvided",
    "PairBuildError",
    "Suggestion",
    "UnsupportedLanguage",
    "build_many",
    "build_one",
    "detect_format",
    "prepare_dicts",
]
