"""Pytest configuration and shared fixtures."""
import tempfile
from pathlib import Path

import pytest


# Small Portuguese/English vocabulary used to fake language detection.
VOCABULARY = {
    "por": {
        "hola", "obras", "viver", "casa", "livro", "gato", "cachorro", "agua",
        "permitindo", "conhecimento", "restrito", "contabilidade", "nos",
    },
    "eng": {
        "hello", "hi", "works", "live", "house", "home", "book", "cat", "dog",
        "water", "allowing", "letting", "permitting", "knowledge", "restricted",
        "accounting", "us", "we",
    },
}


class WordListClassifier:
    """Deterministic classifier: a cell belongs to a language if it is in its word list."""

    def __init__(self, vocabulary=None):
        self.vocabulary = vocabulary or VOCABULARY
        self.calls = 0

    def classify(self, text, languages):
        self.calls += 1
        word = text.strip().lower()
        for lang in sorted(languages):
            if word in self.vocabulary.get(lang, ()):
                return lang
        return None


def make_corpus(rows, separator="\t"):
    """Join rows of fields into corpus bytes."""
    return "\n".join(separator.join(row) for row in rows).encode("utf-8") + b"\n"


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def classifier():
    return WordListClassifier()


@pytest.fixture
def por_eng_rows():
    """Portuguese in column 0, English in column 1."""
    return [
        ("obras", "works"),
        ("viver", "live"),
        ("casa", "house"),
        ("casa", "home"),
        ("livro", "book"),
        ("gato", "cat"),
        ("cachorro", "dog"),
        ("agua", "water"),
    ]


@pytest.fixture
def por_eng_corpus(por_eng_rows):
    return make_corpus(por_eng_rows)


@pytest.fixture
def opus_style_corpus(por_eng_rows):
    """OPUS layout: frequency, English, Portuguese."""
    return make_corpus((str(10 + i), eng, por) for i, (por, eng) in enumerate(por_eng_rows))
