"""
Language classification for corpus cells.

Format detection only needs one capability: given a short text and the set
of languages that may appear in the corpus, name the most likely language or
give up. Anything implementing ``Classifier`` can be plugged in; the default
is backed by langid restricted to the candidate languages.
"""

import logging
from typing import FrozenSet, Iterable, Optional, Protocol

from langid.langid import LanguageIdentifier, model

from makedict.errors import UnsupportedLanguage
from makedict.languages import ISO_639_1_TO_3, ISO_639_3_TO_1, normalize_code


logger = logging.getLogger(__name__)

# With only two candidate languages the normalized probability of the winner
# is always >= 0.5, so anything near that is a coin flip.
DEFAULT_MIN_CONFIDENCE = 0.8


class Classifier(Protocol):
    def classify(self, text: str, languages: Iterable[str]) -> Optional[str]:
        """Return the ISO 639-3 code of ``text`` among ``languages``, or None."""
        ...


class LangidClassifier:
    """langid-backed classifier.

    A langid identifier carries its language restriction as mutable state, so
    each instance owns its own identifier and must not be shared between
    threads. Loading the model takes a moment; reuse an instance for every
    corpus of a language pair.
    """

    def __init__(self, min_confidence: float = DEFAULT_MIN_CONFIDENCE):
        self.min_confidence = min_confidence
        self._identifier = LanguageIdentifier.from_modelstring(model, norm_probs=True)
        self._restricted_to: Optional[FrozenSet[str]] = None

    def _restrict(self, languages: Iterable[str]) -> None:
        codes = frozenset(normalize_code(lang) for lang in languages)
        if codes == self._restricted_to:
            return

        iso1 = []
        for code in sorted(codes):
            if code not in ISO_639_3_TO_1:
                raise UnsupportedLanguage(code)
            iso1.append(ISO_639_3_TO_1[code])

        self._identifier.set_languages(iso1)
        self._restricted_to = codes
        logger.debug(f"Classifier restricted to {sorted(codes)}")

    def classify(self, text: str, languages: Iterable[str]) -> Optional[str]:
        self._restrict(languages)

        text = text.strip()
        if not text:
            return None

        lang, confidence = self._identifier.classify(text)
        if confidence < self.min_confidence:
            return None
        return ISO_639_1_TO_3.get(lang)
