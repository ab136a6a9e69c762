"""
Language codes and language pairs.

Dictionaries are identified by pairs of ISO 639-3 codes ("por_eng").
The langid model speaks ISO 639-1, so the classifier translates through
ISO_639_3_TO_1 below, which covers every language in langid's default model.
"""

from typing import Dict, NamedTuple

from makedict.errors import InvalidLanguagePair


PAIR_SEPARATOR = "_"

ISO_639_3_TO_1: Dict[str, str] = {
    "afr": "af", "amh": "am", "arg": "an", "ara": "ar", "asm": "as",
    "aze": "az", "bel": "be", "bul": "bg", "ben": "bn", "bre": "br",
    "bos": "bs", "cat": "ca", "ces": "cs", "cym": "cy", "dan": "da",
    "deu": "de", "dzo": "dz", "ell": "el", "eng": "en", "epo": "eo",
    "spa": "es", "est": "et", "eus": "eu", "fas": "fa", "fin": "fi",
    "fao": "fo", "fra": "fr", "gle": "ga", "glg": "gl", "guj": "gu",
    "heb": "he", "hin": "hi", "hrv": "hr", "hat": "ht", "hun": "hu",
    "hye": "hy", "ind": "id", "isl": "is", "ita": "it", "jpn": "ja",
    "jav": "jv", "kat": "ka", "kaz": "kk", "khm": "km", "kan": "kn",
    "kor": "ko", "kur": "ku", "kir": "ky", "lat": "la", "ltz": "lb",
    "lao": "lo", "lit": "lt", "lav": "lv", "mlg": "mg", "mkd": "mk",
    "mal": "ml", "mon": "mn", "mar": "mr", "msa": "ms", "mlt": "mt",
    "nob": "nb", "nep": "ne", "nld": "nl", "nno": "nn", "nor": "no",
    "oci": "oc", "ori": "or", "pan": "pa", "pol": "pl", "pus": "ps",
    "por": "pt", "que": "qu", "ron": "ro", "rus": "ru", "kin": "rw",
    "sme": "se", "sin": "si", "slk": "sk", "slv": "sl", "sqi": "sq",
    "srp": "sr", "swe": "sv", "swa": "sw", "tam": "ta", "tel": "te",
    "tha": "th", "tgl": "tl", "tur": "tr", "uig": "ug", "ukr": "uk",
    "urd": "ur", "vie": "vi", "vol": "vo", "wln": "wa", "xho": "xh",
    "zho": "zh", "zul": "zu",
}

ISO_639_1_TO_3: Dict[str, str] = {two: three for three, two in ISO_639_3_TO_1.items()}


def normalize_code(code: str) -> str:
    """Canonical form of a language code (stripped, lowercase)."""
    return code.strip().lower()


class LanguagePair(NamedTuple):
    """Ordered (source, target) pair of ISO 639-3 codes."""

    source: str
    target: str

    @classmethod
    def parse(cls, identifier: str) -> "LanguagePair":
        """Parse "xxx_yyy"; anything but two non-empty parts is rejected."""
        parts = identifier.split(PAIR_SEPARATOR)
        if len(parts) != 2:
            raise InvalidLanguagePair(identifier)
        source, target = (normalize_code(part) for part in parts)
        if not source or not target:
            raise InvalidLanguagePair(identifier)
        return cls(source, target)

    @property
    def identifier(self) -> str:
        return f"{self.source}{PAIR_SEPARATOR}{self.target}"

    def __str__(self) -> str:
        return self.identifier
