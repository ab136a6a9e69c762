"""
Configuration for makedict builds.

Reads schema/sources.yaml (or $MAKEDICT_SOURCES):

    settings:
      deadline_seconds: 30
      sample_stride: 100
      min_confidence: 0.8
      cache_dir: data/cache
      output_dir: data/build
      max_workers: 0          # 0 = one worker per pair
    pairs:
      por_eng:
        - https://object.pouta.csc.fi/OPUS-Wikipedia/v1.0/dic/en-pt.dic.gz

Relative directories resolve against the project root. Missing keys fall back
to DEFAULT_SETTINGS.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from makedict.languages import LanguagePair


# From src/makedict/ up to the project root
PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_SOURCES_PATH = PROJECT_ROOT / "schema" / "sources.yaml"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "deadline_seconds": 30.0,
    "sample_stride": 100,
    "min_confidence": 0.8,
    "cache_dir": "data/cache",
    "output_dir": "data/build",
    "max_workers": 0,
}


@dataclass
class Settings:
    deadline_seconds: float = DEFAULT_SETTINGS["deadline_seconds"]
    sample_stride: int = DEFAULT_SETTINGS["sample_stride"]
    min_confidence: float = DEFAULT_SETTINGS["min_confidence"]
    cache_dir: Path = PROJECT_ROOT / DEFAULT_SETTINGS["cache_dir"]
    output_dir: Path = PROJECT_ROOT / DEFAULT_SETTINGS["output_dir"]
    max_workers: Optional[int] = None


@dataclass
class BuildConfig:
    settings: Settings = field(default_factory=Settings)
    pairs: Dict[str, List[str]] = field(default_factory=dict)

    def sources_for(self, pair_ids: Optional[List[str]] = None) -> Dict[str, List[str]]:
        """Sources for ``pair_ids`` (all configured pairs if None)."""
        if not pair_ids:
            return dict(self.pairs)
        missing = [p for p in pair_ids if p not in self.pairs]
        if missing:
            raise KeyError(f"no sources configured for: {', '.join(missing)}")
        return {p: self.pairs[p] for p in pair_ids}


def _resolve_dir(value: Any) -> Path:
    path = Path(os.path.expanduser(str(value)))
    return path if path.is_absolute() else PROJECT_ROOT / path


def sources_path() -> Path:
    """Config path from $MAKEDICT_SOURCES, else schema/sources.yaml."""
    override = os.environ.get("MAKEDICT_SOURCES")
    return Path(override) if override else DEFAULT_SOURCES_PATH


def parse_config(raw: Optional[Dict[str, Any]]) -> BuildConfig:
    """Build a BuildConfig from an already loaded YAML mapping."""
    raw = raw or {}
    values = dict(DEFAULT_SETTINGS)
    values.update(raw.get("settings") or {})

    cache_dir = os.environ.get("MAKEDICT_CACHE_DIR") or values["cache_dir"]
    settings = Settings(
        deadline_seconds=float(values["deadline_seconds"]),
        sample_stride=int(values["sample_stride"]),
        min_confidence=float(values["min_confidence"]),
        cache_dir=_resolve_dir(cache_dir),
        output_dir=_resolve_dir(values["output_dir"]),
        max_workers=int(values["max_workers"] or 0) or None,
    )

    pairs: Dict[str, List[str]] = {}
    for pair_id, urls in (raw.get("pairs") or {}).items():
        # Reject malformed identifiers up front, before anything is fetched
        LanguagePair.parse(pair_id)
        if isinstance(urls, str):
            urls = [urls]
        pairs[pair_id] = [str(url) for url in (urls or [])]

    return BuildConfig(settings=settings, pairs=pairs)


def load_config(path: Optional[Path] = None) -> BuildConfig:
    """Load the sources file; a missing file yields the defaults."""
    path = Path(path) if path is not None else sources_path()
    if not path.exists():
        return parse_config(None)

    with open(path, "r", encoding="utf-8") as f:
        return parse_config(yaml.safe_load(f))
