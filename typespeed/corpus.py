from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import List, Tuple

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent / "data"


class TypespeedError(Exception):
    """Base class for errors raised by typespeed."""


class UnknownLanguage(TypespeedError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown language: {name}")
        self.name = name


@dataclass(frozen=True)
class Corpus:
    name: str
    words: Tuple[str, ...]
    ordered_by_frequency: bool = False
    no_lazy_mode: bool = False


def list_available() -> List[str]:
    """Names of the bundled word lists, sorted."""
    return sorted(p.stem for p in DATA_DIR.glob("*.json"))


@lru_cache(maxsize=None)
def resolve(name: str) -> Corpus:
    """Load the bundled corpus called ``name``.

    Raises UnknownLanguage when no such word list ships with the package.
    """
    path = DATA_DIR / f"{name}.json"
    if not name or "/" in name or "\\" in name or not path.is_file():
        raise UnknownLanguage(name)

    raw = json.loads(path.read_text(encoding="utf-8"))
    words = tuple(str(w) for w in raw.get("words", []) if str(w))
    if not words:
        raise ValueError(f"{path.name}: word list is empty")
    logger.debug("Loaded corpus %s (%d words)", name, len(words))
    return Corpus(
        name=str(raw.get("name", name)),
        words=words,
        ordered_by_frequency=bool(raw.get("orderedByFrequency", False)),
        no_lazy_mode=bool(raw.get("noLazyMode", False)),
    )
