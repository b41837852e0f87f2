from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields, replace
from typing import Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)

MODES = ["time", "words"]
TIME_LIMITS = [15, 30, 60, 120]
WORD_COUNTS = [10, 25, 50, 100]

# Words generated up front in time mode.
TIME_MODE_WORDS = 100


@dataclass(frozen=True)
class TestConfig:
    mode: str = "time"
    time_limit: int = 30
    word_count: int = 25
    language: str = "english"
    theme: str = "dark"
    one_line: bool = False
    punctuation: bool = False
    numbers: bool = False
    backspace: bool = True

    @property
    def limit_seconds(self) -> Optional[int]:
        return self.time_limit if self.mode == "time" else None

    @property
    def target_words(self) -> int:
        return self.word_count if self.mode == "words" else TIME_MODE_WORDS

    @property
    def duration(self) -> int:
        return self.time_limit if self.mode == "time" else self.word_count

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


DEFAULT_CONFIG = TestConfig()


def merge_config(
    partial: Optional[Mapping[str, object]],
    base: TestConfig = DEFAULT_CONFIG,
    languages: Optional[List[str]] = None,
) -> TestConfig:
    """Overlay persisted settings on ``base``.

    Unknown keys are ignored and values that do not fit a field keep the
    base value, so a hand-edited settings file never stops the app.
    """
    if not partial:
        return base

    known = {f.name for f in fields(TestConfig)}
    changes: Dict[str, object] = {}
    for key, value in partial.items():
        if key not in known:
            continue
        default = getattr(base, key)
        if isinstance(default, bool):
            if isinstance(value, bool):
                changes[key] = value
        elif isinstance(default, int):
            try:
                number = 0 if isinstance(value, bool) else int(value)
            except (TypeError, ValueError):
                number = 0
            if number > 0:
                changes[key] = number
        elif isinstance(value, str) and value:
            changes[key] = value

        if key not in changes:
            logger.warning("Ignoring invalid setting %s=%r", key, value)

    merged = replace(base, **changes)
    if merged.mode not in MODES:
        logger.warning("Unknown mode %r, using %r", merged.mode, DEFAULT_CONFIG.mode)
        merged = replace(merged, mode=DEFAULT_CONFIG.mode)
    if languages is not None and merged.language not in languages:
        logger.warning("Unknown language %r, using %r", merged.language, DEFAULT_CONFIG.language)
        merged = replace(merged, language=DEFAULT_CONFIG.language)
    return merged
