from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import asdict, dataclass, fields
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from typespeed.config import TestConfig
from typespeed.stats import TestResult

logger = logging.getLogger(__name__)

MAX_SCORES = 100


def default_data_dir() -> Path:
    """
    Local-only storage:
    - $TYPESPEED_HOME when set
    - macOS: ~/Library/Application Support/typespeed
    - Linux: $XDG_DATA_HOME/typespeed or ~/.local/share/typespeed
    """
    override = os.environ.get("TYPESPEED_HOME")
    if override:
        return Path(override)
    home = Path.home()
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / "typespeed"
    xdg = os.environ.get("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / "typespeed"
    return home / ".local" / "share" / "typespeed"


@dataclass
class ScoreEntry:
    wpm: float
    raw_wpm: float
    accuracy: float
    consistency: float
    language: str
    mode: str
    duration: int
    timestamp: str

    @classmethod
    def from_result(cls, result: TestResult, when: Optional[datetime] = None) -> "ScoreEntry":
        config = result.config or TestConfig()
        return cls(
            wpm=result.wpm,
            raw_wpm=result.raw_wpm,
            accuracy=result.accuracy,
            consistency=result.consistency,
            language=config.language,
            mode=config.mode,
            duration=config.duration,
            timestamp=(when or datetime.now()).isoformat(timespec="seconds"),
        )


_SCORE_FIELDS = {f.name for f in fields(ScoreEntry)}


class Store:
    """Settings and score history, one JSON file each."""

    def __init__(self, data_dir: Optional[Path] = None) -> None:
        self.data_dir = Path(data_dir) if data_dir else default_data_dir()
        self.settings_path = self.data_dir / "settings.json"
        self.scores_path = self.data_dir / "scores.json"

    def load_settings(self) -> Dict[str, object]:
        data = self._read(self.settings_path, {})
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed settings in %s", self.settings_path)
            return {}
        return data

    def save_settings(self, config: TestConfig) -> None:
        self._write(self.settings_path, config.to_dict())

    def list_scores(self) -> List[ScoreEntry]:
        data = self._read(self.scores_path, [])
        if not isinstance(data, list):
            logger.warning("Ignoring malformed scores in %s", self.scores_path)
            return []
        out: List[ScoreEntry] = []
        for row in data:
            if not isinstance(row, Mapping):
                continue
            # Filter to known fields so extra/future keys don't crash
            filtered = {k: v for k, v in row.items() if k in _SCORE_FIELDS}
            try:
                out.append(ScoreEntry(**filtered))
            except TypeError:
                logger.debug("Skipping incomplete score row %r", row)
        return out

    def append_score(self, entry: ScoreEntry) -> List[ScoreEntry]:
        """Insert ``entry`` newest first and keep the latest MAX_SCORES."""
        scores = [entry] + self.list_scores()
        scores = scores[:MAX_SCORES]
        self._write(self.scores_path, [asdict(s) for s in scores])
        return scores

    def _read(self, path: Path, default):
        if not path.exists():
            return default
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load %s: %s", path, e)
            return default

    def _write(self, path: Path, payload) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save %s: %s", path, e)
