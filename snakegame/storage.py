from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

logger = logging.getLogger(__name__)

HIGH_SCORE_KEY = "snakeHighScore"
# A full 20x20 board scores under 4000, so longer strings are corrupt.
MAX_SCORE_DIGITS = 12


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[object]: ...

    def set(self, key: str, value: object) -> None: ...


class MemoryStore:
    """Dict-backed store; nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, object]] = None) -> None:
        self.data: Dict[str, object] = dict(initial or {})
        self.writes = 0

    def get(self, key: str) -> Optional[object]:
        return self.data.get(key)

    def set(self, key: str, value: object) -> None:
        self.data[key] = value
        self.writes += 1


class JsonFileStore:
    """Keeps every key in a single JSON object on disk.

    A missing, unreadable or malformed file reads as empty. Failed writes are
    logged and dropped so a full disk never ends a game.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path).expanduser()

    def _load(self) -> Dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable store %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store %s: expected a JSON object", self.path)
            return {}
        return data

    def get(self, key: str) -> Optional[object]:
        return self._load().get(key)

    def set(self, key: str, value: object) -> None:
        data = self._load()
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as exc:
            logger.error("Could not write %s: %s", self.path, exc)


def load_high_score(store: KeyValueStore) -> int:
    raw = store.get(HIGH_SCORE_KEY)
    if raw is None:
        return 0
    if isinstance(raw, bool):
        value = None
    elif isinstance(raw, int):
        value = raw
    elif isinstance(raw, str) and raw.strip().isdigit() and len(raw.strip()) <= MAX_SCORE_DIGITS:
        try:
            value = int(raw.strip())
        except ValueError:
            value = None
    else:
        value = None

    if value is None or value < 0:
        logger.warning("Stored high score %r is not a valid score; using 0", raw)
        return 0
    return value


def save_high_score(store: KeyValueStore, value: int) -> None:
    store.set(HIGH_SCORE_KEY, int(value))
