"""Persisted play sessions in a string key-value store.

Records live under ``"<namespace>-<puzzleId>"``. Two backends are
provided: a JSON-file directory (one file per key, like the other local
collections) and a plain in-memory mapping.
"""

from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import Any, Dict, MutableMapping, Optional

from ..core.constants import DEFAULT_NAMESPACE
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

DEFAULT_STORE_DIR = Path("local_db/collections/sessions")


class FileKeyValueStore(MutableMapping):
    """String key-value store persisting each key as a text file."""

    def __init__(self, store_dir: Path | str = DEFAULT_STORE_DIR) -> None:
        self.store_dir = Path(store_dir)
        self.store_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        slug = re.sub(r"[^A-Za-z0-9._-]", "_", key)
        return self.store_dir / f"{slug}.json"

    def __getitem__(self, key: str) -> str:
        path = self._path(key)
        if not path.exists():
            raise KeyError(key)
        return path.read_text(encoding="utf-8")

    def __setitem__(self, key: str, value: str) -> None:
        self._path(key).write_text(value, encoding="utf-8")

    def __delitem__(self, key: str) -> None:
        path = self._path(key)
        if not path.exists():
            raise KeyError(key)
        path.unlink()

    def __iter__(self):
        return (path.stem for path in sorted(self.store_dir.glob("*.json")))

    def __len__(self) -> int:
        return sum(1 for _ in self.store_dir.glob("*.json"))


class SessionStore:
    """Save and load session records for individual puzzles."""

    def __init__(
        self,
        backend: Optional[MutableMapping[str, str]] = None,
        namespace: Optional[str] = None,
    ) -> None:
        self.backend: MutableMapping[str, str] = backend if backend is not None else {}
        self.namespace = namespace or os.environ.get("ARROWWORD_NAMESPACE", DEFAULT_NAMESPACE)

    def key(self, puzzle_id: str) -> str:
        return f"{self.namespace}-{puzzle_id}"

    def save(self, record: Dict[str, Any]) -> str:
        key = self.key(record["puzzleId"])
        self.backend[key] = json.dumps(record, ensure_ascii=False)
        LOGGER.info("Session saved: %s", key)
        return key

    def load(self, puzzle_id: str) -> Optional[Dict[str, Any]]:
        """Return the stored record, or None if missing, corrupt or stale."""

        key = self.key(puzzle_id)
        raw = self.backend.get(key)
        if raw is None:
            return None
        try:
            record = json.loads(raw)
        except json.JSONDecodeError as exc:
            LOGGER.warning("Session record %s unreadable: %s", key, exc)
            return None
        if not isinstance(record, dict) or record.get("puzzleId") != puzzle_id:
            LOGGER.warning("Session record %s does not belong to %s", key, puzzle_id)
            return None
        return record

    def clear(self, puzzle_id: str) -> None:
        self.backend.pop(self.key(puzzle_id), None)
