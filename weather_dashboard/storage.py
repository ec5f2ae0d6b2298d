"""
Recent-Search Storage

A tiny key-value store contract plus the recent-search list built on it.

The list is most-recent-first, deduplicated, and capped: re-searching a
place moves it to the front instead of adding a second copy.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from .config import MAX_RECENT_SEARCHES, RECENT_SEARCHES_KEY, RECENT_SEARCHES_PATH

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Persistent store holding ordered string lists by key."""

    def get(self, key: str) -> list[str] | None: ...

    def set(self, key: str, values: Sequence[str]) -> None: ...


class MemoryStore:
    """Process-local store, used in tests and when persistence is disabled."""

    def __init__(self, initial: dict[str, list[str]] | None = None):
        self._data: dict[str, list[str]] = {k: list(v) for k, v in (initial or {}).items()}

    def get(self, key: str) -> list[str] | None:
        values = self._data.get(key)
        return list(values) if values is not None else None

    def set(self, key: str, values: Sequence[str]) -> None:
        self._data[key] = list(values)


class JsonFileStore:
    """
    Store backed by a single JSON object on disk.

    Writes go to a sibling temp file first and are moved into place,
    so a crash mid-write leaves the previous contents intact.
    """

    def __init__(self, path: str | Path = RECENT_SEARCHES_PATH):
        self.path = Path(path)

    def _read_all(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            # ValueError covers both JSONDecodeError and UnicodeDecodeError
            logger.warning("Ignoring unreadable store at %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> list[str] | None:
        value = self._read_all().get(key)
        if not isinstance(value, list):
            return None
        return [item for item in value if isinstance(item, str)]

    def set(self, key: str, values: Sequence[str]) -> None:
        data = self._read_all()
        data[key] = list(values)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        os.replace(tmp_path, self.path)


def push_recent(
    searches: Sequence[str],
    place: str,
    limit: int = MAX_RECENT_SEARCHES,
) -> list[str]:
    """Return `searches` with `place` moved to the front, capped at `limit`."""
    return [place, *(s for s in searches if s != place)][:limit]


class RecentSearches:
    """The recent-search list as persisted in a KeyValueStore."""

    def __init__(
        self,
        store: KeyValueStore,
        key: str = RECENT_SEARCHES_KEY,
        limit: int = MAX_RECENT_SEARCHES,
    ):
        self.store = store
        self.key = key
        self.limit = limit

    def load(self) -> list[str]:
        """Read the stored list, repairing duplicates and overflow."""
        stored = self.store.get(self.key) or []
        searches: list[str] = []
        for place in stored:
            if place not in searches:
                searches.append(place)
        return searches[: self.limit]

    def push(self, searches: Sequence[str], place: str) -> list[str]:
        """Move `place` to the front of `searches`, capped at this list's limit."""
        return push_recent(searches, place, self.limit)

    def save(self, searches: Sequence[str]) -> None:
        """Write `searches` back to the store."""
        self.store.set(self.key, list(searches)[: self.limit])
