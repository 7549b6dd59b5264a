"""Durable, user-level set of favorite equipment ids."""

import json
import logging
from typing import Iterable, Optional, Set

from core.records import RecordId
from db.kv_store import KeyValueStore


logger = logging.getLogger(__name__)

FAVORITES_KEY = "favorites"


class FavoritesStore:
    """
    Favorites survive dataset loads and restarts.

    Every save writes the complete set, so repeated or reordered saves
    leave the same stored value and the last write wins.
    """

    def __init__(self, store: Optional[KeyValueStore] = None):
        self.store = store
        self._ids: Set[RecordId] = set()

    @property
    def ids(self) -> Set[RecordId]:
        return set(self._ids)

    def load(self) -> Set[RecordId]:
        """Read the persisted set; unreadable entries count as empty."""
        if self.store is None:
            return self.ids

        raw = self.store.get(FAVORITES_KEY)
        if raw is None:
            self._ids = set()
            return self.ids

        try:
            self._ids = set(json.loads(raw))
        except (TypeError, ValueError):
            logger.warning("Ignoring unreadable favorites entry: %r", raw)
            self._ids = set()
        return self.ids

    def save(self, ids: Iterable[RecordId]) -> None:
        self._ids = set(ids)
        if self.store is not None:
            self.store.put(FAVORITES_KEY, json.dumps(sorted(self._ids, key=str)))

    def toggle(self, record_id: RecordId) -> Set[RecordId]:
        """Flip one id against the persisted set, not a possibly stale copy."""
        ids = self.load()
        if record_id in ids:
            ids.discard(record_id)
        else:
            ids.add(record_id)
        self.save(ids)
        return self.ids

    def forget(self) -> None:
        """Drop the in-memory copy; the persisted entry is kept."""
        self._ids = set()
