"""
Process-wide user state: the backend session token and favorite ids.

Created once at start-up from durable storage, handed to whoever needs it,
and torn down on logout.
"""

import logging
from typing import Optional

from config.settings import Config
from core.favorites import FavoritesStore
from db.connection import DatabaseClient
from db.kv_store import KeyValueStore


logger = logging.getLogger(__name__)

TOKEN_KEY = "token"


class AppState:
    def __init__(self, store: Optional[KeyValueStore] = None, db: Optional[DatabaseClient] = None):
        self.store = store
        self.db = db
        self.favorites = FavoritesStore(store)
        self.token: Optional[str] = None

    @classmethod
    def start(cls, config: Optional[Config] = None) -> "AppState":
        """Open the durable store and read token and favorites from it."""
        config = config or Config.load()
        db = DatabaseClient(config.db)
        state = cls(KeyValueStore(db), db)
        state.token = state.store.get(TOKEN_KEY)
        state.favorites.load()
        logger.info(
            "App state ready: %d favorite(s), %s",
            len(state.favorites.ids),
            "token present" if state.token else "no token",
        )
        return state

    @property
    def authenticated(self) -> bool:
        return self.token is not None

    def set_token(self, token: str) -> None:
        self.token = token
        if self.store is not None:
            self.store.put(TOKEN_KEY, token)
        self.favorites.load()

    def logout(self) -> None:
        """Clear the token everywhere and drop cached favorites."""
        self.token = None
        if self.store is not None:
            self.store.delete(TOKEN_KEY)
        self.favorites.forget()

    def close(self) -> None:
        if self.db is not None:
            self.db.close()
