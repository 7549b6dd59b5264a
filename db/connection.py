from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from config.settings import DatabaseConfig


class DatabaseClient:
    """
    Thin wrapper around the SQLAlchemy engine backing the durable state.

    Keeps engine creation and disposal away from the favorites and session
    layers.
    """

    def __init__(self, config: DatabaseConfig):
        self.config = config
        self._engine: Optional[Engine] = None

    @property
    def engine(self) -> Engine:
        """Lazy-load the engine."""
        if self._engine is None:
            self._engine = create_engine(self.config.connection_string)
        return self._engine

    def close(self) -> None:
        """Dispose of pooled connections."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
