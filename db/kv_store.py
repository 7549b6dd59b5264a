"""Single-table key-value store for small pieces of durable app state."""

from typing import Optional

from sqlalchemy import Column, MetaData, String, Table, Text, delete, insert, select

from db.connection import DatabaseClient


metadata = MetaData()

kv_entries = Table(
    "kv_entries",
    metadata,
    Column("key", String(128), primary_key=True),
    Column("value", Text, nullable=False),
)


class KeyValueStore:
    def __init__(self, db: DatabaseClient):
        self.db = db
        metadata.create_all(self.db.engine)

    def get(self, key: str) -> Optional[str]:
        with self.db.engine.connect() as conn:
            return conn.execute(
                select(kv_entries.c.value).where(kv_entries.c.key == key)
            ).scalar_one_or_none()

    def put(self, key: str, value: str) -> None:
        """Replace the whole value stored under ``key``."""
        with self.db.engine.begin() as conn:
            conn.execute(delete(kv_entries).where(kv_entries.c.key == key))
            conn.execute(insert(kv_entries).values(key=key, value=value))

    def delete(self, key: str) -> None:
        with self.db.engine.begin() as conn:
            conn.execute(delete(kv_entries).where(kv_entries.c.key == key))
