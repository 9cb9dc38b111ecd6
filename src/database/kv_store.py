import logging
from typing import List, Optional, Set

from .connection import get_cursor

logger = logging.getLogger(__name__)

# Tables already created in this process; Lambda containers reuse module state
_ready_tables: Set[str] = set()


class KeyValueStore:
    """
    Key-value store backed by a PostgreSQL table.

    Handed to command handlers as ``bot.kv``; the dispatcher never reads it.
    """

    def __init__(self, table: str = "kv_store"):
        if not table.isidentifier():
            raise ValueError(f"Invalid table name: {table!r}")
        self.table = table

    def init_table(self) -> None:
        """Create the backing table if it does not exist."""
        with get_cursor() as (_, cursor):
            cursor.execute(
                f"CREATE TABLE IF NOT EXISTS {self.table} ("
                "key TEXT PRIMARY KEY, value TEXT NOT NULL)"
            )
        _ready_tables.add(self.table)
        logger.info(f"Ensured key-value table {self.table} exists")

    def _ensure_table(self) -> None:
        if self.table not in _ready_tables:
            self.init_table()

    def get(self, key: str) -> Optional[str]:
        """
        Get the value stored under a key.

        Args:
            key: Key to look up

        Returns:
            Stored value, or None if the key is absent
        """
        try:
            self._ensure_table()
            with get_cursor() as (_, cursor):
                cursor.execute(f"SELECT value FROM {self.table} WHERE key = %s", (key,))
                row = cursor.fetchone()
            return row[0] if row else None
        except Exception:
            logger.exception(f"Error reading key {key!r}")
            raise

    def put(self, key: str, value: str) -> None:
        """
        Store a value, replacing any previous one.

        Args:
            key: Key to write
            value: Value to store
        """
        try:
            self._ensure_table()
            with get_cursor() as (_, cursor):
                cursor.execute(
                    f"INSERT INTO {self.table} (key, value) VALUES (%s, %s) "
                    "ON CONFLICT (key) DO UPDATE SET value = EXCLUDED.value",
                    (key, value),
                )
            logger.debug(f"Stored key {key!r}")
        except Exception:
            logger.exception(f"Error writing key {key!r}")
            raise

    def delete(self, key: str) -> bool:
        """
        Delete a key.

        Returns:
            True if the key existed, False otherwise
        """
        try:
            self._ensure_table()
            with get_cursor() as (_, cursor):
                cursor.execute(f"DELETE FROM {self.table} WHERE key = %s", (key,))
                deleted = cursor.rowcount > 0
            return deleted
        except Exception:
            logger.exception(f"Error deleting key {key!r}")
            raise

    def list_keys(self, prefix: str = "") -> List[str]:
        """List keys starting with ``prefix``, sorted."""
        try:
            self._ensure_table()
            with get_cursor() as (_, cursor):
                cursor.execute(
                    f"SELECT key FROM {self.table} WHERE key LIKE %s ORDER BY key",
                    (_escape_like(prefix) + "%",),
                )
                rows = cursor.fetchall()
            return [row[0] for row in rows if row]
        except Exception:
            logger.exception(f"Error listing keys with prefix {prefix!r}")
            raise


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
