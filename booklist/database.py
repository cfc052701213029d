import logging
import os
import sqlite3
from typing import Optional

logger = logging.getLogger(__name__)


class LocalStore:
    """Key-value slots kept in a single SQLite file.

    Every value is replaced as a whole by one committed statement, so readers
    never observe a partially written slot.
    """

    def __init__(self, db_file: str) -> None:
        self.db_file = db_file
        self.create_tables()

    def get_db_connection(self) -> sqlite3.Connection:
        """Opens a connection to the SQLite file backing this store."""
        conn = sqlite3.connect(self.db_file)
        conn.row_factory = sqlite3.Row
        return conn

    def create_tables(self) -> None:
        """Creates the storage table if it does not exist yet."""
        directory = os.path.dirname(os.path.abspath(self.db_file))
        os.makedirs(directory, exist_ok=True)
        conn = self.get_db_connection()
        try:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS storage (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)
            conn.commit()
        finally:
            conn.close()

    def get_item(self, key: str) -> Optional[str]:
        conn = self.get_db_connection()
        try:
            row = conn.execute("SELECT value FROM storage WHERE key = ?", (key,)).fetchone()
            return row["value"] if row else None
        finally:
            conn.close()

    def set_item(self, key: str, value: str) -> None:
        conn = self.get_db_connection()
        try:
            conn.execute(
                "INSERT INTO storage (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )
            conn.commit()
            logger.debug(f"Wrote {len(value)} chars to slot {key!r}")
        finally:
            conn.close()

    def remove_item(self, key: str) -> None:
        conn = self.get_db_connection()
        try:
            conn.execute("DELETE FROM storage WHERE key = ?", (key,))
            conn.commit()
        finally:
            conn.close()
