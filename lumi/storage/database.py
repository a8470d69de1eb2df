"""SQLite slot storage."""

import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Optional

from lumi.storage.base import SlotBackend


class SqliteBackend(SlotBackend):
    """Stores every slot as a row of a single ``slots`` table."""

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self):
        """Initialize database schema."""
        with self._connection() as conn:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS slots (
                    name TEXT PRIMARY KEY,
                    payload TEXT NOT NULL,
                    updated_at TIMESTAMP NOT NULL
                );
            """)

    @contextmanager
    def _connection(self):
        """Context manager for database connections."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def read(self, slot: str) -> Optional[str]:
        with self._connection() as conn:
            row = conn.execute(
                "SELECT payload FROM slots WHERE name = ?",
                (slot,)
            ).fetchone()
            if row:
                return row["payload"]
            return None

    def write(self, slot: str, payload: str) -> None:
        now = datetime.now().isoformat()
        with self._connection() as conn:
            conn.execute("""
                INSERT INTO slots (name, payload, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(name) DO UPDATE SET
                    payload = excluded.payload,
                    updated_at = excluded.updated_at
            """, (slot, payload, now))
