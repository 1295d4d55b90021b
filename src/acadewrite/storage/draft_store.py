"""SQLite store for the single-user document draft."""

from __future__ import annotations

import sqlite3
import time
from pathlib import Path

DEFAULT_DB_PATH = Path.home() / ".acadewrite" / "drafts.db"
DEFAULT_DRAFT_KEY = "acade_draft_html"


class DraftStore:
    """Key-value draft storage. The document lives under one fixed key."""

    def __init__(
        self,
        db_path: str | Path = DEFAULT_DB_PATH,
        key: str = DEFAULT_DRAFT_KEY,
    ):
        self.db_path = Path(db_path)
        self.key = key
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS drafts (
                    key TEXT PRIMARY KEY,
                    content TEXT NOT NULL,
                    saved_at REAL NOT NULL
                )
            """)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(str(self.db_path))

    def load(self) -> str:
        """Return the stored draft, or an empty string when none exists."""
        with self._connect() as conn:
            row = conn.execute(
                "SELECT content FROM drafts WHERE key = ?", (self.key,)
            ).fetchone()
        return row[0] if row else ""

    def save(self, content: str) -> None:
        with self._connect() as conn:
            conn.execute(
                """INSERT OR REPLACE INTO drafts (key, content, saved_at)
                   VALUES (?, ?, ?)""",
                (self.key, content, time.time()),
            )

    def saved_at(self) -> float | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT saved_at FROM drafts WHERE key = ?", (self.key,)
            ).fetchone()
        return row[0] if row else None

    def clear(self) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM drafts WHERE key = ?", (self.key,))
