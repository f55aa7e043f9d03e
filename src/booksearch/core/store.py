"""SQLite-backed named slots for the saved-books list."""

from __future__ import annotations

import sqlite3
import time
from pathlib import Path

import structlog

from .shelf import SLOT_NAME, Shelf

log = structlog.get_logger()


class SlotStore:
    """Tiny key-value store: each slot holds one text value, rewritten in full."""

    def __init__(self, db_path: Path) -> None:
        if str(db_path) != ":memory:":
            db_path.parent.mkdir(parents=True, exist_ok=True)
        self.db_path = db_path
        self._conn = sqlite3.connect(str(db_path), check_same_thread=False)
        self._conn.execute(
            """CREATE TABLE IF NOT EXISTS slots (
                name TEXT PRIMARY KEY,
                value TEXT,
                updated_at REAL
            )"""
        )
        self._conn.commit()

    def get(self, name: str) -> str | None:
        row = self._conn.execute(
            "SELECT value FROM slots WHERE name = ?", (name,)
        ).fetchone()
        return row[0] if row else None

    def put(self, name: str, value: str) -> None:
        self._conn.execute(
            "INSERT OR REPLACE INTO slots (name, value, updated_at) VALUES (?, ?, ?)",
            (name, value, time.time()),
        )
        self._conn.commit()
        log.debug("slot_store", name=name, size=len(value))

    def close(self) -> None:
        self._conn.close()

    def load_shelf(self) -> Shelf:
        return Shelf.from_json(self.get(SLOT_NAME))

    def save_shelf(self, shelf: Shelf) -> None:
        self.put(SLOT_NAME, shelf.to_json())
