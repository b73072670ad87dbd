"""
High score persistence.

A single key-value row in a local SQLite file. The store never raises on I/O
problems: a missing or unreadable score reads as 0 and a failed write only
logs, so the score lives in memory for the rest of the session.
"""

import logging
import os
import sqlite3
from typing import Optional

from domain.constants import HIGH_SCORE_KEY

logger = logging.getLogger(__name__)


class MemoryHighScoreStore:
    """In-process store; nothing survives the process."""

    def __init__(self, value: int = 0):
        self.value = value
        self.saves = 0

    def load(self) -> int:
        return self.value

    def save(self, value: int) -> None:
        self.value = value
        self.saves += 1

    def clear(self) -> None:
        self.value = 0


class SQLiteHighScoreStore:
    """
    High score kept in a `settings(key, value)` table.

    Args:
        db_path: Path to the SQLite file; parent directories are created.
        key: Row key, shared with the page's storage key name.
    """

    def __init__(self, db_path: str, key: str = HIGH_SCORE_KEY):
        self.db_path = db_path
        self.key = key

    def _connect(self) -> sqlite3.Connection:
        directory = os.path.dirname(self.db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        try:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS settings (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)
        except sqlite3.Error:
            conn.close()
            raise
        return conn

    def load(self) -> int:
        try:
            conn = self._connect()
        except (sqlite3.Error, OSError) as e:
            logger.warning(f"High score store unavailable at {self.db_path}: {e}")
            return 0

        try:
            row = conn.execute(
                "SELECT value FROM settings WHERE key = ?", (self.key,)
            ).fetchone()
        except sqlite3.Error as e:
            logger.warning(f"Could not read high score: {e}")
            return 0
        finally:
            conn.close()

        if row is None:
            return 0
        return _parse_score(row[0])

    def save(self, value: int) -> None:
        try:
            conn = self._connect()
        except (sqlite3.Error, OSError) as e:
            logger.warning(f"High score {value} not persisted, store unavailable: {e}")
            return

        try:
            conn.execute(
                """
                INSERT INTO settings (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (self.key, str(int(value)))
            )
            conn.commit()
            logger.debug(f"Persisted high score {value}")
        except sqlite3.Error as e:
            conn.rollback()
            logger.warning(f"High score {value} not persisted: {e}")
        finally:
            conn.close()

    def clear(self) -> None:
        try:
            conn = self._connect()
        except (sqlite3.Error, OSError) as e:
            logger.warning(f"High score store unavailable at {self.db_path}: {e}")
            return

        try:
            conn.execute("DELETE FROM settings WHERE key = ?", (self.key,))
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.warning(f"Could not clear high score: {e}")
        finally:
            conn.close()


def _parse_score(raw) -> int:
    """Stored values are decimal strings; anything else reads as 0."""
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        logger.warning(f"Ignoring unreadable stored high score {raw!r}")
        return 0
    return max(0, value)


def create_highscore_store(db_path: Optional[str]):
    """SQLite store for a path, memory store when persistence is disabled."""
    if not db_path:
        return MemoryHighScoreStore()
    return SQLiteHighScoreStore(db_path)
