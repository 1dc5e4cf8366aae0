from __future__ import annotations
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Optional
from settings import StorageConfig

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""

class HighScoreStore:
    """The game's small SQLite key-value file: the high score plus the sound on/off choice."""

    def __init__(self, config: StorageConfig | None = None):
        self.config = config or StorageConfig()

    @property
    def path(self) -> Path:
        return Path(self.config.path)

    def _connect(self) -> sqlite3.Connection:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.path)
        conn.executescript(SCHEMA)
        return conn

    def _get(self, key: str) -> Optional[str]:
        if not self.path.exists():
            return None
        with closing(self._connect()) as conn:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        return row[0] if row else None

    def load(self) -> int:
        """Stored high score, or 0 when it is missing or unreadable."""
        try:
            value = self._get(self.config.high_score_key)
            if value is None:
                return 0
            return max(0, int(value))
        except (sqlite3.Error, ValueError, TypeError) as e:
            print(f"⚠️  Could not read high score, starting from 0: {e}")
            return 0

    def save(self, score: int) -> None:
        try:
            with closing(self._connect()) as conn, conn:
                # Stored as text; anything that is not all digits counts as lower.
                conn.execute(
                    """
                    INSERT INTO kv (key, value)
                    VALUES (?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = CASE
                        WHEN kv.value GLOB '[0-9]*'
                             AND kv.value NOT GLOB '*[^0-9]*'
                             AND CAST(kv.value AS INTEGER) >= CAST(excluded.value AS INTEGER)
                        THEN kv.value
                        ELSE excluded.value
                    END
                    """,
                    (self.config.high_score_key, str(int(score))),
                )
        except sqlite3.Error as e:
            print(f"❌ Failed to save high score: {e}")

    def load_sound_enabled(self) -> bool:
        try:
            return self._get(self.config.sound_key) != "false"
        except sqlite3.Error as e:
            print(f"⚠️  Could not read sound setting: {e}")
            return True

    def save_sound_enabled(self, enabled: bool) -> None:
        try:
            with closing(self._connect()) as conn, conn:
                conn.execute(
                    "INSERT INTO kv (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                    (self.config.sound_key, "true" if enabled else "false"),
                )
        except sqlite3.Error as e:
            print(f"❌ Failed to save sound setting: {e}")
