"""SQLite-backed activity log with count and age bounds."""

import logging
import sqlite3
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Iterator, Optional

from gf_shopify.models.config import RelayConfig

logger = logging.getLogger(__name__)

MAX_ENTRIES = 100
LEVELS = ("info", "success", "error")


@dataclass
class LogEntry:
    """One activity log line."""

    id: int
    timestamp: str  # YYYY-MM-DD HH:MM:SS, local time
    level: str  # "info" | "success" | "error"
    message: str
    date: str  # YYYY-MM-DD


class ActivityLog:
    """
    Append-only log for operators. Every write trims the table to the most
    recent MAX_ENTRIES rows, then drops rows dated before today - retention_days.
    """

    _write_lock = threading.Lock()

    def __init__(
        self,
        db_path: str | Path = "gf_shopify.db",
        *,
        enabled: bool = True,
        retention_days: int = 7,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if not 1 <= retention_days <= 30:
            raise ValueError("retention_days must be between 1 and 30")
        self._db_path = Path(db_path)
        self.enabled = enabled
        self.retention_days = retention_days
        self._clock = clock or datetime.now
        self._ensure_schema()

    @classmethod
    def from_config(
        cls,
        config: RelayConfig,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> "ActivityLog":
        return cls(
            config.log_db,
            enabled=config.logging_enabled,
            retention_days=config.log_retention_days,
            clock=clock,
        )

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        """One transaction on a fresh connection; closed on exit."""
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        schema_path = Path(__file__).parent / "schema.sql"
        try:
            with self._connection() as conn:
                conn.executescript(schema_path.read_text())
        except sqlite3.Error:
            logger.exception("Activity log database unavailable: %s", self._db_path)

    def log(self, message: str, level: str = "info") -> Optional[LogEntry]:
        """Append an entry and prune. Returns None when logging is disabled or the write fails."""
        if level not in LEVELS:
            raise ValueError(f"Unknown log level: {level}. Available: {list(LEVELS)}")
        if not self.enabled:
            return None

        now = self._clock()
        timestamp = now.strftime("%Y-%m-%d %H:%M:%S")
        date = now.strftime("%Y-%m-%d")
        cutoff = (now.date() - timedelta(days=self.retention_days)).isoformat()

        if level == "error":
            logger.error("[%s] GF Shopify (%s): %s", timestamp, level, message)
        else:
            logger.info("[%s] GF Shopify (%s): %s", timestamp, level, message)

        try:
            entry_id = self._write(timestamp, level, message, date, cutoff)
        except sqlite3.Error:
            logger.exception("Could not write activity log entry to %s", self._db_path)
            return None

        return LogEntry(id=entry_id, timestamp=timestamp, level=level, message=message, date=date)

    def _write(self, timestamp: str, level: str, message: str, date: str, cutoff: str) -> int:
        with self._write_lock, self._connection() as conn:
            cursor = conn.execute(
                "INSERT INTO log_entries (timestamp, level, message, date) VALUES (?, ?, ?, ?)",
                (timestamp, level, message, date),
            )
            entry_id = cursor.lastrowid or 0
            conn.execute(
                """
                DELETE FROM log_entries WHERE id NOT IN (
                    SELECT id FROM log_entries ORDER BY id DESC LIMIT ?
                )
                """,
                (MAX_ENTRIES,),
            )
            conn.execute("DELETE FROM log_entries WHERE date < ?", (cutoff,))
        return entry_id

    def info(self, message: str) -> Optional[LogEntry]:
        return self.log(message, "info")

    def success(self, message: str) -> Optional[LogEntry]:
        return self.log(message, "success")

    def error(self, message: str) -> Optional[LogEntry]:
        return self.log(message, "error")

    def recent(self, limit: int = 20) -> list[LogEntry]:
        """Most recent entries, newest first."""
        with self._connection() as conn:
            rows = conn.execute(
                "SELECT * FROM log_entries ORDER BY id DESC LIMIT ?",
                (limit,),
            ).fetchall()
        return [self._row_to_entry(r) for r in rows]

    def count(self) -> int:
        with self._connection() as conn:
            return conn.execute("SELECT COUNT(*) FROM log_entries").fetchone()[0]

    def clear(self) -> int:
        """Delete every entry regardless of settings. Returns number removed."""
        with self._write_lock, self._connection() as conn:
            cursor = conn.execute("DELETE FROM log_entries")
            return cursor.rowcount

    def _row_to_entry(self, row: sqlite3.Row) -> LogEntry:
        return LogEntry(
            id=row["id"],
            timestamp=row["timestamp"],
            level=row["level"],
            message=row["message"],
            date=row["date"],
        )
