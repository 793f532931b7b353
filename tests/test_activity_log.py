"""Unit tests for ActivityLog."""

import logging
import sqlite3
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from gf_shopify.models.config import RelayConfig
from gf_shopify.store import ActivityLog, LogEntry
from gf_shopify.store.activity_log import MAX_ENTRIES


def _fixed_clock(when: datetime):
    return lambda: when


class TestActivityLogWrite:
    """Tests for log()."""

    def test_log_returns_entry(self, activity_log: ActivityLog) -> None:
        """log() stores and returns the entry with timestamp and date."""
        when = datetime(2026, 10, 19, 9, 30, 0)
        log = ActivityLog(activity_log._db_path, clock=_fixed_clock(when))
        entry = log.log("hello", "success")
        assert isinstance(entry, LogEntry)
        assert entry.timestamp == "2026-10-19 09:30:00"
        assert entry.date == "2026-10-19"
        assert entry.level == "success"
        assert log.recent()[0].message == "hello"

    def test_default_level_is_info(self, activity_log: ActivityLog) -> None:
        """Level defaults to info."""
        activity_log.log("x")
        assert activity_log.recent()[0].level == "info"

    def test_unknown_level_raises(self, activity_log: ActivityLog) -> None:
        """Only info/success/error are accepted."""
        with pytest.raises(ValueError, match="Unknown log level"):
            activity_log.log("x", "warning")

    def test_disabled_is_noop(self, temp_db: Path) -> None:
        """Nothing is stored when logging is disabled."""
        log = ActivityLog(temp_db, enabled=False)
        assert log.log("ignored") is None
        assert log.count() == 0

    def test_mirrors_to_stdlib_logging(
        self, activity_log: ActivityLog, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Entries are also emitted to the gf_shopify logger."""
        with caplog.at_level(logging.INFO, logger="gf_shopify.store.activity_log"):
            activity_log.error("boom")
        assert any("GF Shopify (error): boom" in r.getMessage() for r in caplog.records)
        assert caplog.records[-1].levelno == logging.ERROR

    def test_level_helpers(self, activity_log: ActivityLog) -> None:
        """info/success/error helpers set the level."""
        activity_log.info("a")
        activity_log.success("b")
        activity_log.error("c")
        assert [e.level for e in activity_log.recent()] == ["error", "success", "info"]

    @pytest.mark.parametrize("days", [0, 31])
    def test_retention_range_enforced(self, temp_db: Path, days: int) -> None:
        """Retention outside 1-30 days is rejected."""
        with pytest.raises(ValueError):
            ActivityLog(temp_db, retention_days=days)


class TestActivityLogBounds:
    """Count and retention pruning."""

    def test_keeps_most_recent_hundred(self, activity_log: ActivityLog) -> None:
        """Appending 150 entries leaves exactly the 100 most recent."""
        for i in range(150):
            activity_log.log(f"entry {i}")
        assert activity_log.count() == MAX_ENTRIES == 100
        entries = activity_log.recent(200)
        assert entries[0].message == "entry 149"
        assert entries[-1].message == "entry 50"

    def test_old_entries_dropped_on_next_write(self, temp_db: Path) -> None:
        """An entry dated 10 days ago is gone after any write with retention 7."""
        now = datetime.now()
        ActivityLog(temp_db, retention_days=7, clock=_fixed_clock(now - timedelta(days=10))).log("old")
        ActivityLog(temp_db, retention_days=7, clock=_fixed_clock(now - timedelta(days=5))).log("recent")
        log = ActivityLog(temp_db, retention_days=7, clock=_fixed_clock(now))
        assert log.count() == 2
        log.log("new")
        assert [e.message for e in log.recent()] == ["new", "recent"]

    def test_entry_on_cutoff_date_kept(self, temp_db: Path) -> None:
        """An entry exactly retention_days old is still within the window."""
        now = datetime(2026, 10, 19, 12, 0, 0)
        ActivityLog(temp_db, retention_days=7, clock=_fixed_clock(now - timedelta(days=7))).log("edge")
        log = ActivityLog(temp_db, retention_days=7, clock=_fixed_clock(now))
        log.log("new")
        assert [e.message for e in log.recent()] == ["new", "edge"]


class TestActivityLogFailures:
    """Storage failures are reported, never raised from writes."""

    def test_unopenable_database(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """A path in a missing directory neither fails construction nor writes."""
        with caplog.at_level(logging.ERROR, logger="gf_shopify.store.activity_log"):
            log = ActivityLog(tmp_path / "missing" / "x.db")
            assert log.info("hello") is None
        assert any("Could not write activity log entry" in r.getMessage() for r in caplog.records)

    def test_locked_database(self, activity_log: ActivityLog, monkeypatch: pytest.MonkeyPatch) -> None:
        """A database error during a write returns None."""

        def locked():
            raise sqlite3.OperationalError("database is locked")

        monkeypatch.setattr(activity_log, "_connection", locked)
        assert activity_log.error("boom") is None

    def test_connections_closed(self, activity_log: ActivityLog, monkeypatch: pytest.MonkeyPatch) -> None:
        """Each operation closes the connection it opened."""
        opened: list[sqlite3.Connection] = []
        connect = sqlite3.connect

        def tracking_connect(*args, **kwargs):
            conn = connect(*args, **kwargs)
            opened.append(conn)
            return conn

        monkeypatch.setattr(sqlite3, "connect", tracking_connect)
        activity_log.info("x")
        activity_log.recent()
        activity_log.count()
        activity_log.clear()
        assert len(opened) == 4
        for conn in opened:
            with pytest.raises(sqlite3.ProgrammingError):
                conn.execute("SELECT 1")


class TestActivityLogRead:
    """Tests for recent(), count() and clear()."""

    def test_recent_is_newest_first_and_limited(self, activity_log: ActivityLog) -> None:
        """recent(n) returns the last n entries newest first."""
        for i in range(30):
            activity_log.log(f"m{i}")
        entries = activity_log.recent(20)
        assert len(entries) == 20
        assert entries[0].message == "m29"
        assert entries[-1].message == "m10"

    def test_clear_removes_everything(self, activity_log: ActivityLog) -> None:
        """clear() deletes all entries and reports how many."""
        for i in range(5):
            activity_log.log(f"m{i}")
        assert activity_log.clear() == 5
        assert activity_log.count() == 0
        assert activity_log.recent() == []

    def test_clear_works_when_disabled(self, temp_db: Path) -> None:
        """Clearing is unconditional."""
        ActivityLog(temp_db).log("kept")
        assert ActivityLog(temp_db, enabled=False).clear() == 1

    def test_from_config(self, temp_db: Path) -> None:
        """from_config applies logging settings."""
        config = RelayConfig(logging_enabled=False, log_retention_days=3, log_db=temp_db)
        log = ActivityLog.from_config(config)
        assert log.enabled is False
        assert log.retention_days == 3
