"""Local storage for the activity log."""

from gf_shopify.store.activity_log import ActivityLog, LogEntry

__all__ = ["ActivityLog", "LogEntry"]
