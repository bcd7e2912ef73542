"""Exceptions for faults. Expected outcomes (no data, bad month) are results, not errors."""


class ExpenseAnalyticsError(Exception):
    """Base exception for the analytics engine."""


class ConfigError(ExpenseAnalyticsError):
    """Invalid configuration values."""


class SnapshotError(ExpenseAnalyticsError):
    """A record snapshot file could not be read or validated."""
