"""Timestamp formatting utilities."""

from datetime import datetime


def now() -> str:
    """Compact timestamp for directory names, e.g. '20261017_134502'."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def now_exact() -> str:
    """ISO 8601 timestamp with microseconds, for event logs."""
    return datetime.now().isoformat()


def today() -> str:
    """Date stamp for dated result directories, e.g. '2026-10-17'."""
    return datetime.now().strftime("%Y-%m-%d")
