"""Timestamp formatting utilities."""

from datetime import datetime


def now() -> str:
    """Current local time as a filesystem-safe stamp, e.g. 20251114_123456."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")

