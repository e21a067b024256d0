"""
TaskKeeper Utilities Module.

Provides shared utilities across the package:
- Timezone-aware datetime helpers
- Millisecond timestamps used for task identifiers

Copyright (c) 2025 TaskKeeper
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """
    Get current UTC time as timezone-aware datetime.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(timezone.utc)


def ensure_aware(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def now_ms(dt: Optional[datetime] = None) -> int:
    """
    Milliseconds since the Unix epoch.

    Args:
        dt: Datetime to convert (defaults to now)

    Returns:
        Integer milliseconds
    """
    if dt is None:
        dt = utc_now()
    return int(ensure_aware(dt).timestamp() * 1000)


__all__ = [
    'utc_now',
    'ensure_aware',
    'now_ms',
]
