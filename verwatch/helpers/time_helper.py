"""Time utility helpers."""

import time
from datetime import datetime, timezone


def now_ms() -> int:
    """
    Get current timestamp in milliseconds since epoch.

    Returns:
        Current time as integer milliseconds
    """
    return int(time.time() * 1000)


def now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
