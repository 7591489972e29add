"""Version token generation.

A token is the build's wall-clock time in milliseconds, as a decimal string.
Two builds run at different times get different tokens; sub-millisecond
rebuilds are not distinguished.
"""

from __future__ import annotations

from verwatch.helpers.time_helper import now_ms


def generate_token() -> str:
    """Token for a production build."""
    return str(now_ms())


def dev_token() -> str:
    """Token for a development build. Never equal to a production token."""
    return f"dev-{now_ms()}"
