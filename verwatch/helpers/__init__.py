"""
Helpers package.
"""

from .exceptions import (
    FetchError,
    MalformedManifestError,
    StampError,
    UnresolvedVersionError,
    VerwatchError,
    WriteError,
)
from .logging_helper import VerwatchLogFilter, configure_logging
from .time_helper import now_iso, now_ms

__all__ = [
    "FetchError",
    "MalformedManifestError",
    "StampError",
    "UnresolvedVersionError",
    "VerwatchError",
    "VerwatchLogFilter",
    "WriteError",
    "configure_logging",
    "now_iso",
    "now_ms",
]
