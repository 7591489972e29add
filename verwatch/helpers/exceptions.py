"""Custom exceptions used across multiple layers.

Rules:
- Only put exceptions here if they need to be raised in one layer and caught in another.
- Keep exceptions simple and focused.
- No I/O, no config loading, no complex logic.
"""

from __future__ import annotations


class VerwatchError(Exception):
    """Base class for all verwatch errors."""


class WriteError(VerwatchError):
    """Raised when the version manifest cannot be persisted. Fails the build."""


class StampError(VerwatchError):
    """Raised when the entry document cannot be stamped with the version token."""


class UnresolvedVersionError(VerwatchError):
    """Raised when the loaded entry document carries no readable version token."""


class FetchError(VerwatchError):
    """Raised when the deployed manifest cannot be fetched."""


class MalformedManifestError(FetchError):
    """Raised when the fetched manifest body is not a valid version manifest."""
