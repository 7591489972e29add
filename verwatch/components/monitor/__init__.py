"""
Monitor package.
"""

from .manifest_fetch_comp import NO_CACHE_HEADERS, cache_busted, fetch_manifest, join_url
from .notification_comp import NotificationHub
from .version_source_comp import EntryDocumentVersionSource, read_meta_version

__all__ = [
    "NO_CACHE_HEADERS",
    "EntryDocumentVersionSource",
    "NotificationHub",
    "cache_busted",
    "fetch_manifest",
    "join_url",
    "read_meta_version",
]
