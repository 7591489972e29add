"""
Build package.
"""

from .entry_stamp_comp import DEFAULT_ENTRY_DOCUMENT, DEFAULT_META_NAME, stamp_entry_document
from .manifest_writer_comp import MANIFEST_FILENAME, build_manifest, write_manifest
from .token_comp import dev_token, generate_token

__all__ = [
    "DEFAULT_ENTRY_DOCUMENT",
    "DEFAULT_META_NAME",
    "MANIFEST_FILENAME",
    "build_manifest",
    "dev_token",
    "generate_token",
    "stamp_entry_document",
    "write_manifest",
]
