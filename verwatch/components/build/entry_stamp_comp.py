"""Entry document stamping.

Replaces the content of the version meta tag in the built entry document:

    <meta name="app-version" content="..." />

The substitution is a single regex replacement on the raw bytes' text; every
other byte of the document is left as it was.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from verwatch.helpers.exceptions import StampError

logger = logging.getLogger(__name__)

DEFAULT_ENTRY_DOCUMENT = "index.html"
DEFAULT_META_NAME = "app-version"


def meta_pattern(meta_name: str = DEFAULT_META_NAME) -> re.Pattern[str]:
    """Pattern for the version meta tag; group 1 and 2 surround the content value."""
    return re.compile(r'(<meta\s+name="' + re.escape(meta_name) + r'"\s+content=")[^"]*("\s*/?>)')


def stamp_entry_document(
    output_dir: str | Path,
    version: str,
    entry_name: str = DEFAULT_ENTRY_DOCUMENT,
    meta_name: str = DEFAULT_META_NAME,
) -> Path:
    """
    Stamp the version token into the built entry document in place.

    Args:
        output_dir: Build output directory
        version: Token already written to the manifest
        entry_name: Entry document file name inside output_dir
        meta_name: Name attribute of the version meta tag

    Returns:
        Path of the stamped document

    Raises:
        StampError: If the document is missing, unwritable, or has no version meta tag
    """
    entry_path = Path(output_dir) / entry_name

    try:
        raw = entry_path.read_bytes()
    except FileNotFoundError as e:
        raise StampError(f"Entry document not found: {entry_path}") from e
    except OSError as e:
        raise StampError(f"Cannot read {entry_path}: {e}") from e

    try:
        html = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise StampError(f"Entry document is not UTF-8: {entry_path}") from e

    pattern = meta_pattern(meta_name)
    matches = len(pattern.findall(html))
    if matches == 0:
        raise StampError(f'No <meta name="{meta_name}"> tag in {entry_path}')
    if matches > 1:
        logger.warning("%d version meta tags in %s; stamping the first only", matches, entry_path)

    stamped = pattern.sub(lambda m: f"{m.group(1)}{version}{m.group(2)}", html, count=1)

    try:
        entry_path.write_bytes(stamped.encode("utf-8"))
    except OSError as e:
        raise StampError(f"Cannot write {entry_path}: {e}") from e

    logger.info("Entry document stamped: %s -> %s", entry_path, version)
    return entry_path
