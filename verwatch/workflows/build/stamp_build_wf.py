"""
Post-build stamping workflow.

Order matters: the manifest is written first and its token is the one stamped
into the entry document. Mismatched tokens would make every client report an
update that does not exist.

Failure policy:
- WriteError propagates (the build must fail: no manifest, no detection)
- StampError is logged loudly and reported in the result (artifacts stay usable)
"""

from __future__ import annotations

import logging
from pathlib import Path

from verwatch.components.build.entry_stamp_comp import (
    DEFAULT_ENTRY_DOCUMENT,
    DEFAULT_META_NAME,
    stamp_entry_document,
)
from verwatch.components.build.manifest_writer_comp import MANIFEST_FILENAME, write_manifest
from verwatch.components.build.token_comp import generate_token
from verwatch.helpers.dto.version_dto import StampBuildResult
from verwatch.helpers.exceptions import StampError

logger = logging.getLogger(__name__)


def stamp_build_workflow(
    output_dir: str | Path,
    token: str | None = None,
    entry_name: str = DEFAULT_ENTRY_DOCUMENT,
    meta_name: str = DEFAULT_META_NAME,
) -> StampBuildResult:
    """
    Write version.json and stamp the entry document with the same token.

    Args:
        output_dir: Build output directory
        token: Version token (generated from the clock if None)
        entry_name: Entry document file name
        meta_name: Name attribute of the version meta tag

    Returns:
        StampBuildResult; entry_stamped is False when stamping failed

    Raises:
        WriteError: If the manifest cannot be written
    """
    out = Path(output_dir)
    token = token or generate_token()

    manifest = write_manifest(out, token)

    entry_path = out / entry_name
    try:
        stamp_entry_document(out, manifest.version, entry_name=entry_name, meta_name=meta_name)
    except StampError as e:
        logger.error(
            "Entry document NOT stamped (%s). Clients served from this build can never detect updates.",
            e,
        )
        return StampBuildResult(
            manifest=manifest,
            manifest_path=out / MANIFEST_FILENAME,
            entry_path=entry_path,
            entry_stamped=False,
            stamp_error=str(e),
        )

    return StampBuildResult(
        manifest=manifest,
        manifest_path=out / MANIFEST_FILENAME,
        entry_path=entry_path,
        entry_stamped=True,
    )
