"""Version manifest writer.

Writes `<output_dir>/version.json`. A missing manifest disables update
detection for the whole deployment, so every failure here is raised as
WriteError for the build to fail on.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from verwatch.helpers.dto.version_dto import VersionManifest
from verwatch.helpers.exceptions import WriteError
from verwatch.helpers.time_helper import now_iso, now_ms

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "version.json"


def build_manifest(token: str, build_number: int | None = None) -> VersionManifest:
    """Manifest for this build, timestamped now."""
    return VersionManifest(
        version=token,
        build_time=now_iso(),
        build_number=now_ms() if build_number is None else build_number,
    )


def write_manifest(output_dir: str | Path, token: str, build_number: int | None = None) -> VersionManifest:
    """
    Write the version manifest for a build.

    Args:
        output_dir: Build output directory (created if missing)
        token: Version token for this build
        build_number: Build counter (defaults to current ms)

    Returns:
        The written manifest; its version is the token

    Raises:
        WriteError: If the directory cannot be created or the file cannot be written
    """
    manifest = build_manifest(token, build_number)
    out = Path(output_dir)
    manifest_path = out / MANIFEST_FILENAME

    try:
        out.mkdir(parents=True, exist_ok=True)
        manifest_path.write_text(json.dumps(manifest.to_dict(), indent=2), encoding="utf-8")
    except OSError as e:
        raise WriteError(f"Cannot write {manifest_path}: {e}") from e

    logger.info("Manifest written: %s", manifest_path)
    logger.info("Version token: %s (built %s)", manifest.version, manifest.build_time)
    return manifest
