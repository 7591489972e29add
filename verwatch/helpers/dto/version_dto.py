"""Version manifest DTOs shared by the build stamper and the runtime monitor.

## Manifest Contract

`version.json` is written once per build and served next to the entry document:

    {
      "version": "1700000000000",
      "buildTime": "2023-11-14T22:13:20.000Z",
      "buildNumber": 1700000000000
    }

Only `version` is compared, and only for equality. `buildTime` is for humans,
`buildNumber` is kept for forward compatibility.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from verwatch.helpers.exceptions import MalformedManifestError


@dataclass(frozen=True)
class VersionManifest:
    """What is currently deployed."""

    version: str
    build_time: str = ""
    build_number: int = 0

    @classmethod
    def from_dict(cls, payload: Any) -> VersionManifest:
        """
        Parse the wire form of a manifest.

        Raises:
            MalformedManifestError: If payload is not an object with a usable version
        """
        if not isinstance(payload, dict):
            raise MalformedManifestError(f"Manifest must be a JSON object, got {type(payload).__name__}")

        version = payload.get("version")
        if isinstance(version, int) and not isinstance(version, bool):
            version = str(version)
        if not isinstance(version, str) or not version:
            raise MalformedManifestError("Manifest has no usable 'version' field")

        build_time = payload.get("buildTime", "")
        if not isinstance(build_time, str):
            raise MalformedManifestError("Manifest 'buildTime' must be a string")

        build_number = payload.get("buildNumber", 0)
        if not isinstance(build_number, int) or isinstance(build_number, bool):
            raise MalformedManifestError("Manifest 'buildNumber' must be an integer")

        return cls(version=version, build_time=build_time, build_number=build_number)

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "buildTime": self.build_time,
            "buildNumber": self.build_number,
        }


@dataclass
class StampBuildResult:
    """Outcome of one stamper run."""

    manifest: VersionManifest
    manifest_path: Path
    entry_path: Path
    entry_stamped: bool
    stamp_error: str | None = None

    @property
    def version(self) -> str:
        return self.manifest.version
