"""Unit tests for verwatch.helpers.dto.version_dto."""

from __future__ import annotations

from pathlib import Path

import pytest

from verwatch.helpers.dto.version_dto import StampBuildResult, VersionManifest
from verwatch.helpers.exceptions import MalformedManifestError


@pytest.mark.unit
class TestVersionManifestFromDict:
    def test_full_payload(self) -> None:
        manifest = VersionManifest.from_dict(
            {"version": "1700000000000", "buildTime": "2023-11-14T22:13:20.000Z", "buildNumber": 1700000000000}
        )
        assert manifest.version == "1700000000000"
        assert manifest.build_time == "2023-11-14T22:13:20.000Z"
        assert manifest.build_number == 1700000000000

    def test_only_version_required(self) -> None:
        manifest = VersionManifest.from_dict({"version": "dev-1"})
        assert manifest == VersionManifest(version="dev-1")

    def test_numeric_version_becomes_string(self) -> None:
        assert VersionManifest.from_dict({"version": 42}).version == "42"

    def test_unknown_fields_ignored(self) -> None:
        manifest = VersionManifest.from_dict({"version": "1", "commit": "abc"})
        assert manifest.version == "1"

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            "1700000000000",
            None,
            {},
            {"version": ""},
            {"version": None},
            {"version": True},
            {"version": {"nested": 1}},
        ],
    )
    def test_unusable_version_rejected(self, payload: object) -> None:
        with pytest.raises(MalformedManifestError):
            VersionManifest.from_dict(payload)

    def test_build_time_type_checked(self) -> None:
        with pytest.raises(MalformedManifestError, match="buildTime"):
            VersionManifest.from_dict({"version": "1", "buildTime": 123})

    @pytest.mark.parametrize("build_number", ["7", 1.5, False])
    def test_build_number_type_checked(self, build_number: object) -> None:
        with pytest.raises(MalformedManifestError, match="buildNumber"):
            VersionManifest.from_dict({"version": "1", "buildNumber": build_number})


@pytest.mark.unit
class TestVersionManifestToDict:
    def test_wire_field_names(self) -> None:
        manifest = VersionManifest(version="1", build_time="t", build_number=2)
        assert manifest.to_dict() == {"version": "1", "buildTime": "t", "buildNumber": 2}

    def test_frozen(self) -> None:
        manifest = VersionManifest(version="1")
        with pytest.raises(AttributeError):
            manifest.version = "2"  # type: ignore[misc]


@pytest.mark.unit
def test_stamp_build_result_exposes_version() -> None:
    result = StampBuildResult(
        manifest=VersionManifest(version="abc"),
        manifest_path=Path("dist/version.json"),
        entry_path=Path("dist/index.html"),
        entry_stamped=True,
    )
    assert result.version == "abc"
    assert result.stamp_error is None
