"""Unit tests for verwatch.components.build.manifest_writer_comp."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from verwatch.components.build.manifest_writer_comp import MANIFEST_FILENAME, build_manifest, write_manifest
from verwatch.helpers.exceptions import WriteError


@pytest.mark.unit
class TestWriteManifest:
    def test_writes_three_fields(self, tmp_path: Path) -> None:
        manifest = write_manifest(tmp_path, "1700000000000", build_number=1700000000000)

        data = json.loads((tmp_path / MANIFEST_FILENAME).read_text(encoding="utf-8"))
        assert data["version"] == "1700000000000"
        assert data["buildNumber"] == 1700000000000
        assert data["buildTime"].endswith("Z")
        assert manifest.version == "1700000000000"

    def test_pretty_printed(self, tmp_path: Path) -> None:
        write_manifest(tmp_path, "abc")
        text = (tmp_path / MANIFEST_FILENAME).read_text(encoding="utf-8")
        assert text.startswith("{\n  ")

    def test_creates_missing_directories(self, tmp_path: Path) -> None:
        out = tmp_path / "build" / "client"
        write_manifest(out, "abc")
        assert (out / MANIFEST_FILENAME).is_file()

    def test_overwrites_previous_manifest(self, tmp_path: Path) -> None:
        write_manifest(tmp_path, "first")
        write_manifest(tmp_path, "second")
        data = json.loads((tmp_path / MANIFEST_FILENAME).read_text(encoding="utf-8"))
        assert data["version"] == "second"

    def test_unwritable_target_raises_write_error(self, tmp_path: Path) -> None:
        """A file where the output directory should be cannot hold a manifest."""
        blocker = tmp_path / "dist"
        blocker.write_text("not a directory", encoding="utf-8")

        with pytest.raises(WriteError):
            write_manifest(blocker, "abc")

    def test_returned_manifest_matches_file(self, tmp_path: Path) -> None:
        manifest = write_manifest(tmp_path, "abc", build_number=5)
        data = json.loads((tmp_path / MANIFEST_FILENAME).read_text(encoding="utf-8"))
        assert data == manifest.to_dict()


@pytest.mark.unit
class TestBuildManifest:
    def test_build_number_defaults_to_clock(self) -> None:
        manifest = build_manifest("abc")
        assert manifest.build_number > 1_600_000_000_000

    def test_explicit_build_number(self) -> None:
        assert build_manifest("abc", build_number=3).build_number == 3
