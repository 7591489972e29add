"""
Pytest fixtures and configuration for the test suite.

Mocking strategy:
- Real files in tmp_path for the build stamper and local entry documents
- MagicMock requests sessions for anything that would hit the network
- RecordingListener instead of a real notification UI
"""

from __future__ import annotations

import os
import sys
import threading
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
import requests

# Add project root to path so tests can import verwatch package
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from verwatch.helpers.dto.version_dto import VersionManifest  # noqa: E402

ENTRY_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <meta name="app-version" content="{version}" />
    <title>App</title>
  </head>
  <body><div id="root"></div></body>
</html>
"""


def make_entry_html(version: str = "__APP_VERSION__") -> str:
    """Entry document as a bundler would emit it, with the given version tag content."""
    return ENTRY_TEMPLATE.format(version=version)


def make_response(status_code: int = 200, payload: Any = None, text: str = "") -> MagicMock:
    """Fake requests.Response."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.text = text
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload

    def _raise_for_status() -> None:
        if status_code >= 400:
            raise requests.HTTPError(f"{status_code} Error")

    response.raise_for_status.side_effect = _raise_for_status
    return response


class RecordingListener:
    """UpdateListener that records every event it receives."""

    def __init__(self) -> None:
        self.detected: list[VersionManifest] = []
        self.dismissed = 0
        self.refreshes = 0
        self.detected_event = threading.Event()
        self.refresh_event = threading.Event()

    def on_update_detected(self, manifest: VersionManifest) -> None:
        self.detected.append(manifest)
        self.detected_event.set()

    def on_dismiss(self) -> None:
        self.dismissed += 1

    def on_refresh_requested(self) -> None:
        self.refreshes += 1
        self.refresh_event.set()


class SequenceFetcher:
    """ManifestFetcher returning scripted versions; the last one repeats."""

    def __init__(self, *versions: str | Exception) -> None:
        self._versions = list(versions)
        self.calls = 0
        self.called = threading.Event()
        self._lock = threading.Lock()

    def __call__(self) -> VersionManifest:
        with self._lock:
            index = min(self.calls, len(self._versions) - 1)
            self.calls += 1
            item = self._versions[index]
        self.called.set()
        if isinstance(item, Exception):
            raise item
        return VersionManifest(version=item, build_time="2023-11-14T22:13:20.000Z", build_number=1)


@pytest.fixture
def dist_dir(tmp_path: Path) -> Path:
    """Build output directory holding an unstamped index.html."""
    out = tmp_path / "dist"
    out.mkdir()
    (out / "index.html").write_text(make_entry_html(), encoding="utf-8")
    return out


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def mock_session() -> MagicMock:
    """requests.Session stand-in; set .get.return_value or .get.side_effect per test."""
    return MagicMock(spec=requests.Session)


@pytest.fixture(autouse=True)
def isolated_config_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep VERWATCH_* variables and the host's config files out of tests."""
    for key in list(os.environ):
        if key.startswith("VERWATCH_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("verwatch.services.config_svc.SYSTEM_CONFIG_PATH", str(tmp_path / "etc" / "config.yaml"))
