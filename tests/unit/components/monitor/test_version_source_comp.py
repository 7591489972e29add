"""Unit tests for verwatch.components.monitor.version_source_comp."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests
from conftest import make_entry_html, make_response

from verwatch.components.monitor.version_source_comp import EntryDocumentVersionSource, read_meta_version
from verwatch.helpers.exceptions import UnresolvedVersionError


@pytest.mark.unit
class TestReadMetaVersion:
    def test_reads_content(self) -> None:
        assert read_meta_version(make_entry_html("1700000000000")) == "1700000000000"

    def test_missing_tag(self) -> None:
        assert read_meta_version("<html><head></head></html>") is None

    def test_empty_content(self) -> None:
        assert read_meta_version('<meta name="app-version" content="">') is None

    def test_custom_meta_name(self) -> None:
        html = '<meta name="app-version" content="a"><meta name="build-id" content="b">'
        assert read_meta_version(html, "build-id") == "b"

    def test_attribute_order_does_not_matter(self) -> None:
        assert read_meta_version('<meta content="x" name="app-version">') == "x"


@pytest.mark.unit
class TestEntryDocumentVersionSourceLocal:
    def test_reads_local_file(self, tmp_path: Path) -> None:
        entry = tmp_path / "index.html"
        entry.write_text(make_entry_html("100"), encoding="utf-8")

        assert EntryDocumentVersionSource(entry)() == "100"

    def test_document_loaded_once(self, tmp_path: Path) -> None:
        """A loaded page does not change when a new build lands on disk."""
        entry = tmp_path / "index.html"
        entry.write_text(make_entry_html("100"), encoding="utf-8")
        source = EntryDocumentVersionSource(entry)
        assert source() == "100"

        entry.write_text(make_entry_html("200"), encoding="utf-8")

        assert source() == "100"
        assert EntryDocumentVersionSource(entry)() == "200"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(UnresolvedVersionError):
            EntryDocumentVersionSource(tmp_path / "missing.html")()

    def test_missing_tag(self, tmp_path: Path) -> None:
        entry = tmp_path / "index.html"
        entry.write_text("<html></html>", encoding="utf-8")

        with pytest.raises(UnresolvedVersionError, match="app-version"):
            EntryDocumentVersionSource(entry)()


@pytest.mark.unit
class TestEntryDocumentVersionSourceHttp:
    def test_reads_from_url(self, mock_session: MagicMock) -> None:
        mock_session.get.return_value = make_response(200, text=make_entry_html("300"))
        source = EntryDocumentVersionSource("https://app.example.com/", session=mock_session, timeout_s=3)

        assert source() == "300"
        mock_session.get.assert_called_once_with("https://app.example.com/", timeout=3)

    def test_http_error(self, mock_session: MagicMock) -> None:
        mock_session.get.return_value = make_response(404, text="not found")
        source = EntryDocumentVersionSource("https://app.example.com/", session=mock_session)

        with pytest.raises(UnresolvedVersionError, match="Cannot load"):
            source()

    def test_connection_error(self, mock_session: MagicMock) -> None:
        mock_session.get.side_effect = requests.exceptions.ConnectionError("offline")
        source = EntryDocumentVersionSource("http://localhost:1/", session=mock_session)

        with pytest.raises(UnresolvedVersionError):
            source()
