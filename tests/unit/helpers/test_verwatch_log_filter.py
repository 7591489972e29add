"""Unit tests for VerwatchLogFilter.

Tests verify automatic identity/role tag derivation from logger names.
"""

from __future__ import annotations

import logging

import pytest

from verwatch.helpers.logging_helper import LOG_FORMAT, VerwatchLogFilter, configure_logging


class TestVerwatchLogFilterIdentityRole:
    """Tests for identity and role tag derivation from logger names."""

    @pytest.fixture
    def log_filter(self) -> VerwatchLogFilter:
        """Create a fresh filter instance."""
        return VerwatchLogFilter()

    def _make_record(self, name: str) -> logging.LogRecord:
        """Create a minimal LogRecord with given logger name."""
        return logging.LogRecord(
            name=name,
            level=logging.INFO,
            pathname="",
            lineno=0,
            msg="Test message",
            args=(),
            exc_info=None,
        )

    @pytest.mark.unit
    def test_service_suffix(self, log_filter: VerwatchLogFilter) -> None:
        """_svc suffix should produce [Identity] [Service] tags."""
        record = self._make_record("verwatch.services.freshness_monitor_svc")
        log_filter.filter(record)

        assert record.verwatch_identity_tag == "[Freshness Monitor]"
        assert record.verwatch_role_tag == " [Service]"

    @pytest.mark.unit
    def test_component_suffix(self, log_filter: VerwatchLogFilter) -> None:
        record = self._make_record("verwatch.components.build.entry_stamp_comp")
        log_filter.filter(record)

        assert record.verwatch_identity_tag == "[Entry Stamp]"
        assert record.verwatch_role_tag == " [Component]"

    @pytest.mark.unit
    def test_workflow_suffix(self, log_filter: VerwatchLogFilter) -> None:
        record = self._make_record("verwatch.workflows.build.stamp_build_wf")
        log_filter.filter(record)

        assert record.verwatch_identity_tag == "[Stamp Build]"
        assert record.verwatch_role_tag == " [Workflow]"

    @pytest.mark.unit
    def test_no_suffix_has_no_role(self, log_filter: VerwatchLogFilter) -> None:
        """Modules without a role suffix get an identity only."""
        record = self._make_record("verwatch.app")
        log_filter.filter(record)

        assert record.verwatch_identity_tag == "[App]"
        assert record.verwatch_role_tag == ""

    @pytest.mark.unit
    def test_filter_never_drops(self, log_filter: VerwatchLogFilter) -> None:
        assert log_filter.filter(self._make_record("anything")) is True


class TestConfigureLogging:
    @pytest.mark.unit
    def test_attaches_filter_once(self) -> None:
        root = logging.getLogger()
        handler = logging.StreamHandler()
        root.addHandler(handler)
        try:
            configure_logging("DEBUG")
            configure_logging("DEBUG")
            filters = [f for f in handler.filters if isinstance(f, VerwatchLogFilter)]
            assert len(filters) == 1
            assert root.level == logging.DEBUG
        finally:
            root.removeHandler(handler)
            root.setLevel(logging.WARNING)

    @pytest.mark.unit
    def test_unknown_level_falls_back_to_info(self) -> None:
        root = logging.getLogger()
        try:
            configure_logging("CHATTY")
            assert root.level == logging.INFO
        finally:
            root.setLevel(logging.WARNING)

    @pytest.mark.unit
    def test_format_uses_tags(self) -> None:
        assert "%(verwatch_identity_tag)s" in LOG_FORMAT
        assert "%(verwatch_role_tag)s" in LOG_FORMAT
