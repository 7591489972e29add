"""Unit tests for verwatch.helpers.dto.monitor_dto."""

from __future__ import annotations

import pytest

from verwatch.helpers.dto.monitor_dto import (
    ClientVersionState,
    MonitorOptions,
    MonitorSnapshot,
    UpdateListener,
)


@pytest.mark.unit
class TestMonitorOptions:
    def test_defaults(self) -> None:
        options = MonitorOptions()
        assert options.check_interval_s == 300
        assert options.show_notification is True
        assert options.auto_refresh is False
        assert options.auto_refresh_delay_s == 10
        assert options.request_timeout_s == 10

    @pytest.mark.parametrize("interval", [0, -1])
    def test_interval_must_be_positive(self, interval: float) -> None:
        with pytest.raises(ValueError, match="check_interval_s"):
            MonitorOptions(check_interval_s=interval)

    def test_negative_refresh_delay_rejected(self) -> None:
        with pytest.raises(ValueError, match="auto_refresh_delay_s"):
            MonitorOptions(auto_refresh_delay_s=-1)

    def test_zero_refresh_delay_allowed(self) -> None:
        assert MonitorOptions(auto_refresh_delay_s=0).auto_refresh_delay_s == 0

    def test_timeout_kept_below_interval(self) -> None:
        """A fetch must never outlive the tick it belongs to."""
        options = MonitorOptions(check_interval_s=4, request_timeout_s=30)
        assert options.request_timeout_s == 2

    def test_non_positive_timeout_replaced(self) -> None:
        options = MonitorOptions(check_interval_s=300, request_timeout_s=0)
        assert options.request_timeout_s == 10


@pytest.mark.unit
class TestClientVersionState:
    def test_fresh_state(self) -> None:
        state = ClientVersionState()
        assert state.current_version is None
        assert state.has_notified is False
        assert state.detected_manifest is None
        assert state.phase == "no_update"


@pytest.mark.unit
class TestMonitorSnapshot:
    def test_frozen(self) -> None:
        snapshot = MonitorSnapshot(
            status="stopped",
            current_version="1",
            has_update=False,
            phase="no_update",
            detected_version=None,
            checks_run=0,
            last_check_ms=None,
        )
        assert snapshot.last_error is None
        with pytest.raises(AttributeError):
            snapshot.status = "running"  # type: ignore[misc]


@pytest.mark.unit
class TestUpdateListenerProtocol:
    def test_recording_listener_satisfies_protocol(self, listener) -> None:
        assert isinstance(listener, UpdateListener)

    def test_partial_object_rejected(self) -> None:
        class OnlyDetect:
            def on_update_detected(self, manifest) -> None:
                pass

        assert not isinstance(OnlyDetect(), UpdateListener)
