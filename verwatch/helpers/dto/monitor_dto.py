"""Freshness monitor DTOs and the listener protocol.

## Lifecycle Contract

| Phase           | Meaning                                                  |
|-----------------|----------------------------------------------------------|
| no_update       | Every successful poll so far matched the loaded version  |
| update_detected | A mismatch was seen and the one notification was emitted |
| dismissed       | User dismissed; polling continues, never re-notifies     |
| refreshed       | User (or auto-refresh) reloaded; terminal for instance   |

### Key Rules

1. has_notified goes false -> true at most once per monitor instance and is
   never reset. A later matching poll does not "un-notify".

2. Any inequality counts as an update, including a rollback to an older token.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol, runtime_checkable

from verwatch.helpers.dto.version_dto import VersionManifest

MonitorStatus = Literal["stopped", "running"]

UpdatePhase = Literal["no_update", "update_detected", "dismissed", "refreshed"]

DEFAULT_CHECK_INTERVAL_S = 300.0
DEFAULT_AUTO_REFRESH_DELAY_S = 10.0
DEFAULT_REQUEST_TIMEOUT_S = 10.0


@dataclass
class MonitorOptions:
    """Recognized monitor options."""

    check_interval_s: float = DEFAULT_CHECK_INTERVAL_S
    """Seconds between scheduled checks."""

    show_notification: bool = True
    """Emit on_update_detected to listeners on first mismatch."""

    auto_refresh: bool = False
    """Schedule a reload auto_refresh_delay_s after first mismatch."""

    auto_refresh_delay_s: float = DEFAULT_AUTO_REFRESH_DELAY_S
    """Delay before an automatic reload."""

    request_timeout_s: float = DEFAULT_REQUEST_TIMEOUT_S
    """Bound on a single manifest fetch. Kept below check_interval_s."""

    def __post_init__(self) -> None:
        if self.check_interval_s <= 0:
            raise ValueError(f"check_interval_s must be positive, got {self.check_interval_s}")
        if self.auto_refresh_delay_s < 0:
            raise ValueError(f"auto_refresh_delay_s must not be negative, got {self.auto_refresh_delay_s}")
        if self.request_timeout_s <= 0 or self.request_timeout_s >= self.check_interval_s:
            self.request_timeout_s = min(DEFAULT_REQUEST_TIMEOUT_S, self.check_interval_s / 2)


@dataclass
class ClientVersionState:
    """Per-instance monitor state. Owned and mutated only by one FreshnessMonitorService."""

    current_version: str | None = None
    has_notified: bool = False
    detected_manifest: VersionManifest | None = None
    phase: UpdatePhase = "no_update"


@dataclass(frozen=True)
class MonitorSnapshot:
    """Read-only view of a monitor for status display and debugging."""

    status: MonitorStatus
    current_version: str | None
    has_update: bool
    phase: UpdatePhase
    detected_version: str | None
    checks_run: int
    last_check_ms: int | None
    last_error: str | None = None
    listeners: int = 0


@runtime_checkable
class UpdateListener(Protocol):
    """Protocol for consumers that render the update notification.

    Any UI technology (terminal, native, web bridge) implements this.
    The monitor owns detection and dedup; the listener owns presentation.
    """

    def on_update_detected(self, manifest: VersionManifest) -> None:
        """Called once per monitor instance when a newer deployment is first seen."""
        ...

    def on_dismiss(self) -> None:
        """Called when the notification is dismissed."""
        ...

    def on_refresh_requested(self) -> None:
        """Called right before the client is reloaded."""
        ...
