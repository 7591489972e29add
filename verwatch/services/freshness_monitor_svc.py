"""
Freshness monitor service.

## Freshness Monitoring Contract

FreshnessMonitor OWNS:
- One poll thread while running (immediate check, then every check_interval_s)
- One optional auto-refresh timer
- The ClientVersionState of this client instance

FreshnessMonitor EMITS:
- on_update_detected(manifest) once per instance, through the NotificationHub
- on_dismiss / on_refresh_requested for the two user actions

### Key Rules

1. current_version is read from the loaded entry document on first check and
   cached. Without it no fetch is ever attempted.

2. Comparison is equality only. Any different token, including an older one
   after a rollback, is an update.

3. has_notified goes false -> true at most once and is never reset; a later
   matching poll leaves it set.

4. Fetch failures are warnings. The next scheduled tick is the retry; there is
   no backoff.

5. After stop() returns, no further scheduled fetch is issued and any pending
   auto-refresh is cancelled. A check still finishing when stop() runs never
   arms a new one.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from verwatch.components.monitor.notification_comp import NotificationHub
from verwatch.helpers.dto.monitor_dto import (
    ClientVersionState,
    MonitorOptions,
    MonitorSnapshot,
    UpdateListener,
)
from verwatch.helpers.dto.version_dto import VersionManifest
from verwatch.helpers.exceptions import FetchError, UnresolvedVersionError
from verwatch.helpers.time_helper import now_ms

logger = logging.getLogger(__name__)

VersionSource = Callable[[], str | None]
ManifestFetcher = Callable[[], VersionManifest]
Reloader = Callable[[], None]


class FreshnessMonitorService:
    """
    Detects that the loaded client is older than the deployed one.

    Key design:
    - Collaborators are injected: version source, manifest fetcher, reloader
    - Scheduled ticks skip while another check is in flight
    - Listener and reloader errors are logged, never raised to the caller
    - start/stop are idempotent and repeatable (start, stop, start = one thread)
    """

    def __init__(
        self,
        options: MonitorOptions,
        version_source: VersionSource,
        fetcher: ManifestFetcher,
        listeners: list[UpdateListener] | None = None,
        reloader: Reloader | None = None,
    ):
        """
        Initialize the monitor.

        Args:
            options: Interval, notification and auto-refresh settings
            version_source: Returns the loaded client's token (may raise UnresolvedVersionError)
            fetcher: Fetches the deployed manifest (raises FetchError on failure)
            listeners: Notification consumers
            reloader: Performs a full client reload (None disables reloading)
        """
        self.options = options
        self._version_source = version_source
        self._fetcher = fetcher
        self._reloader = reloader
        self._hub = NotificationHub(listeners)

        self._state = ClientVersionState()
        self._unresolved_logged = False
        self._checks_run = 0
        self._last_check_ms: int | None = None
        self._last_error: str | None = None

        # Threading
        self._state_lock = threading.Lock()
        self._check_lock = threading.Lock()
        self._lifecycle_lock = threading.Lock()
        self._stop_event: threading.Event | None = None
        self._poll_thread: threading.Thread | None = None
        self._refresh_timer: threading.Timer | None = None
        self._stopped = False

    # ---------------------------- Lifecycle ----------------------------------

    def start(self) -> None:
        """Start polling. A second call while running only logs a warning."""
        with self._lifecycle_lock:
            if self._is_running_locked():
                logger.warning("[FreshnessMonitor] Already running")
                return

            self._stopped = False
            stop_event = threading.Event()
            self._stop_event = stop_event
            self._poll_thread = threading.Thread(
                target=self._poll_loop,
                args=(stop_event,),
                daemon=True,
                name="FreshnessMonitor",
            )
            self._poll_thread.start()

        logger.info("[FreshnessMonitor] Started, checking every %ss", self.options.check_interval_s)

    def stop(self) -> None:
        """Stop polling and cancel a pending auto-refresh. No-op when stopped."""
        with self._lifecycle_lock:
            thread = self._poll_thread
            stop_event = self._stop_event
            self._poll_thread = None
            self._stop_event = None
            self._stopped = True
            self._cancel_refresh_timer_locked()

        if stop_event is None:
            return

        stop_event.set()
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=self.options.request_timeout_s + 1)
            if thread.is_alive():
                logger.warning("[FreshnessMonitor] Poll thread still finishing a fetch; its result is discarded")

        logger.info("[FreshnessMonitor] Stopped")

    def is_running(self) -> bool:
        with self._lifecycle_lock:
            return self._is_running_locked()

    def _is_running_locked(self) -> bool:
        return (
            self._poll_thread is not None
            and self._poll_thread.is_alive()
            and self._stop_event is not None
            and not self._stop_event.is_set()
        )

    # ------------------------------ Public API -------------------------------

    def manual_check(self) -> bool:
        """
        Run one check outside the schedule.

        Shares dedup state with scheduled checks; it never re-notifies.

        Returns:
            True if the deployed version differs from the loaded one
        """
        logger.info("[FreshnessMonitor] Manual update check...")
        with self._check_lock:
            return self._check()

    def get_has_update(self) -> bool:
        """Whether an update has been detected for this instance."""
        with self._state_lock:
            return self._state.has_notified

    def snapshot(self) -> MonitorSnapshot:
        """Read-only copy of the monitor state."""
        running = self.is_running()
        listeners = self._hub.listener_count()
        with self._state_lock:
            detected = self._state.detected_manifest
            return MonitorSnapshot(
                status="running" if running else "stopped",
                current_version=self._state.current_version,
                has_update=self._state.has_notified,
                phase=self._state.phase,
                detected_version=detected.version if detected else None,
                checks_run=self._checks_run,
                last_check_ms=self._last_check_ms,
                last_error=self._last_error,
                listeners=listeners,
            )

    def add_listener(self, listener: UpdateListener) -> None:
        self._hub.add_listener(listener)

    def remove_listener(self, listener: UpdateListener) -> None:
        self._hub.remove_listener(listener)

    # -------------------------- Notification actions -------------------------

    def refresh(self) -> None:
        """Reload the client now. Terminal for this instance."""
        with self._lifecycle_lock:
            self._cancel_refresh_timer_locked()

        with self._state_lock:
            if self._state.phase == "refreshed":
                return
            self._state.phase = "refreshed"

        logger.info("[FreshnessMonitor] Reloading to pick up the latest version...")
        self._hub.emit_refresh_requested()

        if self._reloader is None:
            logger.warning("[FreshnessMonitor] No reloader configured; reload skipped")
            return

        try:
            self._reloader()
        except Exception as e:
            logger.error("[FreshnessMonitor] Reload failed: %s", e)

    def dismiss(self) -> bool:
        """
        Dismiss the current notification.

        Polling and dedup are unaffected; a dismissed update is never re-notified.

        Returns:
            True if a shown notification was dismissed
        """
        with self._state_lock:
            if self._state.phase != "update_detected":
                return False
            self._state.phase = "dismissed"

        logger.info("[FreshnessMonitor] Update notification dismissed")
        self._hub.emit_dismiss()
        return True

    # ------------------------- Poll Loop -------------------------------------

    def _poll_loop(self, stop_event: threading.Event) -> None:
        """Immediate check, then one check per interval until stop_event is set."""
        while not stop_event.is_set():
            self._scheduled_check(stop_event)
            if stop_event.wait(self.options.check_interval_s):
                break

    def _scheduled_check(self, stop_event: threading.Event) -> None:
        if not self._check_lock.acquire(blocking=False):
            logger.debug("[FreshnessMonitor] Previous check still in flight, skipping tick")
            return
        try:
            self._check(stop_event)
        except Exception as e:
            logger.exception("[FreshnessMonitor] Unexpected error during scheduled check: %s", e)
        finally:
            self._check_lock.release()

    def _check(self, stop_event: threading.Event | None = None) -> bool:
        """One check. Returns whether the deployed version differs."""
        current = self._resolve_current_version()
        if current is None:
            return False

        if stop_event is not None and stop_event.is_set():
            return False

        with self._state_lock:
            self._checks_run += 1
            self._last_check_ms = now_ms()

        try:
            manifest = self._fetcher()
        except FetchError as e:
            logger.warning("[FreshnessMonitor] Version check failed: %s", e)
            with self._state_lock:
                self._last_error = str(e)
            return False

        with self._state_lock:
            self._last_error = None

        if stop_event is not None and stop_event.is_set():
            logger.debug("[FreshnessMonitor] Stopped during fetch, discarding result")
            return False

        has_update = manifest.version != current
        if has_update:
            self._handle_mismatch(manifest, current, stop_event)
        return has_update

    def _resolve_current_version(self) -> str | None:
        with self._state_lock:
            if self._state.current_version is not None:
                return self._state.current_version

        reason = "version source returned nothing"
        try:
            version = self._version_source()
        except UnresolvedVersionError as e:
            version = None
            reason = str(e)

        if not version:
            if not self._unresolved_logged:
                self._unresolved_logged = True
                logger.warning("[FreshnessMonitor] Cannot read current version (%s); update checks disabled", reason)
            return None

        with self._state_lock:
            if self._state.current_version is None:
                self._state.current_version = version
                logger.debug("[FreshnessMonitor] Current version: %s", version)
            return self._state.current_version

    def _handle_mismatch(
        self, manifest: VersionManifest, current: str, stop_event: threading.Event | None = None
    ) -> None:
        with self._state_lock:
            if self._state.has_notified:
                return
            self._state.has_notified = True
            self._state.detected_manifest = manifest
            self._state.phase = "update_detected"

        logger.info(
            "[FreshnessMonitor] New version %s detected (current: %s, built: %s)",
            manifest.version,
            current,
            manifest.build_time or "unknown",
        )

        if self.options.show_notification:
            self._hub.emit_update_detected(manifest)

        if self.options.auto_refresh:
            self._schedule_auto_refresh(stop_event)

    # ------------------------- Auto Refresh ----------------------------------

    def _schedule_auto_refresh(self, stop_event: threading.Event | None = None) -> None:
        """Arm the one-shot reload timer. Never armed once stop() has run for this check."""
        delay = self.options.auto_refresh_delay_s
        with self._lifecycle_lock:
            superseded = stop_event is not None and (stop_event.is_set() or stop_event is not self._stop_event)
            if self._stopped or superseded:
                logger.debug("[FreshnessMonitor] Stopped, auto-refresh not scheduled")
                return
            if self._refresh_timer is not None:
                return
            timer = threading.Timer(delay, self._auto_refresh)
            timer.daemon = True
            timer.name = "FreshnessAutoRefresh"
            self._refresh_timer = timer
            timer.start()

        logger.info("[FreshnessMonitor] Reloading automatically in %ss...", delay)

    def _auto_refresh(self) -> None:
        with self._lifecycle_lock:
            self._refresh_timer = None
        self.refresh()

    def _cancel_refresh_timer_locked(self) -> None:
        if self._refresh_timer is not None:
            self._refresh_timer.cancel()
            self._refresh_timer = None
