"""
Notification fan-out for the freshness monitor.

The monitor decides when a notification happens; the hub only delivers it to
every registered UpdateListener. A listener that raises is logged and skipped
so one broken consumer cannot block the others or the monitor.
"""

from __future__ import annotations

import logging
import threading

from verwatch.helpers.dto.monitor_dto import UpdateListener
from verwatch.helpers.dto.version_dto import VersionManifest

logger = logging.getLogger(__name__)


class NotificationHub:
    """Thread-safe registry of update listeners."""

    def __init__(self, listeners: list[UpdateListener] | None = None):
        self._lock = threading.Lock()
        self._listeners: list[UpdateListener] = []
        for listener in listeners or []:
            self.add_listener(listener)

    def add_listener(self, listener: UpdateListener) -> None:
        if not isinstance(listener, UpdateListener):
            raise TypeError(f"{type(listener).__name__} does not implement UpdateListener")
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def remove_listener(self, listener: UpdateListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    def emit_update_detected(self, manifest: VersionManifest) -> int:
        """Deliver a detected update. Returns how many listeners accepted it."""
        return self._broadcast("on_update_detected", manifest)

    def emit_dismiss(self) -> int:
        return self._broadcast("on_dismiss")

    def emit_refresh_requested(self) -> int:
        return self._broadcast("on_refresh_requested")

    def _broadcast(self, event: str, *args: object) -> int:
        # Snapshot under lock, call outside it so listeners may re-enter the hub
        with self._lock:
            listeners = list(self._listeners)

        delivered = 0
        for listener in listeners:
            try:
                getattr(listener, event)(*args)
                delivered += 1
            except Exception as e:
                logger.error("[Notification] Listener %s failed on %s: %s", type(listener).__name__, event, e)

        if delivered:
            logger.debug("[Notification] %s delivered to %d listener(s)", event, delivered)
        return delivered
