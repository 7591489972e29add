"""
Application composition root for a monitored client.

The Application stands in for the host page: it "loads" the entry document,
owns one FreshnessMonitorService per load, starts it after a short delay so it
does not compete with startup work, and stops it on teardown.

Architecture:
- Application owns: config, HTTP session, listeners, the current monitor
- reload() is the monitor's reloader: it discards the current monitor and
  builds a new one from a freshly loaded entry document (a new page load)
- Do NOT construct monitors for a running client outside of this class
"""

from __future__ import annotations

import functools
import logging
import threading

import requests

from verwatch.components.monitor.manifest_fetch_comp import fetch_manifest, join_url
from verwatch.components.monitor.version_source_comp import EntryDocumentVersionSource
from verwatch.helpers.dto.monitor_dto import MonitorSnapshot, UpdateListener
from verwatch.services.config_svc import ConfigService
from verwatch.services.freshness_monitor_svc import FreshnessMonitorService

logger = logging.getLogger(__name__)


class Application:
    """
    Host lifecycle around the freshness monitor.

    Configuration Access:
    - Raw config stays inside ConfigService
    - Config-derived values are instance attributes computed in __init__
    """

    def __init__(
        self,
        config_service: ConfigService | None = None,
        listeners: list[UpdateListener] | None = None,
        session: requests.Session | None = None,
        entry_location: str | None = None,
    ):
        """
        Initialize application with its configuration.

        Args:
            config_service: Configuration (defaults + YAML + env if None)
            listeners: Notification consumers attached to every monitor instance
            session: HTTP session shared by all loads
            entry_location: Entry document URL or path (derived from config if None)
        """
        self._config_service = config_service or ConfigService()
        cfg = self._config_service

        self.base_url: str = str(cfg.get("monitor.base_url"))
        self.manifest_url: str = join_url(self.base_url, str(cfg.get("monitor.manifest_path")))
        self.entry_location: str = entry_location or join_url(self.base_url, str(cfg.get("monitor.entry_path")))
        self.meta_name: str = str(cfg.get("monitor.meta_name"))
        self.start_delay_s: float = float(cfg.get("monitor.start_delay_s", 0))
        self.options = cfg.make_monitor_options()

        self.session = session or requests.Session()
        self.listeners: list[UpdateListener] = list(listeners or [])

        self.monitor: FreshnessMonitorService | None = None
        self.loads = 0

        self._lock = threading.Lock()
        self._start_timer: threading.Timer | None = None
        self._running = False

    # ---------------------------- Lifecycle ----------------------------------

    def start(self, delay_s: float | None = None) -> None:
        """
        Load the client and start monitoring after delay_s (config default if None).
        """
        delay = self.start_delay_s if delay_s is None else delay_s
        with self._lock:
            if self._running:
                logger.warning("[Application] Already running, ignoring start() call")
                return
            self._running = True
            self.monitor = self.build_monitor()
            self.loads = 1

            if delay > 0:
                self._start_timer = threading.Timer(delay, self._start_monitor)
                self._start_timer.daemon = True
                self._start_timer.start()

        if delay > 0:
            logger.info("[Application] Version monitor starts in %ss", delay)
        else:
            self._start_monitor()

    def stop(self) -> None:
        """Tear down: cancel a pending delayed start and stop the monitor."""
        with self._lock:
            if not self._running:
                return
            self._running = False
            if self._start_timer is not None:
                self._start_timer.cancel()
                self._start_timer = None
            monitor = self.monitor

        if monitor is not None:
            monitor.stop()
        logger.info("[Application] Stopped")

    def reload(self) -> None:
        """
        Full client reload: new entry document, new monitor instance, fresh state.
        """
        with self._lock:
            if not self._running:
                logger.warning("[Application] Reload requested while stopped; ignoring")
                return
            old = self.monitor
            self.monitor = self.build_monitor()
            self.loads += 1
            new = self.monitor

        logger.info("[Application] Reloading client (load #%d)", self.loads)
        if old is not None:
            old.stop()

        # stop() may have run while the old monitor was shutting down
        with self._lock:
            if not self._running or self.monitor is not new:
                logger.info("[Application] Stopped during reload; new monitor not started")
                return
            new.start()

    def is_running(self) -> bool:
        with self._lock:
            return self._running

    # ------------------------------ Helpers ----------------------------------

    def build_monitor(self) -> FreshnessMonitorService:
        """Monitor for one page load, wired to this application's collaborators."""
        version_source = EntryDocumentVersionSource(
            self.entry_location,
            meta_name=self.meta_name,
            session=self.session,
            timeout_s=self.options.request_timeout_s,
        )
        fetcher = functools.partial(
            fetch_manifest,
            self.manifest_url,
            self.options.request_timeout_s,
            self.session,
        )
        return FreshnessMonitorService(
            self.options,
            version_source=version_source,
            fetcher=fetcher,
            listeners=self.listeners,
            reloader=self.reload,
        )

    def check_now(self) -> bool:
        """Manual check on the current monitor. False when nothing is loaded."""
        monitor = self.monitor
        return monitor.manual_check() if monitor is not None else False

    def snapshot(self) -> MonitorSnapshot | None:
        monitor = self.monitor
        return monitor.snapshot() if monitor is not None else None

    def _start_monitor(self) -> None:
        with self._lock:
            self._start_timer = None
            if not self._running or self.monitor is None:
                return
            self.monitor.start()
