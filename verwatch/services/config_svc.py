#!/usr/bin/env python3
# ======================================================================
#  Config Service - Configuration loading and caching
#  - Loads config from YAML files and VERWATCH_* env vars
#  - Caches composed config for performance
#  - Provides reload() for runtime changes
# ======================================================================

from __future__ import annotations

import copy
import logging
import os
from typing import Any

import yaml

from verwatch.helpers.dto.monitor_dto import MonitorOptions

# ======================================================================
# Internal Constants (Not User-Configurable)
# ======================================================================
ENV_PREFIX = "VERWATCH_"
CONFIG_PATH_ENV = "VERWATCH_CONFIG_PATH"
SYSTEM_CONFIG_PATH = "/etc/verwatch/config.yaml"


class ConfigService:
    """
    Service for loading and caching configuration.

    Loads config from multiple sources (defaults → YAML → env → overrides),
    caches the result, and provides reload capability.
    """

    def __init__(self, overrides: dict[str, Any] | None = None, config_path: str | None = None) -> None:
        """
        Initialize ConfigService with empty cache.

        Args:
            overrides: Values applied last (explicit CLI flags)
            config_path: Extra YAML file applied after the standard locations
        """
        self._overrides = overrides or {}
        self._config_path = config_path
        self._config: dict[str, Any] | None = None
        self._logger = logging.getLogger(__name__)

    def get_config(self, force_reload: bool = False) -> dict[str, Any]:
        """
        Get the composed configuration.

        Args:
            force_reload: If True, bypass cache and reload from sources

        Returns:
            Complete configuration dict
        """
        if self._config is None or force_reload:
            self._config = self._compose(self._overrides)
        return self._config

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a config value by dotted path.

        Example:
            >>> service.get("monitor.check_interval_s")
            300
            >>> service.get("monitor.missing", 5)
            5
        """
        cfg = self.get_config()
        node: Any = cfg
        for part in key_path.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def reload(self) -> dict[str, Any]:
        """Force reload configuration from all sources."""
        self._logger.info("Reloading configuration from all sources")
        return self.get_config(force_reload=True)

    def make_monitor_options(self) -> MonitorOptions:
        """
        Build MonitorOptions from the current configuration.

        This is the boundary where raw config values are typed and validated.
        """
        return MonitorOptions(
            check_interval_s=float(self.get("monitor.check_interval_s")),
            show_notification=bool(self.get("monitor.show_notification")),
            auto_refresh=bool(self.get("monitor.auto_refresh")),
            auto_refresh_delay_s=float(self.get("monitor.auto_refresh_delay_s")),
            request_timeout_s=float(self.get("monitor.request_timeout_s")),
        )

    # ----------------------------------------------------------------------
    # Private composition logic
    # ----------------------------------------------------------------------

    def _compose(self, overrides: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Load final configuration from:
          1) Built-in defaults
          2) /etc/verwatch/config.yaml  (if present)
          3) ./config/config.yaml
          4) $VERWATCH_CONFIG_PATH (if set), then config_path (if given)
          5) Environment variables (VERWATCH_<SECTION>_<KEY>)
          6) overrides dict passed in

        Returns merged config as dict.
        """
        cfg = self._default_config()

        self._deep_merge(cfg, self._load_yaml(SYSTEM_CONFIG_PATH))
        self._deep_merge(cfg, self._load_yaml(os.path.join(os.getcwd(), "config", "config.yaml")))

        env_path = os.getenv(CONFIG_PATH_ENV)
        if env_path:
            self._deep_merge(cfg, self._load_yaml(env_path))

        if self._config_path:
            self._deep_merge(cfg, self._load_yaml(self._config_path))

        self._apply_env_overrides(cfg)

        if overrides:
            self._deep_merge(cfg, copy.deepcopy(overrides))

        self._logger.debug("compose() loaded config; keys: %s", list(cfg.keys()))
        return cfg

    def _default_config(self) -> dict[str, Any]:
        """Base defaults for every user-configurable setting."""
        return {
            "build": {
                "output_dir": "./dist",
                "entry_document": "index.html",
                "meta_name": "app-version",
            },
            "monitor": {
                "base_url": "http://localhost:3003",
                "manifest_path": "/version.json",
                "entry_path": "/",
                "meta_name": "app-version",
                "check_interval_s": 300,  # 5 minutes
                "show_notification": True,
                "auto_refresh": False,
                "auto_refresh_delay_s": 10,
                "request_timeout_s": 10,
                "start_delay_s": 2,  # let the host finish its own startup first
            },
            "server": {
                "host": "0.0.0.0",
                "port": 3003,
            },
            "log_level": "INFO",
        }

    def _deep_merge(self, a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
        """
        Recursively merge dict b into dict a (mutates a, returns it).
        """
        for k, v in b.items():
            if isinstance(v, dict) and isinstance(a.get(k), dict):
                self._deep_merge(a[k], v)
            else:
                a[k] = v
        return a

    def _load_yaml(self, path: str) -> dict[str, Any]:
        """
        Load a YAML file; returns {} if not found or invalid.
        """
        if not path or not os.path.exists(path):
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            self._logger.warning(f"Ignoring unreadable config file {path}: {e}")
            return {}
        if not isinstance(data, dict):
            self._logger.warning(f"Ignoring config file {path}: top level is not a mapping")
            return {}
        return data

    def _apply_env_overrides(self, cfg: dict[str, Any]) -> None:
        """
        Support environment overrides for known keys only.

        Supported formats:
          VERWATCH_LOG_LEVEL=DEBUG
          VERWATCH_BUILD_OUTPUT_DIR=./build
          VERWATCH_MONITOR_BASE_URL=https://app.example.com
          VERWATCH_MONITOR_CHECK_INTERVAL_S=60
          VERWATCH_MONITOR_AUTO_REFRESH=true
          VERWATCH_SERVER_PORT=8080

        Unknown keys are ignored.
        """
        allowed: dict[str, tuple[str | None, str]] = {}
        for key, value in cfg.items():
            if isinstance(value, dict):
                for sub_key in value:
                    allowed[f"{key}_{sub_key}"] = (key, sub_key)
            else:
                allowed[key] = (None, key)

        for k, v in os.environ.items():
            if not k.startswith(ENV_PREFIX) or k == CONFIG_PATH_ENV:
                continue

            key = k[len(ENV_PREFIX) :].lower()
            if key not in allowed:
                self._logger.debug(f"Ignoring environment override for unknown key: {key}")
                continue

            section, name = allowed[key]
            target = cfg if section is None else cfg[section]
            target[name] = _parse_env_value(v)


def _parse_env_value(v: str) -> Any:
    """Parse typed values from environment strings."""
    if v.lower() in ("true", "false"):
        return v.lower() == "true"
    if v.isdigit():
        return int(v)
    if v.replace(".", "", 1).replace("-", "", 1).isdigit():
        return float(v)
    return v
