"""
Shared utility functions for CLI commands.
Helper functions used across multiple command modules.
"""

from __future__ import annotations

import argparse
from typing import Any

from verwatch.services.config_svc import ConfigService

__all__ = [
    "build_config",
    "format_duration",
]

# argparse dest -> (config section, config key)
_ARG_TO_CONFIG: dict[str, tuple[str, str]] = {
    "out": ("build", "output_dir"),
    "dir": ("build", "output_dir"),
    "entry": ("build", "entry_document"),
    "meta_name": ("build", "meta_name"),
    "base_url": ("monitor", "base_url"),
    "interval": ("monitor", "check_interval_s"),
    "timeout": ("monitor", "request_timeout_s"),
    "start_delay": ("monitor", "start_delay_s"),
    "host": ("server", "host"),
    "port": ("server", "port"),
}


def build_config(args: argparse.Namespace) -> ConfigService:
    """ConfigService with explicit CLI flags layered on top of YAML and env."""
    overrides: dict[str, Any] = {}
    for dest, (section, key) in _ARG_TO_CONFIG.items():
        value = getattr(args, dest, None)
        if value is not None:
            overrides.setdefault(section, {})[key] = value

    if getattr(args, "meta_name", None) is not None:
        overrides.setdefault("monitor", {})["meta_name"] = args.meta_name
    if getattr(args, "auto_refresh", False):
        overrides.setdefault("monitor", {})["auto_refresh"] = True
    if getattr(args, "no_notify", False):
        overrides.setdefault("monitor", {})["show_notification"] = False
    if getattr(args, "log_level", None) is not None:
        overrides["log_level"] = args.log_level

    return ConfigService(overrides=overrides, config_path=getattr(args, "config", None))


def format_duration(seconds: float) -> str:
    """Format seconds into human readable: 2d 5h 30m"""
    if seconds < 60:
        return f"{int(seconds)}s"
    elif seconds < 3600:
        m = int(seconds / 60)
        s = int(seconds % 60)
        return f"{m}m {s}s" if s > 0 else f"{m}m"
    elif seconds < 86400:
        h = int(seconds / 3600)
        m = int((seconds % 3600) / 60)
        return f"{h}h {m}m"
    else:
        d = int(seconds / 86400)
        h = int((seconds % 86400) / 3600)
        return f"{d}d {h}h"
