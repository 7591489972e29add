"""
Dto package.
"""

from .monitor_dto import (
    ClientVersionState,
    MonitorOptions,
    MonitorSnapshot,
    MonitorStatus,
    UpdateListener,
    UpdatePhase,
)
from .version_dto import StampBuildResult, VersionManifest

__all__ = [
    "ClientVersionState",
    "MonitorOptions",
    "MonitorSnapshot",
    "MonitorStatus",
    "StampBuildResult",
    "UpdateListener",
    "UpdatePhase",
    "VersionManifest",
]
