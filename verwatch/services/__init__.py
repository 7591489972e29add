"""
Services package.
"""

from .config_svc import ConfigService
from .freshness_monitor_svc import FreshnessMonitorService

__all__ = [
    "ConfigService",
    "FreshnessMonitorService",
]
