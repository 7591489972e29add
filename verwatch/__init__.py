"""
verwatch - deployment freshness detection.

Build time: stamp a version token into version.json and the entry document.
Runtime: poll version.json and notify once when the loaded client is stale.
"""

from .__version__ import __version__

__all__ = ["__version__"]
