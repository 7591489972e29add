"""Version information for verwatch."""

# Semantic versioning: MAJOR.MINOR.PATCH
# MAJOR: Breaking changes to the manifest or entry document contract
# MINOR: New features, backward compatible
# PATCH: Bug fixes, backward compatible

__version__ = "0.2.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Version history:
# 0.2.0 - CLI and static server
#         - `verwatch watch` terminal notifications with refresh/dismiss commands
#         - `verwatch serve` FastAPI server with no-cache manifest headers
#         - YAML + environment configuration
# 0.1.0 - Initial release
#         - Build stamping (version.json + app-version meta tag)
#         - Freshness monitor with one-shot notification lifecycle
