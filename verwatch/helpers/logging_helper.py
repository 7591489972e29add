"""
Logging helpers.

VerwatchLogFilter derives readable identity/role tags from logger names so
log lines read like "[Freshness Monitor] [Service] Started". Module naming
conventions drive the role:

    *_svc    -> [Service]
    *_comp   -> [Component]
    *_wf     -> [Workflow]
    *_helper -> [Helper]
    *_cli    -> [CLI]
"""

from __future__ import annotations

import logging

_ROLE_SUFFIXES: dict[str, str] = {
    "_svc": "[Service]",
    "_comp": "[Component]",
    "_wf": "[Workflow]",
    "_helper": "[Helper]",
    "_cli": "[CLI]",
}

LOG_FORMAT = "%(asctime)s %(levelname)s %(verwatch_identity_tag)s%(verwatch_role_tag)s %(message)s"


class VerwatchLogFilter(logging.Filter):
    """Attach identity and role tags to every record passing through a handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        identity, role = _derive_tags(record.name)
        record.verwatch_identity_tag = identity
        record.verwatch_role_tag = f" {role}" if role else ""
        return True


def _derive_tags(logger_name: str) -> tuple[str, str]:
    module = logger_name.rsplit(".", 1)[-1]
    role = ""
    for suffix, tag in _ROLE_SUFFIXES.items():
        if module.endswith(suffix):
            module = module[: -len(suffix)]
            role = tag
            break
    identity = " ".join(part.capitalize() for part in module.split("_") if part)
    return f"[{identity or logger_name}]", role


def configure_logging(level: str | int = "INFO") -> None:
    """
    Configure logging once for the whole process.

    Installs the tagged format on the root handler. Safe to call more than once;
    the filter is only attached to handlers that do not carry it yet.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT)
    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers:
        if not any(isinstance(f, VerwatchLogFilter) for f in handler.filters):
            handler.addFilter(VerwatchLogFilter())
