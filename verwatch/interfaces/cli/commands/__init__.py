"""
Commands package.
"""

from .check_cli import cmd_check
from .serve_cli import cmd_serve
from .stamp_cli import cmd_stamp
from .watch_cli import cmd_watch, dispatch_watch_command

__all__ = [
    "cmd_check",
    "cmd_serve",
    "cmd_stamp",
    "cmd_watch",
    "dispatch_watch_command",
]
