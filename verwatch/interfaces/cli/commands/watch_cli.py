"""
Watch command: run a monitored client in the foreground.

The terminal plays the host page: it loads the entry document, polls the
manifest, shows the update notification and maps keys to its actions.
"""

from __future__ import annotations

import argparse
import sys
import threading

from verwatch.app import Application
from verwatch.interfaces.cli.ui import (
    ConsoleUpdateListener,
    TableDisplay,
    print_error,
    print_info,
    print_warning,
)
from verwatch.interfaces.cli.utils import build_config, format_duration

WATCH_HELP = "Commands: [bold]r[/bold] refresh  [bold]d[/bold] dismiss  [bold]c[/bold] check  [bold]s[/bold] status  [bold]q[/bold] quit"


def dispatch_watch_command(app: Application, command: str) -> bool:
    """
    Apply one keyboard command to the running client.

    Returns:
        False when the command asks to quit, True otherwise
    """
    command = command.strip().lower()
    monitor = app.monitor

    if command in ("q", "quit", "exit"):
        return False
    if not command:
        return True
    if monitor is None:
        print_warning("Client not loaded yet")
        return True

    if command == "r":
        monitor.refresh()
    elif command == "d":
        if not monitor.dismiss():
            print_info("No update notification to dismiss")
    elif command == "c":
        if app.check_now():
            print_info("Deployed version differs from the loaded one")
        else:
            print_info("No new version detected")
    elif command == "s":
        snapshot = app.snapshot()
        if snapshot is not None:
            TableDisplay.show_snapshot(snapshot, title=f"Version Monitor (load #{app.loads})")
    else:
        print_warning(f"Unknown command: {command}")
    return True


def cmd_watch(args: argparse.Namespace) -> int:
    """
    Monitor a deployed client until interrupted.
    """
    try:
        app = Application(
            build_config(args),
            listeners=[ConsoleUpdateListener()],
            entry_location=args.entry_file,
        )
    except ValueError as e:
        print_error(f"Invalid monitor configuration: {e}")
        return 1

    print_info(
        f"Watching {app.manifest_url} every {format_duration(app.options.check_interval_s)} "
        f"(loaded from {app.entry_location})"
    )
    print_info(WATCH_HELP)
    app.start()

    try:
        while True:
            line = sys.stdin.readline()
            if not line:
                # stdin closed (running detached): keep polling until interrupted
                threading.Event().wait()
            if not dispatch_watch_command(app, line):
                break
    except KeyboardInterrupt:
        print_info("Interrupted")
    finally:
        app.stop()
    return 0
