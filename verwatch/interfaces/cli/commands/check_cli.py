"""
Check command: one manual comparison of a loaded entry document against the deployed manifest.
"""

from __future__ import annotations

import argparse

from verwatch.app import Application
from verwatch.interfaces.cli.ui import InfoPanel, print_error, print_success, print_warning, show_spinner
from verwatch.interfaces.cli.utils import build_config


def cmd_check(args: argparse.Namespace) -> int:
    """
    Run a single manual check and report the result.
    """
    try:
        app = Application(build_config(args), entry_location=args.entry_file)
        monitor = app.build_monitor()

        has_update = show_spinner(f"Checking {app.manifest_url}...", monitor.manual_check)
        snapshot = monitor.snapshot()
    except ValueError as e:
        print_error(f"Invalid monitor configuration: {e}")
        return 1

    if snapshot.current_version is None:
        print_warning(f"No version tag found in {app.entry_location}; update detection is disabled for it")
        return 0

    if has_update:
        content = f"""[bold]Loaded:[/bold] {snapshot.current_version}
[bold]Deployed:[/bold] {snapshot.detected_version or "unknown"}"""
        InfoPanel.show("Update Available", content, "magenta")
        return 0

    if snapshot.last_error is not None:
        print_error(f"Version check failed: {snapshot.last_error}")
        return 1

    print_success(f"Up to date (version {snapshot.current_version})")
    return 0
