#!/usr/bin/env python3
"""
Rich UI components for CLI - consistent interface across all commands.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from verwatch.helpers.dto.monitor_dto import MonitorSnapshot
from verwatch.helpers.dto.version_dto import VersionManifest

console = Console()

# Color scheme constants
COLOR_SUCCESS = "green"
COLOR_ERROR = "red"
COLOR_WARNING = "yellow"
COLOR_INFO = "cyan"
COLOR_UPDATE = "magenta"


class InfoPanel:
    """
    Simple panel for displaying status/info without progress tracking.
    """

    @staticmethod
    def show(title: str, content: str, border_style: str = COLOR_INFO):
        """Show a single info panel."""
        panel = Panel(content, title=f"[bold]{title}[/bold]", border_style=border_style, box=box.ROUNDED)
        console.print(panel)


class TableDisplay:
    """
    Formatted tables for status output.
    """

    @staticmethod
    def show_summary(title: str, data: dict[str, Any], border_style: str = COLOR_INFO):
        """Display a summary table."""
        table = Table(title=title, box=box.ROUNDED, show_header=False, border_style=border_style)
        table.add_column("Metric", style="bold")
        table.add_column("Value")

        for key, value in data.items():
            table.add_row(key, str(value))

        console.print(table)

    @staticmethod
    def show_snapshot(snapshot: MonitorSnapshot, title: str = "Version Monitor"):
        """Display a monitor snapshot."""
        TableDisplay.show_summary(
            title,
            {
                "Status": snapshot.status,
                "Current version": snapshot.current_version or "unresolved",
                "Update detected": "yes" if snapshot.has_update else "no",
                "Phase": snapshot.phase,
                "Detected version": snapshot.detected_version or "-",
                "Checks run": snapshot.checks_run,
                "Last check": format_ms(snapshot.last_check_ms),
                "Last error": snapshot.last_error or "-",
                "Listeners": snapshot.listeners,
            },
        )


def format_build_time(build_time: str) -> str:
    """Render an ISO-8601 build time in local time; unparseable values pass through."""
    if not build_time:
        return "unknown"
    try:
        parsed = datetime.fromisoformat(build_time.replace("Z", "+00:00"))
    except ValueError:
        return build_time
    return parsed.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def format_ms(value: int | None) -> str:
    if value is None:
        return "never"
    return datetime.fromtimestamp(value / 1000).strftime("%Y-%m-%d %H:%M:%S")


class ConsoleUpdateListener:
    """
    Terminal rendering of the update notification.

    Shows a panel with the two actions; the watch command maps keyboard input
    to refresh/dismiss on the monitor.
    """

    def on_update_detected(self, manifest: VersionManifest) -> None:
        content = (
            f"[bold]Version:[/bold] {manifest.version}\n"
            f"[bold]Built:[/bold] {format_build_time(manifest.build_time)}\n\n"
            "[bold]r[/bold] refresh now    [bold]d[/bold] later"
        )
        InfoPanel.show("New version available", content, COLOR_UPDATE)

    def on_dismiss(self) -> None:
        print_info("Update notification dismissed")

    def on_refresh_requested(self) -> None:
        print_info("Refreshing to load the latest version...")


def show_spinner(message: str, task_fn: Callable, *args, **kwargs):
    """
    Show a spinner while executing a task.
    Returns the result of task_fn.
    """
    with console.status(f"[bold {COLOR_INFO}]{message}[/bold {COLOR_INFO}]"):
        return task_fn(*args, **kwargs)


def print_success(message: str):
    """Print a success message."""
    console.print(f"[bold {COLOR_SUCCESS}]✓[/bold {COLOR_SUCCESS}] {message}")


def print_error(message: str):
    """Print an error message."""
    console.print(f"[bold {COLOR_ERROR}]✗[/bold {COLOR_ERROR}] {message}")


def print_warning(message: str):
    """Print a warning message."""
    console.print(f"[bold {COLOR_WARNING}]⚠[/bold {COLOR_WARNING}] {message}")


def print_info(message: str):
    """Print an info message."""
    console.print(f"[{COLOR_INFO}]ℹ[/{COLOR_INFO}] {message}")
