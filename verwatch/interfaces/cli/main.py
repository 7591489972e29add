#!/usr/bin/env python3
"""
Main CLI entry point with argument parser and command dispatch.
"""

from __future__ import annotations

import argparse

from verwatch.__version__ import __version__
from verwatch.helpers.logging_helper import configure_logging
from verwatch.interfaces.cli.commands.check_cli import cmd_check
from verwatch.interfaces.cli.commands.serve_cli import cmd_serve
from verwatch.interfaces.cli.commands.stamp_cli import cmd_stamp
from verwatch.interfaces.cli.commands.watch_cli import cmd_watch
from verwatch.interfaces.cli.utils import build_config


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    p = argparse.ArgumentParser(
        prog="verwatch",
        description="verwatch - Build version stamping and stale-client update detection",
        epilog="Examples:\n"
        "  verwatch stamp --out dist                          # Stamp a build after bundling\n"
        "  verwatch stamp --out dist --dev                    # Stamp with a dev-<ms> token\n"
        "  verwatch check --base-url https://app.example.com  # One manual update check\n"
        "  verwatch watch --interval 60 --auto-refresh        # Monitor and reload on update\n"
        "  verwatch serve --dir dist --port 3003              # Serve a stamped build",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--config", help="extra YAML config file (applied after the standard locations)")
    p.add_argument("--log-level", dest="log_level", help="logging level (default: from config, INFO)")

    sub = p.add_subparsers(
        dest="cmd",
        title="commands",
        description="Available commands (use 'verwatch <command> --help' for command-specific help)",
    )

    # stamp: Post-build version stamping
    s = sub.add_parser("stamp", help="Write version.json and stamp the entry document")
    s.add_argument("--out", help="build output directory (default: ./dist)")
    s.add_argument("--entry", help="entry document inside the output directory (default: index.html)")
    s.add_argument("--meta-name", dest="meta_name", help="name of the version meta tag (default: app-version)")
    token = s.add_mutually_exclusive_group()
    token.add_argument("--token", help="use this version token instead of the current time")
    token.add_argument("--dev", action="store_true", help="use a dev-<ms> token for development builds")
    s.set_defaults(func=cmd_stamp)

    # check: One manual check
    s = sub.add_parser("check", help="Compare a loaded entry document with the deployed manifest once")
    s.add_argument("--base-url", dest="base_url", help="deployment origin (default: http://localhost:3003)")
    s.add_argument("--entry-file", dest="entry_file", help="local entry document standing in for the loaded client")
    s.add_argument("--meta-name", dest="meta_name", help="name of the version meta tag (default: app-version)")
    s.add_argument("--timeout", type=float, help="request timeout in seconds")
    s.set_defaults(func=cmd_check)

    # watch: Foreground monitor
    s = sub.add_parser("watch", help="Poll for new deployments and show the update notification")
    s.add_argument("--base-url", dest="base_url", help="deployment origin (default: http://localhost:3003)")
    s.add_argument("--entry-file", dest="entry_file", help="local entry document standing in for the loaded client")
    s.add_argument("--meta-name", dest="meta_name", help="name of the version meta tag (default: app-version)")
    s.add_argument("--interval", type=float, help="seconds between checks (default: 300)")
    s.add_argument("--timeout", type=float, help="request timeout in seconds")
    s.add_argument("--auto-refresh", dest="auto_refresh", action="store_true", help="reload automatically on update")
    s.add_argument("--no-notify", dest="no_notify", action="store_true", help="do not show the update notification")
    s.add_argument("--start-delay", dest="start_delay", type=float, help="seconds before the first check (default: 2)")
    s.set_defaults(func=cmd_watch)

    # serve: Static server for a stamped build
    s = sub.add_parser("serve", help="Serve a stamped build directory")
    s.add_argument("--dir", help="build output directory (default: ./dist)")
    s.add_argument("--entry", help="entry document served at / (default: index.html)")
    s.add_argument("--host", help="bind address (default: 0.0.0.0)")
    s.add_argument("--port", type=int, help="port (default: 3003)")
    s.set_defaults(func=cmd_serve)

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # If no command provided, show help
    if args.cmd is None:
        parser.print_help()
        return 0

    configure_logging(str(build_config(args).get("log_level", "INFO")))
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
