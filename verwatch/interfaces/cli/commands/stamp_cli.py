"""
Stamp command: write version.json and stamp the entry document after a build.
"""

from __future__ import annotations

import argparse

from verwatch.components.build.token_comp import dev_token
from verwatch.helpers.exceptions import WriteError
from verwatch.interfaces.cli.ui import InfoPanel, print_error, print_warning
from verwatch.interfaces.cli.utils import build_config
from verwatch.workflows.build.stamp_build_wf import stamp_build_workflow


def cmd_stamp(args: argparse.Namespace) -> int:
    """
    Stamp a build output directory. Exit status 1 only when the manifest is not written.
    """
    config = build_config(args)
    output_dir = str(config.get("build.output_dir"))
    token = args.token or (dev_token() if args.dev else None)

    try:
        result = stamp_build_workflow(
            output_dir,
            token=token,
            entry_name=str(config.get("build.entry_document")),
            meta_name=str(config.get("build.meta_name")),
        )
    except WriteError as e:
        print_error(f"Version manifest not written: {e}")
        return 1

    content = f"""[bold]Version:[/bold] {result.version}
[bold]Build time:[/bold] {result.manifest.build_time}
[bold]Manifest:[/bold] {result.manifest_path}
[bold]Entry document:[/bold] {result.entry_path}"""

    if result.entry_stamped:
        InfoPanel.show("Build Stamped", content, "green")
    else:
        InfoPanel.show("Manifest Written, Entry Document NOT Stamped", content, "yellow")
        print_warning(f"{result.stamp_error}. Clients of this build will never see update notifications.")
    return 0
