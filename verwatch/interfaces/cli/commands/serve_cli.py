"""
Serve command: host a stamped build directory with non-cacheable manifest and entry routes.
"""

from __future__ import annotations

import argparse

import uvicorn

from verwatch.interfaces.api.api_app import create_app
from verwatch.interfaces.cli.ui import print_info
from verwatch.interfaces.cli.utils import build_config


def cmd_serve(args: argparse.Namespace) -> int:
    """Serve the build output directory until interrupted."""
    config = build_config(args)
    dist_dir = str(config.get("build.output_dir"))
    host = str(config.get("server.host"))
    port = int(config.get("server.port"))

    api_app = create_app(dist_dir, entry_name=str(config.get("build.entry_document")))
    print_info(f"Serving {dist_dir} on http://{host}:{port}")
    uvicorn.run(api_app, host=host, port=port, log_level=str(config.get("log_level", "INFO")).lower())
    return 0
