"""
FastAPI application serving a stamped build output directory.

Routes:
- GET /version.json  manifest, never cacheable
- GET /              entry document, never cacheable (it carries the version tag)
- everything else    static files from the build directory
"""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from verwatch.__version__ import __version__
from verwatch.components.build.entry_stamp_comp import DEFAULT_ENTRY_DOCUMENT
from verwatch.components.build.manifest_writer_comp import MANIFEST_FILENAME
from verwatch.components.monitor.manifest_fetch_comp import NO_CACHE_HEADERS

logger = logging.getLogger(__name__)


def create_app(dist_dir: str | Path, entry_name: str = DEFAULT_ENTRY_DOCUMENT) -> FastAPI:
    """
    Build the static server for one build output directory.

    Args:
        dist_dir: Directory holding version.json and the entry document
        entry_name: Entry document served at /
    """
    root = Path(dist_dir).resolve()
    api_app = FastAPI(title="verwatch", version=__version__)

    # Global exception handler
    @api_app.exception_handler(Exception)
    async def exception_handler(request: Request, exc: Exception):
        logger.exception(f"[API] Exception: {exc}")
        return JSONResponse(status_code=500, content={"error": str(exc)})

    @api_app.get(f"/{MANIFEST_FILENAME}")
    async def serve_manifest():
        """Serve the deployed version manifest."""
        manifest_path = root / MANIFEST_FILENAME
        if manifest_path.is_file():
            return FileResponse(str(manifest_path), media_type="application/json", headers=NO_CACHE_HEADERS)
        logger.warning("[API] %s requested but missing from %s", MANIFEST_FILENAME, root)
        return JSONResponse({"error": "Version manifest not found"}, status_code=404, headers=NO_CACHE_HEADERS)

    @api_app.get("/")
    async def serve_entry_document():
        """Serve the stamped entry document."""
        entry_path = root / entry_name
        if entry_path.is_file():
            return FileResponse(str(entry_path), media_type="text/html", headers=NO_CACHE_HEADERS)
        return JSONResponse({"error": "Entry document not found"}, status_code=404)

    if root.is_dir():
        api_app.mount("/", StaticFiles(directory=str(root)), name="static")
    else:
        logger.warning("[API] Build directory %s does not exist; serving manifest/entry routes only", root)

    return api_app
