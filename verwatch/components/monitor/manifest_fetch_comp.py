"""Deployed manifest fetcher.

GET {base_url}/version.json?<ms>

The manifest must never come from a browser or proxy cache, so every request
carries a cache-busting query and no-cache headers. Any failure is raised as
FetchError (MalformedManifestError for a bad body); callers treat both as
"no update detected" for this cycle.
"""

from __future__ import annotations

import logging

import requests

from verwatch.helpers.dto.version_dto import VersionManifest
from verwatch.helpers.exceptions import FetchError, MalformedManifestError
from verwatch.helpers.time_helper import now_ms

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
}

DEFAULT_MANIFEST_PATH = "/version.json"


def join_url(base_url: str, path: str = DEFAULT_MANIFEST_PATH) -> str:
    """Join base URL and path without doubling slashes."""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def cache_busted(url: str) -> str:
    """Append the current ms timestamp as a bare query parameter."""
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{now_ms()}"


def fetch_manifest(
    url: str,
    timeout_s: float,
    session: requests.Session | None = None,
) -> VersionManifest:
    """
    Fetch and parse the deployed manifest.

    Args:
        url: Full manifest URL (without cache-busting query)
        timeout_s: Bound on the request
        session: Optional requests session (module-level requests if None)

    Returns:
        Parsed VersionManifest

    Raises:
        FetchError: Network failure, timeout, or non-2xx status
        MalformedManifestError: Body is not a valid manifest
    """
    http = session or requests
    try:
        response = http.get(cache_busted(url), headers=NO_CACHE_HEADERS, timeout=timeout_s)
    except requests.exceptions.Timeout as e:
        raise FetchError(f"Timed out after {timeout_s}s fetching {url}") from e
    except requests.RequestException as e:
        raise FetchError(f"Failed to fetch {url}: {e}") from e

    if not 200 <= response.status_code < 300:
        raise FetchError(f"HTTP {response.status_code} fetching {url}")

    try:
        payload = response.json()
    except ValueError as e:
        raise MalformedManifestError(f"Manifest at {url} is not JSON") from e

    return VersionManifest.from_dict(payload)
