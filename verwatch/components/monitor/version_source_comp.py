"""Current-version lookup from the loaded entry document.

The loaded client knows its own version only through the meta tag the build
stamped into the entry document. The document is loaded once per source
instance; a fresh source stands for a fresh page load.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

import requests
from bs4 import BeautifulSoup

from verwatch.components.build.entry_stamp_comp import DEFAULT_META_NAME
from verwatch.helpers.exceptions import UnresolvedVersionError

logger = logging.getLogger(__name__)

_REQUEST_TIMEOUT = 10  # seconds


def read_meta_version(html: str, meta_name: str = DEFAULT_META_NAME) -> str | None:
    """
    Extract the version token from an HTML document.

    Returns:
        The meta tag's content, or None if the tag is absent or empty
    """
    soup = BeautifulSoup(html, "html.parser")
    tag = soup.find("meta", attrs={"name": meta_name})
    if tag is None:
        return None
    content = tag.get("content")
    if isinstance(content, list):
        content = " ".join(content)
    return content or None


class EntryDocumentVersionSource:
    """
    Callable version source backed by an entry document.

    The location is either an http(s) URL or a local path. The document is
    loaded on first call and kept; later calls only re-read the meta tag.

    Raises UnresolvedVersionError from __call__ when the document cannot be
    loaded or carries no version tag.
    """

    def __init__(
        self,
        location: str | Path,
        meta_name: str = DEFAULT_META_NAME,
        session: requests.Session | None = None,
        timeout_s: float = _REQUEST_TIMEOUT,
    ):
        self.location = str(location)
        self.meta_name = meta_name
        self._session = session
        self._timeout_s = timeout_s
        self._document: str | None = None
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            if self._document is None:
                self._document = self._load()
            document = self._document

        version = read_meta_version(document, self.meta_name)
        if version is None:
            raise UnresolvedVersionError(f'No <meta name="{self.meta_name}"> in {self.location}')
        return version

    def _load(self) -> str:
        if self.location.startswith(("http://", "https://")):
            http = self._session or requests
            try:
                response = http.get(self.location, timeout=self._timeout_s)
                response.raise_for_status()
            except requests.RequestException as e:
                raise UnresolvedVersionError(f"Cannot load entry document {self.location}: {e}") from e
            logger.debug("Loaded entry document from %s", self.location)
            return response.text

        try:
            return Path(self.location).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise UnresolvedVersionError(f"Cannot read entry document {self.location}: {e}") from e
