from __future__ import annotations

import json
import logging
from typing import Any, Optional

import requests

from core.config import AUTH_TOKEN, REQUEST_TIMEOUT, STORAGE_URL
from core.exceptions import RemoteRejected, SerializationError, TransportError

logger = logging.getLogger(__name__)


class DocumentStore:
    """Whole-document client for a path-addressed JSON store (`<base>/<path>.json`)."""

    def __init__(self, base_url: str = STORAGE_URL, *, auth_token: Optional[str] = AUTH_TOKEN,
                 timeout: float = REQUEST_TIMEOUT, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.auth_token = auth_token or None
        self.timeout = timeout
        self.session = session or requests.Session()

    def url_for(self, path: str) -> str:
        path = (path or "").strip("/")
        return f"{self.base_url}/{path}.json"

    def _params(self) -> dict:
        return {"auth": self.auth_token} if self.auth_token else {}

    # ---------- write ----------
    def write(self, path: str, document: Any) -> Any:
        """Overwrite the document at `path` in full. Returns the store's echo."""
        try:
            body = json.dumps(document)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Cannot encode document for {path!r}: {e}") from e

        url = self.url_for(path)
        try:
            r = self.session.put(url, data=body, params=self._params(),
                                 headers={"Content-Type": "application/json"}, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"PUT {url} failed: {e}") from e
        if not r.ok:
            raise RemoteRejected(r.status_code, r.reason or "")
        logger.debug("PUT %s -> %s (%d bytes)", url, r.status_code, len(body))
        return self._decode(r, url)

    # ---------- read ----------
    def read(self, path: str) -> Any:
        """Fetch the document at `path`. None when the path holds nothing or the store refuses."""
        url = self.url_for(path)
        try:
            r = self.session.get(url, params=self._params(), timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"GET {url} failed: {e}") from e
        if not r.ok:
            logger.warning("GET %s -> %s %s; treating as empty", url, r.status_code, r.reason)
            return None
        return self._decode(r, url)

    @staticmethod
    def _decode(r, url: str) -> Any:
        if not r.content or not r.content.strip():
            return None
        try:
            return r.json()
        except ValueError as e:
            raise SerializationError(f"Invalid JSON from {url}: {e}") from e
