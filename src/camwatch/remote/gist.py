"""GitHub Gist client holding the shared camera document."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import requests
from pydantic import ValidationError

from camwatch.config import SyncConfig
from camwatch.errors import (
    NotConfiguredError,
    RemoteConnectionError,
    RemoteDocumentError,
    RemoteWriteError,
)
from camwatch.models import (
    Camera,
    SyncCredentials,
    collection_from_json,
    collection_to_json,
)

logger = logging.getLogger(__name__)


def _require_configured(credentials: SyncCredentials) -> None:
    if not credentials.is_configured:
        raise NotConfiguredError(
            "Sync is not configured: set a GitHub token and gist id first"
        )


class GistClient:
    """Fetch/replace access to one file inside a gist.

    The gist has no versioning; whatever is fetched may be stale the moment
    it arrives. Blocking HTTP calls run in a worker thread.
    """

    def __init__(
        self, config: SyncConfig, session: requests.Session | None = None
    ) -> None:
        self._config = config
        self._session = session or requests.Session()

    def _url(self, document_id: str) -> str:
        return f"{self._config.api_url.rstrip('/')}/gists/{document_id.strip()}"

    def _headers(self, credential: str) -> dict[str, str]:
        return {
            "Authorization": f"token {credential.strip()}",
            "Accept": "application/vnd.github.v3+json",
            "Content-Type": "application/json",
        }

    def _get(self, credentials: SyncCredentials) -> Any:
        url = self._url(credentials.document_id)
        try:
            response = self._session.get(
                url,
                headers=self._headers(credentials.credential),
                timeout=self._config.timeout,
            )
        except requests.RequestException as exc:
            raise RemoteConnectionError(f"Cannot reach GitHub: {exc}") from exc

        if not response.ok:
            raise RemoteConnectionError(
                f"Cannot connect to GitHub gist (HTTP {response.status_code})"
            )

        try:
            return response.json()
        except ValueError as exc:
            raise RemoteDocumentError("GitHub returned a non-JSON response") from exc

    def _parse(self, gist: Any) -> list[Camera]:
        if not isinstance(gist, dict):
            raise RemoteDocumentError("GitHub response is not a gist object")
        files = gist.get("files") or {}
        if not isinstance(files, dict):
            raise RemoteDocumentError("Gist response has no file listing")
        entry = files.get(self._config.filename) or {}
        if not isinstance(entry, dict):
            raise RemoteDocumentError(
                f"Gist file '{self._config.filename}' has an unexpected shape"
            )
        content = entry.get("content") or "[]"
        if not isinstance(content, str):
            raise RemoteDocumentError(
                f"Gist file '{self._config.filename}' has no text content"
            )
        try:
            return collection_from_json(content)
        except ValidationError as exc:
            raise RemoteDocumentError(
                f"Gist file '{self._config.filename}' is not a camera list: {exc}"
            ) from exc

    def _patch(self, credentials: SyncCredentials, cameras: list[Camera]) -> None:
        content = collection_to_json(cameras)
        body = {"files": {self._config.filename: {"content": content}}}
        try:
            response = self._session.patch(
                self._url(credentials.document_id),
                headers=self._headers(credentials.credential),
                data=json.dumps(body),
                timeout=self._config.timeout,
            )
        except requests.RequestException as exc:
            raise RemoteWriteError(f"Cannot update gist: {exc}") from exc

        if not response.ok:
            raise RemoteWriteError(
                f"Error updating gist (HTTP {response.status_code})"
            )

    async def fetch(self, credentials: SyncCredentials) -> list[Camera]:
        _require_configured(credentials)
        logger.debug("Fetching gist %s", credentials.document_id)
        gist = await asyncio.to_thread(self._get, credentials)
        cameras = self._parse(gist)
        logger.debug("Fetched %d remote cameras", len(cameras))
        return cameras

    async def replace(
        self, credentials: SyncCredentials, cameras: list[Camera]
    ) -> None:
        _require_configured(credentials)
        logger.debug(
            "Writing %d cameras to gist %s", len(cameras), credentials.document_id
        )
        await asyncio.to_thread(self._patch, credentials, cameras)

    def close(self) -> None:
        self._session.close()
