"""Fetch, merge, write back, then commit locally."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Protocol

from camwatch.core.merge import merge_collections
from camwatch.core.registry import CameraRegistry
from camwatch.errors import NotConfiguredError
from camwatch.models import Camera, SyncCredentials

logger = logging.getLogger(__name__)


class SyncState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    MERGING_WRITING = "merging+writing"


class RemoteStore(Protocol):
    async def fetch(self, credentials: SyncCredentials) -> list[Camera]: ...

    async def replace(
        self, credentials: SyncCredentials, cameras: list[Camera]
    ) -> None: ...


class SyncOrchestrator:
    """Runs one sync at a time with all-or-nothing commit.

    The local store is written only after the remote write-back succeeded.
    Any failure leaves both stores as they were and propagates the
    ``SyncError`` to the caller.
    """

    def __init__(self, registry: CameraRegistry, remote: RemoteStore) -> None:
        self._registry = registry
        self._remote = remote
        self._state = SyncState.IDLE

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def is_syncing(self) -> bool:
        return self._state is not SyncState.IDLE

    async def request_sync(self) -> list[Camera] | None:
        """Sync with the remote document.

        Returns the committed collection, or ``None`` when another sync is
        already in flight.
        """
        if self.is_syncing:
            logger.info("Sync already in progress (%s), ignoring request", self._state)
            return None

        credentials = self._registry.store.load_credentials()
        if not credentials.is_configured:
            raise NotConfiguredError(
                "Sync is not configured: set a GitHub token and gist id first"
            )

        try:
            self._state = SyncState.FETCHING
            remote = await self._remote.fetch(credentials)

            self._state = SyncState.MERGING_WRITING
            local = self._registry.snapshot()
            merged = merge_collections(local, remote)
            logger.debug(
                "Merged %d local and %d remote cameras into %d",
                len(local),
                len(remote),
                len(merged),
            )
            await self._remote.replace(credentials, merged)

            # re-read the store: edits saved during the round trip, by this
            # process or another one, are newer than ``merged`` and stay
            # pending for the next sync
            current = self._registry.store.load()
            committed = merge_collections(current, merged)
            self._registry.replace_all(committed)
        finally:
            self._state = SyncState.IDLE

        logger.info("Sync complete: %d cameras", len(committed))
        return committed
