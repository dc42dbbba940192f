"""Exceptions raised by camwatch."""

from __future__ import annotations


class SyncError(Exception):
    """A sync attempt failed; neither store was modified."""


class NotConfiguredError(SyncError):
    """Credential or document id missing, no request was sent."""


class RemoteConnectionError(SyncError):
    """Fetching the remote document failed."""


class RemoteDocumentError(RemoteConnectionError):
    """The remote document was fetched but does not hold a camera list."""


class RemoteWriteError(SyncError):
    """Writing the merged collection back to the remote document failed."""


class StorageCorruptionError(ValueError):
    """A local data file exists but cannot be read."""


class CameraNotFoundError(KeyError):
    def __init__(self, camera_id: str) -> None:
        super().__init__(camera_id)
        self.camera_id = camera_id

    def __str__(self) -> str:
        return f"Camera '{self.camera_id}' not found"
