"""camwatch - camera fleet registry with conflict-free gist sync."""

from __future__ import annotations

from importlib.metadata import version

from .config import ProbeConfig, Settings, StorageConfig, SyncConfig, get_settings
from .core import CameraRegistry, SyncOrchestrator, merge_collections
from .models import Camera, CameraStatus, SyncCredentials
from .remote import GistClient
from .storage import LocalStore

__all__ = [
    "Camera",
    "CameraRegistry",
    "CameraStatus",
    "GistClient",
    "LocalStore",
    "ProbeConfig",
    "Settings",
    "StorageConfig",
    "SyncConfig",
    "SyncCredentials",
    "SyncOrchestrator",
    "__version__",
    "get_settings",
    "merge_collections",
]

__version__ = version("camwatch")
