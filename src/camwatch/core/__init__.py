from __future__ import annotations

from .merge import merge_collections
from .probe import (
    SimulatedStatusProbe,
    StatusProbe,
    StatusScanner,
    TcpStatusProbe,
    build_probe,
    scan_statuses,
)
from .registry import CameraRegistry, camera_filter, new_camera_id
from .sync import RemoteStore, SyncOrchestrator, SyncState

__all__ = [
    "CameraRegistry",
    "RemoteStore",
    "SimulatedStatusProbe",
    "StatusProbe",
    "StatusScanner",
    "SyncOrchestrator",
    "SyncState",
    "TcpStatusProbe",
    "build_probe",
    "camera_filter",
    "merge_collections",
    "new_camera_id",
    "scan_statuses",
]
