"""Data models for camwatch."""

from camwatch.models.camera import (
    Camera,
    CameraStats,
    CameraStatus,
    SyncCredentials,
    collection_from_json,
    collection_to_data,
    collection_to_json,
    is_active,
    now_ms,
)

__all__ = [
    "Camera",
    "CameraStats",
    "CameraStatus",
    "SyncCredentials",
    "collection_from_json",
    "collection_to_data",
    "collection_to_json",
    "is_active",
    "now_ms",
]
