from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from typing import Any

from camwatch.errors import CameraNotFoundError
from camwatch.models import Camera, CameraStats, CameraStatus, is_active, now_ms
from camwatch.storage import LocalStore

logger = logging.getLogger(__name__)

CameraPredicate = Callable[[Camera], bool]

PLACEHOLDER_IP = "192.168.1.xxx"
READONLY_FIELDS = frozenset({"id", "updated_at"})


def new_camera_id() -> str:
    return f"cam_{uuid.uuid4().hex}"


def _reject_unknown(fields: dict[str, Any]) -> None:
    unknown = set(fields).difference(Camera.model_fields)
    if unknown:
        raise ValueError(f"Unknown camera fields: {', '.join(sorted(unknown))}")


def camera_filter(
    query: str | None = None, status: CameraStatus | None = None
) -> CameraPredicate:
    """Build a predicate matching name/address/ip text and optional status."""
    term = (query or "").strip().lower()

    def _matches(camera: Camera) -> bool:
        if status is not None and camera.status is not status:
            return False
        if not term:
            return True
        return (
            term in camera.name.lower()
            or term in camera.address.lower()
            or term in camera.ip.lower()
        )

    return _matches


class CameraRegistry:
    """Owns the in-memory camera collection.

    Every mutation stamps ``updated_at`` and is written to the local store
    before returning.
    """

    def __init__(self, store: LocalStore) -> None:
        self._store = store
        self._cameras: list[Camera] = store.load()

    @property
    def store(self) -> LocalStore:
        return self._store

    @property
    def cameras(self) -> list[Camera]:
        return list(self._cameras)

    def snapshot(self) -> list[Camera]:
        return [camera.model_copy() for camera in self._cameras]

    def _index(self, camera_id: str) -> int:
        for index, camera in enumerate(self._cameras):
            if camera.id == camera_id:
                return index
        raise CameraNotFoundError(camera_id)

    def _stamp(self, previous: int = 0) -> int:
        # never move a record's clock backwards
        return max(now_ms(), previous)

    def _persist(self) -> None:
        self._store.save(self._cameras)

    def get(self, camera_id: str) -> Camera:
        return self._cameras[self._index(camera_id)]

    def create_camera(self, **fields: Any) -> Camera:
        stamp = self._stamp()
        data = {"status": CameraStatus.ONLINE, "last_check_at": stamp, **fields}
        _reject_unknown(fields)
        data["id"] = data.get("id") or new_camera_id()
        data["updated_at"] = stamp

        if any(camera.id == data["id"] for camera in self._cameras):
            raise ValueError(f"Camera '{data['id']}' already exists")

        camera = Camera.model_validate(data)
        self._cameras.append(camera)
        self._persist()
        logger.info("Created camera %s (%s)", camera.id, camera.name)
        return camera

    def create_pinned_camera(self, lat: float, lng: float, **fields: Any) -> Camera:
        """Create a camera at a picked map location with generated defaults."""
        defaults = {
            "name": f"Camera #{len(self.list_active()) + 1}",
            "ip": PLACEHOLDER_IP,
            "address": f"Pinned at: {lat:.4f}, {lng:.4f}",
        }
        return self.create_camera(**{**defaults, **fields, "lat": lat, "lng": lng})

    def update_camera(self, camera_id: str, **fields: Any) -> Camera:
        index = self._index(camera_id)
        current = self._cameras[index]

        readonly = READONLY_FIELDS.intersection(fields)
        if readonly:
            raise ValueError(f"Cannot change {', '.join(sorted(readonly))}")
        _reject_unknown(fields)

        data = current.model_dump()
        data.update(fields)
        data["updated_at"] = self._stamp(current.updated_at)
        updated = Camera.model_validate(data)

        self._cameras[index] = updated
        self._persist()
        logger.debug("Updated camera %s: %s", camera_id, ", ".join(sorted(fields)))
        return updated

    def soft_delete(self, camera_id: str) -> None:
        self.update_camera(camera_id, deleted=True)
        logger.info("Deleted camera %s", camera_id)

    def restore(self, camera_id: str) -> Camera:
        camera = self.update_camera(camera_id, deleted=False)
        logger.info("Restored camera %s", camera_id)
        return camera

    def list_active(self, predicate: CameraPredicate | None = None) -> list[Camera]:
        return [
            camera
            for camera in self._cameras
            if is_active(camera) and (predicate is None or predicate(camera))
        ]

    def stats(self) -> CameraStats:
        return CameraStats.from_cameras(self._cameras)

    def mark_checking(self, camera_ids: set[str], checking: bool = True) -> None:
        """Set the transient probing flag without touching ``updated_at``."""
        for camera in self._cameras:
            if camera.id in camera_ids:
                camera.is_checking = checking

    def replace_all(self, cameras: list[Camera]) -> None:
        self._cameras = list(cameras)
        self._persist()
