from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from camwatch.errors import StorageCorruptionError
from camwatch.models import (
    Camera,
    CameraStatus,
    SyncCredentials,
    collection_from_json,
    collection_to_json,
    now_ms,
)

logger = logging.getLogger(__name__)

CAMERAS_FILE = "cameras.json"
CREDENTIALS_FILE = "sync.json"


def seed_cameras() -> list[Camera]:
    stamp = now_ms()
    return [
        Camera(
            id="1",
            name="Ngã tư Phan Chu Trinh",
            ip="192.168.1.10",
            address="99 Phan Chu Trinh, P.9, Đà Lạt",
            lat=11.9472,
            lng=108.4593,
            status=CameraStatus.ONLINE,
            updated_at=stamp,
            last_check_at=stamp,
        ),
        Camera(
            id="2",
            name="Cổng Phường Lâm Viên",
            ip="192.168.1.11",
            address="Phường Lâm Viên, Đà Lạt",
            lat=11.9412,
            lng=108.4583,
            status=CameraStatus.OFFLINE,
            updated_at=stamp,
            last_check_at=stamp,
        ),
    ]


class LocalStore:
    """Whole-file JSON persistence of the camera collection.

    Two independent files live in the data directory: the collection and the
    sync credentials. Both are always read and written in full.
    """

    def __init__(self, data_dir: Path, seed: list[Camera] | None = None) -> None:
        self._data_dir = data_dir
        self._cameras_path = data_dir / CAMERAS_FILE
        self._credentials_path = data_dir / CREDENTIALS_FILE
        self._seed = seed

    @property
    def path(self) -> Path:
        return self._data_dir

    @property
    def cameras_path(self) -> Path:
        return self._cameras_path

    @property
    def credentials_path(self) -> Path:
        return self._credentials_path

    def ensure_dirs(self) -> None:
        self._data_dir.mkdir(parents=True, exist_ok=True)

    def _seed_collection(self) -> list[Camera]:
        if self._seed is None:
            return seed_cameras()
        return [camera.model_copy() for camera in self._seed]

    def _read_cameras(self) -> list[Camera]:
        try:
            return collection_from_json(self._cameras_path.read_bytes())
        except (OSError, ValidationError) as exc:
            raise StorageCorruptionError(
                f"Unreadable camera file: {self._cameras_path}\n{exc}"
            ) from exc

    def load(self) -> list[Camera]:
        """Return the stored collection.

        Falls back to the seed collection on first run and to an empty
        collection when the file is corrupt. Never raises for bad data.
        """
        if not self._cameras_path.exists():
            logger.debug("No camera file at %s, using seed", self._cameras_path)
            return self._seed_collection()

        try:
            cameras = self._read_cameras()
        except StorageCorruptionError as exc:
            logger.warning("%s; starting with an empty collection", exc)
            return []

        logger.debug("Loaded %d cameras from %s", len(cameras), self._cameras_path)
        return cameras

    def save(self, cameras: list[Camera]) -> None:
        cleared = [camera.model_copy() for camera in cameras]
        for camera in cleared:
            camera.is_checking = False
        self.ensure_dirs()
        self._cameras_path.write_text(
            collection_to_json(cleared, indent=2), encoding="utf-8"
        )
        logger.debug("Saved %d cameras to %s", len(cleared), self._cameras_path)

    def load_credentials(self) -> SyncCredentials:
        if not self._credentials_path.exists():
            return SyncCredentials()

        try:
            with self._credentials_path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
            return SyncCredentials.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            logger.warning(
                "Unreadable sync credentials %s: %s", self._credentials_path, exc
            )
            return SyncCredentials()

    def save_credentials(self, credentials: SyncCredentials) -> None:
        self.ensure_dirs()
        # holds the GitHub token: owner-only
        fd = os.open(
            self._credentials_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600
        )
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            os.chmod(self._credentials_path, 0o600)
            json.dump(credentials.model_dump(by_alias=True), handle, indent=2)

    def init(self) -> bool:
        """Create the data directory and write the seed collection.

        Returns False when a collection already exists.
        """
        self.ensure_dirs()
        if self._cameras_path.exists():
            return False
        self.save(self._seed_collection())
        return True
