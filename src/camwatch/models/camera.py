"""Camera records and their JSON wire format."""

from __future__ import annotations

import json
import time
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, TypeAdapter
from pydantic.alias_generators import to_camel


def now_ms() -> int:
    return int(time.time() * 1000)


class CameraStatus(str, Enum):
    ONLINE = "online"
    OFFLINE = "offline"


class Camera(BaseModel):
    """A fixed-location camera.

    ``updated_at`` drives conflict resolution during sync and must be
    stamped on every change. ``deleted`` is a tombstone: deleted cameras stay
    in storage and in sync payloads.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        validate_assignment=True,
    )

    id: str
    name: str = ""
    ip: str = ""
    address: str = ""
    lat: float = Field(default=0.0, ge=-90, le=90)
    lng: float = Field(default=0.0, ge=-180, le=180)
    status: CameraStatus = CameraStatus.ONLINE
    video_url: str | None = None
    updated_at: int = 0
    last_check_at: int | None = None
    deleted: bool = False

    # presentation-only, never persisted or synced
    _checking: bool = PrivateAttr(default=False)

    @property
    def is_checking(self) -> bool:
        return self._checking

    @is_checking.setter
    def is_checking(self, value: bool) -> None:
        self._checking = value

    @property
    def position(self) -> tuple[float, float]:
        return (self.lat, self.lng)

_collection_adapter = TypeAdapter(list[Camera])


def is_active(camera: Camera) -> bool:
    return not camera.deleted


def collection_to_data(cameras: list[Camera]) -> list[dict[str, Any]]:
    return [
        camera.model_dump(mode="json", by_alias=True, exclude_none=True)
        for camera in cameras
    ]


def collection_to_json(cameras: list[Camera], indent: int | None = None) -> str:
    return json.dumps(collection_to_data(cameras), indent=indent, ensure_ascii=False)


def collection_from_json(content: str | bytes) -> list[Camera]:
    """Parse a serialized collection.

    Raises ``pydantic.ValidationError`` for malformed JSON or records.
    """
    return _collection_adapter.validate_json(content)


class SyncCredentials(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    credential: str = ""
    document_id: str = ""

    @property
    def is_configured(self) -> bool:
        return bool(self.credential.strip()) and bool(self.document_id.strip())


class CameraStats(BaseModel):
    total: int = 0
    online: int = 0
    offline: int = 0

    @classmethod
    def from_cameras(cls, cameras: list[Camera]) -> CameraStats:
        active = [camera for camera in cameras if is_active(camera)]
        return cls(
            total=len(active),
            online=sum(1 for c in active if c.status is CameraStatus.ONLINE),
            offline=sum(1 for c in active if c.status is CameraStatus.OFFLINE),
        )
