from __future__ import annotations

from camwatch.models import Camera


def merge_collections(local: list[Camera], remote: list[Camera]) -> list[Camera]:
    """Merge two camera lists, last writer wins per id.

    The remote list is the baseline. A local copy replaces the remote one
    when its ``updated_at`` is greater or equal, so ties favor local. Records
    are never dropped for being absent on one side; deletion travels only as
    the ``deleted`` tombstone.
    """
    result: dict[str, Camera] = {camera.id: camera for camera in remote}

    for camera in local:
        current = result.get(camera.id)
        if current is None or (camera.updated_at or 0) >= (current.updated_at or 0):
            result[camera.id] = camera

    return list(result.values())
