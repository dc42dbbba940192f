"""Tests for the last-writer-wins merge."""

from __future__ import annotations

from camwatch.core import CameraRegistry, merge_collections
from camwatch.models import CameraStatus, is_active


def _by_id(cameras):
    return {camera.id: camera for camera in cameras}


def test_remote_newer_wins(make_camera):
    local = [make_camera("1", updated_at=100, status=CameraStatus.ONLINE)]
    remote = [make_camera("1", updated_at=200, status=CameraStatus.OFFLINE)]

    merged = _by_id(merge_collections(local, remote))

    assert merged["1"].status is CameraStatus.OFFLINE
    assert merged["1"].updated_at == 200


def test_local_only_record_is_kept(make_camera):
    local = [make_camera("2", updated_at=50)]

    merged = merge_collections(local, [])

    assert merged == local


def test_local_tombstone_newer_wins(make_camera):
    local = [make_camera("3", updated_at=300, deleted=True)]
    remote = [make_camera("3", updated_at=100, deleted=False)]

    merged = merge_collections(local, remote)

    assert merged[0].deleted is True
    assert not is_active(merged[0])


def test_remote_tombstone_newer_wins(make_camera):
    local = [make_camera("3", updated_at=100)]
    remote = [make_camera("3", updated_at=300, deleted=True)]

    merged = merge_collections(local, remote)

    assert merged[0].deleted is True


def test_newer_undelete_revives_record(make_camera):
    local = [make_camera("4", updated_at=500, deleted=False, name="Back")]
    remote = [make_camera("4", updated_at=400, deleted=True)]

    merged = merge_collections(local, remote)

    assert merged[0].deleted is False
    assert merged[0].name == "Back"


def test_tie_favors_local(make_camera):
    local = [make_camera("5", updated_at=700, name="local edit")]
    remote = [make_camera("5", updated_at=700, name="remote edit")]

    merged = merge_collections(local, remote)

    assert merged[0].name == "local edit"


def test_local_newer_wins(make_camera):
    local = [make_camera("6", updated_at=900, name="new")]
    remote = [make_camera("6", updated_at=800, name="old")]

    assert merge_collections(local, remote)[0].name == "new"


def test_missing_timestamp_counts_as_zero(make_camera):
    local = [make_camera("7", updated_at=0, name="local")]
    remote = [make_camera("7", updated_at=1, name="remote")]

    assert merge_collections(local, remote)[0].name == "remote"


def test_remote_only_record_survives(make_camera):
    local = [make_camera("a", updated_at=10)]
    remote = [make_camera("b", updated_at=10)]

    merged = merge_collections(local, remote)

    assert [camera.id for camera in merged] == ["b", "a"]


def test_merge_never_drops_an_id(make_camera):
    local = [
        make_camera("1", updated_at=5),
        make_camera("2", updated_at=50, deleted=True),
        make_camera("3", updated_at=1),
    ]
    remote = [
        make_camera("2", updated_at=40),
        make_camera("3", updated_at=2),
        make_camera("4", updated_at=3),
    ]

    merged = merge_collections(local, remote)

    assert {camera.id for camera in merged} == {"1", "2", "3", "4"}
    assert len(merged) == 4


def test_merge_is_idempotent(make_camera):
    local = [
        make_camera("1", updated_at=100),
        make_camera("2", updated_at=300, deleted=True),
    ]
    remote = [
        make_camera("1", updated_at=200, status=CameraStatus.OFFLINE),
        make_camera("2", updated_at=100),
        make_camera("9", updated_at=10),
    ]

    once = merge_collections(local, remote)
    twice = merge_collections(once, remote)

    assert twice == once


def test_both_sides_converge_after_adopting_result(make_camera):
    a = [make_camera("1", updated_at=100, name="a"), make_camera("2", updated_at=5)]
    b = [make_camera("1", updated_at=150, name="b"), make_camera("3", updated_at=7)]

    merged = merge_collections(a, b)

    assert _by_id(merge_collections(merged, b)) == _by_id(merge_collections(b, merged))
    assert _by_id(merged)["1"].name == "b"


def test_merged_tombstone_hidden_from_active_listing(make_camera, store):
    store.save([make_camera("3", updated_at=100)])
    registry = CameraRegistry(store)

    merged = merge_collections(
        registry.cameras, [make_camera("3", updated_at=300, deleted=True)]
    )
    registry.replace_all(merged)

    assert registry.list_active() == []
    assert len(registry.cameras) == 1
