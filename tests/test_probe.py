"""Tests for status probes and the status scan."""

from __future__ import annotations

import asyncio
import socket

import pytest

from camwatch.config import ProbeConfig
from camwatch.core import (
    CameraRegistry,
    SimulatedStatusProbe,
    StatusScanner,
    TcpStatusProbe,
    build_probe,
    scan_statuses,
)
from camwatch.models import CameraStatus


class FixedRandom:
    def __init__(self, value: float) -> None:
        self.value = value

    def random(self) -> float:
        return self.value


class RecordingProbe:
    def __init__(self, status: CameraStatus, registry=None) -> None:
        self.status = status
        self.registry = registry
        self.seen: list[str] = []
        self.checking_during_probe: list[bool] = []

    async def probe(self, camera):
        self.seen.append(camera.id)
        if self.registry is not None:
            current = self.registry.get(camera.id)
            self.checking_during_probe.append(current.is_checking)
        await asyncio.sleep(0)
        return self.status


@pytest.fixture
def registry(store):
    return CameraRegistry(store)


def test_scan_updates_active_cameras(registry, monkeypatch):
    online = registry.create_camera(name="a")
    deleted = registry.create_camera(name="b")
    registry.soft_delete(deleted.id)
    probe = RecordingProbe(CameraStatus.OFFLINE, registry)

    stamp = online.updated_at + 50
    monkeypatch.setattr("camwatch.core.registry.now_ms", lambda: stamp)
    monkeypatch.setattr("camwatch.core.probe.now_ms", lambda: stamp)
    updated = asyncio.run(scan_statuses(registry, probe))

    assert probe.seen == [online.id]
    assert probe.checking_during_probe == [True]
    assert [camera.id for camera in updated] == [online.id]
    camera = registry.get(online.id)
    assert camera.status is CameraStatus.OFFLINE
    assert camera.updated_at == stamp
    assert camera.last_check_at == stamp
    assert camera.is_checking is False
    assert registry.store.load()[0].status is CameraStatus.OFFLINE


def test_scan_with_no_cameras_is_noop(registry):
    probe = RecordingProbe(CameraStatus.ONLINE)

    assert asyncio.run(scan_statuses(registry, probe)) == []


def test_second_scan_is_rejected_while_running(registry):
    registry.create_camera(name="a")
    scanner = StatusScanner(registry, RecordingProbe(CameraStatus.ONLINE))

    async def scenario():
        first = asyncio.create_task(scanner.scan())
        await asyncio.sleep(0)
        assert scanner.is_running
        second = await scanner.scan()
        return await first, second

    first, second = asyncio.run(scenario())

    assert len(first) == 1
    assert second == []
    assert not scanner.is_running


def test_simulated_probe_keeps_or_toggles(make_camera):
    camera = make_camera("1", status=CameraStatus.ONLINE)

    steady = SimulatedStatusProbe(toggle_chance=0.05, rng=FixedRandom(0.5))
    flipping = SimulatedStatusProbe(toggle_chance=0.05, rng=FixedRandom(0.01))

    assert asyncio.run(steady.probe(camera)) is CameraStatus.ONLINE
    assert asyncio.run(flipping.probe(camera)) is CameraStatus.OFFLINE


def test_build_probe_respects_simulate_flag():
    assert isinstance(build_probe(ProbeConfig(simulate=True)), SimulatedStatusProbe)
    assert isinstance(build_probe(ProbeConfig()), TcpStatusProbe)


def test_tcp_probe_online_when_port_accepts(make_camera):
    async def scenario():
        server = await asyncio.start_server(
            lambda _reader, writer: writer.close(), "127.0.0.1", 0
        )
        port = server.sockets[0].getsockname()[1]
        probe = TcpStatusProbe(ProbeConfig(timeout=1.0))
        try:
            return await probe.probe(make_camera("1", ip=f"127.0.0.1:{port}"))
        finally:
            server.close()
            await server.wait_closed()

    assert asyncio.run(scenario()) is CameraStatus.ONLINE


def test_tcp_probe_offline_when_refused(make_camera):
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]

    probe = TcpStatusProbe(ProbeConfig(port=port, timeout=1.0))
    camera = make_camera("1", ip="127.0.0.1", status=CameraStatus.ONLINE)

    assert asyncio.run(probe.probe(camera)) is CameraStatus.OFFLINE



def test_bad_port_does_not_abort_scan(registry):
    async def scenario():
        server = await asyncio.start_server(
            lambda _reader, writer: writer.close(), "127.0.0.1", 0
        )
        port = server.sockets[0].getsockname()[1]
        good = registry.create_camera(name="good", ip=f"127.0.0.1:{port}")
        bad = registry.create_camera(name="bad", ip="127.0.0.1:70000")
        probe = TcpStatusProbe(ProbeConfig(timeout=1.0))
        try:
            await scan_statuses(registry, probe)
        finally:
            server.close()
            await server.wait_closed()
        return good.id, bad.id

    good_id, bad_id = asyncio.run(scenario())

    assert registry.get(good_id).status is CameraStatus.ONLINE
    assert registry.get(bad_id).status is CameraStatus.OFFLINE
    assert registry.get(good_id).last_check_at is not None
    assert registry.get(bad_id).updated_at >= registry.get(bad_id).last_check_at
