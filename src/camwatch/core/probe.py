"""Camera liveness probes and the status scan."""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Protocol

from camwatch.config import ProbeConfig
from camwatch.core.registry import CameraRegistry
from camwatch.models import Camera, CameraStatus, now_ms

logger = logging.getLogger(__name__)


class StatusProbe(Protocol):
    async def probe(self, camera: Camera) -> CameraStatus: ...


def _split_host_port(address: str, default_port: int) -> tuple[str, int]:
    host, sep, port = address.strip().rpartition(":")
    if sep and host and port.isdigit() and ":" not in host:
        return host, int(port)
    return address.strip(), default_port


class TcpStatusProbe:
    """Online when a TCP connection to the camera opens in time."""

    def __init__(self, config: ProbeConfig) -> None:
        self._config = config

    async def probe(self, camera: Camera) -> CameraStatus:
        host, port = _split_host_port(camera.ip, self._config.port)
        logger.debug("Probing %s at %s:%d", camera.id, host, port)
        try:
            _reader, writer = await asyncio.wait_for(
                asyncio.open_connection(host, port),
                timeout=self._config.timeout,
            )
        except (asyncio.TimeoutError, TimeoutError):
            logger.debug("No response from %s:%d (timeout)", host, port)
            return CameraStatus.OFFLINE
        except (OSError, OverflowError, ValueError) as exc:
            logger.debug("Failed to connect to %s:%d: %s", host, port, exc)
            return CameraStatus.OFFLINE

        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            pass
        return CameraStatus.ONLINE


class SimulatedStatusProbe:
    """Keeps the current status, flipping it now and then."""

    def __init__(
        self,
        toggle_chance: float = 0.05,
        delay: float = 0.0,
        rng: random.Random | None = None,
    ) -> None:
        self._toggle_chance = toggle_chance
        self._delay = delay
        self._rng = rng or random.Random()

    async def probe(self, camera: Camera) -> CameraStatus:
        if self._delay:
            await asyncio.sleep(self._delay * (1 + self._rng.random()))
        if self._rng.random() < self._toggle_chance:
            if camera.status is CameraStatus.ONLINE:
                return CameraStatus.OFFLINE
            return CameraStatus.ONLINE
        return camera.status


def build_probe(config: ProbeConfig) -> StatusProbe:
    if config.simulate:
        return SimulatedStatusProbe()
    return TcpStatusProbe(config)


class StatusScanner:
    """Probes every active camera and records the result as an update."""

    def __init__(
        self, registry: CameraRegistry, probe: StatusProbe, parallel: int = 20
    ) -> None:
        self._registry = registry
        self._probe = probe
        self._parallel = max(parallel, 1)
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    async def scan(self) -> list[Camera]:
        if self._running:
            logger.info("Status scan already running, ignoring request")
            return []

        targets = self._registry.list_active()
        if not targets:
            return []

        self._running = True
        semaphore = asyncio.Semaphore(self._parallel)
        self._registry.mark_checking({camera.id for camera in targets})

        async def _check(camera: Camera) -> tuple[str, CameraStatus]:
            async with semaphore:
                return camera.id, await self._probe.probe(camera)

        try:
            results = await asyncio.gather(*(_check(camera) for camera in targets))
        finally:
            self._registry.mark_checking({camera.id for camera in targets}, False)
            self._running = False

        updated: list[Camera] = []
        for camera_id, status in results:
            updated.append(
                self._registry.update_camera(
                    camera_id, status=status, last_check_at=now_ms()
                )
            )

        online = sum(1 for camera in updated if camera.status is CameraStatus.ONLINE)
        logger.info("Status scan: %d/%d cameras online", online, len(updated))
        return updated


async def scan_statuses(
    registry: CameraRegistry, probe: StatusProbe, parallel: int = 20
) -> list[Camera]:
    return await StatusScanner(registry, probe, parallel).scan()
