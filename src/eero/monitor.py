"""Poll a network's device listing and report state transitions."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime

from .config import settings
from .errors import EeroError
from .filters import DeviceFilter
from .models import Device
from .network import EeroService
from .utils import logger

SNAPSHOT_FIELDS = ("connected", "paused", "blocked", "ip")


@dataclass(frozen=True)
class DeviceSnapshot:
    connected: bool
    paused: bool
    blocked: bool
    ip: str

    @classmethod
    def from_device(cls, device: Device) -> DeviceSnapshot:
        return cls(
            connected=device.connected,
            paused=device.paused,
            blocked=device.blocked,
            ip=device.ip,
        )


@dataclass(frozen=True)
class DeviceChange:
    """A device that appeared, or whose snapshot differs from the last tick."""

    device_id: str
    device: Device
    previous: DeviceSnapshot | None
    current: DeviceSnapshot
    timestamp: datetime

    @property
    def is_new(self) -> bool:
        return self.previous is None

    @property
    def changed_fields(self) -> frozenset[str]:
        if self.previous is None:
            return frozenset(SNAPSHOT_FIELDS)
        return frozenset(
            name
            for name in SNAPSHOT_FIELDS
            if getattr(self.previous, name) != getattr(self.current, name)
        )


ChangeHandler = Callable[[DeviceChange], None]
ErrorHandler = Callable[[EeroError, datetime], None]


@dataclass
class DeviceMonitor:
    service: EeroService
    network_id: str
    device_filter: DeviceFilter | None = None
    interval: float = field(default_factory=lambda: settings.monitor_interval)
    _snapshots: dict[str, DeviceSnapshot] = field(default_factory=dict, init=False)
    _primed: bool = field(default=False, init=False)

    @property
    def snapshots(self) -> dict[str, DeviceSnapshot]:
        return dict(self._snapshots)

    def observe(
        self, devices: Iterable[Device], *, now: datetime | None = None
    ) -> list[DeviceChange]:
        """Diff ``devices`` against the previous tick and store the new state.

        The first observation only records state and reports nothing. Devices
        missing from a tick keep their last snapshot.
        """
        timestamp = now or datetime.now()
        if self.device_filter is not None:
            devices = self.device_filter.apply(devices).devices

        changes: list[DeviceChange] = []
        for device in devices:
            snapshot = DeviceSnapshot.from_device(device)
            previous = self._snapshots.get(device.id)
            self._snapshots[device.id] = snapshot
            if not self._primed:
                continue
            if previous is None or previous != snapshot:
                changes.append(
                    DeviceChange(
                        device_id=device.id,
                        device=device,
                        previous=previous,
                        current=snapshot,
                        timestamp=timestamp,
                    )
                )

        self._primed = True
        if changes:
            logger.bind(network_id=self.network_id, change_count=len(changes)).info(
                "Detected device changes"
            )
        return changes

    def poll_once(self, *, now: datetime | None = None) -> list[DeviceChange]:
        devices = self.service.list_devices(self.network_id)
        return self.observe(devices, now=now)

    def run(
        self,
        on_change: ChangeHandler,
        *,
        on_error: ErrorHandler | None = None,
        stop_event: threading.Event | None = None,
    ) -> None:
        """Poll until ``stop_event`` is set, forwarding every change to ``on_change``."""
        stop = stop_event or threading.Event()
        logger.bind(network_id=self.network_id, interval=self.interval).info(
            "Device monitor started"
        )
        while not stop.is_set():
            try:
                changes = self.poll_once()
            except EeroError as exc:
                logger.bind(network_id=self.network_id, error=str(exc)).warning(
                    "Device monitor iteration failed"
                )
                if on_error is not None:
                    on_error(exc, datetime.now())
            else:
                for change in changes:
                    on_change(change)
            stop.wait(self.interval)
        logger.bind(network_id=self.network_id).info("Device monitor stopped")


__all__ = [
    "DeviceChange",
    "DeviceMonitor",
    "DeviceSnapshot",
    "SNAPSHOT_FIELDS",
]
