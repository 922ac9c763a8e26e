"""Compound, conjunctive predicates over device listings."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, fields

from .models import Device, Profile


@dataclass(frozen=True)
class DeviceFilters:
    """Optional predicates; every enabled one must hold for a device to match."""

    profile: str | None = None
    no_profile: bool = False
    wired: bool = False
    wireless: bool = False
    online: bool = False
    offline: bool = False
    guest: bool = False
    no_guest: bool = False
    paused: bool = False
    private: bool = False

    @property
    def active(self) -> bool:
        return any(getattr(self, field.name) for field in fields(self))


@dataclass(frozen=True)
class ProfileSelection:
    """Profile filter after resolution against the network's profiles."""

    query: str
    name: str
    profile_id: str | None = None

    @property
    def resolved(self) -> bool:
        return self.profile_id is not None


def select_profile(query: str, profiles: Iterable[Profile]) -> ProfileSelection:
    """Resolve a profile filter by ID or exact name.

    When nothing matches, the raw query is kept for a best-effort name
    comparison, so a typo yields an empty listing rather than an error.
    """
    needle = query.lower()
    for profile in profiles:
        if profile.id.lower() == needle or profile.name.lower() == needle:
            return ProfileSelection(query=query, name=profile.name, profile_id=profile.id)
    return ProfileSelection(query=query, name=query)


@dataclass(frozen=True)
class FilterResult:
    devices: list[Device]
    total: int
    description: str

    @property
    def count(self) -> int:
        return len(self.devices)


class DeviceFilter:
    """Evaluate :class:`DeviceFilters` against device listings."""

    def __init__(
        self, filters: DeviceFilters | None = None, profiles: Iterable[Profile] = ()
    ) -> None:
        self.filters = filters or DeviceFilters()
        self.selection: ProfileSelection | None = None
        if self.filters.profile:
            self.selection = select_profile(self.filters.profile, profiles)

    def _matches_profile(self, device: Device) -> bool:
        if self.selection is None:
            return True
        # Guest devices carry no usable profile assignment.
        if device.is_guest or device.profile is None:
            return False
        return (
            device.profile_name.lower() == self.selection.name.lower()
            or device.profile_id.lower() == self.selection.query.lower()
        )

    def matches(self, device: Device) -> bool:
        f = self.filters
        if not self._matches_profile(device):
            return False
        if f.no_profile and device.profile is not None:
            return False
        if f.wired and device.wireless:
            return False
        if f.wireless and not device.wireless:
            return False
        if f.online and not device.connected:
            return False
        if f.offline and device.connected:
            return False
        if f.guest and not device.is_guest:
            return False
        if f.no_guest and device.is_guest:
            return False
        if f.paused and not device.paused:
            return False
        if f.private and not device.is_private:
            return False
        return True

    def describe(self) -> str:
        """Human-readable list of the active predicates."""
        f = self.filters
        parts: list[str] = []
        if self.selection is not None:
            if self.selection.resolved:
                parts.append(
                    f"profile: {self.selection.name} [{self.selection.profile_id}]"
                )
            else:
                parts.append(f"profile: {self.selection.query}")
        flags = [
            (f.no_profile, "no profile"),
            (f.wired, "wired"),
            (f.wireless, "wireless"),
            (f.online, "online"),
            (f.offline, "offline"),
            (f.guest, "guest"),
            (f.no_guest, "no guest"),
            (f.paused, "paused"),
            (f.private, "private"),
        ]
        parts.extend(label for enabled, label in flags if enabled)
        return ", ".join(parts)

    def apply(self, devices: Iterable[Device]) -> FilterResult:
        listing = list(devices)
        matched = [device for device in listing if self.matches(device)]
        return FilterResult(
            devices=matched, total=len(listing), description=self.describe()
        )


__all__ = [
    "DeviceFilter",
    "DeviceFilters",
    "FilterResult",
    "ProfileSelection",
    "select_profile",
]
