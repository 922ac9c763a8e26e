"""Public package interface for the eero network client."""

from __future__ import annotations

from .cli import main as _cli_main
from .client import EeroClient, decode_envelope
from .config import ConfigStore, Settings, StoredConfig, settings
from .errors import (
    DecodeError,
    EeroError,
    MembershipError,
    NotFoundError,
    RemoteError,
    TransportError,
    ValidationError,
)
from .filters import DeviceFilter, DeviceFilters, FilterResult
from .models import (
    Account,
    Device,
    Eero,
    GuestNetwork,
    Network,
    Profile,
    ProfileDetails,
    Reservation,
)
from .monitor import DeviceChange, DeviceMonitor, DeviceSnapshot
from .network import EeroService
from .profiles import ProfileMembership
from .resolve import (
    resolve_device,
    resolve_eero,
    resolve_network,
    resolve_profile,
    resolve_reservation,
)

__all__ = [
    "Account",
    "ConfigStore",
    "DecodeError",
    "Device",
    "DeviceChange",
    "DeviceFilter",
    "DeviceFilters",
    "DeviceMonitor",
    "DeviceSnapshot",
    "Eero",
    "EeroClient",
    "EeroError",
    "EeroService",
    "FilterResult",
    "GuestNetwork",
    "MembershipError",
    "Network",
    "NotFoundError",
    "Profile",
    "ProfileDetails",
    "ProfileMembership",
    "RemoteError",
    "Reservation",
    "Settings",
    "StoredConfig",
    "TransportError",
    "ValidationError",
    "decode_envelope",
    "main",
    "resolve_device",
    "resolve_eero",
    "resolve_network",
    "resolve_profile",
    "resolve_reservation",
    "settings",
]


def main(argv: None | list[str] = None) -> None:
    """Entrypoint for the command-line interface."""
    _cli_main(argv)
