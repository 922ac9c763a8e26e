"""Resolve free-form, human-supplied queries to canonical resource IDs.

Every resolver tries the same strategies in a fixed priority order:

1. exact canonical-ID equality,
2. canonical-ID prefix (abbreviated IDs),
3. a kind-specific secondary key (MAC, serial or name),
4. a kind-specific tertiary key (display name, location or IP).

Each strategy is applied to the whole listing, in listing order, before the
next one is tried, so an exact ID always wins over another resource's name.
All comparisons are case-insensitive. Names must match exactly; only IDs
support abbreviation.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

from .errors import NotFoundError, ValidationError
from .models import Device, Eero, Network, Profile, Reservation, Resource
from .utils import logger, normalize_mac

R = TypeVar("R", bound=Resource)
Matcher = Callable[[R, str], bool]


def _exact_id(candidate: Resource, query: str) -> bool:
    return candidate.id.lower() == query


def _id_prefix(candidate: Resource, query: str) -> bool:
    return candidate.id.lower().startswith(query)


def mac_matches(mac: str, query: str) -> bool:
    """Compare MACs with and without separators."""
    if not mac:
        return False
    return mac.lower() == query or normalize_mac(mac) == normalize_mac(query)


def resolve(
    kind: str,
    candidates: Iterable[R],
    query: str,
    *,
    secondary: Matcher | None = None,
    tertiary: Matcher | None = None,
) -> str:
    """Return the canonical ID of the first candidate matching ``query``."""
    needle = (query or "").strip().lower()
    if not needle:
        raise ValidationError(f"a {kind} identifier is required")

    listing: Sequence[R] = list(candidates)
    strategies: list[tuple[str, Matcher]] = [("id", _exact_id), ("prefix", _id_prefix)]
    if secondary is not None:
        strategies.append(("secondary", secondary))
    if tertiary is not None:
        strategies.append(("tertiary", tertiary))

    for strategy, matches in strategies:
        for candidate in listing:
            if matches(candidate, needle):
                logger.bind(kind=kind, strategy=strategy, resolved=candidate.id).debug(
                    "Resolved identifier"
                )
                return candidate.id

    raise NotFoundError(kind, query)


def resolve_device(devices: Iterable[Device], query: str) -> str:
    return resolve(
        "device",
        devices,
        query,
        secondary=lambda device, q: mac_matches(device.mac, q),
        tertiary=lambda device, q: device.display_name.lower() == q,
    )


def resolve_profile(profiles: Iterable[Profile], query: str) -> str:
    return resolve(
        "profile",
        profiles,
        query,
        secondary=lambda profile, q: profile.name.lower() == q,
    )


def resolve_eero(eeros: Iterable[Eero], query: str) -> str:
    return resolve(
        "eero",
        eeros,
        query,
        secondary=lambda eero, q: bool(eero.serial) and eero.serial.lower() == q,
        tertiary=lambda eero, q: q in eero.location.lower(),
    )


def resolve_reservation(reservations: Iterable[Reservation], query: str) -> str:
    return resolve(
        "reservation",
        reservations,
        query,
        secondary=lambda reservation, q: mac_matches(reservation.mac, q),
        tertiary=lambda reservation, q: reservation.ip.lower() == q,
    )


def resolve_network(networks: Iterable[Network], query: str) -> str:
    return resolve(
        "network",
        networks,
        query,
        secondary=lambda network, q: network.name.lower() == q,
    )


__all__ = [
    "mac_matches",
    "resolve",
    "resolve_device",
    "resolve_eero",
    "resolve_network",
    "resolve_profile",
    "resolve_reservation",
]
