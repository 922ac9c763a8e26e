"""Add and remove devices from eero profiles.

The eero API only accepts the complete member list of a profile, so every
change is a read-modify-write: the profile is fetched, the list is edited
locally and written back in full. Edits made by another client between the
read and the write are overwritten.
"""

from __future__ import annotations

from .client import api_path
from .errors import MembershipError
from .models import ProfileDetails
from .network import EeroService
from .utils import logger


class ProfileMembership:
    """Membership operations for profiles on top of :class:`EeroService`."""

    def __init__(self, service: EeroService) -> None:
        self._service = service

    @staticmethod
    def device_url(network_id: str, device_id: str) -> str:
        return api_path("networks", network_id, "devices", device_id)

    def add_device(
        self, network_id: str, profile_id: str, device_id: str
    ) -> ProfileDetails:
        """Append ``device_id`` to the profile and return the profile as read."""
        profile = self._service.get_profile(network_id, profile_id)
        members = [member.url for member in profile.devices]
        if any(member.id == device_id for member in profile.devices):
            raise MembershipError(
                f"device {device_id} is already in profile {profile.name or profile_id}"
            )

        members.append(self.device_url(network_id, device_id))
        logger.bind(
            network_id=network_id,
            profile_id=profile_id,
            device_id=device_id,
            member_count=len(members),
        ).info("Adding device to profile")
        self._service.set_profile_devices(network_id, profile_id, members)
        return profile

    def remove_device(
        self, network_id: str, profile_id: str, device_id: str
    ) -> ProfileDetails:
        """Drop ``device_id`` from the profile, keeping the order of the rest."""
        profile = self._service.get_profile(network_id, profile_id)
        remaining = [
            member.url for member in profile.devices if member.id != device_id
        ]
        if len(remaining) == len(profile.devices):
            raise MembershipError(
                f"device {device_id} is not in profile {profile.name or profile_id}"
            )

        logger.bind(
            network_id=network_id,
            profile_id=profile_id,
            device_id=device_id,
            member_count=len(remaining),
        ).info("Removing device from profile")
        self._service.set_profile_devices(network_id, profile_id, remaining)
        return profile


__all__ = ["ProfileMembership"]
