"""Typed operations for every eero resource, built on the transport."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from .client import EeroClient, api_path, decode_envelope
from .config import ConfigStore
from .errors import EeroError
from .models import (
    Account,
    Device,
    Eero,
    GuestNetwork,
    LoginResponse,
    Profile,
    ProfileDetails,
    Reservation,
)
from .utils import logger


class EeroService:
    """Interface for authenticating and managing resources of one eero account."""

    def __init__(
        self,
        client: EeroClient,
        *,
        store: ConfigStore | None = None,
        network_id: str | None = None,
    ) -> None:
        self._client = client
        self._store = store
        self._network_id = network_id or None

    @property
    def client(self) -> EeroClient:
        return self._client

    @property
    def store(self) -> ConfigStore | None:
        return self._store

    @property
    def network_id(self) -> str | None:
        return self._network_id

    def login(self, identity: str) -> str:
        """Start the login handshake; the API sends a code to ``identity``."""
        raw = self._client.send("post", api_path("login"), {"login": identity})
        response: LoginResponse = decode_envelope(raw, LoginResponse)
        logger.info("Login code requested")
        return response.user_token

    def login_verify(self, token: str, code: str) -> None:
        """Confirm ``token`` with the verification code sent by the API."""
        # The verify call authenticates with the unconfirmed token.
        self._client.token = token
        self._client.send("post", api_path("login", "verify"), {"code": code})
        logger.info("Login verified")

    def validate_token(self) -> bool:
        """Return True when the current token is accepted by the API."""
        if not self._client.token:
            return False
        try:
            self.get_account()
        except EeroError as exc:
            logger.bind(error=str(exc)).debug("Token validation failed")
            return False
        return True

    def get_account(self) -> Account:
        raw = self._client.send("get", api_path("account"))
        return decode_envelope(raw, Account)

    def ensure_network(self) -> str:
        """Return the active network ID, defaulting to the account's first network."""
        if self._network_id:
            return self._network_id

        account = self.get_account()
        if not account.networks:
            raise EeroError("no networks found on this account")

        network = account.networks[0]
        self.use_network(network.id)
        logger.bind(network_id=network.id, name=network.name).info(
            "Defaulted to first network on account"
        )
        return network.id

    def use_network(self, network_id: str) -> None:
        """Make ``network_id`` the active network and persist it if a store is set."""
        self._network_id = network_id
        if self._store is not None:
            self._store.save(self._client.token or "", network_id)

    def list_devices(self, network_id: str) -> list[Device]:
        """Return all devices known to the network, in server order."""
        raw = self._client.send("get", api_path("networks", network_id, "devices"))
        devices: list[Device] = decode_envelope(raw, list[Device])
        logger.bind(network_id=network_id, device_count=len(devices)).debug(
            "Fetched devices"
        )
        return devices

    def get_device_raw(self, network_id: str, device_id: str) -> dict[str, Any]:
        raw = self._client.send(
            "get", api_path("networks", network_id, "devices", device_id)
        )
        return decode_envelope(raw, dict[str, Any])

    def update_device(
        self, network_id: str, device_id: str, updates: Mapping[str, Any]
    ) -> None:
        """PUT a partial field map; the server merges it."""
        logger.bind(
            network_id=network_id, device_id=device_id, fields=sorted(updates)
        ).info("Updating device")
        self._client.send(
            "put",
            api_path("networks", network_id, "devices", device_id),
            dict(updates),
        )

    def pause_device(self, network_id: str, device_id: str, pause: bool) -> None:
        self.update_device(network_id, device_id, {"paused": pause})

    def block_device(self, network_id: str, device_id: str, block: bool) -> None:
        self.update_device(network_id, device_id, {"blocked": block})

    def set_device_nickname(
        self, network_id: str, device_id: str, nickname: str
    ) -> None:
        self.update_device(network_id, device_id, {"nickname": nickname})

    def list_profiles(self, network_id: str) -> list[Profile]:
        raw = self._client.send("get", api_path("networks", network_id, "profiles"))
        profiles: list[Profile] = decode_envelope(raw, list[Profile])
        logger.bind(network_id=network_id, profile_count=len(profiles)).debug(
            "Fetched profiles"
        )
        return profiles

    def get_profile(self, network_id: str, profile_id: str) -> ProfileDetails:
        raw = self._client.send(
            "get", api_path("networks", network_id, "profiles", profile_id)
        )
        return decode_envelope(raw, ProfileDetails)

    def get_profile_raw(self, network_id: str, profile_id: str) -> dict[str, Any]:
        raw = self._client.send(
            "get", api_path("networks", network_id, "profiles", profile_id)
        )
        return decode_envelope(raw, dict[str, Any])

    def update_profile(
        self, network_id: str, profile_id: str, updates: Mapping[str, Any]
    ) -> None:
        logger.bind(
            network_id=network_id, profile_id=profile_id, fields=sorted(updates)
        ).info("Updating profile")
        self._client.send(
            "put",
            api_path("networks", network_id, "profiles", profile_id),
            dict(updates),
        )

    def pause_profile(self, network_id: str, profile_id: str, pause: bool) -> None:
        self.update_profile(network_id, profile_id, {"paused": pause})

    def set_profile_devices(
        self, network_id: str, profile_id: str, device_urls: Sequence[str]
    ) -> None:
        """Replace the full, ordered member list of a profile."""
        self.update_profile(
            network_id,
            profile_id,
            {"devices": [{"url": url} for url in device_urls]},
        )

    def list_eeros(self, network_id: str) -> list[Eero]:
        raw = self._client.send("get", api_path("networks", network_id, "eeros"))
        eeros: list[Eero] = decode_envelope(raw, list[Eero])
        logger.bind(network_id=network_id, eero_count=len(eeros)).debug(
            "Fetched eero nodes"
        )
        return eeros

    def get_eero_raw(self, eero_id: str) -> dict[str, Any]:
        raw = self._client.send("get", api_path("eeros", eero_id))
        return decode_envelope(raw, dict[str, Any])

    def reboot_eero(self, eero_id: str) -> None:
        logger.bind(eero_id=eero_id).info("Rebooting eero node")
        self._client.send("post", api_path("eeros", eero_id, "reboot"))

    def get_guest_network(self, network_id: str) -> GuestNetwork:
        raw = self._client.send(
            "get", api_path("networks", network_id, "guestnetwork")
        )
        return decode_envelope(raw, GuestNetwork)

    def update_guest_network(
        self, network_id: str, updates: Mapping[str, Any]
    ) -> None:
        logger.bind(network_id=network_id, fields=sorted(updates)).info(
            "Updating guest network"
        )
        self._client.send(
            "put", api_path("networks", network_id, "guestnetwork"), dict(updates)
        )

    def enable_guest_network(self, network_id: str, enable: bool) -> None:
        self.update_guest_network(network_id, {"enabled": enable})

    def set_guest_network_password(self, network_id: str, password: str) -> None:
        self.update_guest_network(network_id, {"password": password})

    def reboot_network(self, network_id: str) -> None:
        logger.bind(network_id=network_id).info("Rebooting network")
        self._client.send("post", api_path("networks", network_id, "reboot"))

    def list_reservations(self, network_id: str) -> list[Reservation]:
        raw = self._client.send(
            "get", api_path("networks", network_id, "reservations")
        )
        return decode_envelope(raw, list[Reservation])

    def get_reservation_raw(
        self, network_id: str, reservation_id: str
    ) -> dict[str, Any]:
        raw = self._client.send(
            "get", api_path("networks", network_id, "reservations", reservation_id)
        )
        return decode_envelope(raw, dict[str, Any])

    def create_reservation(
        self, network_id: str, ip: str, mac: str, description: str = ""
    ) -> None:
        logger.bind(network_id=network_id, ip=ip, mac=mac).info(
            "Creating reservation"
        )
        self._client.send(
            "post",
            api_path("networks", network_id, "reservations"),
            {"ip": ip, "mac": mac, "description": description},
        )

    def delete_reservation(self, network_id: str, reservation_id: str) -> None:
        logger.bind(network_id=network_id, reservation_id=reservation_id).info(
            "Deleting reservation"
        )
        self._client.send(
            "delete",
            api_path("networks", network_id, "reservations", reservation_id),
        )


__all__ = ["EeroService"]
