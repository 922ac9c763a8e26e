"""Pydantic models for payloads returned by the eero API."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .utils import extract_id

MAX_SIGNAL_BARS = 5


class Resource(BaseModel):
    """Base for every API object identified by a canonical URL."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    url: str = ""

    @property
    def id(self) -> str:
        return extract_id(self.url)


def _none_to_empty(value: Any) -> Any:
    return "" if value is None else value


class LoginResponse(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    user_token: str


class Network(Resource):
    name: str = ""
    premium: bool = Field(default=False, alias="premium_status")

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> Any:
        return _none_to_empty(value)

    @field_validator("premium", mode="before")
    @classmethod
    def _coerce_premium(cls, value: Any) -> Any:
        # Older payloads report a status string rather than a flag.
        if isinstance(value, str):
            return value.lower() in {"active", "true", "premium"}
        return bool(value)


class Account(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = ""
    email: str = ""
    phone: str = ""
    networks: list[Network] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> Any:
        return _none_to_empty(value)

    @field_validator("email", "phone", mode="before")
    @classmethod
    def _unwrap_value(cls, value: Any) -> Any:
        if isinstance(value, dict):
            value = value.get("value")
        return _none_to_empty(value)

    @field_validator("networks", mode="before")
    @classmethod
    def _unwrap_networks(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return value.get("data") or []
        return value or []


class ProfileRef(Resource):
    name: str = ""


class Device(Resource):
    mac: str = ""
    hostname: str = ""
    nickname: str = ""
    ip: str = ""
    connected: bool = False
    wireless: bool = False
    paused: bool = False
    blocked: bool = False
    is_private: bool = False
    is_guest: bool = False
    connection_type: str = ""
    device_type: str = ""
    manufacturer: str = ""
    profile: ProfileRef | None = None

    @field_validator(
        "mac",
        "hostname",
        "nickname",
        "ip",
        "connection_type",
        "device_type",
        "manufacturer",
        mode="before",
    )
    @classmethod
    def _coerce_strings(cls, value: Any) -> Any:
        return _none_to_empty(value)

    @property
    def display_name(self) -> str:
        """Best available name: nickname, then hostname, then MAC."""
        return self.nickname or self.hostname or self.mac

    @property
    def status(self) -> Literal["blocked", "paused", "online", "offline"]:
        if self.blocked:
            return "blocked"
        if self.paused:
            return "paused"
        return "online" if self.connected else "offline"

    @property
    def connection(self) -> Literal["wired", "wireless"]:
        return "wireless" if self.wireless else "wired"

    @property
    def profile_id(self) -> str:
        return self.profile.id if self.profile else ""

    @property
    def profile_name(self) -> str:
        return self.profile.name if self.profile else ""


class Profile(Resource):
    name: str = ""
    paused: bool = False


class ProfileMember(Resource):
    nickname: str = ""
    hostname: str = ""
    mac: str = ""

    @field_validator("nickname", "hostname", "mac", mode="before")
    @classmethod
    def _coerce_strings(cls, value: Any) -> Any:
        return _none_to_empty(value)


class ProfileDetails(Profile):
    devices: list[ProfileMember] = Field(default_factory=list)

    @field_validator("devices", mode="before")
    @classmethod
    def _coerce_devices(cls, value: Any) -> Any:
        return value or []


class Eero(Resource):
    serial: str = ""
    location: str = ""
    gateway: bool = False
    ip_address: str = ""
    status: str = ""
    model: str = ""
    os_version: str = ""
    wired: bool = False
    state: str = ""
    mesh_quality_bars: int = 0
    connected_clients_count: int = 0
    heartbeat_ok: bool = False
    is_primary_node: bool = False
    connection_type: str = ""

    @field_validator(
        "serial",
        "location",
        "ip_address",
        "status",
        "model",
        "os_version",
        "state",
        "connection_type",
        mode="before",
    )
    @classmethod
    def _coerce_strings(cls, value: Any) -> Any:
        return _none_to_empty(value)

    @field_validator("mesh_quality_bars", "connected_clients_count", mode="before")
    @classmethod
    def _coerce_counts(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("mesh_quality_bars")
    @classmethod
    def _clamp_signal(cls, value: int) -> int:
        return min(max(value, 0), MAX_SIGNAL_BARS)

    @property
    def connection(self) -> Literal["wired", "wireless"]:
        return "wired" if self.wired else "wireless"


class GuestNetwork(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    enabled: bool = False
    name: str = ""
    password: str = Field(default="", repr=False)

    @field_validator("name", "password", mode="before")
    @classmethod
    def _coerce_strings(cls, value: Any) -> Any:
        return _none_to_empty(value)


class Reservation(Resource):
    ip: str = ""
    mac: str = ""
    description: str = ""

    @field_validator("ip", "mac", "description", mode="before")
    @classmethod
    def _coerce_strings(cls, value: Any) -> Any:
        return _none_to_empty(value)


__all__ = [
    "Account",
    "Device",
    "Eero",
    "GuestNetwork",
    "LoginResponse",
    "Network",
    "Profile",
    "ProfileDetails",
    "ProfileMember",
    "ProfileRef",
    "Reservation",
    "Resource",
]
