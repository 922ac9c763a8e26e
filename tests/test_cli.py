"""Tests for the command-line interface."""

from __future__ import annotations

import itertools
import json
import threading
from typing import Any

import pytest

from eero import cli
from eero.config import ConfigStore
from eero.errors import RemoteError
from eero.filters import DeviceFilters


class FakeApi:
    """Routes (method, path) pairs to canned envelope payloads."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Any] = {}
        self.calls: list[dict[str, Any]] = []
        self.clients: list[DummyClient] = []

    def route(self, method: str, path: str, payload: Any) -> None:
        self.routes[(method, path)] = payload

    def handle(self, client: DummyClient, method: str, path: str, body: Any) -> bytes:
        self.calls.append(
            {"method": method, "path": path, "body": body, "token": client.token}
        )
        if (method, path) not in self.routes:
            raise AssertionError(f"Unexpected request: {method.upper()} {path}")
        payload = self.routes[(method, path)]
        if callable(payload):
            payload = payload()
        if isinstance(payload, Exception):
            raise payload
        return json.dumps({"meta": {"code": 200}, "data": payload}).encode("utf-8")

    def writes(self) -> list[dict[str, Any]]:
        return [call for call in self.calls if call["method"] != "get"]


class DummyClient:
    api: FakeApi

    def __init__(
        self, base_url: str | None = None, *, token: str | None = None, **_: object
    ) -> None:
        self.base_url = base_url
        self.token = token
        self.closed = False
        self.api.clients.append(self)

    def send(self, method: str, path: str, body: Any | None = None) -> bytes:
        return self.api.handle(self, method, path, body)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def api(
    monkeypatch,
    account_payload,
    device_payloads,
    profile_payloads,
    eero_payloads,
    reservation_payloads,
) -> FakeApi:
    fake = FakeApi()
    fake.route("get", "/2.2/account", account_payload)
    fake.route("get", "/2.2/networks/12345/devices", device_payloads)
    fake.route("get", "/2.2/networks/12345/profiles", profile_payloads)
    fake.route("get", "/2.2/networks/12345/eeros", eero_payloads)
    fake.route("get", "/2.2/networks/12345/reservations", reservation_payloads)
    monkeypatch.setattr(DummyClient, "api", fake, raising=False)
    monkeypatch.setattr("eero.cli.EeroClient", DummyClient)
    return fake


@pytest.fixture
def logged_in() -> ConfigStore:
    store = ConfigStore()
    store.save("tok_abc123", "12345")
    return store


def _inputs(*answers: str):
    iterator = iter(answers)
    return lambda prompt: next(iterator)


def test_login_saves_token_and_first_network(api, capsys):
    api.route("post", "/2.2/login", {"user_token": "tok_abc123"})
    api.route("post", "/2.2/login/verify", {})

    cli.login(input_fn=_inputs("test@example.com", "123456"))

    output = capsys.readouterr().out
    assert "Logged in to network: Home" in output
    assert "Login successful! Token saved." in output
    assert api.calls[0]["body"] == {"login": "test@example.com"}
    assert api.calls[1] == {
        "method": "post",
        "path": "/2.2/login/verify",
        "body": {"code": "123456"},
        "token": "tok_abc123",
    }
    stored = ConfigStore().load()
    assert stored.token == "tok_abc123"
    assert stored.network_id == "12345"
    assert all(client.closed for client in api.clients)


def test_login_with_network_choice(api, capsys):
    api.route("post", "/2.2/login", {"user_token": "tok_abc123"})
    api.route("post", "/2.2/login/verify", {})

    cli.login("cabin", input_fn=_inputs("test@example.com", "123456"))

    assert "Logged in to network: Cabin" in capsys.readouterr().out
    assert ConfigStore().load().network_id == "67890"


def test_login_keeps_token_when_account_lookup_fails(api, capsys):
    api.route("post", "/2.2/login", {"user_token": "tok_abc123"})
    api.route("post", "/2.2/login/verify", {})
    api.route("get", "/2.2/account", RemoteError("internal error", status_code=500))

    cli.login(input_fn=_inputs("test@example.com", "123456"))

    assert "couldn't fetch network info" in capsys.readouterr().out
    stored = ConfigStore().load()
    assert stored.token == "tok_abc123"
    assert stored.network_id == ""


def test_login_requires_identity(api):
    with pytest.raises(SystemExit, match="email or phone number is required"):
        cli.login(input_fn=_inputs("   "))

    assert api.calls == []


def test_login_reports_rejected_code(api):
    api.route("post", "/2.2/login", {"user_token": "tok_abc123"})
    api.route(
        "post", "/2.2/login/verify", RemoteError("verification.invalid", status_code=401)
    )

    with pytest.raises(SystemExit, match="Error: verification.invalid"):
        cli.login(input_fn=_inputs("test@example.com", "000000"))

    assert ConfigStore().has_token() is False


def test_logout_clears_session(logged_in, capsys):
    cli.main(["logout"])

    assert "Logged out. Token cleared." in capsys.readouterr().out
    assert logged_in.has_token() is False


def test_status_when_logged_out(api, capsys):
    cli.main(["status"])

    output = capsys.readouterr().out
    assert "Status: Not logged in" in output
    assert api.calls == []


def test_status_lists_account(api, logged_in, capsys):
    cli.main(["status"])

    output = capsys.readouterr().out
    assert "Status: Authenticated" in output
    assert "Email: test@example.com" in output
    assert "  - Home (Premium) *" in output
    assert "  - Cabin" in output
    assert f"Config: {logged_in.path}" in output


def test_status_with_expired_token(api, logged_in, capsys):
    api.route("get", "/2.2/account", RemoteError("unauthorized", status_code=401))

    cli.main(["status"])

    assert "Status: Token is invalid or expired" in capsys.readouterr().out


def test_commands_require_login(api):
    with pytest.raises(SystemExit, match="not logged in"):
        cli.main(["devices"])


def test_list_devices_prints_table_and_total(api, logged_in, capsys):
    cli.main(["devices"])

    output = capsys.readouterr().out
    assert "My Laptop" in output
    assert "Adults (prof1)" in output
    assert "NAS Server" in output
    assert output.rstrip().endswith("Total: 3 devices")


def test_list_devices_with_filters(api, logged_in, capsys):
    cli.main(["devices", "--profile", "Adults", "list", "--online"])

    output = capsys.readouterr().out
    assert "My Laptop" in output
    assert "NAS Server" not in output
    assert "Total: 1 devices (filtered by profile: Adults [prof1], online)" in output


def test_list_devices_empty_result(api, logged_in, capsys):
    cli.list_devices(DeviceFilters(guest=True))

    output = capsys.readouterr().out
    assert "No data to display" in output
    assert "Total: 0 devices (filtered by guest)" in output


def test_parser_merges_filter_flags():
    parser = cli.build_parser()

    args = parser.parse_args(["devices", "--wired", "monitor", "--offline"])

    assert args.action == "monitor"
    assert cli._filters_from_args(args) == DeviceFilters(wired=True, offline=True)
    assert args.interval is None


def test_pause_device_by_id_prefix(api, logged_in, capsys):
    api.route("put", "/2.2/networks/12345/devices/aabbccdd1122", {})

    cli.main(["devices", "pause", "aabb"])

    assert "Device aabbccdd1122 has been paused" in capsys.readouterr().out
    assert api.writes() == [
        {
            "method": "put",
            "path": "/2.2/networks/12345/devices/aabbccdd1122",
            "body": {"paused": True},
            "token": "tok_abc123",
        }
    ]


def test_block_and_rename_device(api, logged_in, capsys):
    api.route("put", "/2.2/networks/12345/devices/eeff00112233", {})

    cli.main(["devices", "unblock", "EE-FF-00-11-22-33"])
    cli.main(["devices", "rename", "phone", "Kitchen", "Tablet"])

    output = capsys.readouterr().out
    assert "Device eeff00112233 has been unblocked" in output
    assert "Device eeff00112233 has been renamed to 'Kitchen Tablet'" in output
    assert [call["body"] for call in api.writes()] == [
        {"blocked": False},
        {"nickname": "Kitchen Tablet"},
    ]


def test_unknown_device_exits_with_error(api, logged_in):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["devices", "pause", "zzz"])

    assert str(excinfo.value) == "Error: device not found: zzz"
    assert api.writes() == []


@pytest.mark.parametrize(
    ("command", "message"),
    [
        (lambda: cli.rename_device("phone", "   "), "a device name is required"),
        (lambda: cli.set_guest_password(""), "a guest network password is required"),
    ],
)
def test_blank_input_is_rejected_before_any_request(api, logged_in, command, message):
    with pytest.raises(SystemExit) as excinfo:
        command()

    assert str(excinfo.value) == f"Error: {message}"
    assert api.calls == []


def test_inspect_device_prints_json(api, logged_in, capsys, device_payloads):
    api.route(
        "get", "/2.2/networks/12345/devices/112233445566", device_payloads[2]
    )

    cli.main(["devices", "inspect", "nas server"])

    printed = json.loads(capsys.readouterr().out)
    assert printed["mac"] == "11:22:33:44:55:66"


def test_monitor_prints_changes(api, logged_in, device_payloads):
    offline = [dict(device_payloads[0], connected=False), *device_payloads[1:]]
    listings = itertools.chain([device_payloads, offline], itertools.repeat(offline))
    api.route("get", "/2.2/networks/12345/devices", lambda: next(listings))

    lines: list[str] = []
    ticks = itertools.count(1)

    class StopAfterTwo(threading.Event):
        def wait(self, timeout: float | None = None) -> bool:
            if next(ticks) >= 2:
                self.set()
            return self.is_set()

    cli.monitor_devices(interval=25, print_fn=lines.append, stop_event=StopAfterTwo())

    assert lines[0].startswith("Monitoring devices every 25 seconds.")
    assert lines[1].startswith("TIME")
    assert len(lines) == 3
    assert "aabbccdd1122" in lines[2]
    assert "My Laptop" in lines[2]
    assert "offline" in lines[2]


def test_monitor_reports_fetch_errors(api, logged_in):
    responses = iter([RemoteError("rate limited", status_code=429)])
    api.route("get", "/2.2/networks/12345/devices", lambda: next(responses))

    lines: list[str] = []

    class StopAfterOne(threading.Event):
        def wait(self, timeout: float | None = None) -> bool:
            self.set()
            return True

    cli.monitor_devices(print_fn=lines.append, stop_event=StopAfterOne())

    assert lines[-1].endswith("Error fetching devices: rate limited")


def test_list_profiles(api, logged_in, capsys):
    cli.main(["profiles"])

    output = capsys.readouterr().out
    assert "Adults" in output
    assert "paused" in output
    assert "Total: 2 profiles" in output


def test_pause_profile_by_name(api, logged_in, capsys):
    api.route("put", "/2.2/networks/12345/profiles/prof2", {})

    cli.main(["profiles", "unpause", "kids"])

    assert "Profile prof2 has been unpaused" in capsys.readouterr().out
    assert api.writes()[0]["body"] == {"paused": False}


def test_add_device_to_profile(api, logged_in, capsys, profile_payloads):
    details = dict(
        profile_payloads[1], devices=[{"url": "/2.2/networks/12345/devices/d1"}]
    )
    api.route("get", "/2.2/networks/12345/profiles/prof2", details)
    api.route("put", "/2.2/networks/12345/profiles/prof2", {})

    cli.main(["profiles", "add", "Kids", "My Laptop"])

    assert "Device aabbccdd1122 has been added to profile Kids" in (
        capsys.readouterr().out
    )
    assert api.writes()[0]["body"] == {
        "devices": [
            {"url": "/2.2/networks/12345/devices/d1"},
            {"url": "/2.2/networks/12345/devices/aabbccdd1122"},
        ]
    }


def test_remove_device_not_in_profile(api, logged_in, profile_payloads):
    api.route(
        "get", "/2.2/networks/12345/profiles/prof2", dict(profile_payloads[1], devices=[])
    )

    with pytest.raises(SystemExit, match="is not in profile Kids"):
        cli.main(["profiles", "remove", "kids", "aabb"])

    assert api.writes() == []


def test_list_eeros(api, logged_in, capsys):
    cli.main(["eeros"])

    output = capsys.readouterr().out
    assert "Living Room" in output
    assert "5/5" in output
    assert "Total: 2 eero nodes" in output


def test_reboot_eero_by_location(api, logged_in, capsys):
    api.route("post", "/2.2/eeros/8318691/reboot", {})

    cli.main(["eeros", "reboot", "bedroom"])

    assert "Rebooting eero 8318691 (Bedroom)..." in capsys.readouterr().out


def test_guest_status_shows_password_when_enabled(api, logged_in, capsys):
    api.route(
        "get",
        "/2.2/networks/12345/guestnetwork",
        {"enabled": True, "name": "Home Guest", "password": "guestpass123"},
    )

    cli.main(["guest"])

    output = capsys.readouterr().out
    assert "Status:   enabled" in output
    assert "Name:     Home Guest" in output
    assert "Password: guestpass123" in output


def test_guest_status_hides_password_when_disabled(api, logged_in, capsys):
    api.route(
        "get",
        "/2.2/networks/12345/guestnetwork",
        {"enabled": False, "name": "Home Guest", "password": "guestpass123"},
    )

    cli.main(["guest", "status"])

    assert "guestpass123" not in capsys.readouterr().out


def test_guest_enable_and_password(api, logged_in, capsys):
    api.route("put", "/2.2/networks/12345/guestnetwork", {})

    cli.main(["guest", "enable"])
    cli.main(["guest", "password", "s3cret-pass"])

    output = capsys.readouterr().out
    assert "Guest network has been enabled" in output
    assert "Guest network password has been updated" in output
    assert [call["body"] for call in api.writes()] == [
        {"enabled": True},
        {"password": "s3cret-pass"},
    ]


def test_reservations_list_add_remove(api, logged_in, capsys):
    api.route("post", "/2.2/networks/12345/reservations", {})
    api.route("delete", "/2.2/networks/12345/reservations/res2", {})

    cli.main(["reservations"])
    cli.main(["reservations", "add", "00:11:22:33:44:55", "192.168.1.30", "Smart", "TV"])
    cli.main(["reservations", "remove", "192.168.1.20"])

    output = capsys.readouterr().out
    assert "Printer" in output
    assert "Reservation created: 00:11:22:33:44:55 -> 192.168.1.30" in output
    assert "Reservation deleted" in output
    assert api.writes()[0]["body"] == {
        "ip": "192.168.1.30",
        "mac": "00:11:22:33:44:55",
        "description": "Smart TV",
    }
    assert api.writes()[1]["method"] == "delete"


def test_reboot_network_requires_confirmation(api, logged_in, capsys):
    cli.reboot_network(input_fn=_inputs("n"))

    assert "Reboot cancelled" in capsys.readouterr().out
    assert api.writes() == []


def test_reboot_network_with_yes_flag(api, logged_in, capsys):
    api.route("post", "/2.2/networks/12345/reboot", {})

    cli.main(["reboot", "--yes"])

    assert "Network reboot initiated." in capsys.readouterr().out
    assert api.writes()[0]["path"] == "/2.2/networks/12345/reboot"


def test_invalid_config_file_exits(api, capsys):
    ConfigStore().path.parent.mkdir(parents=True, exist_ok=True)
    ConfigStore().path.write_text("{broken", encoding="utf-8")

    with pytest.raises(SystemExit, match="Invalid config file"):
        cli.main(["devices"])
