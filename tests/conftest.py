from __future__ import annotations

from typing import Any

import pytest


@pytest.fixture(autouse=True)
def _isolate_config_path(monkeypatch: pytest.MonkeyPatch, tmp_path):
    monkeypatch.setenv("EERO_CONFIG", str(tmp_path / "eero" / "config.json"))
    yield


@pytest.fixture
def device_payloads() -> list[dict[str, Any]]:
    return [
        {
            "url": "/2.2/networks/12345/devices/aabbccdd1122",
            "mac": "AA:BB:CC:DD:11:22",
            "hostname": "laptop",
            "nickname": "My Laptop",
            "ip": "192.168.1.100",
            "connected": True,
            "wireless": True,
            "paused": False,
            "blocked": False,
            "is_private": False,
            "is_guest": False,
            "connection_type": "wireless",
            "device_type": "computer",
            "manufacturer": "Apple",
            "profile": {"url": "/2.2/networks/12345/profiles/prof1", "name": "Adults"},
        },
        {
            "url": "/2.2/networks/12345/devices/eeff00112233",
            "mac": "EE:FF:00:11:22:33",
            "hostname": "phone",
            "nickname": None,
            "ip": "192.168.1.101",
            "connected": False,
            "wireless": True,
            "paused": False,
            "blocked": False,
            "is_private": True,
            "is_guest": False,
            "connection_type": "wireless",
            "device_type": "phone",
            "manufacturer": "Samsung",
            "profile": None,
        },
        {
            "url": "/2.2/networks/12345/devices/112233445566",
            "mac": "11:22:33:44:55:66",
            "hostname": "nas",
            "nickname": "NAS Server",
            "ip": "192.168.1.10",
            "connected": True,
            "wireless": False,
            "paused": False,
            "blocked": False,
            "is_private": False,
            "is_guest": False,
            "connection_type": "wired",
            "device_type": "server",
            "manufacturer": "Synology",
            "profile": None,
        },
    ]


@pytest.fixture
def profile_payloads() -> list[dict[str, Any]]:
    return [
        {"url": "/2.2/networks/12345/profiles/prof1", "name": "Adults", "paused": False},
        {"url": "/2.2/networks/12345/profiles/prof2", "name": "Kids", "paused": True},
    ]


@pytest.fixture
def eero_payloads() -> list[dict[str, Any]]:
    return [
        {
            "url": "/2.2/eeros/8318690",
            "serial": "SN12345678",
            "location": "Living Room",
            "gateway": True,
            "ip_address": "192.168.1.1",
            "status": "green",
            "model": "eero Pro 6E",
            "os_version": "v7.1.1",
            "wired": True,
            "state": "ONLINE",
            "mesh_quality_bars": 5,
            "connected_clients_count": 12,
            "heartbeat_ok": True,
            "is_primary_node": True,
        },
        {
            "url": "/2.2/eeros/8318691",
            "serial": "SN87654321",
            "location": "Bedroom",
            "gateway": False,
            "ip_address": "192.168.1.2",
            "status": "green",
            "model": "eero 6",
            "os_version": "v7.1.1",
            "wired": False,
            "state": "ONLINE",
            "mesh_quality_bars": 3,
            "connected_clients_count": 3,
            "heartbeat_ok": True,
            "is_primary_node": False,
        },
    ]


@pytest.fixture
def reservation_payloads() -> list[dict[str, Any]]:
    return [
        {
            "url": "/2.2/networks/12345/reservations/res1",
            "ip": "192.168.1.10",
            "mac": "11:22:33:44:55:66",
            "description": "NAS Server",
        },
        {
            "url": "/2.2/networks/12345/reservations/res2",
            "ip": "192.168.1.20",
            "mac": "AA:BB:CC:DD:EE:FF",
            "description": "Printer",
        },
    ]


@pytest.fixture
def account_payload() -> dict[str, Any]:
    return {
        "name": "Test User",
        "email": {"value": "test@example.com", "verified": True},
        "phone": {"value": "+15555550100", "verified": True},
        "networks": {
            "count": 2,
            "data": [
                {
                    "url": "/2.2/networks/12345",
                    "name": "Home",
                    "premium_status": "active",
                },
                {"url": "/2.2/networks/67890", "name": "Cabin"},
            ],
        },
    }
