"""Pytest configuration and fixtures for BSN.cloud client tests."""

import base64
from typing import Any

import pytest

from bsn_cloud.config import BsnCloudConfig

TEST_BASE_URL = "https://api.test.bsn.cloud/v1"
TEST_TOKEN_URL = "https://auth.test.bsn.cloud/token"
TEST_NETWORK = "Test Network"


@pytest.fixture
def config() -> BsnCloudConfig:
    """Fixture providing a client configuration with test endpoints."""
    return BsnCloudConfig(
        client_id="test_client",
        client_secret="test_secret",  # noqa: S106
        network_name=TEST_NETWORK,
        base_url=TEST_BASE_URL,
        token_url=TEST_TOKEN_URL,
    )


@pytest.fixture
def sample_token_response() -> dict[str, Any]:
    """Fixture providing a sample token endpoint response."""
    return {
        "access_token": "test_access_token",
        "expires_in": 3600,
        "token_type": "Bearer",
    }


@pytest.fixture
def sample_beacons() -> list[dict[str, Any]]:
    """Fixture providing one beacon of every kind."""
    return [
        {
            "mode": "iBeacon",
            "name": "Lobby",
            "major": 1,
            "minor": 2,
            "uuid": "f7826da6-4fa2-4e98-8024-bc5b71e0893e",
            "power": -59,
        },
        {
            "mode": "EddystoneUid",
            "name": "Entrance",
            "namespaceId": base64.b64encode(bytes(range(10))).decode(),
            "instanceId": base64.b64encode(bytes(range(6))).decode(),
            "power": -20,
        },
        {
            "mode": "EddystoneUrl",
            "name": "Promo",
            "url": "https://example.com",
            "power": -10,
        },
    ]


@pytest.fixture
def sample_player(sample_beacons: list[dict[str, Any]]) -> dict[str, Any]:
    """Fixture providing a sample player resource.

    Args:
        sample_beacons: Beacon fixture.

    Returns:
        A dictionary representing one element of a device listing.

    """
    return {
        "id": 12345,
        "serial": "XTD1234567",
        "model": "XT1145",
        "family": "Malibu",
        "registrationDate": "2024-01-15T10:30:00.123Z",
        "lastModifiedDate": "2024-03-01T08:00:00",
        "settings": {
            "name": "Lobby Player",
            "description": "Main lobby display",
            "concatNameAndSerial": False,
            "setupType": "BSN",
            "group": {"id": 1, "name": "Default"},
            "timezone": "UTC",
            "screen": {"idleColor": "#000000", "splashUrl": ""},
            "synchronization": {
                "status": {"period": "00:05:00"},
                "settings": {"period": "00:05:00"},
                "schedule": {"period": "01:00:00"},
                "content": {"start": "00:00:00", "end": "23:59:59"},
            },
            "network": {
                "hostname": "lobby-player",
                "proxyServer": "",
                "proxyBypass": [],
                "timeServers": ["time.brightsignnetwork.com"],
                "interfaces": [
                    {
                        "type": "Ethernet",
                        "name": "eth0",
                        "enabled": True,
                        "proto": "DHCPv4",
                        "ip": [],
                        "gateway": "",
                        "dns": [],
                        "contentDownloadEnabled": True,
                        "healthReportingEnabled": True,
                    },
                ],
            },
            "beacons": sample_beacons,
            "lws": {
                "username": "admin",
                "password": "secret",
                "enableUpdateNotifications": True,
            },
            "lastModifiedDate": None,
        },
        "status": {
            "group": {"id": 1, "name": "Default"},
            "presentation": {"id": 7, "name": "Welcome", "link": "/presentations/7"},
            "script": {"type": "Autorun", "version": "1.2.3", "plugins": []},
            "firmware": {"version": "8.5.42"},
            "storage": [
                {
                    "interface": "SD1",
                    "system": "exFAT",
                    "access": "Read, Write",
                    "stats": {"blockSize": 32768, "bytesFree": 1024},
                },
            ],
            "network": {
                "externalIp": "203.0.113.10",
                "interfaces": [
                    {
                        "type": "Ethernet",
                        "name": "eth0",
                        "proto": "DHCPv4,DHCPv6",
                        "mac": "90:ac:3f:00:00:01",
                        "ip": ["192.168.1.20/24"],
                        "gateway": "192.168.1.1",
                        "metric": 100,
                    },
                ],
            },
            "uptime": "3.04:05:06",
            "currentSettingsTimestamp": "2024-03-01T08:00:00.000+01:00",
            "currentScheduleTimestamp": "",
            "timezone": "UTC",
            "health": "Normal",
            "synchronization": {
                "settings": {"enabled": True},
                "schedule": {"enabled": True},
                "content": {"enabled": False},
            },
        },
        "subscription": {
            "id": 99,
            "device": {"id": 12345, "serial": "XTD1234567"},
            "type": "Control",
            "activityPeriod": "365.00:00:00",
            "status": "Active",
            "creationDate": "2024-01-15T10:30:00Z",
            "activationDate": "2024-01-15T10:31:00Z",
            "suspensionDate": None,
            "expirationDate": None,
            "lastModifiedDate": "2024-01-15T10:31:00Z",
        },
        "taggedGroups": [{"id": 3, "name": "Floor 1", "tags": {"site": "HQ"}}],
        "permissions": [],
    }


@pytest.fixture
def sample_devices_response(sample_player: dict[str, Any]) -> dict[str, Any]:
    """Fixture providing a sample device listing response."""
    return {"items": [sample_player], "isTruncated": False}


@pytest.fixture
def sample_networks_response() -> dict[str, Any]:
    """Fixture providing a sample network listing response."""
    return {
        "items": [
            {"id": "101", "name": TEST_NETWORK},
            {"id": "102", "name": "Other Network"},
        ],
    }
