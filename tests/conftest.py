"""Pytest fixtures for adexposure tests."""

import json

import pytest

from adexposure.errors import SourceUnavailableError
from adexposure.signatures.permissions import (
    ACCESS_COARSE_LOCATION,
    ACCESS_FINE_LOCATION,
    INTERNET,
)
from adexposure.sources.base import (
    InstalledApp,
    StaticAdvertisingSource,
    StaticInventory,
)

TRACKABLE_ID = "11111111-1111-1111-1111-111111111111"


def heavy_permissions(count: int = 11) -> list[str]:
    """Build a list of distinct, harmless permission names."""
    return [f"com.example.permission.P{i}" for i in range(count)]


class FailingInventory:
    """Inventory that always raises, like a device without package visibility."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error or SourceUnavailableError("QUERY_ALL_PACKAGES denied")

    def list_apps(self):
        raise self.error


class FailingAdvertisingSource:
    """Advertising source that always raises, like a device without Play Services."""

    def fetch(self):
        raise SourceUnavailableError("Play Services missing")


@pytest.fixture
def fixtures_dir(tmp_path):
    """Create a temporary fixtures directory."""
    return tmp_path


@pytest.fixture
def exposed_advertising():
    """Tracking not limited and a readable advertising id."""
    return StaticAdvertisingSource(TRACKABLE_ID, tracking_limited=False)


@pytest.fixture
def protected_advertising():
    """Tracking limited and no advertising id."""
    return StaticAdvertisingSource(None, tracking_limited=True)


@pytest.fixture
def one_risky_app_inventory():
    """One user app with location + network, plus harmless and system apps."""
    return StaticInventory(
        [
            InstalledApp.create("com.example.maps", False, [ACCESS_FINE_LOCATION, INTERNET]),
            InstalledApp.create("com.example.notes", False, [INTERNET]),
            InstalledApp.create(
                "com.android.systemui", True, [ACCESS_FINE_LOCATION, INTERNET, *heavy_permissions()]
            ),
        ]
    )


@pytest.fixture
def clean_inventory():
    """Apps that trigger no app-level signals."""
    return StaticInventory(
        [
            InstalledApp.create("com.example.notes", False, [INTERNET]),
            InstalledApp.create("com.example.clock", False, []),
        ]
    )


@pytest.fixture
def snapshot_data():
    """A device snapshot with an exposed id and a mix of apps."""
    return {
        "advertising": {"id": TRACKABLE_ID, "limit_ad_tracking": False},
        "packages": [
            {
                "package": "com.example.maps",
                "system": False,
                "permissions": [ACCESS_COARSE_LOCATION, INTERNET],
            },
            {
                "package": "com.example.social",
                "system": False,
                "permissions": [ACCESS_FINE_LOCATION, INTERNET, *heavy_permissions()],
            },
            {
                "package": "com.android.phone",
                "system": True,
                "permissions": [ACCESS_FINE_LOCATION, INTERNET, *heavy_permissions(20)],
            },
            {"package": "com.example.empty", "system": False},
        ],
    }


@pytest.fixture
def snapshot_file(fixtures_dir, snapshot_data):
    """Write the device snapshot to disk."""
    filepath = fixtures_dir / "device.json"
    filepath.write_text(json.dumps(snapshot_data))
    return filepath


@pytest.fixture
def protected_snapshot_file(fixtures_dir):
    """Snapshot of a hardened device with only harmless apps."""
    filepath = fixtures_dir / "hardened.json"
    filepath.write_text(
        json.dumps(
            {
                "advertising": {"id": None, "limit_ad_tracking": True},
                "packages": [{"package": "com.example.notes", "permissions": [INTERNET]}],
            }
        )
    )
    return filepath
