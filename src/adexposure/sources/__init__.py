"""Upstream signal sources: advertising identity and installed applications."""

from adexposure.sources.adb import AdbInventory
from adexposure.sources.base import (
    AdvertisingIdentitySource,
    AdvertisingInfo,
    ApplicationInventory,
    InstalledApp,
    StaticAdvertisingSource,
    StaticInventory,
    UnavailableAdvertisingSource,
)
from adexposure.sources.snapshot import SnapshotSource

__all__ = [
    "AdvertisingIdentitySource",
    "ApplicationInventory",
    "AdvertisingInfo",
    "InstalledApp",
    "StaticAdvertisingSource",
    "StaticInventory",
    "UnavailableAdvertisingSource",
    "SnapshotSource",
    "AdbInventory",
]
