"""Interfaces for the upstream signal sources consumed by the scanner."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from adexposure.errors import SourceUnavailableError


@dataclass(frozen=True)
class AdvertisingInfo:
    """Advertising identifier state reported by the platform."""

    id: str | None
    tracking_limited: bool


@dataclass(frozen=True)
class InstalledApp:
    """One entry of the installed application inventory."""

    package_id: str
    is_system_component: bool = False
    requested_permissions: frozenset[str] | None = None  # None: nothing declared

    @classmethod
    def create(
        cls,
        package_id: str,
        is_system_component: bool = False,
        requested_permissions: Iterable[str] | None = None,
    ) -> "InstalledApp":
        """Build an entry from any iterable of permission names."""
        permissions = None if requested_permissions is None else frozenset(requested_permissions)
        return cls(package_id, is_system_component, permissions)


@runtime_checkable
class AdvertisingIdentitySource(Protocol):
    """Supplies the advertising identifier and the tracking limitation flag."""

    def fetch(self) -> AdvertisingInfo:
        """Return the current advertising state or raise SourceUnavailableError."""
        ...


@runtime_checkable
class ApplicationInventory(Protocol):
    """Supplies the installed applications with their requested permissions."""

    def list_apps(self) -> Sequence[InstalledApp]:
        """Return all visible applications or raise SourceUnavailableError."""
        ...


class StaticAdvertisingSource:
    """Advertising source returning fixed values."""

    def __init__(self, advertising_id: str | None, tracking_limited: bool) -> None:
        self._info = AdvertisingInfo(advertising_id, tracking_limited)

    def fetch(self) -> AdvertisingInfo:
        return self._info


class UnavailableAdvertisingSource:
    """Advertising source for setups where the identifier cannot be read."""

    def __init__(self, reason: str = "advertising identity not available") -> None:
        self.reason = reason

    def fetch(self) -> AdvertisingInfo:
        raise SourceUnavailableError(self.reason, source="advertising")


class StaticInventory:
    """Inventory returning a fixed list of applications."""

    def __init__(self, apps: Iterable[InstalledApp]) -> None:
        self._apps = tuple(apps)

    def list_apps(self) -> Sequence[InstalledApp]:
        return self._apps
