"""Device snapshot files as a source of advertising and inventory signals.

A snapshot is a JSON document captured from a device:

    {
      "advertising": {"id": "38400000-8cf0-11bd-b23e-10b96e40000d",
                      "limit_ad_tracking": false},
      "packages": [
        {"package": "com.example.maps", "system": false,
         "permissions": ["android.permission.INTERNET", ...]}
      ]
    }

Either section may be missing; only the interface backed by the missing
section reports itself unavailable.
"""

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from adexposure.errors import SnapshotError
from adexposure.sources.base import AdvertisingInfo, InstalledApp

logger = logging.getLogger(__name__)


class SnapshotSource:
    """Serves both source interfaces from one snapshot file.

    The file is read on every call so a rescan picks up a refreshed snapshot.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _load(self) -> dict[str, Any]:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise SnapshotError(f"Snapshot not found: {self.path}", source="snapshot") from e
        except (OSError, json.JSONDecodeError) as e:
            raise SnapshotError(f"Cannot read snapshot {self.path}: {e}", source="snapshot") from e

        if not isinstance(data, dict):
            raise SnapshotError(
                f"Snapshot {self.path} must contain a JSON object", source="snapshot"
            )
        return data

    def fetch(self) -> AdvertisingInfo:
        """Read the advertising section."""
        section = self._load().get("advertising")
        if not isinstance(section, dict):
            raise SnapshotError(
                f"No advertising section in snapshot {self.path}", source="advertising"
            )

        advertising_id = section.get("id")
        if advertising_id is not None and not isinstance(advertising_id, str):
            raise SnapshotError(
                f"Advertising id must be a string, got {type(advertising_id).__name__}",
                source="advertising",
            )

        limited = section.get("limit_ad_tracking", True)
        if not isinstance(limited, bool):
            raise SnapshotError(
                f"limit_ad_tracking must be true or false, got {limited!r}",
                source="advertising",
            )
        return AdvertisingInfo(id=advertising_id, tracking_limited=limited)

    def list_apps(self) -> Sequence[InstalledApp]:
        """Read the packages section."""
        packages = self._load().get("packages")
        if not isinstance(packages, list):
            raise SnapshotError(
                f"No packages section in snapshot {self.path}", source="inventory"
            )

        apps = []
        for i, entry in enumerate(packages):
            if not isinstance(entry, dict) or "package" not in entry:
                raise SnapshotError(
                    f"Package entry {i} in {self.path} has no 'package' name",
                    source="inventory",
                )
            apps.append(self._parse_entry(i, entry))

        logger.debug("Loaded %d package(s) from %s", len(apps), self.path)
        return apps

    def _parse_entry(self, index: int, entry: dict[str, Any]) -> InstalledApp:
        """Validate one package entry; JSON strings are never read as flags."""
        system = entry.get("system", False)
        if not isinstance(system, bool):
            raise SnapshotError(
                f"Package entry {index} in {self.path}: 'system' must be true or false, "
                f"got {system!r}",
                source="inventory",
            )

        permissions = entry.get("permissions")
        if permissions is not None and (
            not isinstance(permissions, list)
            or not all(isinstance(p, str) for p in permissions)
        ):
            raise SnapshotError(
                f"Package entry {index} in {self.path}: 'permissions' must be a list "
                "of permission names",
                source="inventory",
            )

        return InstalledApp.create(
            package_id=str(entry["package"]),
            is_system_component=system,
            requested_permissions=permissions,
        )
