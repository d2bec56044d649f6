"""Exposure scanner that gathers signals and applies the scoring policy.

The two upstream queries degrade independently:
- advertising identity failure -> no id, tracking assumed limited
- inventory failure or empty list -> app counts zeroed, INFO finding added

Anything else that goes wrong is turned into a failed report. scan() never
raises.
"""

import logging
from collections.abc import Iterable

from adexposure.scanner.results import ExposureReport, SignalTuple
from adexposure.scanner.scoring import evaluate
from adexposure.signatures.permissions import (
    PERMISSION_THRESHOLD,
    requests_location,
    requests_network,
)
from adexposure.sources.base import (
    AdvertisingIdentitySource,
    AdvertisingInfo,
    ApplicationInventory,
    InstalledApp,
)

logger = logging.getLogger(__name__)


def count_exposed_apps(
    apps: Iterable[InstalledApp],
    self_package: str | None = None,
) -> tuple[int, int]:
    """Count risky and heavy-permission apps in an inventory.

    Args:
        apps: Inventory entries
        self_package: Package id of the scanning application, excluded from
            the location + network count

    Returns:
        Tuple of (location_and_network_app_count, many_permissions_app_count)
    """
    location_and_network = 0
    many_permissions = 0

    for app in apps:
        permissions = app.requested_permissions
        if permissions is None:
            continue
        if app.is_system_component:
            continue

        if (
            app.package_id != self_package
            and requests_location(permissions)
            and requests_network(permissions)
        ):
            logger.debug("%s requests location and network access", app.package_id)
            location_and_network += 1

        if len(permissions) > PERMISSION_THRESHOLD:
            logger.debug("%s requests %d permissions", app.package_id, len(permissions))
            many_permissions += 1

    return location_and_network, many_permissions


class ExposureScanner:
    """Builds an ExposureReport from an advertising source and an inventory.

    Holds no per-scan state, so one instance can be scanned repeatedly.
    """

    def __init__(
        self,
        advertising_source: AdvertisingIdentitySource,
        inventory: ApplicationInventory,
        self_package: str | None = None,
    ) -> None:
        self.advertising_source = advertising_source
        self.inventory = inventory
        self.self_package = self_package

    def scan(self) -> ExposureReport:
        """Run one scan. Always returns a report."""
        try:
            return self._perform_scan()
        except Exception as e:
            logger.exception("Exposure scan failed")
            return ExposureReport.failed(f"Error during scan: {e}")

    def _perform_scan(self) -> ExposureReport:
        advertising = self._fetch_advertising_info()
        location_apps, heavy_apps, inventory_ok = self._scan_installed_apps()

        signals = SignalTuple(
            tracking_limited=advertising.tracking_limited,
            advertising_id=advertising.id,
            location_and_network_app_count=location_apps,
            many_permissions_app_count=heavy_apps,
            app_inventory_succeeded=inventory_ok,
        )
        score, findings = evaluate(signals)

        return ExposureReport(
            score=score,
            advertising_id=signals.advertising_id,
            tracking_limited=signals.tracking_limited,
            location_and_network_app_count=signals.location_and_network_app_count,
            many_permissions_app_count=signals.many_permissions_app_count,
            findings=tuple(findings),
            succeeded=True,
            app_inventory_succeeded=inventory_ok,
        )

    def _fetch_advertising_info(self) -> AdvertisingInfo:
        try:
            return self.advertising_source.fetch()
        except Exception as e:
            # Assume the protective setting when the id cannot be read
            logger.warning("Advertising identity unavailable: %s", e)
            return AdvertisingInfo(id=None, tracking_limited=True)

    def _scan_installed_apps(self) -> tuple[int, int, bool]:
        try:
            apps = list(self.inventory.list_apps())
            if not apps:
                # An empty list almost always means enumeration was restricted
                logger.warning("Application inventory returned no packages")
                return 0, 0, False
            # Malformed entries make the whole inventory unusable
            location_apps, heavy_apps = count_exposed_apps(apps, self.self_package)
        except Exception as e:
            logger.warning("Application inventory unavailable: %s", e)
            return 0, 0, False

        logger.info(
            "Scanned %d app(s): %d with location + network, %d above %d permissions",
            len(apps),
            location_apps,
            heavy_apps,
            PERMISSION_THRESHOLD,
        )
        return location_apps, heavy_apps, True
