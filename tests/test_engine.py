"""Tests for the exposure scanner."""

import dataclasses

import pytest

from adexposure.scanner.engine import ExposureScanner, count_exposed_apps
from adexposure.scanner.results import (
    MAX_SCORE,
    ExposureReport,
    Finding,
    ProtectionTier,
    Severity,
    classify_tier,
)
from adexposure.signatures.permissions import (
    ACCESS_FINE_LOCATION,
    INTERNET,
    ZEROED_ADVERTISING_ID,
)
from adexposure.sources.base import (
    InstalledApp,
    StaticAdvertisingSource,
    StaticInventory,
)

from conftest import FailingAdvertisingSource, FailingInventory, heavy_permissions

TRACKABLE_ID = "11111111-1111-1111-1111-111111111111"


class PolicyError(Exception):
    pass


class TestCountExposedApps:
    """Test per-app counting rules."""

    def test_location_and_network_required(self):
        """Location alone or network alone does not count."""
        apps = [
            InstalledApp.create("a.location", False, [ACCESS_FINE_LOCATION]),
            InstalledApp.create("b.network", False, [INTERNET]),
            InstalledApp.create("c.both", False, [ACCESS_FINE_LOCATION, INTERNET]),
        ]
        assert count_exposed_apps(apps) == (1, 0)

    def test_system_components_excluded(self):
        apps = [
            InstalledApp.create(
                "android.sys", True, [ACCESS_FINE_LOCATION, INTERNET, *heavy_permissions()]
            ),
        ]
        assert count_exposed_apps(apps) == (0, 0)

    def test_self_excluded_from_location_count(self):
        """The scanning app is not counted as a risky app."""
        apps = [
            InstalledApp.create(
                "io.scanner", False, [ACCESS_FINE_LOCATION, INTERNET, *heavy_permissions()]
            ),
        ]
        assert count_exposed_apps(apps, self_package="io.scanner") == (0, 1)
        assert count_exposed_apps(apps) == (1, 1)

    def test_threshold_is_strict(self):
        """Exactly 10 permissions is not heavy, 11 is."""
        apps = [
            InstalledApp.create("ten", False, heavy_permissions(10)),
            InstalledApp.create("eleven", False, heavy_permissions(11)),
        ]
        assert count_exposed_apps(apps) == (0, 1)

    def test_no_declared_permissions_skipped(self):
        apps = [InstalledApp.create("bare", False, None)]
        assert count_exposed_apps(apps) == (0, 0)


class TestExposureScanner:
    """Test scan orchestration."""

    def test_scenario_a(self, exposed_advertising, one_risky_app_inventory):
        """Exposed settings and one risky user app."""
        report = ExposureScanner(exposed_advertising, one_risky_app_inventory).scan()

        assert report.succeeded
        assert report.score == 4
        assert classify_tier(report.score) == ProtectionTier.LOW
        assert report.advertising_id == TRACKABLE_ID
        assert report.location_and_network_app_count == 1
        assert report.many_permissions_app_count == 0
        assert [f.severity for f in report.findings] == [
            Severity.CRITICAL,
            Severity.WARNING,
            Severity.WARNING,
        ]
        assert report.findings[2].title.startswith("1 app(s)")

    def test_scenario_b(self, protected_advertising, clean_inventory):
        """Hardened device with only harmless apps."""
        report = ExposureScanner(protected_advertising, clean_inventory).scan()

        assert report.succeeded
        assert report.score == 10
        assert classify_tier(report.score) == ProtectionTier.HIGH
        assert report.findings == ()
        assert report.app_inventory_succeeded

    def test_scenario_c(self, protected_advertising):
        """Inventory failure is not penalized and adds one INFO finding."""
        report = ExposureScanner(protected_advertising, FailingInventory()).scan()

        assert report.succeeded
        assert report.score == 10
        assert not report.app_inventory_succeeded
        assert len(report.findings) == 1
        assert report.findings[0].severity == Severity.INFO
        assert "unavailable" in report.findings[0].title.lower()

    def test_advertising_failure_falls_back(self, clean_inventory):
        """A failing advertising source means no id and tracking limited."""
        report = ExposureScanner(FailingAdvertisingSource(), clean_inventory).scan()

        assert report.succeeded
        assert report.advertising_id is None
        assert report.tracking_limited is True
        assert report.score == 10

    def test_unexpected_advertising_error_also_recovered(self, clean_inventory):
        """Any exception from the advertising source degrades the same way."""

        class Broken:
            def fetch(self):
                raise RuntimeError("binder died")

        report = ExposureScanner(Broken(), clean_inventory).scan()

        assert report.succeeded
        assert report.tracking_limited is True

    def test_empty_inventory_is_unavailable(self, exposed_advertising):
        """An empty package list counts as a restricted inventory."""
        report = ExposureScanner(exposed_advertising, StaticInventory([])).scan()

        assert report.succeeded
        assert report.location_and_network_app_count == 0
        assert report.many_permissions_app_count == 0
        assert report.findings[-1].severity == Severity.INFO
        assert "unavailable" in report.findings[-1].title.lower()
        assert report.score == 5

    def test_malformed_inventory_entries_are_unavailable(self, exposed_advertising):
        """Entries the counter cannot read degrade the inventory, not the scan."""
        report = ExposureScanner(exposed_advertising, StaticInventory([object()])).scan()

        assert report.succeeded
        assert report.tracking_limited is False
        assert not report.app_inventory_succeeded
        assert report.findings[0].severity == Severity.CRITICAL
        assert report.findings[-1].severity == Severity.INFO
        assert "unavailable" in report.findings[-1].title.lower()
        assert report.score == 5

    def test_zeroed_id_not_penalized(self, clean_inventory):
        advertising = StaticAdvertisingSource(ZEROED_ADVERTISING_ID, tracking_limited=True)
        report = ExposureScanner(advertising, clean_inventory).scan()

        assert report.score == 10
        assert report.advertising_id == ZEROED_ADVERTISING_ID
        assert report.findings == ()

    def test_self_package_option(self, protected_advertising):
        inventory = StaticInventory(
            [InstalledApp.create("io.scanner", False, [ACCESS_FINE_LOCATION, INTERNET])]
        )

        assert ExposureScanner(protected_advertising, inventory).scan().score == 9
        scanner = ExposureScanner(protected_advertising, inventory, self_package="io.scanner")
        assert scanner.scan().score == 10

    def test_idempotent(self, exposed_advertising, one_risky_app_inventory):
        """Two scans over unchanged sources give equal reports."""
        scanner = ExposureScanner(exposed_advertising, one_risky_app_inventory)

        assert scanner.scan() == scanner.scan()

    def test_unexpected_error_returns_failed_report(
        self, exposed_advertising, one_risky_app_inventory, monkeypatch
    ):
        """Errors outside the two sources produce a failed report, never an exception."""

        def explode(signals):
            raise PolicyError("policy crashed")

        monkeypatch.setattr("adexposure.scanner.engine.evaluate", explode)
        report = ExposureScanner(exposed_advertising, one_risky_app_inventory).scan()

        assert not report.succeeded
        assert report.score == 0
        assert report.tracking_limited is True
        assert report.advertising_id is None
        assert report.location_and_network_app_count == 0
        assert report.many_permissions_app_count == 0
        assert report.findings == ()
        assert "policy crashed" in report.error_message


class TestExposureReport:
    """Test report data structure."""

    def test_report_is_immutable(self):
        report = ExposureReport(score=10, advertising_id=None, tracking_limited=True)

        with pytest.raises(dataclasses.FrozenInstanceError):
            report.score = 3

    def test_score_clamped(self):
        assert ExposureReport(score=42, advertising_id=None, tracking_limited=True).score == 10
        assert ExposureReport(score=-3, advertising_id=None, tracking_limited=True).score == 0

    def test_findings_stored_as_tuple(self, exposed_advertising, one_risky_app_inventory):
        report = ExposureScanner(exposed_advertising, one_risky_app_inventory).scan()
        assert isinstance(report.findings, tuple)

    def test_failed_report(self):
        report = ExposureReport.failed("boom")

        assert not report.succeeded
        assert report.error_message == "boom"
        assert report.max_severity is None

    def test_failed_report_normalised(self):
        """A report marked failed never carries scan results."""
        finding = Finding(Severity.CRITICAL, "Ad tracking not limited", "off")
        report = ExposureReport(
            score=7,
            advertising_id="11111111-1111-1111-1111-111111111111",
            tracking_limited=False,
            location_and_network_app_count=2,
            many_permissions_app_count=1,
            findings=(finding,),
            succeeded=False,
            error_message="boom",
        )

        assert report == ExposureReport.failed("boom")

    def test_score_clamped_to_max_score(self):
        report = ExposureReport(score=MAX_SCORE + 5, advertising_id=None, tracking_limited=True)
        assert report.score == MAX_SCORE

    @pytest.mark.parametrize("score", [0, 4, 5, 7, 8, 10])
    def test_tier_property(self, score):
        report = ExposureReport(score=score, advertising_id=None, tracking_limited=True)
        assert report.tier is classify_tier(score)

    def test_tier_of_scanned_report(self, exposed_advertising, one_risky_app_inventory):
        report = ExposureScanner(exposed_advertising, one_risky_app_inventory).scan()
        assert report.tier is ProtectionTier.LOW

    def test_max_severity(self, exposed_advertising, one_risky_app_inventory):
        report = ExposureScanner(exposed_advertising, one_risky_app_inventory).scan()
        assert report.max_severity == Severity.CRITICAL

    def test_to_dict(self, exposed_advertising, one_risky_app_inventory):
        d = ExposureScanner(exposed_advertising, one_risky_app_inventory).scan().to_dict()

        assert d["score"] == 4
        assert d["succeeded"] is True
        assert d["max_severity"] == "critical"
        assert d["findings"][0]["severity"] == "critical"
        assert len(d["findings"]) == 3
