"""Result data structures for exposure scans."""

import json
from dataclasses import dataclass, field
from enum import Enum


class Severity(Enum):
    """Severity levels for exposure findings."""

    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


MAX_SCORE = 10

# Tier boundaries (inclusive lower bounds)
HIGH_TIER_MIN = 8
MEDIUM_TIER_MIN = 5


class ProtectionTier(Enum):
    """Protection tier derived from the exposure score (higher is better)."""

    HIGH = ("high", "High", "green")
    MEDIUM = ("medium", "Medium", "yellow")
    LOW = ("low", "Low", "red")

    def __init__(self, key: str, label: str, color: str) -> None:
        self.key = key
        self.label = label
        self.color = color


def classify_tier(score: int) -> ProtectionTier:
    """Map a score to its protection tier."""
    if score >= HIGH_TIER_MIN:
        return ProtectionTier.HIGH
    if score >= MEDIUM_TIER_MIN:
        return ProtectionTier.MEDIUM
    return ProtectionTier.LOW


@dataclass(frozen=True)
class Finding:
    """A single human-readable exposure signal."""

    severity: Severity
    title: str
    description: str
    recommendation: str | None = None  # Remediation advice

    def to_dict(self) -> dict:
        """Convert finding to dictionary."""
        return {
            "severity": self.severity.value,
            "title": self.title,
            "description": self.description,
            "recommendation": self.recommendation,
        }


@dataclass(frozen=True)
class SignalTuple:
    """Raw signals gathered by one scan, before scoring."""

    tracking_limited: bool
    advertising_id: str | None
    location_and_network_app_count: int = 0
    many_permissions_app_count: int = 0
    app_inventory_succeeded: bool = True


@dataclass(frozen=True)
class ExposureReport:
    """Complete, immutable result of one exposure scan."""

    score: int
    advertising_id: str | None
    tracking_limited: bool
    location_and_network_app_count: int = 0
    many_permissions_app_count: int = 0
    findings: tuple[Finding, ...] = field(default_factory=tuple)
    succeeded: bool = True
    error_message: str | None = None
    app_inventory_succeeded: bool = True

    def __post_init__(self) -> None:
        # Reports are built from lists in places; store an immutable copy
        object.__setattr__(self, "findings", tuple(self.findings))
        object.__setattr__(self, "score", max(0, min(MAX_SCORE, self.score)))

        if not self.succeeded:
            # A failed scan carries only the fail-safe defaults
            for name, value in (
                ("score", 0),
                ("advertising_id", None),
                ("tracking_limited", True),
                ("location_and_network_app_count", 0),
                ("many_permissions_app_count", 0),
                ("findings", ()),
                ("app_inventory_succeeded", False),
            ):
                object.__setattr__(self, name, value)

    @classmethod
    def failed(cls, message: str) -> "ExposureReport":
        """Build the fail-safe report returned when a scan cannot complete."""
        return cls(
            score=0,
            advertising_id=None,
            tracking_limited=True,
            location_and_network_app_count=0,
            many_permissions_app_count=0,
            findings=(),
            succeeded=False,
            error_message=message,
            app_inventory_succeeded=False,
        )

    @property
    def tier(self) -> ProtectionTier:
        """Protection tier for this report's score."""
        return classify_tier(self.score)

    @property
    def max_severity(self) -> Severity | None:
        """Get the highest severity finding."""
        for sev in (Severity.CRITICAL, Severity.WARNING, Severity.INFO):
            if any(f.severity == sev for f in self.findings):
                return sev
        return None

    def to_dict(self) -> dict:
        """Convert report to dictionary."""
        return {
            "score": self.score,
            "succeeded": self.succeeded,
            "error_message": self.error_message,
            "advertising_id": self.advertising_id,
            "tracking_limited": self.tracking_limited,
            "location_and_network_app_count": self.location_and_network_app_count,
            "many_permissions_app_count": self.many_permissions_app_count,
            "app_inventory_succeeded": self.app_inventory_succeeded,
            "max_severity": self.max_severity.value if self.max_severity else None,
            "findings": [f.to_dict() for f in self.findings],
        }

    def to_json(self) -> str:
        """Convert report to JSON string."""
        return json.dumps(self.to_dict(), indent=2)
