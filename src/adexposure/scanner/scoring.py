"""Scoring policy: turn a signal tuple into a hardening score and findings.

The score starts at 10 (best protected) and each signal deducts points
independently. The result is clamped once, at the end, so the total of all
deductions never pushes it below 0.

Everything here is a pure function of its arguments.
"""

from adexposure.scanner.recommendations import get_recommendation
from adexposure.scanner.results import MAX_SCORE, Finding, Severity, SignalTuple
from adexposure.signatures.permissions import PERMISSION_THRESHOLD, ZEROED_ADVERTISING_ID

# Deductions (heuristic, not a measured risk)
POINTS_TRACKING_NOT_LIMITED = 3
POINTS_ADVERTISING_ID_ACCESSIBLE = 2
POINTS_PER_RISKY_APP = 1
MAX_RISKY_APPS = 3
POINTS_PER_HEAVY_APP = 1
MAX_HEAVY_APPS = 2


def is_advertising_id_accessible(advertising_id: str | None) -> bool:
    """Check if an advertising id can be read by apps.

    The zeroed placeholder is what the platform reports once the id has
    been deleted, so it does not count.
    """
    return advertising_id is not None and advertising_id != ZEROED_ADVERTISING_ID


def calculate_score(
    tracking_limited: bool,
    advertising_id_accessible: bool,
    location_and_network_app_count: int,
    many_permissions_app_count: int,
) -> int:
    """Calculate the hardening score (0-10, 10 = best protected).

    Args:
        tracking_limited: Whether the user asked apps to limit ad tracking
        advertising_id_accessible: Whether a usable advertising id is exposed
        location_and_network_app_count: Apps holding location and network access
        many_permissions_app_count: Apps above the permission threshold

    Returns:
        Score clamped to [0, 10]
    """
    deductions = 0

    if not tracking_limited:
        deductions += POINTS_TRACKING_NOT_LIMITED
    if advertising_id_accessible:
        deductions += POINTS_ADVERTISING_ID_ACCESSIBLE
    deductions += min(max(location_and_network_app_count, 0), MAX_RISKY_APPS) * POINTS_PER_RISKY_APP
    deductions += min(max(many_permissions_app_count, 0), MAX_HEAVY_APPS) * POINTS_PER_HEAVY_APP

    return max(MAX_SCORE - deductions, 0)


def _finding(severity: Severity, title: str, description: str) -> Finding:
    return Finding(
        severity=severity,
        title=title,
        description=description,
        recommendation=get_recommendation(title, severity),
    )


def build_findings(signals: SignalTuple) -> list[Finding]:
    """Build findings for a signal tuple, in fixed order.

    Order: tracking, advertising id, risky apps, heavy-permission apps,
    inventory unavailable. Each one is emitted only when its condition holds.
    """
    findings = []

    if not signals.tracking_limited:
        findings.append(
            _finding(
                Severity.CRITICAL,
                "Ad tracking not limited",
                "The 'Limit ad tracking' flag is off. Apps MAY use your advertising ID "
                "for targeting; this does not prove that they do.",
            )
        )

    if is_advertising_id_accessible(signals.advertising_id):
        findings.append(
            _finding(
                Severity.WARNING,
                "Advertising ID accessible",
                f"Your advertising ID is {signals.advertising_id}. Apps can read it "
                "to follow you across applications.",
            )
        )

    if signals.app_inventory_succeeded and signals.location_and_network_app_count > 0:
        findings.append(
            _finding(
                Severity.WARNING,
                f"{signals.location_and_network_app_count} app(s) with location + network access",
                "These apps DECLARE both permissions. This does not prove they send "
                "your position to third parties.",
            )
        )

    if signals.app_inventory_succeeded and signals.many_permissions_app_count > 0:
        findings.append(
            _finding(
                Severity.INFO,
                f"{signals.many_permissions_app_count} app(s) with more than "
                f"{PERMISSION_THRESHOLD} permissions",
                "A large number of permissions widens the potential attack surface.",
            )
        )

    if not signals.app_inventory_succeeded:
        findings.append(
            _finding(
                Severity.INFO,
                "Application scan unavailable",
                "The list of installed applications could not be read; app-level "
                "signals were not evaluated.",
            )
        )

    return findings


def evaluate(signals: SignalTuple) -> tuple[int, list[Finding]]:
    """Apply the scoring policy to a signal tuple.

    App-derived deductions only apply when the inventory was readable, so a
    failed inventory never lowers the score.

    Returns:
        Tuple of (score, findings)
    """
    if signals.app_inventory_succeeded:
        risky_apps = signals.location_and_network_app_count
        heavy_apps = signals.many_permissions_app_count
    else:
        risky_apps = heavy_apps = 0

    score = calculate_score(
        signals.tracking_limited,
        is_advertising_id_accessible(signals.advertising_id),
        risky_apps,
        heavy_apps,
    )
    return score, build_findings(signals)

