"""Exposure scoring engine.

Architecture:
    Sources (adexposure.sources)
        - Advertising identity: id + tracking limitation flag
        - Application inventory: package, system flag, requested permissions

    Scanner (engine.py)
        - Queries both sources, each degrading on its own
        - Counts location + network apps and heavy-permission apps

    Scoring policy (scoring.py)
        - Deductions from 10, clamped once
        - Findings in fixed order

    Results (results.py)
        - Immutable report, protection tier lookup
"""

from adexposure.scanner.engine import ExposureScanner, count_exposed_apps
from adexposure.scanner.guard import ScanGuard
from adexposure.scanner.results import (
    ExposureReport,
    Finding,
    ProtectionTier,
    Severity,
    SignalTuple,
    classify_tier,
)
from adexposure.scanner.scoring import (
    build_findings,
    calculate_score,
    evaluate,
    is_advertising_id_accessible,
)

__all__ = [
    # Core scanning
    "ExposureScanner",
    "ScanGuard",
    "count_exposed_apps",
    "ExposureReport",
    "Finding",
    "ProtectionTier",
    "Severity",
    "SignalTuple",
    # Scoring policy
    "build_findings",
    "calculate_score",
    "classify_tier",
    "evaluate",
    "is_advertising_id_accessible",
]
