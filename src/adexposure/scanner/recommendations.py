"""Remediation recommendations for exposure findings.

Provides simple, actionable advice for users based on finding title and severity.
"""

from adexposure.scanner.results import Severity

# Recommendations by finding pattern (keyword matching on title)
RECOMMENDATIONS = {
    "tracking not limited": (
        "Settings > Privacy > Ads: turn on 'Limit ad tracking' or opt out of ads personalization."
    ),
    "advertising id accessible": (
        "Settings > Privacy > Ads: delete or reset the advertising ID."
    ),
    "location + network": (
        "Settings > Apps > Permissions > Location: revoke location from apps that do not need it."
    ),
    "permissions": "Settings > Apps > Permissions: revoke unneeded permissions or uninstall unused apps.",
    "scan unavailable": "Grant package visibility to the scanner or connect the device over adb.",
}

# Default recommendations by severity
DEFAULT_BY_SEVERITY = {
    Severity.CRITICAL: "Change this setting now.",
    Severity.WARNING: "Review this setting in the device privacy settings.",
    Severity.INFO: "No action needed.",
}

# General hardening advice, independent of any finding
HARDENING_TIPS = [
    "Turn off location services when no app needs them.",
    "Delete the advertising ID instead of only resetting it.",
    "Audit app permissions regularly (location, contacts, microphone).",
    "Enable private DNS to encrypt DNS lookups.",
    "Uninstall apps you no longer use.",
    "Avoid apps that request far more permissions than their features need.",
    "Use a privacy-respecting browser.",
    "Turn off Bluetooth and Wi-Fi scanning when not in use.",
]

# What this diagnostic cannot see, as (title, explanation) pairs
LIMITATIONS = [
    (
        "Does not detect embedded advertising SDKs",
        "Tracking libraries inside apps cannot be found without static analysis of the app code.",
    ),
    (
        "Does not monitor network traffic",
        "No requests are captured, so the data apps actually send is never observed.",
    ),
    (
        "Does not detect fingerprinting",
        "Canvas, audio, WebGL or font fingerprinting can identify a device without any advertising ID.",
    ),
    (
        "The tracking limitation flag is declarative",
        "Limiting ad tracking sends a request to apps; nothing technically forces them to honor it.",
    ),
    (
        "Declared permissions are not used permissions",
        "An app may declare a permission and never use it, or use it harmlessly.",
    ),
]


def get_recommendation(title: str, severity: Severity) -> str:
    """Get remediation recommendation for a finding.

    Args:
        title: The finding title
        severity: The finding severity

    Returns:
        Simple, actionable recommendation string
    """
    title_lower = title.lower()

    for pattern, recommendation in RECOMMENDATIONS.items():
        if pattern in title_lower:
            return recommendation

    return DEFAULT_BY_SEVERITY.get(severity, "Review your privacy settings.")
