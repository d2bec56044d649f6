"""Permission signatures and identifier constants."""

from adexposure.signatures.permissions import (
    LOCATION_PERMISSIONS,
    NETWORK_PERMISSION,
    PERMISSION_THRESHOLD,
    ZEROED_ADVERTISING_ID,
)

__all__ = [
    "LOCATION_PERMISSIONS",
    "NETWORK_PERMISSION",
    "PERMISSION_THRESHOLD",
    "ZEROED_ADVERTISING_ID",
]
