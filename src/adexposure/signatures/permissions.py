"""Permission names and identifier values the exposure checks look for.

The permission strings are the Android manifest names reported by the
package manager for each installed application.
"""

ACCESS_FINE_LOCATION = "android.permission.ACCESS_FINE_LOCATION"
ACCESS_COARSE_LOCATION = "android.permission.ACCESS_COARSE_LOCATION"
INTERNET = "android.permission.INTERNET"

# Either one is enough for an app to count as location-capable
LOCATION_PERMISSIONS = frozenset({ACCESS_FINE_LOCATION, ACCESS_COARSE_LOCATION})

NETWORK_PERMISSION = INTERNET

# Apps requesting strictly more than this many permissions are "heavy"
PERMISSION_THRESHOLD = 10

# Value reported by the platform after the user deletes or resets the id
ZEROED_ADVERTISING_ID = "00000000-0000-0000-0000-000000000000"


def requests_location(permissions: frozenset[str]) -> bool:
    """Check if a permission set includes fine or coarse location."""
    return not LOCATION_PERMISSIONS.isdisjoint(permissions)


def requests_network(permissions: frozenset[str]) -> bool:
    """Check if a permission set includes network access."""
    return NETWORK_PERMISSION in permissions
