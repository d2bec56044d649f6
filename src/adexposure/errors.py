"""Exception types raised by sources and the scan guard."""


class AdExposureError(Exception):
    """Base exception for all adexposure errors."""


class SourceUnavailableError(AdExposureError):
    """Raised when an upstream signal source cannot be queried."""

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source


class SnapshotError(SourceUnavailableError):
    """Raised when a device snapshot file is missing or malformed."""


class ScanInProgressError(AdExposureError):
    """Raised when a scan is requested while another one is running."""
