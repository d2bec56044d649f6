"""Single-flight guard for callers that may trigger overlapping scans.

The scanner itself is stateless; the guard lives with the caller (a CLI
loop, a UI controller) and rejects a second scan while one is running.
"""

import logging
import threading

from adexposure.errors import ScanInProgressError
from adexposure.scanner.engine import ExposureScanner
from adexposure.scanner.results import ExposureReport

logger = logging.getLogger(__name__)


class ScanGuard:
    """Allows at most one in-flight scan at a time."""

    def __init__(self) -> None:
        self._lock = threading.Lock()

    @property
    def in_progress(self) -> bool:
        """Check if a scan is currently running under this guard."""
        return self._lock.locked()

    def run(self, scanner: ExposureScanner) -> ExposureReport:
        """Run a scan, raising ScanInProgressError if one is already running."""
        if not self._lock.acquire(blocking=False):
            raise ScanInProgressError("Scan already running")
        try:
            return scanner.scan()
        finally:
            self._lock.release()

    def try_run(self, scanner: ExposureScanner) -> ExposureReport | None:
        """Run a scan, or return None if one is already running."""
        try:
            return self.run(scanner)
        except ScanInProgressError:
            logger.info("Ignoring scan request: a scan is already running")
            return None
