"""Installed application inventory read from a device over adb.

Uses two package manager queries:
    adb shell pm list packages -s        -> system components
    adb shell dumpsys package packages   -> every package with its
                                            "requested permissions:" block

Gracefully reports itself unavailable if adb is not installed, no device
is attached, or the device refuses the query.
"""

import logging
import re
import shutil
import subprocess
from collections.abc import Sequence

from adexposure.errors import SourceUnavailableError
from adexposure.sources.base import InstalledApp

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60

PACKAGE_HEADER = re.compile(r"^\s*Package \[(?P<name>[^\]]+)\]")
REQUESTED_HEADER = "requested permissions:"


def _indent(line: str) -> int:
    return len(line) - len(line.lstrip())


def parse_package_list(output: str) -> set[str]:
    """Parse `pm list packages` output ("package:<name>" per line)."""
    packages = set()
    for line in output.splitlines():
        line = line.strip()
        if line.startswith("package:"):
            packages.add(line[len("package:") :])
    return packages


def parse_dumpsys_packages(output: str) -> dict[str, frozenset[str] | None]:
    """Parse requested permissions per package from `dumpsys package packages`.

    Packages without a "requested permissions:" block map to None.
    Entries like "android.permission.X: restricted=true" keep only the name.
    """
    packages: dict[str, frozenset[str] | None] = {}
    current: str | None = None
    collecting: list[str] | None = None
    header_indent = 0

    def flush() -> None:
        if current is not None and collecting is not None:
            packages[current] = frozenset(collecting)

    for line in output.splitlines():
        header = PACKAGE_HEADER.match(line)
        if header:
            flush()
            current = header.group("name")
            packages.setdefault(current, None)
            collecting = None
            continue

        if current is None or not line.strip():
            continue

        if line.strip() == REQUESTED_HEADER:
            collecting = []
            header_indent = _indent(line)
            continue

        if collecting is not None:
            if _indent(line) > header_indent:
                collecting.append(line.strip().split(":", 1)[0])
            else:
                flush()
                collecting = None

    flush()
    return packages


class AdbInventory:
    """Application inventory backed by `adb shell` package manager queries."""

    name = "adb"
    required_tool = "adb"

    def __init__(
        self,
        serial: str | None = None,
        adb_path: str | None = None,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        self.serial = serial
        self.adb_path = adb_path or self.required_tool
        self.timeout = timeout
        self._tool_available: bool | None = None

    @property
    def tool_available(self) -> bool:
        """Check if adb is installed."""
        if self._tool_available is None:
            self._tool_available = shutil.which(self.adb_path) is not None
        return self._tool_available

    def _shell(self, *args: str) -> str:
        if not self.tool_available:
            raise SourceUnavailableError(
                f"Required tool '{self.adb_path}' not installed. "
                "Install with: sudo apt install android-tools-adb",
                source="inventory",
            )

        command = [self.adb_path]
        if self.serial:
            command += ["-s", self.serial]
        command += ["shell", *args]

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise SourceUnavailableError(
                f"adb timed out after {self.timeout}s: {' '.join(args)}", source="inventory"
            ) from e
        except OSError as e:
            raise SourceUnavailableError(f"Cannot run adb: {e}", source="inventory") from e

        if result.returncode != 0:
            raise SourceUnavailableError(
                f"adb error: {result.stderr.strip()[:200]}", source="inventory"
            )
        return result.stdout

    def list_apps(self) -> Sequence[InstalledApp]:
        """List installed applications on the attached device."""
        system_packages = parse_package_list(self._shell("pm", "list", "packages", "-s"))
        permissions = parse_dumpsys_packages(self._shell("dumpsys", "package", "packages"))

        logger.debug(
            "adb reported %d package(s), %d system", len(permissions), len(system_packages)
        )

        return [
            InstalledApp(
                package_id=package,
                is_system_component=package in system_packages,
                requested_permissions=requested,
            )
            for package, requested in sorted(permissions.items())
        ]
