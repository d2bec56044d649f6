"""Command-line interface for adexposure."""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn

from adexposure import __version__
from adexposure.errors import ScanInProgressError
from adexposure.output.console import print_limitations, print_report
from adexposure.output.json_output import output_json
from adexposure.scanner.engine import ExposureScanner
from adexposure.scanner.guard import ScanGuard
from adexposure.scanner.results import (
    MAX_SCORE,
    ExposureReport,
    ProtectionTier,
    classify_tier,
)
from adexposure.sources.adb import AdbInventory
from adexposure.sources.base import (
    AdvertisingIdentitySource,
    ApplicationInventory,
    UnavailableAdvertisingSource,
)
from adexposure.sources.snapshot import SnapshotSource

app = typer.Typer(
    name="adexposure",
    help="Advertising-identifier exposure diagnostic for Android devices",
    add_completion=False,
    no_args_is_help=True,
)
console = Console()

# Exit codes
EXIT_OK = 0
EXIT_LOW_PROTECTION = 1
EXIT_ERROR = 2

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_guard = ScanGuard()


def _build_sources(
    snapshot: Path | None,
    use_adb: bool,
    serial: str | None,
    adb_path: str | None,
) -> tuple[AdvertisingIdentitySource, ApplicationInventory]:
    """Pick the advertising source and inventory from CLI options."""
    snapshot_source = SnapshotSource(snapshot) if snapshot else None

    advertising: AdvertisingIdentitySource
    if snapshot_source is not None:
        advertising = snapshot_source
    else:
        advertising = UnavailableAdvertisingSource(
            "advertising identity cannot be read over adb; use --snapshot"
        )

    inventory: ApplicationInventory
    if use_adb:
        inventory = AdbInventory(serial=serial, adb_path=adb_path)
    elif snapshot_source is not None:
        inventory = snapshot_source
    else:
        console.print("[red]Error: provide --snapshot and/or --adb[/red]")
        raise typer.Exit(EXIT_ERROR)

    return advertising, inventory


def _exit_code(report: ExposureReport) -> int:
    if not report.succeeded:
        return EXIT_ERROR
    if report.tier is ProtectionTier.LOW:
        return EXIT_LOW_PROTECTION
    return EXIT_OK


@app.command()
def scan(
    snapshot: Path | None = typer.Option(
        None,
        "--snapshot",
        "-s",
        help="Device snapshot JSON (advertising state and/or packages)",
        exists=True,
        dir_okay=False,
    ),
    use_adb: bool = typer.Option(
        False,
        "--adb/--no-adb",
        help="Read installed applications from a device over adb",
    ),
    serial: str | None = typer.Option(
        None,
        "--serial",
        help="adb device serial",
        envvar="ANDROID_SERIAL",
    ),
    adb_path: str | None = typer.Option(
        None,
        "--adb-path",
        help="adb executable (default: adb on PATH)",
        envvar="ADEXPOSURE_ADB",
    ),
    self_package: str | None = typer.Option(
        None,
        "--self-package",
        help="Package id of the scanning app, excluded from location + network counts",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Output the report as JSON to console",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show a recommended action for each finding",
    ),
    tips: bool = typer.Option(
        False,
        "--tips/--no-tips",
        help="Show general hardening tips after the report",
    ),
) -> None:
    """Scan a device for advertising-identifier exposure.

    Scores tracking limitation, advertising ID access and declared app
    permissions from 0 (exposed) to 10 (well protected).

    Exit code is 1 when protection is LOW and 2 when the scan failed.

    Examples:
        adexposure scan --snapshot device.json
        adexposure scan --snapshot device.json --adb --serial emulator-5554
        adexposure scan --snapshot device.json --json
    """
    advertising, inventory = _build_sources(snapshot, use_adb, serial, adb_path)
    scanner = ExposureScanner(advertising, inventory, self_package=self_package)

    try:
        if json_output:
            report = _guard.run(scanner)
        else:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console,
                transient=True,
            ) as progress:
                progress.add_task("Scanning settings and applications...", total=None)
                report = _guard.run(scanner)
    except ScanInProgressError as e:
        console.print(f"[yellow]{e}[/yellow]")
        raise typer.Exit(EXIT_ERROR)

    if json_output:
        output_json(report)
    else:
        print_report(report, verbose=verbose, show_tips=tips)

    raise typer.Exit(_exit_code(report))


@app.command()
def tier(
    score: int = typer.Argument(
        ...,
        help="Exposure score",
        min=0,
        max=MAX_SCORE,
    ),
) -> None:
    """Show the protection tier for a score.

    Examples:
        adexposure tier 7
    """
    level = classify_tier(score)
    console.print(f"{score}/{MAX_SCORE}: [{level.color}]{level.label}[/{level.color}]")


@app.command()
def limits() -> None:
    """Show what this diagnostic cannot detect."""
    print_limitations()


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"adexposure v{__version__}")


@app.callback()
def main(
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        help="Logging level: DEBUG, INFO, WARNING, ERROR",
        case_sensitive=False,
    ),
) -> None:
    """adexposure - Advertising-identifier exposure diagnostic.

    Evaluates declared settings and declared app permissions only. It does
    not monitor traffic or detect SDKs or fingerprinting.
    """
    level = log_level.upper()
    if level not in LOG_LEVELS:
        raise typer.BadParameter(
            f"must be one of {', '.join(LOG_LEVELS)}", param_hint="--log-level"
        )

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


if __name__ == "__main__":
    app()
