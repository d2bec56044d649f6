"""Rich console output for exposure reports."""

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from adexposure.scanner.recommendations import HARDENING_TIPS, LIMITATIONS
from adexposure.scanner.results import MAX_SCORE, ExposureReport, Severity
from adexposure.signatures.permissions import ZEROED_ADVERTISING_ID

console = Console()

SEVERITY_COLORS = {
    Severity.CRITICAL: "red bold",
    Severity.WARNING: "yellow",
    Severity.INFO: "dim",
}

SEVERITY_ICONS = {
    Severity.CRITICAL: "[red]!![/red]",
    Severity.WARNING: "[yellow]![/yellow]",
    Severity.INFO: "[dim]i[/dim]",
}


def print_report(
    report: ExposureReport,
    verbose: bool = False,
    show_tips: bool = False,
) -> None:
    """Print an exposure report to the console.

    Args:
        report: Report to render
        verbose: Show recommendations next to each finding
        show_tips: Append general hardening tips
    """
    if not report.succeeded:
        console.print(
            Panel(
                f"[red]{escape(report.error_message or 'Unknown error')}[/red]",
                title="[bold red]Scan failed[/bold red]",
                expand=False,
            )
        )
        return

    _print_score_card(report)
    _print_findings(report, verbose)
    _print_identifiers(report)

    if show_tips:
        console.print()
        console.print("[bold]Hardening tips[/bold]")
        for tip in HARDENING_TIPS:
            console.print(f"  [green]-[/green] {tip}")


def _print_score_card(report: ExposureReport) -> None:
    """Print score, tier and a ten-cell bar."""
    tier = report.tier
    filled = "#" * report.score
    empty = "." * (MAX_SCORE - report.score)
    bar = f"[{tier.color}]{filled}[/{tier.color}][dim]{empty}[/dim]"

    console.print()
    console.print(
        Panel(
            f"[bold {tier.color}]{report.score}/{MAX_SCORE}[/bold {tier.color}]  {bar}\n"
            f"Protection: [{tier.color}]{tier.label}[/{tier.color}]",
            title="[bold]Advertising exposure[/bold]",
            expand=False,
        )
    )


def _print_findings(report: ExposureReport, verbose: bool) -> None:
    """Print findings in engine order."""
    if not report.findings:
        console.print("  [green]No exposure signals detected[/green]")
        return

    table = Table(
        box=box.SIMPLE,
        show_header=True,
        header_style="bold",
        padding=(0, 1),
    )
    table.add_column("", width=3)  # Icon
    table.add_column("Severity", width=10)
    table.add_column("Finding", no_wrap=False)
    if verbose:
        table.add_column("Action", no_wrap=False, style="cyan")

    for finding in report.findings:
        style = SEVERITY_COLORS[finding.severity]
        row = [
            SEVERITY_ICONS[finding.severity],
            f"[{style}]{finding.severity.value.upper()}[/{style}]",
            f"[bold]{escape(finding.title)}[/bold]\n[dim]{escape(finding.description)}[/dim]",
        ]
        if verbose:
            row.append(escape(finding.recommendation or ""))
        table.add_row(*row)

    console.print(table)


def _print_identifiers(report: ExposureReport) -> None:
    """Print the advertising identifier state."""
    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("Property", style="bold")
    table.add_column("Value")

    if report.advertising_id is None:
        advertising_id = "[dim]Not available[/dim]"
    elif report.advertising_id == ZEROED_ADVERTISING_ID:
        advertising_id = "[green]Deleted[/green]"
    else:
        # Snapshot values are untrusted text, not markup
        advertising_id = escape(report.advertising_id)

    table.add_row("Advertising ID", advertising_id)
    table.add_row(
        "Ad tracking",
        "[green]Limited[/green]" if report.tracking_limited else "[red]Not limited[/red]",
    )
    if report.app_inventory_succeeded:
        table.add_row("Apps with location + network", str(report.location_and_network_app_count))
        table.add_row("Heavy-permission apps", str(report.many_permissions_app_count))
    else:
        table.add_row("Application scan", "[dim]Unavailable[/dim]")

    console.print(table)


def print_limitations() -> None:
    """Print what the diagnostic cannot detect."""
    console.print()
    console.print(Panel("[bold]What this diagnostic can NOT do[/bold]", expand=False))
    for title, explanation in LIMITATIONS:
        console.print(f"[yellow]![/yellow] [bold]{title}[/bold]")
        console.print(f"  [dim]{explanation}[/dim]")
