"""JSON output for exposure reports."""

import json
import sys
from typing import TextIO

from adexposure.scanner.results import ExposureReport


def output_json(
    report: ExposureReport,
    file: TextIO | None = None,
    indent: int = 2,
) -> None:
    """Output an exposure report as JSON.

    Args:
        report: Report to serialize
        file: Output file (default: current stdout)
        indent: JSON indentation level
    """
    file = file or sys.stdout
    json.dump(_build_output(report), file, indent=indent)
    file.write("\n")


def _build_output(report: ExposureReport) -> dict:
    output = report.to_dict()
    output["tier"] = report.tier.key if report.succeeded else None
    output["summary"] = _generate_summary(report)
    return output


def _generate_summary(report: ExposureReport) -> dict:
    """Generate summary statistics for a report.

    Args:
        report: Exposure report

    Returns:
        Summary dictionary
    """
    severity_counts: dict[str, int] = {}
    for finding in report.findings:
        sev = finding.severity.value
        severity_counts[sev] = severity_counts.get(sev, 0) + 1

    return {
        "total_findings": len(report.findings),
        "findings_by_severity": severity_counts,
    }


def report_to_json(report: ExposureReport, indent: int = 2) -> str:
    """Convert an exposure report to a JSON string.

    Args:
        report: Report to serialize
        indent: JSON indentation level

    Returns:
        JSON string
    """
    return json.dumps(_build_output(report), indent=indent)
