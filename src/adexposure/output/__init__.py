"""Output formatters for exposure reports."""

from adexposure.output.console import print_limitations, print_report
from adexposure.output.json_output import output_json, report_to_json

__all__ = ["print_report", "print_limitations", "output_json", "report_to_json"]
