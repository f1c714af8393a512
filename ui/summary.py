"""
Console rendering of a run's outcome: the smell summary table and warnings.
"""

from rich.markup import escape

from core.models import Report, RunWarning
from utils import console


def print_summary(report: Report) -> None:
    """Print the rendered summary lines of a report, if it has any."""
    if not report.lines:
        return
    console.print()
    for line in report.lines:
        console.print(escape(line), highlight=False, soft_wrap=True)


def print_warnings(warnings: list[RunWarning]) -> None:
    """Print each warning on its own line, in the order they were raised."""
    for warning in warnings:
        console.print(f"[yellow]⚠ Warning:[/yellow] {escape(warning.message)}")
