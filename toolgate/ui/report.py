"""Result reporting for TOOLGATE.

Renders check results as a Rich table and prints per-tool guidance
for anything that needs attention.
"""

from rich.table import Table

from toolgate.integrations.version_gate import CheckStatus
from toolgate.utils.console import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from toolgate.workflow.runner import ToolReport

STATUS_LABELS: dict[CheckStatus, str] = {
    CheckStatus.SATISFIED: "[green]✅ OK[/green]",
    CheckStatus.BELOW_MINIMUM: "[yellow]⚠ Outdated[/yellow]",
    CheckStatus.ABSENT: "[red]❌ Missing[/red]",
    CheckStatus.UNPARSEABLE: "[yellow]? Unknown version[/yellow]",
}


def build_table(reports: list[ToolReport]) -> Table:
    table = Table(title=None, show_header=True, header_style="bold")
    table.add_column("Tool", style="cyan")
    table.add_column("Required")
    table.add_column("Found")
    table.add_column("Status")

    for report in reports:
        result = report.result
        required = f">= {result.required}" if result.required else "any"
        found = str(result.found) if result.found else "-"
        table.add_row(report.requirement.name, required, found, STATUS_LABELS[result.status])

    return table


def render_report(reports: list[ToolReport]) -> None:
    """Print the results table."""
    console.print(build_table(reports))
    console.print()


def describe_failure(report: ToolReport) -> list[str]:
    """Describe why a tool failed its check.

    Returns:
        Diagnostic lines, empty for a satisfied tool
    """
    result = report.result
    name = report.requirement.name

    if result.status is CheckStatus.ABSENT:
        return [f"{name} not installed."]
    if result.status is CheckStatus.BELOW_MINIMUM:
        return [f"Expected {name} version >= {result.required}", f"Found {result.found}"]
    if result.status is CheckStatus.UNPARSEABLE:
        if result.required is None:
            return [f"Could not determine {name} version"]
        return [f"Could not determine {name} version (expected >= {result.required})"]
    return []


def print_guidance(reports: list[ToolReport]) -> None:
    """Print diagnostics and remediation hints for each failing tool."""
    for report in reports:
        if report.ok:
            continue
        for line in describe_failure(report):
            print_error(line)
        if report.requirement.hint:
            print_info(report.requirement.hint)


def summarize(reports: list[ToolReport]) -> bool:
    """Print the closing line.

    Returns:
        True if every tool is satisfied
    """
    if all(report.ok for report in reports):
        print_success(f"All {len(reports)} tool(s) meet their requirements")
        return True

    print_warning("Rerun this check once you've fixed the above errors.")
    return False


__all__ = [
    "STATUS_LABELS",
    "build_table",
    "render_report",
    "describe_failure",
    "print_guidance",
    "summarize",
]
