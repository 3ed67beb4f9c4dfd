"""CLI interface for TOOLGATE.

This module provides the Typer-based command-line interface. It checks the
bootstrap tool catalog (or a selection of it) and exits non-zero when any
tool is missing, outdated, or reports no version.
"""

import math
from typing import Annotated

import typer

from toolgate.config.manager import ConfigManager
from toolgate.config.settings import MAX_PARALLEL_CHECKS, MIN_PARALLEL_CHECKS, Settings
from toolgate.integrations.tools import (
    ToolRequirement,
    apply_overrides,
    build_catalog,
    parse_requirement_override,
    select_tools,
)
from toolgate.integrations.version_gate import VersionGate
from toolgate.ui.report import print_guidance, render_report, summarize
from toolgate.utils.console import (
    print_error,
    print_header,
    print_info,
    print_step,
    print_warning,
    show_version,
)
from toolgate.utils.errors import ExitCode, ToolgateError, ToolsNotSatisfiedError
from toolgate.utils.logging import setup_logging
from toolgate.workflow.runner import is_running_as_root, run_checks

app = typer.Typer(
    name="toolgate",
    help="TOOLGATE - Check developer tools against minimum versions",
    add_completion=False,
    no_args_is_help=False,
)


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        show_version()
        raise typer.Exit()


def _resolve_requirements(
    settings: Settings,
    tools: list[str] | None,
    requirements: list[str] | None,
) -> list[ToolRequirement]:
    """Build the list of requirements to check.

    Args:
        settings: Loaded settings
        tools: Tool names to restrict the check to (None = whole catalog)
        requirements: NAME=X.Y.Z overrides from the command line

    Returns:
        Requirements in catalog order, overrides appended

    Raises:
        InvalidRequirementError: If a configured or given requirement is malformed
        UnknownToolError: If a selected tool is not in the catalog
    """
    overrides = [parse_requirement_override(value) for value in requirements or []]
    catalog = apply_overrides(build_catalog(settings), overrides)

    if tools:
        return select_tools(catalog, [*tools, *(name for name, _ in overrides)])
    return catalog


@app.command()
def main(
    tool: Annotated[
        list[str] | None,
        typer.Option(
            "--tool",
            "-t",
            help="Only check this tool (repeatable)",
        ),
    ] = None,
    require: Annotated[
        list[str] | None,
        typer.Option(
            "--require",
            "-r",
            help="Require NAME=MAJOR.MINOR.PATCH, overriding the catalog (repeatable)",
        ),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option(
            "--timeout",
            help="Seconds allowed for each version query (default: from config)",
        ),
    ] = None,
    parallel: Annotated[
        int | None,
        typer.Option(
            "--parallel",
            help=f"Concurrent checks ({MIN_PARALLEL_CHECKS}-{MAX_PARALLEL_CHECKS}, "
            "default: from config)",
        ),
    ] = None,
    show_config: Annotated[
        bool,
        typer.Option(
            "--config",
            help="Show current configuration and exit",
        ),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version information",
        ),
    ] = None,
) -> None:
    """TOOLGATE - Check developer tools against minimum versions.

    Checks git, Python, pip, awscli, Docker, docker-compose, Vault, jq and
    consul-template, then prints guidance for anything that needs attention.
    """
    setup_logging()

    if parallel is not None and not MIN_PARALLEL_CHECKS <= parallel <= MAX_PARALLEL_CHECKS:
        print_error(
            f"Error: --parallel must be between {MIN_PARALLEL_CHECKS} and {MAX_PARALLEL_CHECKS}"
        )
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if timeout is not None and (not math.isfinite(timeout) or timeout <= 0):
        print_error("Error: --timeout must be a finite number greater than 0")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    try:
        config = ConfigManager()
        settings = config.load()

        if show_config:
            config.show()
            raise typer.Exit()

        if is_running_as_root():
            print_warning("Running as root: please run this check without sudo.")

        failed = _run_tool_checks(
            settings,
            tools=tool,
            requirements=require,
            timeout=timeout,
            parallel=parallel,
        )
        if failed:
            raise ToolsNotSatisfiedError(failed)

    except ToolgateError as e:
        print_error(str(e))
        raise typer.Exit(e.exit_code) from e
    except KeyboardInterrupt as e:
        print_info("\nOperation cancelled by user")
        raise typer.Exit(ExitCode.USER_CANCELLED) from e


def _run_tool_checks(
    settings: Settings,
    tools: list[str] | None = None,
    requirements: list[str] | None = None,
    timeout: float | None = None,
    parallel: int | None = None,
) -> list[str]:
    """Check the selected tools and print the report.

    Returns:
        Names of the tools that failed their check
    """
    selected = _resolve_requirements(settings, tools, requirements)

    gate = VersionGate(timeout=timeout if timeout is not None else settings.version_timeout_seconds)
    workers = parallel if parallel is not None else settings.parallel_checks

    print_header("Checking Developer Tools")
    print_step(f"Checking {len(selected)} tool(s)...")
    reports = run_checks(
        selected,
        gate=gate,
        python=settings.python_command,
        max_workers=workers,
    )

    render_report(reports)
    print_guidance(reports)
    summarize(reports)

    return [report.requirement.name for report in reports if not report.ok]


__all__ = [
    "app",
    "main",
]
