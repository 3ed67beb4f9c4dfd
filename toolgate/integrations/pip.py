"""Python package checks for TOOLGATE.

Some bootstrap tools (awscli, pip itself) are expected to be installed as
Python packages for a specific interpreter rather than found on PATH.
These checks ask that interpreter's pip via ``<python> -m pip show``.
"""

import re

from toolgate.integrations.process import CommandResult, CommandRunner, run_command
from toolgate.integrations.version_gate import (
    DEFAULT_VERSION_TIMEOUT,
    CheckResult,
    CheckStatus,
    RequirementLike,
    SemanticVersion,
    compare_versions,
    parse_requirement,
    parse_version,
)
from toolgate.utils.logging import log_check

DEFAULT_PYTHON = "python3"

_VERSION_LINE = re.compile(r"^Version:\s*(.+)$", re.MULTILINE)


def pip_show(
    package: str,
    python: str = DEFAULT_PYTHON,
    runner: CommandRunner = run_command,
    timeout: float | None = DEFAULT_VERSION_TIMEOUT,
) -> CommandResult:
    """Run ``<python> -m pip show <package>``."""
    return runner(python, ["-m", "pip", "show", package], timeout=timeout)


def check_pip_package(
    package: str,
    required: RequirementLike | None = None,
    python: str = DEFAULT_PYTHON,
    runner: CommandRunner = run_command,
    timeout: float | None = DEFAULT_VERSION_TIMEOUT,
) -> CheckResult:
    """Check that a Python package is installed, optionally at a minimum version.

    Args:
        package: Distribution name
        required: Minimum version, or None to check presence only
        python: Interpreter whose pip is asked
        runner: Process-invocation primitive
        timeout: Seconds to wait for pip

    Returns:
        CheckResult with the same semantics as VersionGate.check

    Raises:
        InvalidRequirementError: If required is malformed
    """
    minimum = parse_requirement(required) if required is not None else None

    result = pip_show(package, python, runner, timeout)
    if result.timed_out:
        log_check(package, CheckStatus.UNPARSEABLE.value, required=minimum)
        return CheckResult(tool=package, status=CheckStatus.UNPARSEABLE, required=minimum)
    if not result.succeeded:
        log_check(package, CheckStatus.ABSENT.value, required=minimum)
        return CheckResult(tool=package, status=CheckStatus.ABSENT, required=minimum)

    match = _VERSION_LINE.search(result.output)
    found = parse_version(match.group(1)) if match else None

    if minimum is None:
        status = CheckStatus.SATISFIED
    elif found is None:
        status = CheckStatus.UNPARSEABLE
    elif compare_versions(found, minimum) >= 0:
        status = CheckStatus.SATISFIED
    else:
        status = CheckStatus.BELOW_MINIMUM

    log_check(package, status.value, found=found, required=minimum)
    return CheckResult(tool=package, status=status, required=minimum, found=found)


__all__ = [
    "DEFAULT_PYTHON",
    "pip_show",
    "check_pip_package",
]
