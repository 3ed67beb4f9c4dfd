"""Check runner for TOOLGATE.

Runs every catalog check and collects the results. Checks only read the
output of the tools they invoke, so they run concurrently on a small
thread pool; reports come back in catalog order regardless.
"""

import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from toolgate.integrations.pip import DEFAULT_PYTHON, check_pip_package
from toolgate.integrations.tools import ToolKind, ToolRequirement
from toolgate.integrations.version_gate import CheckResult, CheckStatus, VersionGate
from toolgate.utils.logging import log_message

DEFAULT_MAX_WORKERS = 4


@dataclass(frozen=True)
class ToolReport:
    """A requirement paired with the result of checking it."""

    requirement: ToolRequirement
    result: CheckResult

    @property
    def ok(self) -> bool:
        return self.result.is_satisfied


def check_requirement(
    requirement: ToolRequirement,
    gate: VersionGate,
    python: str = DEFAULT_PYTHON,
) -> CheckResult:
    """Check a single catalog requirement.

    Executables with a minimum go through the version gate; executables
    without one only need to be on PATH. Pip packages are asked of the
    configured interpreter.

    Args:
        requirement: Requirement to check
        gate: Version gate (its runner and timeout are reused for pip)
        python: Interpreter used for pip package checks

    Returns:
        CheckResult for the requirement
    """
    if requirement.kind is ToolKind.PIP_PACKAGE:
        return check_pip_package(
            requirement.name,
            requirement.required,
            python=python,
            runner=gate.runner,
            timeout=gate.timeout,
        )

    if requirement.required is not None:
        return gate.check(requirement.name, requirement.required)

    status = CheckStatus.SATISFIED if gate.is_present(requirement.name) else CheckStatus.ABSENT
    return CheckResult(tool=requirement.name, status=status)


def run_checks(
    requirements: list[ToolRequirement],
    gate: VersionGate | None = None,
    python: str = DEFAULT_PYTHON,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> list[ToolReport]:
    """Check every requirement concurrently.

    Args:
        requirements: Requirements to check
        gate: Version gate to use (a default gate if None)
        python: Interpreter used for pip package checks
        max_workers: Maximum number of concurrent checks

    Returns:
        One ToolReport per requirement, in the order given
    """
    if not requirements:
        return []

    gate = gate or VersionGate()
    workers = max(1, min(max_workers, len(requirements)))
    log_message(f"Checking {len(requirements)} tool(s) with {workers} worker(s)")

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(check_requirement, requirement, gate, python)
            for requirement in requirements
        ]
        # Collected in submission order
        results = [future.result() for future in futures]

    return [
        ToolReport(requirement=requirement, result=result)
        for requirement, result in zip(requirements, results)
    ]


def is_running_as_root() -> bool:
    """Check whether the process runs with an effective UID of 0.

    Always False on platforms without os.geteuid (Windows).
    """
    geteuid = getattr(os, "geteuid", None)
    if geteuid is None:
        return False
    return geteuid() == 0


__all__ = [
    "DEFAULT_MAX_WORKERS",
    "ToolReport",
    "check_requirement",
    "run_checks",
    "is_running_as_root",
]
