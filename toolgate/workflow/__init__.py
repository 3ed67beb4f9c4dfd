"""Check orchestration for TOOLGATE.

This package contains:
- runner: Concurrent execution of catalog checks and preflight checks
"""

from toolgate.workflow.runner import (
    ToolReport,
    check_requirement,
    is_running_as_root,
    run_checks,
)

__all__ = [
    "ToolReport",
    "check_requirement",
    "is_running_as_root",
    "run_checks",
]
