"""Integrations with external tools for TOOLGATE.

This package contains:
- process: Command invocation with combined output and timeouts
- version_gate: Minimum-version gate for executables on PATH
- pip: Python package presence and version checks
- tools: The catalog of bootstrap tools and their minimum versions
"""

from toolgate.integrations.pip import check_pip_package
from toolgate.integrations.process import CommandResult, run_command
from toolgate.integrations.tools import (
    DEFAULT_TOOLS,
    ToolKind,
    ToolRequirement,
    build_catalog,
    select_tools,
)
from toolgate.integrations.version_gate import (
    CheckResult,
    CheckStatus,
    SemanticVersion,
    VersionGate,
    compare_versions,
    parse_requirement,
    parse_version,
)

__all__ = [
    # Process
    "CommandResult",
    "run_command",
    # Version gate
    "CheckResult",
    "CheckStatus",
    "SemanticVersion",
    "VersionGate",
    "compare_versions",
    "parse_requirement",
    "parse_version",
    # Pip
    "check_pip_package",
    # Tools
    "DEFAULT_TOOLS",
    "ToolKind",
    "ToolRequirement",
    "build_catalog",
    "select_tools",
]
