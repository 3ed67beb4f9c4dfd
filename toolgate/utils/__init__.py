"""Utility modules for TOOLGATE.

This package contains:
- console: Rich-based terminal output utilities
- errors: Custom exceptions and exit codes
- logging: Logging configuration
"""

from toolgate.utils.console import (
    console,
    print_error,
    print_header,
    print_info,
    print_step,
    print_success,
    print_warning,
)
from toolgate.utils.errors import (
    ExitCode,
    InvalidRequirementError,
    ToolgateError,
    ToolsNotSatisfiedError,
    UnknownToolError,
)
from toolgate.utils.logging import log_check, log_command, log_message, setup_logging

__all__ = [
    # Console
    "console",
    "print_error",
    "print_success",
    "print_warning",
    "print_info",
    "print_header",
    "print_step",
    # Errors
    "ExitCode",
    "ToolgateError",
    "InvalidRequirementError",
    "UnknownToolError",
    "ToolsNotSatisfiedError",
    # Logging
    "setup_logging",
    "log_message",
    "log_command",
    "log_check",
]
