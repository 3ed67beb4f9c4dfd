"""Custom exceptions and exit codes for TOOLGATE.

This module defines the exit codes and exception hierarchy used throughout
the application. Missing or outdated tools are not exceptions: they are
reported as check results. Exceptions are reserved for caller and
configuration defects, and for the final CLI outcome.
"""

from enum import IntEnum
from typing import ClassVar


class ExitCode(IntEnum):
    """Exit codes returned by the toolgate command.

    These codes are used for consistent error reporting and can be
    checked by calling scripts or CI systems.
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    TOOLS_NOT_SATISFIED = 2
    INVALID_REQUIREMENT = 3
    USER_CANCELLED = 4


class ToolgateError(Exception):
    """Base exception for TOOLGATE errors.

    All custom exceptions in this application should inherit from this class.
    Each exception type has an associated exit code for proper error reporting.

    Attributes:
        exit_code: The exit code to use when this exception causes program termination
        message: The error message
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.GENERAL_ERROR

    def __init__(self, message: str, exit_code: ExitCode | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Error message describing what went wrong
            exit_code: Optional override for the default exit code
        """
        super().__init__(message)
        self._exit_code = exit_code

    @property
    def exit_code(self) -> ExitCode:
        """Get the exit code for this exception.

        Returns:
            The instance exit code if set, otherwise the class default exit code.
        """
        if self._exit_code is not None:
            return self._exit_code
        return self.__class__._default_exit_code


class InvalidRequirementError(ToolgateError):
    """A minimum version requirement is malformed.

    Raised when:
    - A requirement does not have exactly three components
    - A component is negative or not a whole number
    - A configured MIN_*_VERSION value cannot be parsed

    Attributes:
        value: The offending requirement value
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.INVALID_REQUIREMENT

    def __init__(
        self,
        message: str,
        value: object = None,
        exit_code: ExitCode | None = None,
    ) -> None:
        self.value = value
        super().__init__(message, exit_code)


class UnknownToolError(ToolgateError):
    """A tool name was requested that is not in the tool catalog.

    Attributes:
        tool: The unknown tool name
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.INVALID_REQUIREMENT

    def __init__(self, tool: str, known: list[str] | None = None) -> None:
        self.tool = tool
        message = f"Unknown tool: {tool}"
        if known:
            message += f". Known tools: {', '.join(known)}"
        super().__init__(message)


class ToolsNotSatisfiedError(ToolgateError):
    """One or more tools are absent, outdated, or report no version.

    Attributes:
        tools: Names of the tools that failed their check
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.TOOLS_NOT_SATISFIED

    def __init__(self, tools: list[str]) -> None:
        self.tools = list(tools)
        super().__init__(f"{len(self.tools)} tool(s) need attention: {', '.join(self.tools)}")


__all__ = [
    "ExitCode",
    "ToolgateError",
    "InvalidRequirementError",
    "UnknownToolError",
    "ToolsNotSatisfiedError",
]
