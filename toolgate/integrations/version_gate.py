"""Minimum-version gate for externally installed tools.

This module answers one question: is tool T installed at version >= V?
Versions are scraped from the tool's own ``--version`` output and compared
as integer triples, so 1.10.0 sorts after 1.9.0 and 10.0.0 after 9.9.9.

Absence and unparseable output are ordinary results, not errors. Only a
malformed requirement raises, because it points at a bug in the caller's
configuration rather than at the state of the machine.
"""

import re
import shutil
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Union

from toolgate.integrations.process import (
    EXIT_TIMED_OUT,
    CommandResult,
    CommandRunner,
    run_command,
)
from toolgate.utils.errors import InvalidRequirementError
from toolgate.utils.logging import log_check, log_message

# Default seconds to wait for ``<tool> --version`` before giving up
DEFAULT_VERSION_TIMEOUT = 5.0

# A standalone <digits>.<digits>.<digits> token; 1.2.3.4 is not one
_VERSION_PATTERN = re.compile(r"(?<![\d.])(\d+)\.(\d+)\.(\d+)(?!\.?\d)")
_REQUIREMENT_PATTERN = re.compile(r"^(\d+)\.(\d+)\.(\d+)$")


@dataclass(frozen=True)
class SemanticVersion:
    """A (major, minor, patch) version triple of non-negative integers."""

    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            value = getattr(self, name)
            # bool is an int subclass; True.False.True is not a version
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidRequirementError(
                    f"Version component {name} must be a whole number, got {value!r}",
                    value=value,
                )
            if value < 0:
                raise InvalidRequirementError(
                    f"Version component {name} must be >= 0, got {value}",
                    value=value,
                )

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


class CheckStatus(Enum):
    """Outcome of a minimum-version check."""

    ABSENT = "absent"
    BELOW_MINIMUM = "below_minimum"
    SATISFIED = "satisfied"
    UNPARSEABLE = "unparseable"


@dataclass(frozen=True)
class CheckResult:
    """Result of checking one tool against a minimum version.

    Attributes:
        tool: Name of the checked tool
        status: Outcome of the check
        required: Minimum version, or None for presence-only checks
        found: Version reported by the tool, when one could be parsed
    """

    tool: str
    status: CheckStatus
    required: SemanticVersion | None = None
    found: SemanticVersion | None = None

    @property
    def is_satisfied(self) -> bool:
        return self.status is CheckStatus.SATISFIED


RequirementLike = Union[SemanticVersion, str, Sequence[int]]


def parse_version(text: str) -> SemanticVersion | None:
    """Extract the first three-part version from free-form tool output.

    The scan is left to right and the first match wins, even when later
    text contains other version-looking numbers (build metadata, bundled
    library versions). Checks for specific tools may rely on this order.
A token with more than three parts, such as 1.2.3.4, is not a
version and is never partially matched.
    Args:
        text: Output of a version-reporting command

    Returns:
        Parsed version, or None if no standalone ``X.Y.Z`` token is present
    """
    match = _VERSION_PATTERN.search(text or "")
    if not match:
        return None
    major, minor, patch = (int(group) for group in match.groups())
    return SemanticVersion(major, minor, patch)


def parse_requirement(value: RequirementLike) -> SemanticVersion:
    """Validate and convert a minimum-version requirement.

    Accepts a SemanticVersion, an ``"X.Y.Z"`` string or a sequence of
    three non-negative integers.

    Args:
        value: Requirement as supplied by configuration or a caller

    Returns:
        The requirement as a SemanticVersion

    Raises:
        InvalidRequirementError: If the value has the wrong arity, a
            negative or non-integer component, or is not a version at all
    """
    if isinstance(value, SemanticVersion):
        return value

    if isinstance(value, str):
        match = _REQUIREMENT_PATTERN.match(value.strip())
        if not match:
            raise InvalidRequirementError(
                f"Invalid version requirement {value!r}: expected MAJOR.MINOR.PATCH",
                value=value,
            )
        return SemanticVersion(*(int(group) for group in match.groups()))

    if isinstance(value, Sequence):
        if len(value) != 3:
            raise InvalidRequirementError(
                f"Invalid version requirement {tuple(value)!r}: "
                f"expected 3 components, got {len(value)}",
                value=value,
            )
        return SemanticVersion(*value)

    raise InvalidRequirementError(
        f"Invalid version requirement {value!r}: expected MAJOR.MINOR.PATCH",
        value=value,
    )


def compare_versions(found: SemanticVersion, required: SemanticVersion) -> int:
    """Compare two versions component by component.

    Args:
        found: Version reported by the tool
        required: Minimum version

    Returns:
        -1 if found < required, 0 if equal, 1 if found > required
    """
    for have, want in (
        (found.major, required.major),
        (found.minor, required.minor),
        (found.patch, required.patch),
    ):
        if have < want:
            return -1
        if have > want:
            return 1
    return 0


class VersionGate:
    """Decides whether a tool is present at or above a minimum version.

    The gate is stateless: each call only reads the output of the tool it
    invokes, so one instance may be shared across threads.

    Attributes:
        runner: Process-invocation primitive used for ``--version`` calls
        which: Search-path lookup returning the executable path or None
        timeout: Seconds allowed for each version query
    """

    VERSION_FLAG = "--version"

    def __init__(
        self,
        runner: CommandRunner | None = None,
        which: Callable[[str], str | None] | None = None,
        timeout: float = DEFAULT_VERSION_TIMEOUT,
    ) -> None:
        self.runner: CommandRunner = runner or run_command
        self.which = which or shutil.which
        self.timeout = timeout

    def is_present(self, tool_name: str) -> bool:
        """Check whether an executable named tool_name is on the search path."""
        if not tool_name:
            return False
        try:
            return self.which(tool_name) is not None
        except OSError as e:
            log_message(f"Path lookup for {tool_name} failed: {e}")
            return False

    def query_version(self, tool_name: str) -> SemanticVersion | CheckStatus:
        """Ask a tool for its version.

        Runs ``<tool_name> --version`` and parses the first ``X.Y.Z`` run
        from the combined output.

        Args:
            tool_name: Executable to query

        Returns:
            The parsed version; CheckStatus.ABSENT if the tool could not be
            run or exited non-zero; CheckStatus.UNPARSEABLE if it ran (or
            hung past the timeout) without reporting a three-part version
        """
        result: CommandResult = self.runner(
            tool_name, [self.VERSION_FLAG], timeout=self.timeout
        )

        if result.exit_code == EXIT_TIMED_OUT:
            log_message(f"{tool_name} {self.VERSION_FLAG} timed out after {self.timeout}s")
            return CheckStatus.UNPARSEABLE
        if not result.succeeded:
            return CheckStatus.ABSENT

        found = parse_version(result.output)
        if found is None:
            log_message(f"No version found in {tool_name} output: {result.output.strip()[:80]}")
            return CheckStatus.UNPARSEABLE
        return found

    def check(self, tool_name: str, required: RequirementLike) -> CheckResult:
        """Check that tool_name is installed at version >= required.

        Args:
            tool_name: Executable to check
            required: Minimum version (equality is satisfied)

        Returns:
            CheckResult describing the outcome

        Raises:
            InvalidRequirementError: If required is malformed
        """
        minimum = parse_requirement(required)

        if not self.is_present(tool_name):
            log_check(tool_name, CheckStatus.ABSENT.value, required=minimum)
            return CheckResult(tool=tool_name, status=CheckStatus.ABSENT, required=minimum)

        found = self.query_version(tool_name)
        if isinstance(found, CheckStatus):
            log_check(tool_name, found.value, required=minimum)
            return CheckResult(tool=tool_name, status=found, required=minimum)

        if compare_versions(found, minimum) >= 0:
            status = CheckStatus.SATISFIED
        else:
            status = CheckStatus.BELOW_MINIMUM

        log_check(tool_name, status.value, found=found, required=minimum)
        return CheckResult(tool=tool_name, status=status, required=minimum, found=found)


__all__ = [
    "DEFAULT_VERSION_TIMEOUT",
    "SemanticVersion",
    "CheckStatus",
    "CheckResult",
    "RequirementLike",
    "parse_version",
    "parse_requirement",
    "compare_versions",
    "VersionGate",
]
