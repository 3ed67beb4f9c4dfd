"""Process invocation for TOOLGATE.

This module provides the single primitive every check is built on:
run a command and return its combined output and exit code. Environment
conditions (missing binary, permission denied, hung tool) never raise;
they are mapped onto the exit codes a shell would report.
"""

import subprocess
import time
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from toolgate.utils.logging import log_command, log_message

# Tools are free to print any bytes; undecodable ones become U+FFFD
OUTPUT_ENCODING = "utf-8"

# Shell exit-code conventions (see bash(1) and timeout(1))
EXIT_TIMED_OUT = 124
EXIT_NOT_EXECUTABLE = 126
EXIT_COMMAND_NOT_FOUND = 127


@dataclass(frozen=True)
class CommandResult:
    """Result of running an external command.

    Attributes:
        output: stdout and stderr combined, in the order written
        exit_code: Process exit code, or a shell convention code when the
            command could not be run to completion
    """

    output: str
    exit_code: int

    @property
    def succeeded(self) -> bool:
        """True if the command ran and exited with status 0."""
        return self.exit_code == 0

    @property
    def timed_out(self) -> bool:
        return self.exit_code == EXIT_TIMED_OUT


class CommandRunner(Protocol):
    """Callable that runs ``command args...`` and reports the outcome."""

    def __call__(
        self,
        command: str,
        args: Sequence[str] = (),
        *,
        timeout: float | None = None,
    ) -> CommandResult: ...


def run_command(
    command: str,
    args: Sequence[str] = (),
    *,
    timeout: float | None = None,
) -> CommandResult:
    """Run a command and capture its combined output.

    Args:
        command: Executable name or path
        args: Arguments passed to the executable
        timeout: Seconds to wait before giving up on the process

    Returns:
        CommandResult with combined output and exit code. A missing
        executable yields EXIT_COMMAND_NOT_FOUND, any other OS error
        EXIT_NOT_EXECUTABLE, and a timeout EXIT_TIMED_OUT.
    """
    argv = [command, *args]
    started = time.monotonic()

    try:
        result = subprocess.run(
            argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        log_command(argv, EXIT_COMMAND_NOT_FOUND, time.monotonic() - started)
        return CommandResult(output=str(e), exit_code=EXIT_COMMAND_NOT_FOUND)
    except subprocess.TimeoutExpired as e:
        log_message(f"Command timed out after {timeout}s: {argv[0]}")
        log_command(argv, EXIT_TIMED_OUT, time.monotonic() - started)
        return CommandResult(output=_decode(e.output), exit_code=EXIT_TIMED_OUT)
    except OSError as e:
        log_command(argv, EXIT_NOT_EXECUTABLE, time.monotonic() - started)
        return CommandResult(output=str(e), exit_code=EXIT_NOT_EXECUTABLE)

    log_command(argv, result.returncode, time.monotonic() - started)
    return CommandResult(output=_decode(result.stdout), exit_code=result.returncode)


def _decode(data: bytes | str | None) -> str:
    if not data:
        return ""
    if isinstance(data, str):
        return data
    return data.decode(OUTPUT_ENCODING, errors="replace")


__all__ = [
    "EXIT_TIMED_OUT",
    "EXIT_NOT_EXECUTABLE",
    "EXIT_COMMAND_NOT_FOUND",
    "CommandResult",
    "CommandRunner",
    "run_command",
]
