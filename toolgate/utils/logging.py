"""Logging configuration for TOOLGATE.

Every external command a check runs is recorded with its exit code and
duration, and every check with its outcome, so a slow or misbehaving tool
can be diagnosed after the fact. Nothing is written unless enabled.

Environment Variables:
    TOOLGATE_LOG: Set to "true" to enable logging (default: "false")
    TOOLGATE_LOG_FILE: Path to log file (default: ~/.toolgate.log)
"""

import logging
import os
import shlex
from collections.abc import Sequence
from pathlib import Path

LOGGER_NAME = "toolgate"
DEFAULT_LOG_FILE = Path.home() / ".toolgate.log"

_logger: logging.Logger | None = None


def log_enabled() -> bool:
    """Whether TOOLGATE_LOG asks for a log file."""
    return os.environ.get("TOOLGATE_LOG", "false").lower() == "true"


def log_file_path() -> Path:
    return Path(os.environ.get("TOOLGATE_LOG_FILE", str(DEFAULT_LOG_FILE)))


def setup_logging(enabled: bool | None = None, log_file: Path | None = None) -> logging.Logger:
    """Configure the toolgate logger.

    Reconfigures on every call, so the CLI picks up the environment at
    startup even if a module logged before it.

    Args:
        enabled: Write to a file (defaults to TOOLGATE_LOG)
        log_file: File to write to (defaults to TOOLGATE_LOG_FILE)

    Returns:
        Configured logger instance
    """
    global _logger

    logger = logging.getLogger(LOGGER_NAME)
    _close_handlers(logger)
    # Records stay out of the root logger and the terminal
    logger.propagate = False

    if enabled is None:
        enabled = log_enabled()

    if enabled:
        path = log_file or log_file_path()
        path.parent.mkdir(parents=True, exist_ok=True)

        handler = logging.FileHandler(path)
        handler.setFormatter(
            logging.Formatter(
                "[%(asctime)s] %(threadName)s %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    else:
        logger.addHandler(logging.NullHandler())

    _logger = logger
    return logger


def reset_logging() -> None:
    """Close the log file and forget the configured logger."""
    global _logger

    _close_handlers(logging.getLogger(LOGGER_NAME))
    _logger = None


def _close_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def get_logger() -> logging.Logger:
    if _logger is None:
        return setup_logging()
    return _logger


def log_message(message: str) -> None:
    get_logger().info(message)


def log_command(argv: Sequence[str], exit_code: int, duration: float) -> None:
    """Record one external command.

    Args:
        argv: Command and arguments as executed
        exit_code: Exit code, or the shell convention code when it did not run
        duration: Wall-clock seconds spent waiting for it
    """
    get_logger().info(
        "COMMAND: %s | EXIT_CODE: %d | %.3fs", shlex.join(argv), exit_code, duration
    )


def log_check(
    tool: str,
    status: str,
    found: object | None = None,
    required: object | None = None,
) -> None:
    """Record the outcome of one tool check."""
    parts = [f"CHECK: {tool}", status]
    if found is not None:
        parts.append(f"found {found}")
    if required is not None:
        parts.append(f"required >= {required}")
    get_logger().info(" | ".join(parts))


__all__ = [
    "LOGGER_NAME",
    "DEFAULT_LOG_FILE",
    "log_enabled",
    "log_file_path",
    "setup_logging",
    "reset_logging",
    "get_logger",
    "log_message",
    "log_command",
    "log_check",
]
