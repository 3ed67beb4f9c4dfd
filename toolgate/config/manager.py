"""Configuration manager for TOOLGATE.

This module provides the ConfigManager class for loading configuration
values with a cascading hierarchy:

    1. Environment Variables (highest priority)
    2. Local Config (.toolgate in project/parent directories)
    3. Global Config (~/.toolgate-config)
    4. Built-in Defaults (lowest priority)

A project can pin stricter minimum versions in its own .toolgate file
while each developer keeps machine-level settings in the global file.
"""

from __future__ import annotations

import math
import os
import re
from collections.abc import Callable, Iterator
from pathlib import Path

from toolgate.config.settings import (
    CONFIG_FILE,
    MAX_PARALLEL_CHECKS,
    MIN_PARALLEL_CHECKS,
    Settings,
)
from toolgate.utils.console import console, print_header, print_info, print_warning
from toolgate.utils.logging import log_message

_LINE_PATTERN = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)=(.*)$")

DEFAULT_SOURCE = "default"


def parse_timeout_seconds(value: str) -> float:
    """Parse VERSION_TIMEOUT_SECONDS: a finite number of seconds above zero."""
    try:
        seconds = float(value)
    except ValueError:
        raise ValueError("expected a number of seconds") from None
    if not math.isfinite(seconds) or seconds <= 0:
        raise ValueError("expected a number of seconds greater than 0")
    return seconds


def parse_parallel_checks(value: str) -> int:
    """Parse MAX_PARALLEL_CHECKS: a whole number within the supported range."""
    try:
        count = int(value)
    except ValueError:
        raise ValueError("expected a whole number") from None
    if not MIN_PARALLEL_CHECKS <= count <= MAX_PARALLEL_CHECKS:
        raise ValueError(
            f"expected a value between {MIN_PARALLEL_CHECKS} and {MAX_PARALLEL_CHECKS}"
        )
    return count


# Keys not listed here are plain strings. Version strings are validated
# later, when the tool catalog is built, so the error names the tool.
_VALUE_PARSERS: dict[str, Callable[[str], object]] = {
    "VERSION_TIMEOUT_SECONDS": parse_timeout_seconds,
    "MAX_PARALLEL_CHECKS": parse_parallel_checks,
}


class ConfigManager:
    """Loads Settings from the environment and KEY=VALUE config files.

    Files are read line by line; nothing is sourced or evaluated. Keys
    that Settings does not know are skipped. A value that fails to parse
    is reported with a warning and the default is kept.

    Attributes:
        settings: Settings produced by the last load()
        global_config_path: Path to the global ~/.toolgate-config file
        local_config_path: Project .toolgate file found by the last load()
    """

    LOCAL_CONFIG_NAME = ".toolgate"

    def __init__(self, global_config_path: Path | None = None) -> None:
        self.global_config_path = global_config_path or CONFIG_FILE
        self.local_config_path: Path | None = None
        self.settings = Settings()
        self._sources: dict[str, str] = {}

    def load(self) -> Settings:
        """Load configuration from all sources, lowest priority first.

        Each call starts again from defaults.

        Returns:
            Settings instance with loaded values
        """
        self.settings = Settings()
        self.local_config_path = self._find_local_config()
        self._sources = {}

        # key -> (raw value, source); later sources overwrite earlier ones
        values: dict[str, tuple[str, str]] = {}

        if self.global_config_path.is_file():
            log_message(f"Loading global configuration from {self.global_config_path}")
            for key, raw in self._read_pairs(self.global_config_path):
                values[key] = (raw, "global")

        if self.local_config_path:
            log_message(f"Loading local configuration from {self.local_config_path}")
            for key, raw in self._read_pairs(self.local_config_path):
                values[key] = (raw, f"local ({self.local_config_path})")

        for key in Settings.get_config_keys():
            if key in os.environ:
                values[key] = (os.environ[key], "environment")

        for key, (raw, source) in values.items():
            self._apply(key, raw, source)

        log_message(f"Configuration loaded ({len(self._sources)} keys set)")
        return self.settings

    def _find_local_config(self) -> Path | None:
        """Search from the working directory up to the repository root.

        The search stops at the first .toolgate file, at a directory that
        contains .git, or at the filesystem root.
        """
        for directory in (Path.cwd(), *Path.cwd().parents):
            candidate = directory / self.LOCAL_CONFIG_NAME
            if candidate.is_file():
                return candidate
            if (directory / ".git").exists():
                return None
        return None

    @staticmethod
    def _read_pairs(path: Path) -> Iterator[tuple[str, str]]:
        """Yield KEY=VALUE pairs, skipping blanks, comments and other lines."""
        with path.open() as f:
            for line in f:
                match = _LINE_PATTERN.match(line.strip())
                if not match:
                    continue
                key, value = match.groups()
                if len(value) >= 2 and value[0] == value[-1] == '"':
                    # Backslashes first, then quotes, so \\\" round-trips
                    value = value[1:-1].replace("\\\\", "\\").replace('\\"', '"')
                elif len(value) >= 2 and value[0] == value[-1] == "'":
                    value = value[1:-1]
                yield key, value

    def _apply(self, key: str, raw: str, source: str) -> None:
        attr = self.settings.get_attribute_for_key(key)
        if attr is None:
            log_message(f"Ignoring unknown configuration key {key} ({source})")
            return

        parser = _VALUE_PARSERS.get(key)
        if parser is None:
            setattr(self.settings, attr, raw.strip())
        else:
            try:
                setattr(self.settings, attr, parser(raw.strip()))
            except ValueError as e:
                print_warning(
                    f"Ignoring {key}={raw!r} from {source}: {e}; "
                    f"using {getattr(self.settings, attr)}"
                )
                return

        self._sources[key] = source

    def get_source(self, key: str) -> str:
        """Get where a configuration value came from ("default" if unset)."""
        return self._sources.get(key, DEFAULT_SOURCE)

    def show(self) -> None:
        """Display current configuration using Rich formatting."""
        from rich.table import Table

        print_header("Current Configuration")

        print_info(f"Global config: {self.global_config_path}")
        print_info(f"Local config:  {self.local_config_path or '(not found)'}")
        console.print()

        table = Table(title=None, show_header=True, header_style="bold")
        table.add_column("Key", style="cyan")
        table.add_column("Value")
        table.add_column("Source", style="dim")

        for key in Settings.get_config_keys():
            attr = self.settings.get_attribute_for_key(key)
            table.add_row(key, str(getattr(self.settings, attr)), self.get_source(key))

        console.print(table)
        console.print()


__all__ = [
    "ConfigManager",
    "parse_timeout_seconds",
    "parse_parallel_checks",
]
