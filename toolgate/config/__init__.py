"""Configuration management for TOOLGATE.

This package contains:
- settings: Settings dataclass with configuration fields
- manager: ConfigManager class for loading configuration

Configuration Format
====================
Flat KEY=VALUE (environment variable style), one pair per line:

    MIN_GIT_VERSION=2.20.0
    PYTHON_COMMAND=python3.11
    VERSION_TIMEOUT_SECONDS=10
"""

from toolgate.config.manager import ConfigManager
from toolgate.config.settings import CONFIG_FILE, Settings

__all__ = [
    "CONFIG_FILE",
    "Settings",
    "ConfigManager",
]
