"""Settings dataclass for TOOLGATE configuration.

This module defines the Settings dataclass that holds all configuration
values. Defaults are the minimum versions required by the
bootstrap tool catalog.
"""

from dataclasses import dataclass, field
from pathlib import Path

CONFIG_FILE = Path.home() / ".toolgate-config"

# Bounds for MAX_PARALLEL_CHECKS
MIN_PARALLEL_CHECKS = 1
MAX_PARALLEL_CHECKS = 16


@dataclass
class Settings:
    """Configuration settings for TOOLGATE.

    All settings have sensible defaults and can be loaded from
    the configuration file (~/.toolgate-config).

    Attributes:
        min_git_version: Minimum git version (MAJOR.MINOR.PATCH)
        min_python_version: Minimum Python interpreter version
        min_docker_compose_version: Minimum docker-compose version
        min_vault_version: Minimum Hashicorp Vault version
        python_command: Interpreter checked for Python, pip and pip packages
        version_timeout_seconds: Time allowed for each ``--version`` query
        max_parallel_checks: Number of checks run concurrently
    """

    # Minimum versions
    min_git_version: str = "2.0.0"
    min_python_version: str = "3.6.6"
    min_docker_compose_version: str = "1.23.2"
    min_vault_version: str = "0.9.3"

    # Execution settings
    python_command: str = "python3"
    version_timeout_seconds: float = 5.0
    max_parallel_checks: int = 4

    # Config key to attribute mapping
    _key_mapping: dict[str, str] = field(
        default_factory=lambda: {
            "MIN_GIT_VERSION": "min_git_version",
            "MIN_PYTHON_VERSION": "min_python_version",
            "MIN_DOCKER_COMPOSE_VERSION": "min_docker_compose_version",
            "MIN_VAULT_VERSION": "min_vault_version",
            "PYTHON_COMMAND": "python_command",
            "VERSION_TIMEOUT_SECONDS": "version_timeout_seconds",
            "MAX_PARALLEL_CHECKS": "max_parallel_checks",
        },
        repr=False,
    )

    def get_attribute_for_key(self, key: str) -> str | None:
        """Get the attribute name for a config key.

        Args:
            key: Configuration key (e.g., "MIN_GIT_VERSION")

        Returns:
            Attribute name or None if key is unknown
        """
        return self._key_mapping.get(key)

    def get_key_for_attribute(self, attr: str) -> str | None:
        """Get the config key for an attribute name."""
        for key, attribute in self._key_mapping.items():
            if attribute == attr:
                return key
        return None

    @classmethod
    def get_config_keys(cls) -> list[str]:
        """Get all known configuration keys, in display order."""
        return list(cls()._key_mapping.keys())

    @property
    def parallel_checks(self) -> int:
        """max_parallel_checks clamped to the supported range."""
        return max(MIN_PARALLEL_CHECKS, min(MAX_PARALLEL_CHECKS, self.max_parallel_checks))


__all__ = [
    "CONFIG_FILE",
    "MIN_PARALLEL_CHECKS",
    "MAX_PARALLEL_CHECKS",
    "Settings",
]
