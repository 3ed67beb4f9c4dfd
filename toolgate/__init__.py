"""TOOLGATE - Minimum-version gate for developer bootstrap tools.

This package provides a Python CLI that checks the command-line tools a
developer machine needs (git, Python, Docker, Vault, ...) against minimum
versions before a bootstrap run.
"""

__version__ = "1.0.0"
SCRIPT_NAME = "TOOLGATE"

__all__ = [
    "__version__",
    "SCRIPT_NAME",
]
