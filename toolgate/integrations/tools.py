"""Tool catalog for TOOLGATE.

The catalog lists the tools a developer machine is bootstrapped with, in
the order they are checked, together with the guidance printed when a
tool is missing or too old. Minimum versions come from Settings so
projects can raise them without code changes.
"""

import platform
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from toolgate.config.settings import Settings
from toolgate.integrations.version_gate import SemanticVersion, parse_requirement
from toolgate.utils.errors import InvalidRequirementError, UnknownToolError


class ToolKind(Enum):
    """How a tool's presence is determined."""

    EXECUTABLE = "executable"
    PIP_PACKAGE = "pip"


@dataclass(frozen=True)
class ToolSpec:
    """Static catalog entry.

    Attributes:
        name: Executable or package name
        kind: Whether the tool is found on PATH or through pip
        minimum_attr: Settings attribute holding the minimum version, if any
        hint: Guidance shown when the check fails
        platforms: platform.system() values the entry applies to (None = all)
    """

    name: str
    kind: ToolKind = ToolKind.EXECUTABLE
    minimum_attr: str | None = None
    hint: str = ""
    platforms: frozenset[str] | None = None


@dataclass(frozen=True)
class ToolRequirement:
    """A catalog entry with its minimum version resolved."""

    name: str
    kind: ToolKind = ToolKind.EXECUTABLE
    required: SemanticVersion | None = None
    hint: str = ""


# Placeholder replaced by Settings.python_command
PYTHON_PLACEHOLDER = "{python}"

DEFAULT_TOOLS: tuple[ToolSpec, ...] = (
    ToolSpec(
        name="git",
        minimum_attr="min_git_version",
        hint="Please update your git installation.",
    ),
    ToolSpec(
        name="realpath",
        hint="Install coreutils for macOS: brew install coreutils",
        platforms=frozenset({"Darwin"}),
    ),
    ToolSpec(
        name=PYTHON_PLACEHOLDER,
        minimum_attr="min_python_version",
        hint="Please update your Python installation. "
        "We recommend using https://github.com/pyenv/pyenv",
    ),
    ToolSpec(
        name="pip",
        kind=ToolKind.PIP_PACKAGE,
        hint="Install pip with https://bootstrap.pypa.io/get-pip.py",
    ),
    ToolSpec(
        name="awscli",
        kind=ToolKind.PIP_PACKAGE,
        hint="Install with: pip install --upgrade awscli",
    ),
    ToolSpec(
        name="docker",
        hint="Please follow instructions to install here: https://docs.docker.com/install",
    ),
    ToolSpec(
        name="docker-compose",
        minimum_attr="min_docker_compose_version",
        hint="Install with: pip install --upgrade docker-compose",
    ),
    ToolSpec(
        name="vault",
        minimum_attr="min_vault_version",
        hint="Please download latest binary from "
        "https://www.vaultproject.io/downloads.html, then move into $PATH",
    ),
    ToolSpec(
        name="jq",
        hint="Please download latest from https://stedolan.github.io/jq/download/",
    ),
    ToolSpec(
        name="consul-template",
        hint="Please download latest binary from "
        "https://releases.hashicorp.com/consul-template, then move into $PATH",
    ),
)


def _resolve_minimum(spec: ToolSpec, settings: Settings) -> SemanticVersion | None:
    if spec.minimum_attr is None:
        return None

    raw = getattr(settings, spec.minimum_attr)
    try:
        return parse_requirement(raw)
    except InvalidRequirementError as e:
        key = settings.get_key_for_attribute(spec.minimum_attr) or spec.minimum_attr
        raise InvalidRequirementError(f"{key}: {e}", value=raw) from e


def build_catalog(
    settings: Settings,
    system: str | None = None,
    specs: Iterable[ToolSpec] = DEFAULT_TOOLS,
) -> list[ToolRequirement]:
    """Resolve the catalog for this machine.

    Args:
        settings: Loaded settings supplying minimum versions
        system: Platform name to filter on (defaults to platform.system())
        specs: Catalog entries to resolve

    Returns:
        Requirements in catalog order

    Raises:
        InvalidRequirementError: If a configured minimum version is malformed
    """
    system = system or platform.system()
    catalog: list[ToolRequirement] = []

    for spec in specs:
        if spec.platforms is not None and system not in spec.platforms:
            continue

        name = spec.name
        if name == PYTHON_PLACEHOLDER:
            name = settings.python_command

        catalog.append(
            ToolRequirement(
                name=name,
                kind=spec.kind,
                required=_resolve_minimum(spec, settings),
                hint=spec.hint,
            )
        )

    return catalog


def select_tools(catalog: list[ToolRequirement], names: Iterable[str]) -> list[ToolRequirement]:
    """Restrict the catalog to the named tools, keeping catalog order.

    Raises:
        UnknownToolError: If a name is not in the catalog
    """
    wanted = list(dict.fromkeys(names))
    known = [req.name for req in catalog]
    for name in wanted:
        if name not in known:
            raise UnknownToolError(name, known)
    return [req for req in catalog if req.name in wanted]


def parse_requirement_override(value: str) -> tuple[str, SemanticVersion]:
    """Parse a ``NAME=X.Y.Z`` command-line requirement.

    Raises:
        InvalidRequirementError: If the value has no name or a malformed version
    """
    name, sep, version_str = value.partition("=")
    name = name.strip()
    if not sep or not name:
        raise InvalidRequirementError(
            f"Invalid requirement {value!r}: expected NAME=MAJOR.MINOR.PATCH",
            value=value,
        )
    return name, parse_requirement(version_str)


def apply_overrides(
    catalog: list[ToolRequirement],
    overrides: Iterable[tuple[str, SemanticVersion]],
) -> list[ToolRequirement]:
    """Replace catalog minimums, appending unknown names as executables."""
    result = list(catalog)
    for name, required in overrides:
        for i, req in enumerate(result):
            if req.name == name:
                result[i] = ToolRequirement(
                    name=req.name, kind=req.kind, required=required, hint=req.hint
                )
                break
        else:
            result.append(ToolRequirement(name=name, required=required))
    return result


__all__ = [
    "ToolKind",
    "ToolSpec",
    "ToolRequirement",
    "DEFAULT_TOOLS",
    "PYTHON_PLACEHOLDER",
    "build_catalog",
    "select_tools",
    "parse_requirement_override",
    "apply_overrides",
]
