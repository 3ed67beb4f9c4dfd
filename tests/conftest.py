"""Shared pytest fixtures for TOOLGATE tests."""

from pathlib import Path

import pytest

from tests.fakes import FakeRunner, make_which
from toolgate.integrations.version_gate import VersionGate


@pytest.fixture
def fake_runner() -> FakeRunner:
    """A FakeRunner with no tools configured."""
    return FakeRunner()


@pytest.fixture
def make_gate():
    """Build a VersionGate over a FakeRunner; tools given output are on PATH."""

    def _make(**outputs: str) -> tuple[VersionGate, FakeRunner]:
        runner = FakeRunner()
        for name, output in outputs.items():
            runner.add(name.replace("_", "-"), output)
        gate = VersionGate(runner=runner, which=make_which(runner.results), timeout=2.0)
        return gate, runner

    return _make


@pytest.fixture
def temp_config_file(tmp_path: Path) -> Path:
    """Create a temporary global config file with sample values."""
    config_file = tmp_path / ".toolgate-config"
    config_file.write_text(
        """# TOOLGATE Configuration
MIN_GIT_VERSION="2.20.0"
MIN_VAULT_VERSION='1.0.0'
PYTHON_COMMAND=python3.11
VERSION_TIMEOUT_SECONDS=10
MAX_PARALLEL_CHECKS=2
"""
    )
    return config_file


@pytest.fixture
def empty_config_file(tmp_path: Path) -> Path:
    """Create an empty config file."""
    config_file = tmp_path / ".toolgate-config"
    config_file.write_text("")
    return config_file


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path: Path):
    """Keep config keys from the developer's environment out of tests."""
    from toolgate.config.settings import Settings

    for key in Settings.get_config_keys():
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
