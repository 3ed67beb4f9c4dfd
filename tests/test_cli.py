"""Tests for toolgate.cli module."""

import os
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from tests.fakes import FakeRunner, make_which
from toolgate.cli import app
from toolgate.config.manager import ConfigManager
from toolgate.integrations.version_gate import VersionGate
from toolgate.utils.errors import ExitCode

runner = CliRunner()


@pytest.fixture
def isolated_config(tmp_path: Path):
    """Point the CLI at a non-existent global config file."""
    with patch(
        "toolgate.cli.ConfigManager",
        side_effect=lambda: ConfigManager(global_config_path=tmp_path / "missing"),
    ):
        yield


@pytest.fixture
def not_root():
    with patch("toolgate.cli.is_running_as_root", return_value=False) as mock_root:
        yield mock_root


@pytest.fixture
def fake_tools():
    """Patch the CLI's VersionGate to run against a FakeRunner.

    Returns a function that registers tool output; registered tools are on PATH.
    """
    fake = FakeRunner()
    timeouts: list[float] = []

    def make_gate(timeout: float) -> VersionGate:
        timeouts.append(timeout)
        return VersionGate(runner=fake, which=make_which(fake.results), timeout=timeout)

    def add(name: str, output: str, exit_code: int = 0) -> FakeRunner:
        return fake.add(name, output, exit_code)

    with patch("toolgate.cli.VersionGate", side_effect=make_gate):
        add.timeouts = timeouts  # type: ignore[attr-defined]
        add.runner = fake  # type: ignore[attr-defined]
        yield add


class TestCLIVersion:
    """Tests for --version flag."""

    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "1.0.0" in result.stdout

    def test_short_version_flag(self):
        result = runner.invoke(app, ["-v"])

        assert result.exit_code == 0
        assert "1.0.0" in result.stdout


class TestCLIConfig:
    """Tests for --config flag."""

    @patch("toolgate.cli.ConfigManager")
    def test_config_flag_shows_config(self, mock_config_class):
        mock_config = MagicMock()
        mock_config_class.return_value = mock_config

        result = runner.invoke(app, ["--config"])

        assert result.exit_code == 0
        mock_config.show.assert_called_once()

    def test_config_flag_renders_keys(self, isolated_config):
        result = runner.invoke(app, ["--config"])

        assert result.exit_code == 0
        assert "MIN_GIT_VERSION" in result.stdout


class TestCLIValidation:
    """Tests for option validation."""

    def test_parallel_out_of_range(self):
        result = runner.invoke(app, ["--parallel", "0"])

        assert result.exit_code == ExitCode.GENERAL_ERROR

    def test_timeout_must_be_positive(self):
        result = runner.invoke(app, ["--timeout", "0"])

        assert result.exit_code == ExitCode.GENERAL_ERROR

    def test_timeout_must_be_finite(self):
        result = runner.invoke(app, ["--timeout", "inf"])

        assert result.exit_code == ExitCode.GENERAL_ERROR

    def test_unknown_tool(self, isolated_config, not_root, fake_tools):
        result = runner.invoke(app, ["--tool", "kubectl"])

        assert result.exit_code == ExitCode.INVALID_REQUIREMENT
        assert "Unknown tool: kubectl" in result.output

    def test_malformed_require(self, isolated_config, not_root, fake_tools):
        result = runner.invoke(app, ["--require", "vault=1.0"])

        assert result.exit_code == ExitCode.INVALID_REQUIREMENT

    def test_malformed_configured_minimum(self, isolated_config, not_root, fake_tools):
        with patch.dict(os.environ, {"MIN_GIT_VERSION": "two"}):
            result = runner.invoke(app, [])

        assert result.exit_code == ExitCode.INVALID_REQUIREMENT
        assert "MIN_GIT_VERSION" in result.output


class TestCLIChecks:
    """Tests for running tool checks."""

    def test_all_selected_tools_satisfied(self, isolated_config, not_root, fake_tools):
        fake_tools("git", "git version 2.39.3")
        fake_tools("vault", "Vault v0.10.1 ('756fdc45')")

        result = runner.invoke(app, ["--tool", "git", "-t", "vault"])

        assert result.exit_code == ExitCode.SUCCESS
        assert "All 2 tool(s) meet their requirements" in result.output
        assert sorted(fake_tools.runner.commands) == ["git", "vault"]

    def test_outdated_tool_fails(self, isolated_config, not_root, fake_tools):
        fake_tools("git", "git version 1.9.0")

        result = runner.invoke(app, ["--tool", "git"])

        assert result.exit_code == ExitCode.TOOLS_NOT_SATISFIED
        assert "Expected git version >= 2.0.0" in result.output
        assert "Found 1.9.0" in result.output

    def test_missing_tool_fails(self, isolated_config, not_root, fake_tools):
        result = runner.invoke(app, ["--tool", "jq"])

        assert result.exit_code == ExitCode.TOOLS_NOT_SATISFIED
        assert "jq not installed." in result.output

    def test_require_overrides_catalog_minimum(self, isolated_config, not_root, fake_tools):
        fake_tools("vault", "Vault v0.10.1")

        result = runner.invoke(app, ["--tool", "vault", "--require", "vault=1.0.0"])

        assert result.exit_code == ExitCode.TOOLS_NOT_SATISFIED
        assert "Expected vault version >= 1.0.0" in result.output

    def test_require_adds_new_tool(self, isolated_config, not_root, fake_tools):
        fake_tools("git", "git version 2.39.3")
        fake_tools("terraform", "Terraform v1.6.2")

        result = runner.invoke(app, ["-t", "git", "-r", "terraform=1.5.0"])

        assert result.exit_code == ExitCode.SUCCESS
        assert "terraform" in fake_tools.runner.commands

    def test_timeout_option_reaches_gate(self, isolated_config, not_root, fake_tools):
        fake_tools("git", "git version 2.39.3")

        runner.invoke(app, ["--tool", "git", "--timeout", "7.5"])

        assert fake_tools.timeouts[0] == 7.5
        assert fake_tools.runner.calls[0][2] == 7.5

    def test_timeout_defaults_to_config(self, isolated_config, not_root, fake_tools):
        fake_tools("git", "git version 2.39.3")

        with patch.dict(os.environ, {"VERSION_TIMEOUT_SECONDS": "3"}):
            runner.invoke(app, ["--tool", "git"])

        assert fake_tools.timeouts[0] == 3.0

    def test_non_positive_config_timeout_falls_back(self, isolated_config, not_root, fake_tools):
        fake_tools("git", "git version 2.39.3")

        with patch.dict(os.environ, {"VERSION_TIMEOUT_SECONDS": "0"}):
            result = runner.invoke(app, ["--tool", "git"])

        assert result.exit_code == ExitCode.SUCCESS
        assert "Ignoring VERSION_TIMEOUT_SECONDS" in result.output
        assert fake_tools.timeouts[0] == 5.0

    def test_root_warning(self, isolated_config, fake_tools):
        fake_tools("jq", "jq-1.6")

        with patch("toolgate.cli.is_running_as_root", return_value=True):
            result = runner.invoke(app, ["--tool", "jq"])

        assert "without sudo" in result.output
        assert result.exit_code == ExitCode.SUCCESS

    @patch("toolgate.cli._run_tool_checks")
    def test_keyboard_interrupt(self, mock_checks, isolated_config, not_root):
        mock_checks.side_effect = KeyboardInterrupt

        result = runner.invoke(app, [])

        assert result.exit_code == ExitCode.USER_CANCELLED
