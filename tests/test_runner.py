"""Tests for toolgate.workflow.runner module."""

import threading
import time
from unittest.mock import patch

from tests.fakes import FakeRunner, make_which
from toolgate.integrations.tools import ToolKind, ToolRequirement
from toolgate.integrations.version_gate import CheckStatus, SemanticVersion, VersionGate
from toolgate.workflow.runner import (
    ToolReport,
    check_requirement,
    is_running_as_root,
    run_checks,
)


def make_gate(runner: FakeRunner, present: list[str]) -> VersionGate:
    return VersionGate(runner=runner, which=make_which(present), timeout=1.0)


class TestCheckRequirement:
    def test_versioned_executable(self):
        runner = FakeRunner().add("git", "git version 2.39.3")
        gate = make_gate(runner, ["git"])

        result = check_requirement(ToolRequirement("git", required=SemanticVersion(2, 0, 0)), gate)

        assert result.status is CheckStatus.SATISFIED
        assert result.found == SemanticVersion(2, 39, 3)

    def test_presence_only_executable_is_not_invoked(self):
        runner = FakeRunner()
        gate = make_gate(runner, ["docker"])

        result = check_requirement(ToolRequirement("docker"), gate)

        assert result.status is CheckStatus.SATISFIED
        assert runner.calls == []

    def test_presence_only_missing(self):
        gate = make_gate(FakeRunner(), [])

        result = check_requirement(ToolRequirement("jq"), gate)

        assert result.status is CheckStatus.ABSENT

    def test_pip_package_uses_gate_runner_and_python(self):
        runner = FakeRunner().add("python3.11", "Name: awscli\nVersion: 1.29.45\n")
        gate = make_gate(runner, [])

        result = check_requirement(
            ToolRequirement("awscli", kind=ToolKind.PIP_PACKAGE), gate, python="python3.11"
        )

        assert result.status is CheckStatus.SATISFIED
        assert runner.calls == [("python3.11", ("-m", "pip", "show", "awscli"), 1.0)]


class TestRunChecks:
    def test_reports_in_requirement_order(self):
        runner = FakeRunner().add("git", "git version 1.9.0").add("vault", "Vault v0.10.1")
        gate = make_gate(runner, ["git", "vault"])
        requirements = [
            ToolRequirement("git", required=SemanticVersion(2, 0, 0)),
            ToolRequirement("jq"),
            ToolRequirement("vault", required=SemanticVersion(0, 9, 3)),
        ]

        reports = run_checks(requirements, gate=gate, max_workers=3)

        assert [report.requirement.name for report in reports] == ["git", "jq", "vault"]
        assert [report.result.status for report in reports] == [
            CheckStatus.BELOW_MINIMUM,
            CheckStatus.ABSENT,
            CheckStatus.SATISFIED,
        ]
        assert [report.ok for report in reports] == [False, False, True]

    def test_empty(self):
        assert run_checks([]) == []

    def test_checks_run_concurrently(self):
        barrier = threading.Barrier(3, timeout=5)

        def slow_which(name):
            barrier.wait()
            return f"/usr/bin/{name}"

        gate = VersionGate(runner=FakeRunner(), which=slow_which)
        requirements = [ToolRequirement(name) for name in ("docker", "jq", "consul-template")]

        reports = run_checks(requirements, gate=gate, max_workers=3)

        assert all(report.ok for report in reports)

    def test_single_worker_runs_sequentially(self):
        active = 0
        peak = 0
        lock = threading.Lock()

        def tracking_which(name):
            nonlocal active, peak
            with lock:
                active += 1
                peak = max(peak, active)
            time.sleep(0.01)
            with lock:
                active -= 1
            return None

        gate = VersionGate(runner=FakeRunner(), which=tracking_which)

        run_checks([ToolRequirement("a"), ToolRequirement("b")], gate=gate, max_workers=1)

        assert peak == 1


class TestToolReport:
    def test_ok_follows_result(self):
        report = ToolReport(
            requirement=ToolRequirement("jq"),
            result=check_requirement(ToolRequirement("jq"), make_gate(FakeRunner(), ["jq"])),
        )

        assert report.ok is True


class TestIsRunningAsRoot:
    @patch("os.geteuid", create=True, return_value=0)
    def test_root(self, mock_geteuid):
        assert is_running_as_root() is True

    @patch("os.geteuid", create=True, return_value=1000)
    def test_regular_user(self, mock_geteuid):
        assert is_running_as_root() is False
