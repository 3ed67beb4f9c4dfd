"""Tests for toolgate.ui.report module."""

from unittest.mock import patch

from toolgate.integrations.tools import ToolRequirement
from toolgate.integrations.version_gate import CheckResult, CheckStatus, SemanticVersion
from toolgate.ui.report import (
    STATUS_LABELS,
    build_table,
    describe_failure,
    print_guidance,
    summarize,
)
from toolgate.workflow.runner import ToolReport


def make_report(
    name: str,
    status: CheckStatus,
    required: SemanticVersion | None = None,
    found: SemanticVersion | None = None,
    hint: str = "",
) -> ToolReport:
    return ToolReport(
        requirement=ToolRequirement(name, required=required, hint=hint),
        result=CheckResult(tool=name, status=status, required=required, found=found),
    )


class TestBuildTable:
    def test_one_row_per_report(self):
        reports = [
            make_report("git", CheckStatus.SATISFIED, SemanticVersion(2, 0, 0), SemanticVersion(2, 1, 0)),
            make_report("jq", CheckStatus.ABSENT),
        ]

        table = build_table(reports)

        assert table.row_count == 2
        assert [column.header for column in table.columns] == ["Tool", "Required", "Found", "Status"]

    def test_every_status_has_label(self):
        assert set(STATUS_LABELS) == set(CheckStatus)


class TestDescribeFailure:
    def test_absent(self):
        assert describe_failure(make_report("jq", CheckStatus.ABSENT)) == ["jq not installed."]

    def test_below_minimum(self):
        report = make_report(
            "vault", CheckStatus.BELOW_MINIMUM, SemanticVersion(0, 9, 3), SemanticVersion(0, 9, 2)
        )

        assert describe_failure(report) == ["Expected vault version >= 0.9.3", "Found 0.9.2"]

    def test_unparseable(self):
        report = make_report("vault", CheckStatus.UNPARSEABLE, SemanticVersion(0, 9, 3))

        assert "Could not determine vault version" in describe_failure(report)[0]

    def test_satisfied(self):
        assert describe_failure(make_report("git", CheckStatus.SATISFIED)) == []


class TestPrintGuidance:
    @patch("toolgate.ui.report.print_info")
    @patch("toolgate.ui.report.print_error")
    def test_prints_errors_and_hints_for_failures_only(self, mock_error, mock_info):
        reports = [
            make_report("git", CheckStatus.SATISFIED, hint="update git"),
            make_report("jq", CheckStatus.ABSENT, hint="install jq"),
        ]

        print_guidance(reports)

        mock_error.assert_called_once_with("jq not installed.")
        mock_info.assert_called_once_with("install jq")

    @patch("toolgate.ui.report.print_info")
    @patch("toolgate.ui.report.print_error")
    def test_no_hint(self, mock_error, mock_info):
        print_guidance([make_report("terraform", CheckStatus.ABSENT)])

        mock_error.assert_called_once()
        mock_info.assert_not_called()


class TestSummarize:
    @patch("toolgate.ui.report.print_success")
    def test_all_ok(self, mock_success):
        assert summarize([make_report("git", CheckStatus.SATISFIED)]) is True
        mock_success.assert_called_once()

    @patch("toolgate.ui.report.print_warning")
    def test_failures(self, mock_warning):
        reports = [
            make_report("git", CheckStatus.SATISFIED),
            make_report("jq", CheckStatus.ABSENT),
        ]

        assert summarize(reports) is False
        assert "Rerun" in mock_warning.call_args[0][0]
