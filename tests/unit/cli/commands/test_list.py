"""Tests for the list command."""

import pytest

from timesheet_approval.cli import cli
from timesheet_approval.models import Activity, ApprovalStatus


@pytest.fixture
def entries(seed, make_entry):
    return seed(
        make_entry("1", approval_status=ApprovalStatus.APPROVED),
        make_entry("2", hours=3),
        make_entry(
            "3",
            user="bob@example.com",
            activity=Activity.INTERVIEW,
            hours=2,
            project_name="Gemini",
        ),
    )


class TestListCommand:
    """Tests for list_entries."""

    def test_lists_everything_without_filters(self, runner, entries):
        result = runner.invoke(cli, ["list"])

        assert result.exit_code == 0
        assert "3 entries, 9 hours" in result.output
        for header in ["ID", "Date", "User", "Project", "Activity", "Hours", "Status"]:
            assert header in result.output

    def test_filters_combine(self, runner, entries):
        result = runner.invoke(
            cli, ["list", "--user", "ANA@example.com", "--status", "Pending"]
        )

        assert result.exit_code == 0
        assert "1 entry, 3 hours" in result.output
        assert "12/06/2024" in result.output

    def test_project_filter_ignores_case(self, runner, entries):
        result = runner.invoke(cli, ["list", "--project", "gemini"])

        assert "1 entry, 2 hours" in result.output
        assert "bob@example.com" in result.output

    def test_no_match(self, runner, entries):
        result = runner.invoke(cli, ["list", "--unit", "Unit 9"])

        assert result.exit_code == 0
        assert "No timesheet entries match the filters." in result.output

    def test_invalid_status_is_usage_error(self, runner, entries):
        result = runner.invoke(cli, ["list", "--status", "Done"])

        assert result.exit_code == 2
