"""Tests for hours totals."""

import pandas as pd
import pytest

from timesheet_approval.aggregators.hours_summary import (
    entries_to_frame,
    hours_matrix,
    total_hours,
    total_hours_by_project,
)


@pytest.fixture
def entries(make_entry):
    return [
        make_entry("1", hours=4),
        make_entry("2", hours=3, project_name="Gemini"),
        make_entry("3", hours=5),
        make_entry("4", hours=2, user="bob@example.com", project_name="Gemini"),
    ]


class TestHoursSummary:
    """Tests for the hours summary functions."""

    def test_entries_to_frame(self, entries):
        df = entries_to_frame(entries)

        assert len(df) == 4
        assert list(df.columns) == [
            "id", "date", "user", "project", "activity", "status", "unit", "hours"
        ]
        assert df.loc[0, "status"] == "Pending"

    def test_empty_frame_has_columns(self):
        df = entries_to_frame([])

        assert df.empty
        assert "hours" in df.columns

    def test_total_hours(self, entries):
        assert total_hours(entries) == 14
        assert total_hours([]) == 0

    def test_total_by_project(self, entries):
        assert total_hours_by_project(entries) == {"Apollo": 9, "Gemini": 5}

    def test_total_by_project_for_user(self, entries):
        assert total_hours_by_project(entries, user="BOB@example.com") == {"Gemini": 2}
        assert total_hours_by_project(entries, user="eve@example.com") == {}

    def test_hours_matrix(self, entries):
        matrix = hours_matrix(entries)

        assert list(matrix.index) == ["ana@example.com", "bob@example.com"]
        assert list(matrix.columns) == ["Apollo", "Gemini"]
        assert matrix.loc["ana@example.com", "Apollo"] == 9
        assert matrix.loc["bob@example.com", "Apollo"] == 0

    def test_empty_matrix(self):
        assert isinstance(hours_matrix([]), pd.DataFrame)
        assert hours_matrix([]).empty
