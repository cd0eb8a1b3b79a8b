"""Tests for entry list filtering."""

import datetime as dt

import pytest

from timesheet_approval.aggregators.entry_filter import (
    DateBucket,
    EntryFilter,
    FilterEngine,
    filter_entries,
    in_date_bucket,
    start_of_week,
)
from timesheet_approval.models.timesheet import Activity, ApprovalStatus
from timesheet_approval.workflow.session import ReviewSession

# Wednesday; the week runs Sunday 9 June to Saturday 15 June
TODAY = dt.date(2024, 6, 12)


class TestDateBuckets:
    """Tests for start_of_week and in_date_bucket."""

    @pytest.mark.parametrize(
        "day,expected",
        [
            (dt.date(2024, 6, 9), dt.date(2024, 6, 9)),  # Sunday
            (dt.date(2024, 6, 12), dt.date(2024, 6, 9)),
            (dt.date(2024, 6, 15), dt.date(2024, 6, 9)),  # Saturday
            (dt.date(2024, 6, 3), dt.date(2024, 6, 2)),
        ],
    )
    def test_week_starts_sunday(self, day, expected):
        assert start_of_week(day) == expected

    @pytest.mark.parametrize(
        "bucket,day,expected",
        [
            (DateBucket.TODAY, dt.date(2024, 6, 12), True),
            (DateBucket.TODAY, dt.date(2024, 6, 11), False),
            (DateBucket.YESTERDAY, dt.date(2024, 6, 11), True),
            (DateBucket.THIS_WEEK, dt.date(2024, 6, 9), True),
            (DateBucket.THIS_WEEK, dt.date(2024, 6, 15), True),
            (DateBucket.THIS_WEEK, dt.date(2024, 6, 8), False),
            (DateBucket.LAST_WEEK, dt.date(2024, 6, 2), True),
            (DateBucket.LAST_WEEK, dt.date(2024, 6, 8), True),
            (DateBucket.LAST_WEEK, dt.date(2024, 6, 9), False),
            (DateBucket.THIS_MONTH, dt.date(2024, 6, 1), True),
            (DateBucket.THIS_MONTH, dt.date(2024, 5, 31), False),
            (DateBucket.THIS_MONTH, dt.date(2023, 6, 12), False),
        ],
    )
    def test_buckets(self, bucket, day, expected):
        assert in_date_bucket(day, bucket, TODAY) is expected

    def test_bucket_by_value(self):
        assert in_date_bucket(TODAY, "this-week", TODAY)


@pytest.fixture
def entries(make_entry):
    return [
        make_entry("1", date=dt.date(2024, 6, 10), approval_status=ApprovalStatus.APPROVED),
        make_entry("2", date=dt.date(2024, 6, 11), approval_status=ApprovalStatus.PENDING),
        make_entry("3", date=dt.date(2024, 6, 4), approval_status=ApprovalStatus.APPROVED),
        make_entry(
            "4",
            date=dt.date(2024, 6, 12),
            approval_status=ApprovalStatus.APPROVED,
            user="bob@example.com",
            unit="Unit 3",
            activity=Activity.LEAVE,
            hours=8,
        ),
    ]


class TestFilterEntries:
    """Tests for filter_entries."""

    def test_no_filters_returns_everything(self, entries):
        assert filter_entries(entries, EntryFilter(), TODAY) == entries
        assert EntryFilter().is_empty

    def test_filters_are_conjunctive(self, entries):
        criteria = EntryFilter(
            status=ApprovalStatus.APPROVED, date_bucket=DateBucket.THIS_WEEK
        )

        assert [e.id for e in filter_entries(entries, criteria, TODAY)] == ["1", "4"]

    @pytest.mark.parametrize(
        "criteria,expected",
        [
            (EntryFilter(activity=Activity.LEAVE), ["4"]),
            (EntryFilter(user="BOB@example.com"), ["4"]),
            (EntryFilter(unit="Unit 2"), ["1", "2", "3"]),
            (EntryFilter(project="apollo"), ["1", "2", "3", "4"]),
            (EntryFilter(date_bucket=DateBucket.LAST_WEEK), ["3"]),
            (EntryFilter(status=ApprovalStatus.REJECTED), []),
        ],
    )
    def test_single_filters(self, entries, criteria, expected):
        assert [e.id for e in filter_entries(entries, criteria, TODAY)] == expected


class TestFilterEngine:
    """Tests for FilterEngine."""

    @pytest.fixture
    def engine(self, entries):
        return FilterEngine(entries, ReviewSession(), clock=lambda: TODAY)

    def test_apply_and_clear(self, engine):
        """Test filtering by status and week, then clearing everything."""
        engine.session.select_all(["1", "2"])

        visible = engine.apply(
            EntryFilter(status=ApprovalStatus.APPROVED, date_bucket=DateBucket.THIS_WEEK)
        )

        assert [e.id for e in visible] == ["1", "4"]
        assert engine.total_hours() == 12
        assert engine.session.selected_ids() == []

        engine.session.select("1")
        restored = engine.clear()

        assert [e.id for e in restored] == ["1", "2", "3", "4"]
        assert engine.criteria.is_empty
        assert engine.session.selected_ids() == []

    def test_reapply_recomputes_from_full_list(self, engine):
        engine.apply(EntryFilter(user="bob@example.com"))

        visible = engine.apply(EntryFilter(status=ApprovalStatus.PENDING))

        assert engine.visible_ids() == ["2"]
        assert [e.id for e in visible] == ["2"]

    def test_set_entries_keeps_filters(self, engine, make_entry):
        engine.apply(EntryFilter(status=ApprovalStatus.PENDING))

        engine.set_entries([make_entry("9"), make_entry("10", approval_status=ApprovalStatus.APPROVED)])

        assert engine.visible_ids() == ["9"]

    def test_visible_is_a_copy(self, engine):
        engine.visible.clear()

        assert len(engine.visible) == 4
