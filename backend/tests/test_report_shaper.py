"""Tests for report row shaping."""

import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from services.issue_normalizer import Issue
from services.report_shaper import (
    ReportMode,
    format_days,
    percent_of,
    round_half_up,
    shape,
    total_time_days,
)


class TestReportMode:
    """Test report mode parsing."""

    def test_parses_names(self):
        """Should accept mode names in any case."""
        assert ReportMode.parse("planning") is ReportMode.PLANNING
        assert ReportMode.parse(" Retrospective ") is ReportMode.RETROSPECTIVE

    def test_aliases(self):
        """Should accept the sprint-report aliases."""
        assert ReportMode.parse("sprint-report") is ReportMode.RETROSPECTIVE
        assert ReportMode.parse("retro") is ReportMode.RETROSPECTIVE

    def test_passes_through_enum(self):
        """Should return enum values unchanged."""
        assert ReportMode.parse(ReportMode.PLANNING) is ReportMode.PLANNING

    def test_rejects_unknown(self):
        """Should raise ValueError for unknown modes."""
        with pytest.raises(ValueError, match="Unknown report mode"):
            ReportMode.parse("weekly")
        with pytest.raises(ValueError):
            ReportMode.parse(None)


class TestPercentages:
    """Test rounding and percentage rules."""

    def test_one_third(self):
        """1 of 3 days should be 33%."""
        assert percent_of(1, 3) == 33

    def test_rounds_half_up(self):
        """Halves should round up, not to even."""
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(2.4) == 2
        assert percent_of(1, 8) == 13  # 12.5%

    def test_zero_total(self):
        """Zero total time gives 0% rather than dividing by zero."""
        assert percent_of(0, 0) == 0
        assert percent_of(2, 0) == 0


class TestFormatDays:
    """Test day rendering."""

    def test_whole_numbers(self):
        assert format_days(3.0) == "3"
        assert format_days(0) == "0"

    def test_fractions(self):
        assert format_days(1.5) == "1.5"


class TestTotalTimeDays:
    """Test total logged time."""

    def test_sums_grouped_issues(self):
        """Should add up every grouped issue."""
        grouped = {
            "story": [Issue(key="P-1", type="story", calculated_time_days=3.0)],
            "bug": [
                Issue(key="P-2", type="bug", calculated_time_days=1.5),
                Issue(key="P-3", type="bug", calculated_time_days=0.5)
            ]
        }
        assert total_time_days(grouped) == 5.0

    def test_empty(self):
        assert total_time_days({}) == 0


class TestShapePlanning:
    """Test planning rows."""

    def test_planning_row_fields_in_order(self):
        """Should produce planning columns in CSV order."""
        issue = Issue(
            key="P-1", type="story", summary="Build it", assignee_name="Sam",
            original_estimate="3d", epic_label="P-100 - Platform"
        )

        reports = shape({"story": [issue]}, ReportMode.PLANNING)

        row = reports["story"][0]
        assert list(row) == [
            "summary", "key", "name", "estimation",
            "comments", "estimatedDelivery", "epic"
        ]
        assert row == {
            "summary": "Build it",
            "key": "P-1",
            "name": "Sam",
            "estimation": "3d",
            "comments": "",
            "estimatedDelivery": "This Sprint",
            "epic": "P-100 - Platform"
        }

    def test_stretch_goal_goes_to_next_sprint(self):
        """Stretch goals are flagged and delivered next sprint."""
        issue = Issue(key="P-1", type="bug", is_stretch_goal=True)
        row = shape({"bug": [issue]}, "planning")["bug"][0]
        assert row["comments"] == "stretch"
        assert row["estimatedDelivery"] == "Next Sprint"


class TestShapeRetrospective:
    """Test retrospective rows."""

    def test_retrospective_row_fields_in_order(self):
        """Should produce retrospective columns in CSV order."""
        issue = Issue(key="P-1", type="story", summary="Build it",
                      assignee_name="Sam", calculated_time_days=1.0)

        row = shape({"story": [issue]}, ReportMode.RETROSPECTIVE, 3.0)["story"][0]

        assert list(row) == [
            "summary", "key", "name", "time", "percentage", "comments", "epic"
        ]
        assert row["time"] == "1d"
        assert row["percentage"] == "33%"
        assert row["comments"] == ""
        assert row["epic"] is None

    def test_zero_total_time(self):
        """Every percentage is 0% when nothing was logged."""
        grouped = {
            "story": [Issue(key="P-1", type="story")],
            "bug": [Issue(key="P-2", type="bug")]
        }

        reports = shape(grouped, ReportMode.RETROSPECTIVE, 0.0)

        percentages = [row["percentage"] for rows in reports.values() for row in rows]
        assert percentages == ["0%", "0%"]


class TestEpicSort:
    """Test ordering within a bucket."""

    def test_missing_epic_first_and_stable(self):
        """Issues without epic come first; equal epics keep input order."""
        issues = [
            Issue(key="P-1", type="story", epic_label="B - Beta"),
            Issue(key="P-2", type="story"),
            Issue(key="P-3", type="story", epic_label="A - Alpha"),
            Issue(key="P-4", type="story", epic_label="B - Beta"),
            Issue(key="P-5", type="story")
        ]

        rows = shape({"story": issues}, ReportMode.PLANNING)["story"]

        assert [row["key"] for row in rows] == ["P-2", "P-5", "P-3", "P-1", "P-4"]

    def test_does_not_reorder_input(self):
        """Sorting should not mutate the grouped issue list."""
        issues = [
            Issue(key="P-1", type="story", epic_label="B"),
            Issue(key="P-2", type="story", epic_label="A")
        ]
        shape({"story": issues}, ReportMode.PLANNING)
        assert [i.key for i in issues] == ["P-1", "P-2"]
