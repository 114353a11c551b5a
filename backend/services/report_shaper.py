"""Shape grouped issues into planning or retrospective report rows."""

import math
from enum import Enum


class ReportMode(str, Enum):
    """Which report a run produces."""

    PLANNING = "planning"
    RETROSPECTIVE = "retrospective"

    @classmethod
    def parse(cls, value) -> "ReportMode":
        """Read a report mode from user input.

        Accepts ``sprint-report`` and ``retro`` as names for the
        retrospective report.

        Raises:
            ValueError: unknown report mode
        """
        if isinstance(value, cls):
            return value

        normalized = str(value or "").strip().lower()
        if normalized in ("sprint-report", "retro"):
            return cls.RETROSPECTIVE
        try:
            return cls(normalized)
        except ValueError:
            choices = ", ".join(mode.value for mode in cls)
            raise ValueError(f"Unknown report mode {value!r} (expected one of: {choices})") from None


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (0.5 -> 1, 2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def percent_of(days: float, total_days: float) -> int:
    """Rounded percentage of the total; 0 when there is no total."""
    if not total_days:
        return 0
    return round_half_up(days / total_days * 100)


def format_days(days: float) -> str:
    """Render a day count without a trailing ``.0`` for whole numbers."""
    if float(days).is_integer():
        return str(int(days))
    return repr(float(days))


def total_time_days(grouped: dict) -> float:
    """Total logged days across every reported issue."""
    return sum(
        issue.calculated_time_days
        for issues in grouped.values()
        for issue in issues
    )


def _planning_row(issue) -> dict:
    return {
        "summary": issue.summary,
        "key": issue.key,
        "name": issue.assignee_name,
        "estimation": issue.original_estimate,
        "comments": "stretch" if issue.is_stretch_goal else "",
        "estimatedDelivery": "Next Sprint" if issue.is_stretch_goal else "This Sprint",
        "epic": issue.epic_label,
    }


def _retrospective_row(issue, total_days: float) -> dict:
    return {
        "summary": issue.summary,
        "key": issue.key,
        "name": issue.assignee_name,
        "time": f"{format_days(issue.calculated_time_days)}d",
        "percentage": f"{percent_of(issue.calculated_time_days, total_days)}%",
        "comments": "stretch" if issue.is_stretch_goal else "",
        "epic": issue.epic_label,
    }


def shape(grouped: dict, mode: ReportMode, total_days: float = 0.0) -> dict:
    """Build report rows for every category bucket.

    Rows in a bucket are ordered by epic label; issues without an epic come
    first and equal epics keep their original order. Field order in each
    row is the CSV column order.
    """
    mode = ReportMode.parse(mode)

    reports = {}
    for category, issues in grouped.items():
        ordered = sorted(issues, key=lambda issue: issue.epic_label or "")
        if mode is ReportMode.PLANNING:
            reports[category] = [_planning_row(issue) for issue in ordered]
        else:
            reports[category] = [_retrospective_row(issue, total_days) for issue in ordered]
    return reports
