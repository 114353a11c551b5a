"""Sprint report pipeline: fetch, normalize, roll up, group, shape."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from services.effort_rollup import rollup
from services.issue_grouping import group
from services.issue_normalizer import normalize_issues
from services.jira_client import JiraSprintClient
from services.report_shaper import ReportMode, shape, total_time_days
from services.sprint_summary import summarize

logger = logging.getLogger(__name__)


@dataclass
class SprintReport:
    """Report rows for one sprint, keyed by category."""

    sprint_id: str
    mode: ReportMode
    total_time_days: float
    reports: dict = field(default_factory=dict)
    summary: Optional[dict] = None

    def to_dict(self) -> dict:
        return {
            "sprintId": self.sprint_id,
            "mode": self.mode.value,
            "totalTimeDays": round(self.total_time_days, 2),
            "reports": self.reports,
            "summary": self.summary
        }


def build_report(raw_issues: list, sprint_id, mode,
                 track_unfinished: bool = False) -> SprintReport:
    """Run the report pipeline over already-fetched raw issues."""
    mode = ReportMode.parse(mode)

    issues = normalize_issues(raw_issues, track_unfinished)
    rollup(issues)
    grouped = group(issues)

    total_days = total_time_days(grouped)
    reports = shape(grouped, mode, total_days)

    summary = None
    if mode is ReportMode.RETROSPECTIVE:
        summary = summarize(grouped, total_days)

    logger.info(
        f"Built {mode.value} report for sprint {sprint_id}: "
        f"{len(issues)} issues, {len(reports)} categories, {total_days:g} days logged"
    )

    return SprintReport(
        sprint_id=str(sprint_id),
        mode=mode,
        total_time_days=total_days,
        reports=reports,
        summary=summary
    )


class SprintReportService:
    """Builds sprint reports from live Jira data."""

    def __init__(self, server: str, email: str, token: str,
                 page_size: int = 100, track_unfinished: bool = False):
        self.client = JiraSprintClient(server, email, token, page_size=page_size)
        self.track_unfinished = track_unfinished

    def get_report(self, sprint_id, mode) -> SprintReport:
        """Fetch a sprint from Jira and build the requested report.

        Raises:
            ValueError: unknown report mode
            NoSprintDataError: Jira has no issues for the sprint
        """
        mode = ReportMode.parse(mode)
        raw_issues = self.client.fetch_sprint_issues(sprint_id)
        return build_report(raw_issues, sprint_id, mode, self.track_unfinished)

    def export_report(self, sprint_id, mode, writer) -> list:
        """Build a report and write it through ``writer``.

        Nothing is written unless the whole report was built.
        """
        report = self.get_report(sprint_id, mode)
        return writer.write_report(report)
