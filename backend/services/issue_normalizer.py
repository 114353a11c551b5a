"""Turn raw Jira issue payloads into report issues."""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from services.categories import (
    NOT_FOR_REPORT_LABEL,
    STRETCH_LABEL,
    UNFINISHED_LABEL,
    relevant_labels,
)
from services.errors import MalformedDurationError

logger = logging.getLogger(__name__)


@dataclass
class Issue:
    """A sprint issue as the report pipeline sees it.

    ``type`` is the effective category (a relevant label beats the native
    issue type). ``calculated_time_days`` starts as the issue's own logged
    time and is increased once by the effort rollup. ``malformed_time`` marks
    issues whose logged time could not be read; they count as 0 days and are
    left out of the rollup.

    ``is_finished`` is informational only: the unfinished bucket comes from
    ``type``, and no report column shows it.
    """

    key: str
    type: str
    summary: str = ""
    assignee_name: str = "N/A"
    parent_key: Optional[str] = None
    epic_label: Optional[str] = None
    original_estimate: Optional[str] = None
    calculated_time_days: float = 0.0
    status: str = ""
    is_stretch_goal: bool = False
    is_finished: bool = True
    excluded_from_report: bool = False
    malformed_time: bool = False


def parse_time_spent(value: Optional[str], issue_key: str = "") -> float:
    """Parse a logged time value such as ``"3d"`` or ``"1.5h"``.

    The trailing unit character is dropped and the rest is read as a number
    of days. Empty or missing values count as zero, and so does a lone
    character such as ``"5"`` whose remainder is empty.

    Raises:
        MalformedDurationError: the remainder is not a finite number
    """
    if value is None:
        return 0.0

    text = str(value).strip()
    if not text:
        return 0.0

    remainder = text[:-1].strip()
    if not remainder:
        return 0.0

    try:
        days = float(remainder)
    except ValueError:
        raise MalformedDurationError(issue_key, text) from None

    if not math.isfinite(days):
        raise MalformedDurationError(issue_key, text)

    return days


def resolve_issue_type(native_type: str, labels: list,
                       track_unfinished: bool = False) -> str:
    """Pick the effective category for an issue.

    The first label containing a relevant token (case-insensitive) decides
    the type; otherwise the native issue type is used.
    """
    tokens = relevant_labels(track_unfinished)
    for label in labels:
        label_lower = label.lower()
        for token in tokens:
            if token in label_lower:
                return token
    return native_type.lower()


def _epic_label(epic: Optional[dict]) -> Optional[str]:
    if not epic or not epic.get("key"):
        return None
    summary = epic.get("summary") or epic.get("name") or ""
    return f"{epic['key']} - {summary}"


def normalize(raw_issue: dict, track_unfinished: bool = False) -> Issue:
    """Build an Issue from one raw Jira issue.

    Logged time that cannot be parsed is logged as a warning and counted as
    0 days; the issue itself is kept.
    """
    key = raw_issue.get("key", "")
    fields = raw_issue.get("fields") or {}

    labels = fields.get("labels") or []
    issuetype = fields.get("issuetype") or {}
    assignee = fields.get("assignee")
    parent = fields.get("parent")
    status = fields.get("status") or {}
    timetracking = fields.get("timetracking") or {}

    malformed_time = False
    try:
        time_spent = parse_time_spent(timetracking.get("timeSpent"), key)
    except MalformedDurationError as e:
        logger.warning(f"Ignoring logged time: {e}")
        time_spent = 0.0
        malformed_time = True

    return Issue(
        key=key,
        type=resolve_issue_type(issuetype.get("name", ""), labels, track_unfinished),
        summary=fields.get("summary") or "",
        assignee_name=assignee.get("displayName", "N/A") if assignee else "N/A",
        parent_key=parent.get("key") if parent else None,
        epic_label=_epic_label(fields.get("epic")),
        original_estimate=timetracking.get("originalEstimate"),
        calculated_time_days=time_spent,
        status=status.get("name", ""),
        is_stretch_goal=STRETCH_LABEL in labels,
        is_finished=not (track_unfinished and UNFINISHED_LABEL in labels),
        excluded_from_report=NOT_FOR_REPORT_LABEL in labels,
        malformed_time=malformed_time,
    )


def normalize_issues(raw_issues: list, track_unfinished: bool = False) -> list:
    """Normalize a sprint's issues, skipping ones labelled not-for-report."""
    issues = []
    for raw_issue in raw_issues:
        issue = normalize(raw_issue, track_unfinished)
        if issue.excluded_from_report:
            logger.debug(f"Skipping {issue.key}: labelled {NOT_FOR_REPORT_LABEL}")
            continue

        issues.append(issue)

    return issues
