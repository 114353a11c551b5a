"""Report categories and the labels that select them.

Both the issue normalizer and the grouper read from this table, so a label
token and its bucket are always declared together.
"""

from typing import Optional

RELEVANT_LABELS = ("tech-debt", "p1", "additional")
UNFINISHED_LABEL = "unfinished"
STRETCH_LABEL = "stretch"
NOT_FOR_REPORT_LABEL = "not-for-report"
SUBTASK_TYPE = "sub-task"

# Native issue type (or label token) -> report bucket
CATEGORY_TABLE = {
    "bug": "bug",
    "story": "story",
    "task": "story",
    "tech-debt": "tech-debt",
    "p1": "p1",
    "additional": "additional",
    UNFINISHED_LABEL: "unfinished",
}


def relevant_labels(track_unfinished: bool = False) -> tuple:
    """Label tokens that override the native issue type, in match order."""
    if track_unfinished:
        return RELEVANT_LABELS + (UNFINISHED_LABEL,)
    return RELEVANT_LABELS


def report_category(issue_type: str) -> Optional[str]:
    """Bucket for an effective issue type, or None if it is not reported."""
    return CATEGORY_TABLE.get(issue_type)
