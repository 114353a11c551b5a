"""Fold sub-task logged time into parent issues."""

import logging

from services.categories import SUBTASK_TYPE

logger = logging.getLogger(__name__)


def rollup(issues: list) -> None:
    """Add each sub-task's logged time to its parent, in place.

    Only direct sub-task -> parent accumulation happens: every sub-task
    contributes the time it was normalized with, so time logged on a
    sub-task of a sub-task never reaches the grandparent. Sub-tasks whose
    parent is not in the sprint, or whose logged time was malformed, are
    ignored.

    Must run once per sprint dataset; a second call adds the time again.
    """
    by_key = {issue.key: issue for issue in issues}
    own_time = {issue.key: issue.calculated_time_days for issue in issues}

    for issue in issues:
        if issue.type != SUBTASK_TYPE:
            continue

        if issue.malformed_time:
            logger.debug(f"Sub-task {issue.key} has unreadable logged time, not rolled up")
            continue

        parent = by_key.get(issue.parent_key) if issue.parent_key else None
        if parent is None:
            logger.debug(f"Sub-task {issue.key} has no parent in sprint ({issue.parent_key})")
            continue

        parent.calculated_time_days += own_time[issue.key]
