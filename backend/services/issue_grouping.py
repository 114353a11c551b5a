"""Group report issues into category buckets."""

from services.categories import report_category


def group(issues: list) -> dict:
    """Bucket issues by report category.

    Issues whose type has no category (sub-tasks, epics, ...) are left out.
    Order within a bucket follows the input order, and a bucket only exists
    if at least one issue landed in it.
    """
    grouped = {}
    for issue in issues:
        category = report_category(issue.type)
        if category is None:
            continue
        grouped.setdefault(category, []).append(issue)
    return grouped
