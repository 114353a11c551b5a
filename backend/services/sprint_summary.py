"""Sprint-level totals for the retrospective report."""

from services.report_shaper import format_days, percent_of


def _days(issues) -> float:
    return sum(issue.calculated_time_days for issue in issues)


def summarize(grouped: dict, total_days: float) -> dict:
    """Summarize how the sprint's logged days were spent.

    Returns a single row with total developer days, unplanned days
    (``additional`` work), and the tech-debt, bug/P1 and remaining product
    work shares. Product work is whatever is left of 100% after rounding,
    so it can come out slightly off or even negative. With no logged time
    every percentage is 0%.
    """
    unplanned_days = _days(grouped.get("additional", []))
    tech_debt_percent = percent_of(_days(grouped.get("tech-debt", [])), total_days)

    bugs_and_p1s = {}
    for category in ("bug", "p1"):
        for issue in grouped.get(category, []):
            bugs_and_p1s.setdefault(issue.key, issue)
    bugs_and_p1s_percent = percent_of(_days(bugs_and_p1s.values()), total_days)

    if total_days:
        product_work_percent = 100 - tech_debt_percent - bugs_and_p1s_percent
    else:
        product_work_percent = 0

    return {
        "totalDevDays": f"{total_days:.1f}",
        "unplannedTaskDays": f"{format_days(unplanned_days)}d",
        "techDebt": f"{tech_debt_percent}%",
        "bugsAndP1s": f"{bugs_and_p1s_percent}%",
        "productWork": f"{product_work_percent}%",
    }
