"""Exceptions raised by the sprint report pipeline."""


class SprintReportError(Exception):
    """Base class for sprint report failures."""


class NoSprintDataError(SprintReportError):
    """Jira returned no issues payload for the requested sprint."""

    def __init__(self, sprint_id):
        self.sprint_id = sprint_id
        super().__init__(f"No issues found for sprint {sprint_id}")


class MalformedDurationError(SprintReportError, ValueError):
    """Logged time on an issue could not be read as a number of days."""

    def __init__(self, issue_key: str, value: str):
        self.issue_key = issue_key
        self.value = value
        super().__init__(f"Cannot parse logged time {value!r} on {issue_key}")
