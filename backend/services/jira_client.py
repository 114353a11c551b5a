"""Jira client for fetching a sprint's issues."""

import logging
from typing import Optional

import requests

from services.errors import NoSprintDataError

logger = logging.getLogger(__name__)

SPRINT_ISSUE_FIELDS = [
    "epic", "parent", "summary", "key", "status",
    "issuetype", "labels", "assignee", "timetracking"
]


class JiraSprintClient:
    """Reads sprint issues from the Jira Agile API."""

    def __init__(self, server: str, email: str, token: str, page_size: int = 100):
        self.server = server.rstrip("/")
        self.email = email
        self.token = token
        self.page_size = page_size

    def _request(self, endpoint: str, params: Optional[dict] = None):
        """Make authenticated request to Jira API."""
        response = requests.get(
            f"{self.server}{endpoint}",
            auth=(self.email, self.token),
            headers={"Accept": "application/json"},
            params=params,
            timeout=30
        )
        response.raise_for_status()
        return response.json()

    def fetch_sprint_issues(self, sprint_id) -> list:
        """Get the raw issues in a sprint.

        Only the first ``page_size`` issues are returned; larger sprints are
        truncated.

        Raises:
            NoSprintDataError: the response has no ``issues`` (e.g. unknown sprint)
            requests.exceptions.RequestException: Jira could not be reached
                or answered with an error status
        """
        try:
            data = self._request(
                f"/rest/agile/1.0/sprint/{sprint_id}/issue",
                params={
                    "maxResults": self.page_size,
                    "fields": ",".join(SPRINT_ISSUE_FIELDS)
                }
            )
        except requests.exceptions.HTTPError as e:
            # Jira answers 404 for sprints that don't exist
            if e.response is not None and e.response.status_code == 404:
                raise NoSprintDataError(sprint_id) from e
            raise

        issues = data.get("issues") if isinstance(data, dict) else None
        if issues is None:
            raise NoSprintDataError(sprint_id)

        total = data.get("total")
        if total is not None and total > len(issues):
            logger.warning(
                f"Sprint {sprint_id} has {total} issues, only the first {len(issues)} are reported"
            )

        logger.info(f"Fetched {len(issues)} issues for sprint {sprint_id}")
        return issues
