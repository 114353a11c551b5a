"""Shared fixtures for Sprint Reporter tests."""

import pytest


@pytest.fixture
def mock_jira_credentials():
    """Mock Jira credentials for testing."""
    return {
        "server": "https://test.atlassian.net",
        "email": "test@example.com",
        "token": "test-token-123"
    }


@pytest.fixture
def jira_headers():
    """Request headers carrying Jira credentials."""
    return {
        "X-Jira-Server": "https://test.atlassian.net",
        "X-Jira-Email": "test@example.com",
        "X-Jira-Token": "token123"
    }


def make_raw_issue(key, issue_type="Story", labels=None, time_spent=None,
                   original_estimate=None, parent_key=None, epic=None,
                   assignee="Dana Lee", summary=None, status="Done"):
    """Build a raw Jira sprint issue payload."""
    timetracking = {}
    if original_estimate is not None:
        timetracking["originalEstimate"] = original_estimate
    if time_spent is not None:
        timetracking["timeSpent"] = time_spent

    fields = {
        "summary": summary or f"Summary of {key}",
        "status": {"name": status},
        "issuetype": {"name": issue_type},
        "labels": labels or [],
        "assignee": {"displayName": assignee} if assignee else None,
        "timetracking": timetracking
    }
    if parent_key:
        fields["parent"] = {"key": parent_key}
    if epic:
        fields["epic"] = {"key": epic[0], "summary": epic[1]}

    return {"key": key, "fields": fields}


@pytest.fixture
def raw_issue():
    """Factory for raw Jira issues."""
    return make_raw_issue


@pytest.fixture
def sample_story():
    """Story with an epic and logged time."""
    return make_raw_issue(
        "PROJ-101", "Story", time_spent="2h", original_estimate="3d",
        epic=("PROJ-1", "Checkout revamp")
    )


@pytest.fixture
def sample_subtask():
    """Sub-task of PROJ-101."""
    return make_raw_issue("PROJ-102", "Sub-task", time_spent="1h", parent_key="PROJ-101")


@pytest.fixture
def sample_p1_bug():
    """Bug tagged as a P1 incident."""
    return make_raw_issue("PROJ-103", "Bug", labels=["P1-incident"], time_spent="1d")


@pytest.fixture
def sample_stretch_bug():
    """Bug marked as a stretch goal."""
    return make_raw_issue("PROJ-104", "Bug", labels=["stretch"], original_estimate="1")


@pytest.fixture
def sample_sprint_payload(sample_story, sample_subtask, sample_p1_bug, sample_stretch_bug):
    """Jira response for a sprint."""
    return {
        "startAt": 0,
        "maxResults": 100,
        "total": 4,
        "issues": [sample_story, sample_subtask, sample_p1_bug, sample_stretch_bug]
    }


@pytest.fixture
def app(tmp_path):
    """Create Flask test app."""
    import sys
    import os
    sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

    from app import create_app
    app = create_app(config_path=str(tmp_path / "missing-config.json"))
    app.config['TESTING'] = True
    app.config["REPORT_CONFIG"]["outputDir"] = str(tmp_path / "reports")
    return app


@pytest.fixture
def client(app):
    """Create Flask test client."""
    return app.test_client()
