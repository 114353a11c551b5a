"""Sprint report API endpoints."""

from flask import Blueprint, current_app, request, jsonify
import requests

from services.errors import NoSprintDataError
from services.report_shaper import ReportMode
from services.report_writer import ReportWriter
from services.sprint_report import SprintReportService

bp = Blueprint("reports", __name__, url_prefix="/api/reports")


def get_jira_credentials():
    """Extract Jira credentials from request headers."""
    server = request.headers.get("X-Jira-Server", "").rstrip("/")
    email = request.headers.get("X-Jira-Email")
    token = request.headers.get("X-Jira-Token")

    if not all([server, email, token]):
        return None, None, None

    return server, email, token


def get_track_unfinished():
    """Whether to report 'unfinished' labelled issues in their own bucket.

    Query params:
        - track_unfinished: "true"/"false", defaults to the report config
    """
    value = request.args.get("track_unfinished")
    if value is None:
        return current_app.config["REPORT_CONFIG"]["trackUnfinished"]
    return value.lower() in ("1", "true", "yes")


def build_service(server, email, token):
    config = current_app.config["REPORT_CONFIG"]
    return SprintReportService(
        server, email, token,
        page_size=config["pageSize"],
        track_unfinished=get_track_unfinished()
    )


def _handle_jira_error(e):
    if isinstance(e, requests.exceptions.Timeout):
        return jsonify({"error": "Connection to Jira timed out"}), 504
    current_app.logger.warning(f"Jira request failed: {e}")
    return jsonify({"error": f"Failed to fetch sprint from Jira: {str(e)}"}), 502


@bp.route("/<sprint_id>", methods=["GET"])
def get_report(sprint_id):
    """Get the planning or retrospective report for a sprint.

    Query params:
        - mode: "planning" or "retrospective" (default: planning)
        - track_unfinished: Optional, put 'unfinished' issues in their own bucket

    Returns:
        - Rows per category, in CSV column order
        - Sprint summary (retrospective only)
    """
    server, email, token = get_jira_credentials()

    if not server:
        return jsonify({"error": "Missing Jira credentials in headers"}), 401

    try:
        mode = ReportMode.parse(request.args.get("mode", ReportMode.PLANNING.value))
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    try:
        service = build_service(server, email, token)
        report = service.get_report(sprint_id, mode)
        return jsonify({"data": report.to_dict()})
    except NoSprintDataError as e:
        return jsonify({"error": str(e)}), 404
    except requests.exceptions.RequestException as e:
        return _handle_jira_error(e)


@bp.route("/<sprint_id>/export", methods=["POST"])
def export_report(sprint_id):
    """Write a sprint report as CSV files into the configured output directory.

    Query params:
        - mode: "planning" or "retrospective" (default: planning)
        - track_unfinished: Optional, put 'unfinished' issues in their own bucket

    Returns the list of written files.
    """
    server, email, token = get_jira_credentials()

    if not server:
        return jsonify({"error": "Missing Jira credentials in headers"}), 401

    try:
        mode = ReportMode.parse(request.args.get("mode", ReportMode.PLANNING.value))
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    writer = ReportWriter(current_app.config["REPORT_CONFIG"]["outputDir"])

    try:
        service = build_service(server, email, token)
        files = service.export_report(sprint_id, mode, writer)
        return jsonify({"data": {"files": files}})
    except NoSprintDataError as e:
        return jsonify({"error": str(e)}), 404
    except requests.exceptions.RequestException as e:
        return _handle_jira_error(e)
    except OSError as e:
        current_app.logger.error(f"Failed to write report files: {e}")
        return jsonify({"error": f"Failed to write report files: {str(e)}"}), 500
