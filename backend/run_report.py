"""Generate sprint report CSV files from the command line.

Usage:
    python run_report.py --mode retrospective --sprint 1234

Jira credentials are read from JIRA_SERVER, JIRA_EMAIL and JIRA_TOKEN.
The report mode and sprint fall back to REPORT_MODE and SPRINT, then to an
interactive prompt. Variables may also be set in a .env file.
"""

import argparse
import logging
import os
import sys

import requests
from dotenv import load_dotenv

from services.errors import NoSprintDataError
from services.report_shaper import ReportMode
from services.report_writer import ReportWriter
from services.sprint_report import SprintReportService

logger = logging.getLogger("run_report")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Write sprint planning or retrospective reports as CSV")
    parser.add_argument("--mode", help="planning or retrospective (env: REPORT_MODE)")
    parser.add_argument("--sprint", help="Jira sprint id (env: SPRINT)")
    parser.add_argument("--output-dir", help="Directory for CSV files (env: REPORT_OUTPUT_DIR)")
    parser.add_argument("--track-unfinished", action="store_true",
                        help="Report issues labelled 'unfinished' in their own file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def resolve_parameter(value, env_name, prompt, input_func=input):
    """Use the CLI value, else the environment, else ask."""
    if value:
        return value
    value = os.getenv(env_name)
    if value:
        return value
    return input_func(prompt).strip()


def main(argv=None, input_func=input):
    load_dotenv()
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    server = os.getenv("JIRA_SERVER", "")
    email = os.getenv("JIRA_EMAIL")
    token = os.getenv("JIRA_TOKEN")
    if not all([server, email, token]):
        logger.error("Missing Jira credentials (JIRA_SERVER / JIRA_EMAIL / JIRA_TOKEN)")
        return 1

    try:
        mode = ReportMode.parse(resolve_parameter(
            args.mode, "REPORT_MODE", "Report type (planning/retrospective): ", input_func
        ))
    except ValueError as e:
        logger.error(str(e))
        return 1
    except EOFError:
        logger.error("No report mode given (set REPORT_MODE or pass --mode)")
        return 1

    try:
        sprint_id = resolve_parameter(args.sprint, "SPRINT", "Sprint number: ", input_func)
    except EOFError:
        logger.error("No sprint given (set SPRINT or pass --sprint)")
        return 1
    if not sprint_id:
        logger.error("No sprint given")
        return 1

    track_unfinished = args.track_unfinished or os.getenv("TRACK_UNFINISHED", "").lower() in ("1", "true", "yes")
    output_dir = args.output_dir or os.getenv("REPORT_OUTPUT_DIR", ".")

    service = SprintReportService(server, email, token, track_unfinished=track_unfinished)
    writer = ReportWriter(output_dir)

    try:
        files = service.export_report(sprint_id, mode, writer)
    except NoSprintDataError as e:
        logger.error(f"{e}. Check the sprint number.")
        return 1
    except requests.exceptions.RequestException as e:
        logger.error(f"Failed to fetch sprint from Jira: {e}")
        return 1
    except OSError as e:
        logger.error(f"Failed to write report files: {e}")
        return 1

    for path in files:
        print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
