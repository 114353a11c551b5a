"""Write report rows to CSV files."""

import csv
import logging
import os

logger = logging.getLogger(__name__)


class ReportWriter:
    """Writes one CSV file per report, named after the report."""

    def __init__(self, output_dir: str = "."):
        self.output_dir = output_dir

    def _ensure_output_dir(self):
        """Ensure the output directory exists."""
        if not os.path.exists(self.output_dir):
            os.makedirs(self.output_dir)

    def write(self, name: str, rows: list) -> str:
        """Write rows to ``<output_dir>/<name>.csv``.

        The header comes from the first row's keys, in order. I/O errors are
        not caught.
        """
        self._ensure_output_dir()
        path = os.path.join(self.output_dir, f"{name}.csv")

        fieldnames = list(rows[0].keys()) if rows else []
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(rows)

        logger.info(f"Wrote {len(rows)} rows to {path}")
        return path

    def write_report(self, report) -> list:
        """Write every category bucket of a sprint report, plus its summary."""
        paths = []
        for category, rows in report.reports.items():
            paths.append(self.write(category, rows))

        if report.summary is not None:
            paths.append(self.write("summary", [report.summary]))

        return paths
