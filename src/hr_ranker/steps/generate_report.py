"""pypyr step: render the HTML ranking report.

Context keys consumed:
    conn (sqlite3.Connection): An initialised database connection.
    report_path (str, optional): Where to write the HTML file.

Context keys produced:
    report (dict): The composed report with keys ``subject``,
        ``html_body``, ``stats``.
"""

import logging
import pathlib

from hr_ranker.reporting.composer import compose_ranking_report

logger = logging.getLogger(__name__)


def run_step(context: dict) -> None:
    """pypyr entry-point: compose the report and optionally write it."""
    conn = context["conn"]

    report = compose_ranking_report(conn)
    context["report"] = report

    report_path = context.get("report_path")
    if report_path:
        path = pathlib.Path(report_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(report["html_body"], encoding="utf-8")
        logger.info("Report written to %s", path)

    logger.info("Ranking report generated: %s", report["subject"])
