"""Reporting sub-package for the hr-ranker project.

Exports the main public functions:

- ``compose_ranking_report`` -- build the HTML ranking report from DB data.
- ``export_results`` -- write the ranked candidates to a CSV or xlsx file.
- ``candidate_stats`` -- summary figures for a set of scores.

Usage::

    from hr_ranker.reporting import compose_ranking_report

    report = compose_ranking_report(conn, weights)
    pathlib.Path("ranking.html").write_text(report["html_body"])
"""

from hr_ranker.reporting.composer import compose_ranking_report
from hr_ranker.reporting.exporter import export_results
from hr_ranker.reporting.stats import candidate_stats, status_label

__all__ = [
    "candidate_stats",
    "compose_ranking_report",
    "export_results",
    "status_label",
]
