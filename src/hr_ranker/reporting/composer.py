"""Compose the HTML candidate ranking report.

Reads the stored ranking, attaches status labels and summary statistics,
and renders the Jinja2 template at ``templates/ranking_report.html``.
"""

import datetime
import logging
import pathlib
import sqlite3
from typing import Mapping

from jinja2 import Environment, FileSystemLoader

from hr_ranker.db.manager import get_all_candidates, get_weights
from hr_ranker.reporting.stats import candidate_stats, status_label
from hr_ranker.scoring.criteria import CRITERIA
from hr_ranker.scoring.errors import EmptyInputError
from hr_ranker.scoring.models import WeightVector

logger = logging.getLogger(__name__)

# Locate the templates directory relative to this file.
_TEMPLATE_DIR = pathlib.Path(__file__).parent / "templates"


def _status_css(label: str) -> str:
    """Map a status label to the template's CSS class."""
    return label.lower().replace(" ", "-")


def _weight_rows(weights: WeightVector) -> list[dict]:
    """Criterion/weight pairs for the weights table."""
    total = weights.total or 1.0
    return [
        {
            "label": criterion.label,
            "kind": criterion.kind,
            "weight": weight,
            "share": round(weight / total * 100, 1),
        }
        for criterion, weight in zip(CRITERIA, weights.as_tuple())
    ]


def compose_ranking_report(
    conn: sqlite3.Connection,
    weights: WeightVector | Mapping[str, float] | None = None,
) -> dict:
    """Build the candidate ranking report.

    Args:
        conn: An open SQLite connection (with ``sqlite3.Row`` row factory).
        weights: The weights to show.  Defaults to the stored weights
            the current scores were computed with.

    Returns:
        A dict with keys:
            - ``subject`` (str): A one-line title for the report.
            - ``html_body`` (str): The rendered HTML report.
            - ``stats`` (dict): Output of :func:`candidate_stats`.

    Raises:
        EmptyInputError: There are no candidates to report on.
    """
    if weights is None:
        weights = get_weights(conn)
    elif not isinstance(weights, WeightVector):
        weights = WeightVector.from_mapping(weights)

    rows = get_all_candidates(conn)
    if not rows:
        raise EmptyInputError("No candidates to report on")

    candidates = []
    for index, row in enumerate(rows, start=1):
        label = status_label(row["final_score"])
        candidates.append({
            "rank": index,
            "name": row["name"],
            "experience": row["experience"],
            "education": row["education"],
            "interview": row["interview"],
            "age": row["age"],
            "final_score": row["final_score"],
            "status": label,
            "status_css": _status_css(label),
        })

    stats = candidate_stats(row["final_score"] for row in rows)

    env = Environment(
        loader=FileSystemLoader(str(_TEMPLATE_DIR)),
        autoescape=True,
    )
    template = env.get_template("ranking_report.html")

    generated_at = datetime.datetime.now().strftime("%B %d, %Y %H:%M")
    html_body = template.render(
        generated_at=generated_at,
        candidates=candidates,
        weights=_weight_rows(weights),
        stats=stats,
    )

    subject = (
        f"Candidate Ranking: {stats['total']} candidates, "
        f"{stats['recommended']} recommended"
    )

    logger.info(
        "Composed ranking report: %d candidates, %d recommended",
        stats["total"], stats["recommended"],
    )

    return {
        "subject": subject,
        "html_body": html_body,
        "stats": stats,
    }
