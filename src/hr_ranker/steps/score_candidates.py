"""pypyr step: score every stored candidate and save the results.

Context keys consumed:
    conn (sqlite3.Connection): An initialised database connection.
    weights (dict, optional): ``{criterion: weight}``; defaults to the
        stored weights.

Context keys produced:
    ranking (list[dict]): ``{rank, name, score}`` per candidate, best first.
"""

import logging

from hr_ranker.db.manager import get_weights
from hr_ranker.service import recalculate

logger = logging.getLogger(__name__)


def run_step(context: dict) -> None:
    """pypyr entry-point: run the scoring engine over all candidates."""
    conn = context["conn"]
    weights = context.get("weights") or get_weights(conn)

    results = recalculate(conn, weights)

    context["ranking"] = [
        {"rank": r.rank, "name": r.name, "score": r.score} for r in results
    ]

    if results:
        logger.info(
            "Scoring complete: %d candidates, top %s (%.3f)",
            len(results), results[0].name, results[0].score,
        )
    else:
        logger.warning("Scoring skipped: no candidates stored")
