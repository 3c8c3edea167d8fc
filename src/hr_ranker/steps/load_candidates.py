"""pypyr step: load a candidate spreadsheet into the database.

Skipped when the context has no ``candidates_file``, so the same
pipeline can rescore an already loaded candidate set.

The upload goes through :func:`hr_ranker.service.import_candidates`, which
scores the new set before replacing anything: a file that cannot be
scored fails the step and keeps the stored candidates.

Context keys consumed:
    conn (sqlite3.Connection): An initialised database connection.
    candidates_file (str, optional): Path to a ``.csv`` or ``.xlsx`` file.
    weights (dict, optional): Criterion weights; defaults to the stored ones.

Context keys produced:
    loaded_count (int): Number of candidates stored (0 when skipped).
"""

import logging

from hr_ranker.db.manager import get_weights
from hr_ranker.ingest.loader import load_candidates
from hr_ranker.service import import_candidates

logger = logging.getLogger(__name__)


def run_step(context: dict) -> None:
    """pypyr entry-point: validate, score and store the candidate file."""
    conn = context["conn"]
    path = context.get("candidates_file")

    if not path:
        logger.info("No candidates_file in context, keeping stored candidates")
        context["loaded_count"] = 0
        return

    records = load_candidates(path)
    weights = context.get("weights") or get_weights(conn)
    results = import_candidates(conn, records, weights)
    context["loaded_count"] = len(results)

    logger.info("Loaded %d candidates from %s", len(results), path)
