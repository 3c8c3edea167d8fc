"""Service layer: connect the candidate store to the scoring engine.

Every recompute takes a fresh snapshot of the stored candidates, runs
the engine over the complete set, and writes all scores back in one
transaction.
"""

import logging
import sqlite3
from typing import Mapping, Sequence

from hr_ranker.db.manager import (
    delete_candidate as delete_candidate_row,
    get_candidate_records,
    get_weights,
    replace_candidates,
    save_scores,
    save_weights,
    update_candidate as update_candidate_row,
)
from hr_ranker.ingest.loader import validate_candidate
from hr_ranker.scoring.criteria import DEFAULT_WEIGHTS
from hr_ranker.scoring.engine import score
from hr_ranker.scoring.errors import InvalidWeightError
from hr_ranker.scoring.models import CandidateRecord, ScoreResult, WeightVector

logger = logging.getLogger(__name__)

WEIGHT_TOTAL = 100.0
WEIGHT_TOLERANCE = 0.1


def validate_weight_total(weights: WeightVector) -> None:
    """Enforce the "weights add up to 100%" rule used by the CLI.

    Raises:
        InvalidWeightError: The weights do not sum to 100 (+/- 0.1).
    """
    if abs(weights.total - WEIGHT_TOTAL) > WEIGHT_TOLERANCE:
        raise InvalidWeightError(
            f"Weights must sum to 100% (got {weights.total:g})"
        )


def recalculate(
    conn: sqlite3.Connection,
    weights: WeightVector | Mapping[str, float],
) -> list[ScoreResult]:
    """Rescore every stored candidate with *weights* and persist the result.

    Args:
        conn: An open SQLite connection.
        weights: Criterion weights.

    Returns:
        The ranked results, best first.  Empty if there are no candidates.
    """
    if not isinstance(weights, WeightVector):
        weights = WeightVector.from_mapping(weights)

    snapshot = get_candidate_records(conn)
    results = score(snapshot, weights)
    if results:
        save_scores(conn, results)
    save_weights(conn, weights)
    logger.info("Recalculated scores for %d candidates", len(results))
    return results


def import_candidates(
    conn: sqlite3.Connection,
    records: Sequence[CandidateRecord],
    weights: WeightVector | Mapping[str, float] = DEFAULT_WEIGHTS,
) -> list[ScoreResult]:
    """Replace the stored candidate set and score it.

    The new set is validated against the engine before anything is
    written, so a degenerate upload leaves the previous data in place.
    """
    score(records, weights)
    replace_candidates(conn, records)
    return recalculate(conn, weights)


EDITABLE_FIELDS: tuple[str, ...] = ("name", "experience", "education", "interview", "age")


def update_candidate(
    conn: sqlite3.Connection,
    candidate_id: int,
    **fields,
) -> list[ScoreResult] | None:
    """Edit one candidate and rescore the whole set with the stored weights.

    The edited record is validated and the full set is scored in memory
    before anything is written, so an invalid or degenerate edit leaves
    the stored data untouched.

    Returns:
        The new ranking, or ``None`` if no candidate has *candidate_id*.

    Raises:
        ValueError: A field is not one of :data:`EDITABLE_FIELDS`.
        CandidateValidationError: The edited values are out of range.
        ScoringError: The edited set cannot be scored.
    """
    unknown = set(fields) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValueError(f"Unknown candidate fields: {', '.join(sorted(unknown))}")

    snapshot = get_candidate_records(conn)
    current = next((c for c in snapshot if c.candidate_id == candidate_id), None)
    if current is None:
        return None

    values = {key: getattr(current, key) for key in EDITABLE_FIELDS}
    values.update(fields)
    edited = validate_candidate(
        {key.capitalize(): value for key, value in values.items()},
        candidate_id=candidate_id,
    )

    weights = get_weights(conn)
    candidates = [edited if c.candidate_id == candidate_id else c for c in snapshot]
    results = score(candidates, weights)

    update_candidate_row(
        conn,
        candidate_id,
        **{key: getattr(edited, key) for key in EDITABLE_FIELDS},
    )
    save_scores(conn, results)
    logger.info("Updated candidate %d and rescored %d candidates", candidate_id, len(results))
    return results


def delete_candidate(conn: sqlite3.Connection, candidate_id: int) -> list[ScoreResult] | None:
    """Remove one candidate and rescore whoever is left.

    Returns ``None`` if the candidate does not exist.  Raises
    :class:`ScoringError` (and deletes nothing) when the remaining set
    cannot be scored, e.g. two identical candidates.
    """
    snapshot = get_candidate_records(conn)
    remaining = [c for c in snapshot if c.candidate_id != candidate_id]
    if len(remaining) == len(snapshot):
        return None

    results = score(remaining, get_weights(conn))
    delete_candidate_row(conn, candidate_id)
    if results:
        save_scores(conn, results)
    logger.info("Deleted candidate %d, %d remaining", candidate_id, len(results))
    return results
