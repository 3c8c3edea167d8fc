"""Scoring engine façade.

Runs the four stages in order over the complete candidate set::

    raw -> normalize -> weight -> ideal points -> closeness -> ranking

The engine holds no state and performs no I/O.  A changed weight or a
new candidate always means calling :func:`score` again on the whole set,
because normalization and ideal points depend on the population.
"""

import logging
from typing import Mapping, Sequence

from hr_ranker.scoring.closeness import (
    DEGENERATE_SCORE,
    closeness_coefficients,
    rank_results,
)
from hr_ranker.scoring.errors import DegenerateDistanceError
from hr_ranker.scoring.ideal import distances, ideal_profiles
from hr_ranker.scoring.models import CandidateRecord, ScoreResult, WeightVector
from hr_ranker.scoring.normalize import build_decision_matrix, normalize_matrix
from hr_ranker.scoring.weighting import apply_weights

logger = logging.getLogger(__name__)


def score(
    candidates: Sequence[CandidateRecord],
    weights: WeightVector | Mapping[str, float],
    strict: bool = False,
) -> list[ScoreResult]:
    """Rank *candidates* by closeness to the ideal profile.

    Args:
        candidates: Candidate records, in any order.
        weights: A :class:`WeightVector` or a ``{criterion: weight}``
            mapping.
        strict: Raise :class:`DegenerateDistanceError` instead of using
            the 0.5 fallback score.

    Returns:
        One :class:`ScoreResult` per candidate, sorted by descending
        score.  An empty input gives an empty list.

    Raises:
        InvalidWeightError: A weight is negative or non-finite.
        DegenerateColumnError: A criterion cannot be normalized.
        DegenerateDistanceError: Only with *strict*.
    """
    if not isinstance(weights, WeightVector):
        weights = WeightVector.from_mapping(weights)

    candidates = tuple(candidates)
    if not candidates:
        return []

    if len(candidates) == 1:
        # Nothing to compare against: the candidate is both ideals.
        only = candidates[0]
        if strict:
            raise DegenerateDistanceError(only.label)
        return [
            ScoreResult(
                candidate_id=only.candidate_id,
                name=only.name,
                score=DEGENERATE_SCORE,
                rank=1,
                distance_positive=0.0,
                distance_negative=0.0,
            )
        ]

    matrix = build_decision_matrix(candidates)
    weighted = apply_weights(normalize_matrix(matrix), weights)
    positive, negative = ideal_profiles(weighted)
    d_positive, d_negative = distances(weighted, positive, negative)

    scores = closeness_coefficients(d_positive, d_negative, candidates, strict)
    results = rank_results(candidates, scores, d_positive, d_negative)

    logger.debug(
        "Scored %d candidates, top=%s (%.3f)",
        len(results), results[0].name, results[0].score,
    )
    return results
