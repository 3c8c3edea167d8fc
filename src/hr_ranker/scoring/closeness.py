"""Closeness & ranking stage.

``closeness = d_negative / (d_positive + d_negative)``, rounded to three
decimals, then candidates are sorted best-first.
"""

import logging
from typing import Sequence

import numpy as np

from hr_ranker.scoring.errors import DegenerateDistanceError
from hr_ranker.scoring.models import CandidateRecord, ScoreResult

logger = logging.getLogger(__name__)

SCORE_DECIMALS = 3

# Score given to a candidate equally (zero) distant from both ideals.
DEGENERATE_SCORE = 0.5


def closeness_coefficients(
    d_positive: np.ndarray,
    d_negative: np.ndarray,
    candidates: Sequence[CandidateRecord],
    strict: bool = False,
) -> list[float]:
    """Compute the rounded closeness coefficient for every candidate.

    Args:
        d_positive: Distances to the positive ideal profile.
        d_negative: Distances to the negative ideal profile.
        candidates: The candidates, in the same order as the distances.
        strict: Raise instead of falling back when a candidate's total
            distance is zero.

    Returns:
        One score in ``[0, 1]`` per candidate, input order preserved.

    Raises:
        DegenerateDistanceError: Only when *strict* is set.
    """
    scores: list[float] = []
    for candidate, d_pos, d_neg in zip(candidates, d_positive, d_negative):
        total = float(d_pos + d_neg)
        if total == 0:
            if strict:
                raise DegenerateDistanceError(candidate.label)
            logger.debug(
                "Zero total distance for %s, using %.1f",
                candidate.label, DEGENERATE_SCORE,
            )
            scores.append(DEGENERATE_SCORE)
            continue
        scores.append(round(float(d_neg) / total, SCORE_DECIMALS))
    return scores


def rank_results(
    candidates: Sequence[CandidateRecord],
    scores: Sequence[float],
    d_positive: Sequence[float],
    d_negative: Sequence[float],
) -> list[ScoreResult]:
    """Sort candidates by score, best first, and assign ranks from 1.

    ``sorted`` is stable, so equal scores keep their input order.
    """
    order = sorted(range(len(candidates)), key=lambda i: scores[i], reverse=True)
    return [
        ScoreResult(
            candidate_id=candidates[i].candidate_id,
            name=candidates[i].name,
            score=scores[i],
            rank=rank,
            distance_positive=float(d_positive[i]),
            distance_negative=float(d_negative[i]),
        )
        for rank, i in enumerate(order, start=1)
    ]
