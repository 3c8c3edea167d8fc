"""Normalization stage: vector-normalize each criterion column.

Column ``j`` of the result is ``raw[:, j] / sqrt(sum(raw[:, j] ** 2))``,
so every column has unit Euclidean norm over the candidate set.
"""

import logging
from typing import Sequence

import numpy as np

from hr_ranker.scoring.criteria import CRITERION_KEYS
from hr_ranker.scoring.errors import DegenerateColumnError
from hr_ranker.scoring.models import CandidateRecord

logger = logging.getLogger(__name__)


def build_decision_matrix(candidates: Sequence[CandidateRecord]) -> np.ndarray:
    """Stack candidate attribute values into an ``N x 4`` float matrix."""
    if not candidates:
        return np.empty((0, len(CRITERION_KEYS)), dtype=float)
    return np.array([c.values() for c in candidates], dtype=float)


def normalize_matrix(matrix: np.ndarray) -> np.ndarray:
    """Return a new matrix with each column divided by its Euclidean norm.

    Negative values are not rejected; they are carried through.

    Args:
        matrix: An ``N x 4`` decision matrix with ``N >= 2``.

    Returns:
        The normalized matrix (same shape, new array).

    Raises:
        DegenerateColumnError: A column's sum of squares is zero, or the
            candidates are identical on every criterion.
    """
    norms = np.sqrt((matrix ** 2).sum(axis=0))

    zero = [CRITERION_KEYS[j] for j in np.flatnonzero(norms == 0)]
    if zero:
        raise DegenerateColumnError(zero, reason="all values are zero")

    constant = matrix.max(axis=0) == matrix.min(axis=0)
    if matrix.shape[0] >= 2 and constant.all():
        raise DegenerateColumnError(
            list(CRITERION_KEYS), reason="all candidates are identical"
        )
    if matrix.shape[0] >= 2 and constant.any():
        # A constant column contributes equally to both distances.
        logger.debug(
            "Constant criteria carry no ranking signal: %s",
            ", ".join(CRITERION_KEYS[j] for j in np.flatnonzero(constant)),
        )

    logger.debug("Column norms: %s", norms.round(4).tolist())
    return matrix / norms
