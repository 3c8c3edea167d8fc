"""Ideal-point stage.

Derives the best (positive) and worst (negative) reference profiles
from the weighted matrix and measures each candidate's Euclidean
distance to both.
"""

import numpy as np

from hr_ranker.scoring.criteria import CRITERIA


def ideal_profiles(weighted: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Return ``(ideal_positive, ideal_negative)`` over the criteria.

    Benefit criteria take the column maximum as positive ideal and the
    minimum as negative ideal; cost criteria take the reverse.
    """
    benefit = np.array([c.is_benefit for c in CRITERIA])
    col_max = weighted.max(axis=0)
    col_min = weighted.min(axis=0)
    positive = np.where(benefit, col_max, col_min)
    negative = np.where(benefit, col_min, col_max)
    return positive, negative


def distances(
    weighted: np.ndarray,
    positive: np.ndarray,
    negative: np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:
    """Return per-candidate ``(d_positive, d_negative)`` distances."""
    d_positive = np.sqrt(((weighted - positive) ** 2).sum(axis=1))
    d_negative = np.sqrt(((weighted - negative) ** 2).sum(axis=1))
    return d_positive, d_negative
