"""Weighting stage: scale each normalized column by its weight."""

import numpy as np

from hr_ranker.scoring.models import WeightVector


def apply_weights(normalized: np.ndarray, weights: WeightVector) -> np.ndarray:
    """Multiply column ``j`` by ``weights[j]`` (criterion order).

    Weights are used as given; no rescaling to a fixed sum happens here.
    """
    return normalized * np.array(weights.as_tuple(), dtype=float)
