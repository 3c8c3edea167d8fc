"""Scoring sub-package for the hr-ranker project.

Exports the engine entry point so other modules can do::

    from hr_ranker.scoring import score
"""

from hr_ranker.scoring.criteria import CRITERIA, DEFAULT_WEIGHTS
from hr_ranker.scoring.engine import score
from hr_ranker.scoring.errors import (
    DegenerateColumnError,
    DegenerateDistanceError,
    EmptyInputError,
    InvalidWeightError,
    ScoringError,
)
from hr_ranker.scoring.models import CandidateRecord, ScoreResult, WeightVector

__all__ = [
    "CRITERIA",
    "DEFAULT_WEIGHTS",
    "CandidateRecord",
    "DegenerateColumnError",
    "DegenerateDistanceError",
    "EmptyInputError",
    "InvalidWeightError",
    "ScoreResult",
    "ScoringError",
    "WeightVector",
    "score",
]
