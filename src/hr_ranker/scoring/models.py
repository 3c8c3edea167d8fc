"""Typed records passed into and out of the scoring engine."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping

from hr_ranker.scoring.criteria import CRITERION_KEYS
from hr_ranker.scoring.errors import InvalidWeightError


@dataclass(frozen=True)
class CandidateRecord:
    """One candidate's raw attribute values.

    Range checks (education 1-5, interview 0-100, age 18-65) belong to
    the ingest layer; the engine takes these values as given.
    """

    candidate_id: int | None
    name: str
    experience: float
    education: float
    interview: float
    age: float

    def values(self) -> tuple[float, float, float, float]:
        """Return the attribute values in criterion order."""
        return (self.experience, self.education, self.interview, self.age)

    @property
    def label(self) -> str:
        if self.candidate_id is None:
            return self.name
        return f"{self.name} (#{self.candidate_id})"


@dataclass(frozen=True)
class WeightVector:
    """Relative importance of each criterion.

    Weights only need to be non-negative and finite.  Whether they sum to
    100 is a presentation-layer rule, see
    :func:`hr_ranker.service.validate_weight_total`.
    """

    experience: float
    education: float
    interview: float
    age: float

    def __post_init__(self) -> None:
        bad = [
            key for key, value in zip(CRITERION_KEYS, self.as_tuple())
            if not math.isfinite(value) or value < 0
        ]
        if bad:
            raise InvalidWeightError(
                "Weights must be finite and >= 0: "
                + ", ".join(f"{k}={getattr(self, k)}" for k in bad)
            )

    @classmethod
    def from_mapping(cls, weights: Mapping[str, float]) -> WeightVector:
        """Build a vector from a ``{criterion_key: weight}`` mapping."""
        missing = [k for k in CRITERION_KEYS if k not in weights]
        if missing:
            raise InvalidWeightError(
                f"Missing weights for: {', '.join(missing)}"
            )
        try:
            return cls(**{k: float(weights[k]) for k in CRITERION_KEYS})
        except (TypeError, ValueError) as exc:
            raise InvalidWeightError(f"Weights must be numeric: {exc}") from exc

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.experience, self.education, self.interview, self.age)

    def as_dict(self) -> dict[str, float]:
        return dict(zip(CRITERION_KEYS, self.as_tuple()))

    @property
    def total(self) -> float:
        return sum(self.as_tuple())

    def scaled(self, factor: float) -> WeightVector:
        return WeightVector(*(w * factor for w in self.as_tuple()))


@dataclass(frozen=True)
class ScoreResult:
    """A candidate's closeness coefficient and its place in the ranking."""

    candidate_id: int | None
    name: str
    score: float
    rank: int
    distance_positive: float
    distance_negative: float
