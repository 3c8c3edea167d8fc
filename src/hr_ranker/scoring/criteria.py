"""Decision criteria for the hr-ranker scoring engine.

Four fixed criteria, each tagged ``benefit`` (higher is better) or
``cost`` (lower is better).  The order of :data:`CRITERIA` is the column
order of every matrix the engine builds, and the order weights must
follow.
"""

from dataclasses import dataclass

BENEFIT = "benefit"
COST = "cost"


@dataclass(frozen=True)
class Criterion:
    """A single decision criterion."""

    key: str
    label: str
    kind: str

    @property
    def is_benefit(self) -> bool:
        return self.kind == BENEFIT


# Younger candidates are scored closer to the ideal (age is a cost).
CRITERIA: tuple[Criterion, ...] = (
    Criterion("experience", "Experience (years)", BENEFIT),
    Criterion("education", "Education (1-5)", BENEFIT),
    Criterion("interview", "Interview (0-100)", BENEFIT),
    Criterion("age", "Age", COST),
)

CRITERION_KEYS: tuple[str, ...] = tuple(c.key for c in CRITERIA)

DEFAULT_WEIGHTS: dict[str, float] = {
    "experience": 25,
    "education": 20,
    "interview": 40,
    "age": 15,
}
