"""Exception types raised by the scoring engine."""


class ScoringError(Exception):
    """Base class for all scoring engine failures."""


class DegenerateColumnError(ScoringError):
    """A criterion cannot be normalized across the candidate set.

    Raised when a column's sum of squares is zero, or when every
    candidate is identical on every criterion.
    """

    def __init__(self, criteria: list[str], reason: str = "zero variance") -> None:
        self.criteria = list(criteria)
        self.reason = reason
        super().__init__(
            f"Degenerate criteria ({reason}): {', '.join(self.criteria)}"
        )


class DegenerateDistanceError(ScoringError):
    """A candidate's distance to both ideal profiles is zero."""

    def __init__(self, candidate: str) -> None:
        self.candidate = candidate
        super().__init__(
            f"Candidate {candidate!r} coincides with both ideal profiles"
        )


class InvalidWeightError(ScoringError):
    """A weight is negative, non-finite, or otherwise unusable."""


class EmptyInputError(ScoringError):
    """An operation that needs at least one candidate received none."""
