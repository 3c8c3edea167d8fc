"""Summary statistics and status labels for closeness scores (0-1 scale).

A closeness score places a candidate between the worst and best profile
*of its own pool*.  The thresholds below therefore rank candidates
against each other; they are not an absolute hiring bar.
"""

from typing import Iterable

# (minimum score, label), evaluated top-down, first match wins.
STATUS_THRESHOLDS: list[tuple[float, str]] = [
    (0.80, "Recommended"),
    (0.70, "Consider"),
    (0.60, "Review"),
]

RECOMMENDED_THRESHOLD = STATUS_THRESHOLDS[0][0]


def status_label(score: float | None) -> str:
    """Classify a closeness score.

    Thresholds:
        - >= 0.80 -> Recommended
        - >= 0.70 -> Consider
        - >= 0.60 -> Review
        - else    -> Not Recommended

    ``None`` (never scored) gives ``Not Scored``.
    """
    if score is None:
        return "Not Scored"
    for threshold, label in STATUS_THRESHOLDS:
        if score >= threshold:
            return label
    return "Not Recommended"


def candidate_stats(scores: Iterable[float | None]) -> dict:
    """Aggregate figures for a set of scores.

    Closeness is relative to the candidates scored together, so the
    labels and counts describe the current pool and shift whenever a
    candidate is added, edited or removed.

    Unscored entries count as 0.  An empty input yields zeros rather
    than a division by zero.

    Returns:
        A dict with ``total``, ``recommended``, ``average_score`` and
        ``top_score``.
    """
    values = [s if s is not None else 0.0 for s in scores]
    if not values:
        return {"total": 0, "recommended": 0, "average_score": 0.0, "top_score": 0.0}

    return {
        "total": len(values),
        "recommended": sum(1 for v in values if v >= RECOMMENDED_THRESHOLD),
        "average_score": round(sum(values) / len(values), 3),
        "top_score": round(max(values), 3),
    }
