"""Weighted score — folds the factor breakdown and rule bonus into one number."""

import math

from handoff.domain.entities.recommendation import ScoreBreakdown
from handoff.domain.value_objects.weights import ScoringWeights


def round_half_up(value: float) -> int:
    """Round .5 upwards (Python's round() would go to the even neighbour)."""
    return math.floor(value + 0.5)


def compute_final_score(
    breakdown: ScoreBreakdown,
    weights: ScoringWeights,
    bonus: float = 0,
) -> int:
    """Σ(factor × weight) + bonus, rounded.

    Deliberately not clamped to 100 so that rule-forced matches visibly
    outrank organic scores.
    """
    weighted = (
        breakdown.capacity * weights.capacity
        + breakdown.arr_match * weights.arr_match
        + breakdown.industry_match * weights.industry_match
        + breakdown.geography_match * weights.geography_match
        + breakdown.health_score * weights.health_score
    )
    return round_half_up(weighted + bonus)
