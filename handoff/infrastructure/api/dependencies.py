"""FastAPI dependency injection — wires settings into the use case."""

from __future__ import annotations

from functools import lru_cache

from handoff.application.use_cases.recommend_assignments import RecommendAssignmentsUseCase
from handoff.config import settings
from handoff.domain.value_objects.weights import ScoringWeights


def get_default_weights() -> ScoringWeights:
    return ScoringWeights(
        capacity=settings.weight_capacity,
        arr_match=settings.weight_arr_match,
        industry_match=settings.weight_industry_match,
        geography_match=settings.weight_geography_match,
        health_score=settings.weight_health_score,
    )


# Singleton use case (stateless, safe to share across requests)
@lru_cache(maxsize=1)
def get_recommend_assignments_uc() -> RecommendAssignmentsUseCase:
    return RecommendAssignmentsUseCase(
        weights=get_default_weights(),
        max_recommendations=settings.max_recommendations,
        pool_bonus=settings.pool_bonus,
    )
