"""Recommendation entities — the ranked output of the assignment engine."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoreBreakdown:
    """The five factor sub-scores, each in [0, 100]."""

    capacity: int
    arr_match: int
    industry_match: int
    geography_match: int
    health_score: int

    def as_dict(self) -> dict[str, int]:
        return {
            "capacity": self.capacity,
            "arr_match": self.arr_match,
            "industry_match": self.industry_match,
            "geography_match": self.geography_match,
            "health_score": self.health_score,
        }


@dataclass(frozen=True)
class RecommendationEntry:
    rep_id: str
    rep_name: str
    score: int  # not clamped: rule bonuses can push it past 100
    breakdown: ScoreBreakdown
    bonus: float = 0
    applied_rule_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class Recommendation:
    account_id: str
    account_name: str
    entries: tuple[RecommendationEntry, ...] = ()

    def top(self) -> RecommendationEntry | None:
        return self.entries[0] if self.entries else None
