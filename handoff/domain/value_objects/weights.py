"""ScoringWeights value object — how much each factor counts in the final score."""

from dataclasses import dataclass, fields, replace


@dataclass(frozen=True)
class ScoringWeights:
    capacity: float = 0.30
    arr_match: float = 0.25
    industry_match: float = 0.20
    geography_match: float = 0.15
    health_score: float = 0.10

    def total(self) -> float:
        return sum(getattr(self, f.name) for f in fields(self))

    def override(self, **changes: float | None) -> "ScoringWeights":
        """Copy with the given weights replaced; None values keep the current weight."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


DEFAULT_WEIGHTS = ScoringWeights()
