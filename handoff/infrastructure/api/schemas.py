"""Request / response schemas for the assignment API.

The wire format is loosely typed (rules are free-form JSON edited in the UI);
the ``to_domain`` helpers turn it into the tagged domain types. Anything the
engine does not recognise is kept as "unknown" and fails closed downstream
instead of rejecting the whole request.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator

from handoff.domain.entities.account import Account
from handoff.domain.entities.recommendation import Recommendation
from handoff.domain.entities.rep import Rep
from handoff.domain.entities.rule import (
    Action,
    AssignPool,
    Condition,
    LeastLoaded,
    RoundRobin,
    Rule,
)
from handoff.domain.policies.rule_evaluation import RuleSimulation
from handoff.domain.value_objects.enums import ActionType, ConditionField, ConditionOperator
from handoff.domain.value_objects.weights import ScoringWeights

# ── Inputs ──────────────────────────────────────────────────────────


class AccountIn(BaseModel):
    id: str
    name: str
    arr: float = Field(ge=0)
    health_score: int = Field(ge=0, le=100)
    industry: str | None = None
    geography: str | None = None
    segment: str | None = None
    current_owner_id: str | None = None

    def to_domain(self) -> Account:
        return Account(
            id=self.id,
            name=self.name,
            arr=self.arr,
            health_score=self.health_score,
            industry=self.industry,
            geography=self.geography,
            segment=self.segment,
            current_owner_id=self.current_owner_id,
        )


class RepIn(BaseModel):
    id: str
    name: str = Field(validation_alias=AliasChoices("name", "full_name"))
    capacity: int = Field(ge=1)
    specialties: list[str] = Field(default_factory=list)

    def to_domain(self) -> Rep:
        return Rep(
            id=self.id,
            name=self.name,
            capacity=self.capacity,
            specialties=frozenset(self.specialties),
        )


class ActionIn(BaseModel):
    type: Any = None
    target_ids: Any = None

    def to_domain(self) -> Action | None:
        if self.type == ActionType.ASSIGN_POOL.value:
            # A pool without a target list has nothing to restrict to.
            if not isinstance(self.target_ids, list):
                return None
            # Rep ids are strings; any other id can never match a rep.
            return AssignPool(target_ids=frozenset(t for t in self.target_ids if isinstance(t, str)))
        if self.type == ActionType.ROUND_ROBIN.value:
            return RoundRobin()
        if self.type == ActionType.LEAST_LOADED.value:
            return LeastLoaded()
        return None


class ConditionIn(BaseModel):
    field: Any = None
    operator: Any = None
    value: Any = None
    action: Any = None

    def to_domain(self) -> Condition:
        action = None
        if isinstance(self.action, dict):
            action = ActionIn.model_validate(self.action).to_domain()
        return Condition(
            field=ConditionField.parse(self.field),
            operator=ConditionOperator.parse(self.operator),
            value=self.value,
            action=action,
        )


class RuleIn(BaseModel):
    id: str
    name: str = ""
    rules: list[ConditionIn] = Field(
        default_factory=list, validation_alias=AliasChoices("rules", "conditions")
    )
    is_active: bool = True
    priority: int = 0

    @field_validator("rules", mode="before")
    @classmethod
    def _drop_non_object_conditions(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [c for c in value if isinstance(c, dict)]
        return value

    def to_domain(self) -> Rule:
        return Rule(
            id=self.id,
            name=self.name,
            conditions=tuple(c.to_domain() for c in self.rules),
            is_active=self.is_active,
            priority=self.priority,
        )


class WeightsIn(BaseModel):
    capacity: float | None = None
    arr_match: float | None = None
    industry_match: float | None = None
    geography_match: float | None = None
    health_score: float | None = None

    def apply_to(self, base: ScoringWeights) -> ScoringWeights:
        return base.override(**self.model_dump())


class AssignmentRunRequest(BaseModel):
    accounts: list[AccountIn]
    available_reps: list[RepIn] = Field(
        default_factory=list, validation_alias=AliasChoices("available_reps", "reps")
    )
    rep_account_counts: dict[str, int] | None = None
    rep_current_accounts: dict[str, list[AccountIn]] | None = None
    owned_accounts: list[AccountIn] | None = None
    rules: list[RuleIn] = Field(default_factory=list)
    weights: WeightsIn | None = None


class SimulationRequest(BaseModel):
    account: AccountIn
    rules: list[RuleIn] = Field(default_factory=list)


class RuleValidationRequest(BaseModel):
    rules: list[dict[str, Any]] = Field(default_factory=list)


# ── Outputs ─────────────────────────────────────────────────────────


class BreakdownOut(BaseModel):
    capacity: int
    arr_match: int
    industry_match: int
    geography_match: int
    health_score: int


class RecommendationEntryOut(BaseModel):
    rep_id: str
    rep_name: str
    score: int = Field(description="Weighted score plus rule bonus; may exceed 100")
    breakdown: BreakdownOut
    bonus: float = 0
    applied_rule_ids: list[str] = Field(default_factory=list)


class RecommendationOut(BaseModel):
    account_id: str
    account_name: str
    recommendations: list[RecommendationEntryOut]

    @classmethod
    def from_domain(cls, rec: Recommendation) -> RecommendationOut:
        return cls(
            account_id=rec.account_id,
            account_name=rec.account_name,
            recommendations=[
                RecommendationEntryOut(
                    rep_id=e.rep_id,
                    rep_name=e.rep_name,
                    score=e.score,
                    breakdown=BreakdownOut(**e.breakdown.as_dict()),
                    bonus=e.bonus,
                    applied_rule_ids=list(e.applied_rule_ids),
                )
                for e in rec.entries
            ],
        )


class AssignmentRunResponse(BaseModel):
    recommendations: list[RecommendationOut]


class RuleSimulationOut(BaseModel):
    rule_id: str
    rule_name: str
    matched: bool
    reason: str

    @classmethod
    def from_domain(cls, sim: RuleSimulation) -> RuleSimulationOut:
        return cls(
            rule_id=sim.rule_id,
            rule_name=sim.rule_name,
            matched=sim.matched,
            reason=sim.reason,
        )


class SimulationResponse(BaseModel):
    results: list[RuleSimulationOut]


class RuleValidationError(BaseModel):
    rule_index: int
    condition_index: int | None = None
    message: str


class RuleValidationResponse(BaseModel):
    valid: bool
    errors: list[RuleValidationError]


def rule_to_wire(rule: Rule) -> dict[str, Any]:
    """Serialize a domain Rule back to the JSON shape the UI edits."""
    conditions = []
    for c in rule.conditions:
        item: dict[str, Any] = {
            "field": c.field.value if c.field else None,
            "operator": c.operator.value if c.operator else None,
            "value": c.value,
        }
        if c.action is not None:
            item["action"] = {"type": c.action.type.value}
            if isinstance(c.action, AssignPool):
                item["action"]["target_ids"] = sorted(c.action.target_ids)
        conditions.append(item)
    return {
        "id": rule.id,
        "name": rule.name,
        "rules": conditions,
        "is_active": rule.is_active,
        "priority": rule.priority,
    }
