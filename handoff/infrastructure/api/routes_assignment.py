"""Assignment endpoints — run the engine, dry-run rules, validate rules."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from handoff.application.use_cases.recommend_assignments import RecommendAssignmentsUseCase
from handoff.domain.entities.workload import WorkloadSnapshot
from handoff.domain.policies.default_rules import create_default_rules
from handoff.domain.policies.rule_evaluation import simulate_rules, validate_condition
from handoff.infrastructure.api.dependencies import get_recommend_assignments_uc
from handoff.infrastructure.api.schemas import (
    AssignmentRunRequest,
    AssignmentRunResponse,
    RecommendationOut,
    RuleSimulationOut,
    RuleValidationError,
    RuleValidationRequest,
    RuleValidationResponse,
    SimulationRequest,
    SimulationResponse,
    rule_to_wire,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assignment", tags=["assignment"])

RUN_FAILED = "Failed to run assignment engine"


def _build_snapshot(req: AssignmentRunRequest) -> WorkloadSnapshot:
    """Explicit count / portfolio maps win; otherwise derive them from owned accounts."""
    if req.rep_account_counts is None and req.rep_current_accounts is None and req.owned_accounts:
        return WorkloadSnapshot.from_owned_accounts(a.to_domain() for a in req.owned_accounts)

    return WorkloadSnapshot.from_maps(
        req.rep_account_counts,
        {
            rep_id: [a.to_domain() for a in accts]
            for rep_id, accts in (req.rep_current_accounts or {}).items()
        },
    )


@router.post("/run", response_model=AssignmentRunResponse)
async def run_assignment(
    payload: Any = Body(...),
    uc: RecommendAssignmentsUseCase = Depends(get_recommend_assignments_uc),
):
    """Rank candidate reps for each account in the payload."""
    try:
        req = AssignmentRunRequest.model_validate(payload)
        weights = req.weights.apply_to(uc.weights) if req.weights else None

        recommendations = uc.execute_with_snapshot(
            accounts=[a.to_domain() for a in req.accounts],
            reps=[r.to_domain() for r in req.available_reps],
            snapshot=_build_snapshot(req),
            rules=[r.to_domain() for r in req.rules],
            weights=weights,
        )
    except Exception:
        logger.exception("Assignment engine error")
        raise HTTPException(status_code=500, detail=RUN_FAILED)

    return AssignmentRunResponse(
        recommendations=[RecommendationOut.from_domain(r) for r in recommendations]
    )


@router.post("/simulate", response_model=SimulationResponse)
async def simulate(req: SimulationRequest):
    """Dry-run the rule list against a single account."""
    results = simulate_rules(req.account.to_domain(), [r.to_domain() for r in req.rules])
    return SimulationResponse(results=[RuleSimulationOut.from_domain(s) for s in results])


@router.post("/rules/validate", response_model=RuleValidationResponse)
async def validate_rules(req: RuleValidationRequest):
    """Report problems in raw rule definitions before they are saved."""
    errors: list[RuleValidationError] = []
    for rule_index, raw_rule in enumerate(req.rules):
        conditions = raw_rule.get("rules", raw_rule.get("conditions"))
        if not isinstance(conditions, list) or not conditions:
            errors.append(
                RuleValidationError(rule_index=rule_index, message="At least one condition is required")
            )
            continue
        for condition_index, raw_condition in enumerate(conditions):
            if not isinstance(raw_condition, dict):
                message = "Condition must be an object"
            else:
                message = validate_condition(raw_condition)
            if message:
                errors.append(
                    RuleValidationError(
                        rule_index=rule_index,
                        condition_index=condition_index,
                        message=message,
                    )
                )

    return RuleValidationResponse(valid=not errors, errors=errors)


@router.get("/rules/defaults")
async def default_rules():
    """Starter rule templates (inactive until configured)."""
    return {"rules": [rule_to_wire(r) for r in create_default_rules()]}
