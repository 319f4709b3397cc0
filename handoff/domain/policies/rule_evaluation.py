"""RuleEvaluationPolicy — decides eligibility and bonus for an (account, rep) pair.

Business rules:
  1. Rules are walked in list order; inactive rules are skipped.
  2. Each condition is checked against the account's field value.
  3. A matching condition with an ``assign_pool`` action:
       - rep outside the pool → ineligible for this account, permanently;
       - rep inside the pool  → flat bonus, accumulating across rules.
  4. ``round_robin`` and ``least_loaded`` actions do not affect scoring.

Condition checks are fail-closed: an unknown operator, a value of the wrong
shape or a failed numeric coercion makes that one condition "no match".
Nothing in here raises.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from handoff.domain.entities.account import Account
from handoff.domain.entities.rep import Rep
from handoff.domain.entities.rule import AssignPool, Condition, ConditionValue, Rule
from handoff.domain.value_objects.enums import ActionType, ConditionField, ConditionOperator

POOL_BONUS = 20


@dataclass(frozen=True)
class RuleOutcome:
    """Result of the policy evaluation."""

    eligible: bool
    bonus: float = 0
    applied_rule_ids: tuple[str, ...] = ()


# ─── Condition predicates ────────────────────────────────────────────


def field_value(account: Account, field: ConditionField | None) -> object:
    """Read the account attribute a condition refers to (None if unknown)."""
    if field == ConditionField.SEGMENT:
        return account.segment
    if field == ConditionField.INDUSTRY:
        return account.industry
    if field == ConditionField.GEOGRAPHY:
        return account.geography
    if field == ConditionField.ARR:
        return account.arr
    if field == ConditionField.HEALTH_SCORE:
        return account.health_score
    return None


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def strict_equals(left: object, right: object) -> bool:
    """Type-aware equality: ``"1"`` never equals ``1`` and bools never equal numbers."""
    if _is_number(left) and _is_number(right):
        return left == right
    if type(left) is not type(right):
        return False
    if isinstance(left, (list, dict)):
        # Compound literals are compared by identity, never by content.
        return left is right
    return left == right


def to_number(value: object) -> float:
    """Coerce to float; anything that is not clearly numeric becomes NaN."""
    if isinstance(value, bool):
        return float(value)
    if _is_number(value):
        return float(value)
    if isinstance(value, str) and value.strip() and "_" not in value:
        try:
            number = float(value.strip())
        except ValueError:
            return math.nan
        # "inf" / "nan" spellings are not numeric input
        return number if math.isfinite(number) else math.nan
    return math.nan


def evaluate_condition(
    value: object,
    operator: ConditionOperator | None,
    expected: ConditionValue,
) -> bool:
    """Check one predicate. Unknown operators never match."""
    if operator == ConditionOperator.EQUALS:
        return strict_equals(value, expected)
    if operator == ConditionOperator.NOT_EQUALS:
        return not strict_equals(value, expected)
    if operator == ConditionOperator.CONTAINS:
        return (
            isinstance(value, str)
            and isinstance(expected, str)
            and expected.lower() in value.lower()
        )
    if operator == ConditionOperator.GREATER_THAN:
        # NaN compares False both ways
        return to_number(value) > to_number(expected)
    if operator == ConditionOperator.LESS_THAN:
        return to_number(value) < to_number(expected)
    if operator == ConditionOperator.IN:
        return isinstance(expected, list) and any(strict_equals(value, v) for v in expected)
    return False


def condition_matches(account: Account, condition: Condition) -> bool:
    return evaluate_condition(
        field_value(account, condition.field), condition.operator, condition.value
    )


# ─── Eligibility / bonus ─────────────────────────────────────────────


def evaluate_rules(
    account: Account,
    rep: Rep,
    rules: Sequence[Rule],
    pool_bonus: float = POOL_BONUS,
) -> RuleOutcome:
    """Walk the active rules for one (account, rep) pair.

    Once a rule makes the rep ineligible no later rule can restore it, so
    evaluation stops there.
    """
    bonus: float = 0
    applied: list[str] = []

    for rule in rules:
        if not rule.is_active:
            continue

        for condition in rule.conditions:
            action = condition.action
            if not isinstance(action, AssignPool):
                continue
            if not condition_matches(account, condition):
                continue

            if not action.includes(rep.id):
                return RuleOutcome(eligible=False)

            bonus += pool_bonus
            if rule.id not in applied:
                applied.append(rule.id)

    return RuleOutcome(eligible=True, bonus=bonus, applied_rule_ids=tuple(applied))


# ─── Validation ──────────────────────────────────────────────────────

_NUMERIC_OPERATORS = (ConditionOperator.GREATER_THAN.value, ConditionOperator.LESS_THAN.value)


def validate_condition(raw: Mapping[str, object]) -> str | None:
    """Return a human-readable problem with a raw condition, or None if it is usable.

    Advisory only: the evaluator never relies on it and stays fail-closed.
    """
    field = raw.get("field")
    operator = raw.get("operator")
    value = raw.get("value")

    if not field:
        return "Field is required"
    if not operator:
        return "Operator is required"
    if value is None or value == "":
        return "Value is required"

    if ConditionField.parse(field) is None:
        return f"Unknown field: {field}"
    if ConditionOperator.parse(operator) is None:
        return f"Unknown operator: {operator}"
    if operator == ConditionOperator.IN.value and not isinstance(value, list):
        return "Value must be a list for 'in'"
    if operator in _NUMERIC_OPERATORS and math.isnan(to_number(value)):
        return f"Value must be numeric for '{operator}'"

    action = raw.get("action")
    if action is not None:
        if not isinstance(action, Mapping):
            return "Action must be an object"
        action_type = action.get("type")
        try:
            ActionType(action_type)
        except (ValueError, TypeError):
            return f"Unknown action type: {action_type}"
        if action_type == ActionType.ASSIGN_POOL.value and not isinstance(
            action.get("target_ids"), list
        ):
            return "assign_pool requires a list of target_ids"

    return None


# ─── Simulation ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class RuleSimulation:
    rule_id: str
    rule_name: str
    matched: bool
    reason: str


def simulate_rules(account: Account, rules: Sequence[Rule]) -> list[RuleSimulation]:
    """Dry-run every rule against one account, in list order.

    A rule matches when it is active and all of its conditions hold; a rule
    without conditions matches everything.
    """
    results: list[RuleSimulation] = []
    for rule in rules:
        if not rule.is_active:
            matched, reason = False, "Rule is inactive"
        elif all(condition_matches(account, c) for c in rule.conditions):
            matched, reason = True, "All conditions satisfied"
        else:
            matched, reason = False, "Conditions not met"
        results.append(
            RuleSimulation(rule_id=rule.id, rule_name=rule.name, matched=matched, reason=reason)
        )
    return results
