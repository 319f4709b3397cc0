"""Starter rule templates offered to a new organisation.

Both ship inactive: an admin fills in the pool and switches them on.
"""

from handoff.domain.entities.rule import AssignPool, Condition, RoundRobin, Rule
from handoff.domain.value_objects.enums import ConditionField, ConditionOperator


def create_default_rules() -> list[Rule]:
    return [
        Rule(
            id="default-enterprise-pool",
            name="Enterprise accounts to senior reps",
            conditions=(
                Condition(
                    field=ConditionField.SEGMENT,
                    operator=ConditionOperator.EQUALS,
                    value="enterprise",
                    action=AssignPool(target_ids=frozenset()),
                ),
            ),
            is_active=False,
            priority=1,
        ),
        Rule(
            id="default-smb-round-robin",
            name="Round robin for SMB",
            conditions=(
                Condition(
                    field=ConditionField.SEGMENT,
                    operator=ConditionOperator.EQUALS,
                    value="smb",
                    action=RoundRobin(),
                ),
            ),
            is_active=False,
            priority=2,
        ),
    ]
