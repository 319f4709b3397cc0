"""Rule entities — ordered, toggleable assignment policies.

A rule holds one or more conditions. Each condition is checked against an
account field and may carry an action that fires when the condition matches.
Actions are a closed set of variants rather than a bag of optional keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from handoff.domain.value_objects.enums import ActionType, ConditionField, ConditionOperator


@dataclass(frozen=True)
class AssignPool:
    """Restrict eligibility to the listed reps; listed reps get a bonus."""

    target_ids: frozenset[str]
    type: ActionType = field(default=ActionType.ASSIGN_POOL, init=False)

    def includes(self, rep_id: str) -> bool:
        return rep_id in self.target_ids


@dataclass(frozen=True)
class RoundRobin:
    """Distribute across a pool at commit time; no effect on scoring."""

    type: ActionType = field(default=ActionType.ROUND_ROBIN, init=False)


@dataclass(frozen=True)
class LeastLoaded:
    """Prefer the least loaded rep at commit time; no effect on scoring."""

    type: ActionType = field(default=ActionType.LEAST_LOADED, init=False)


Action = Union[AssignPool, RoundRobin, LeastLoaded]

ConditionValue = Union[str, int, float, bool, None, list]


@dataclass(frozen=True)
class Condition:
    # None means the raw field / operator was not recognised; such a
    # condition never matches.
    field: ConditionField | None
    operator: ConditionOperator | None
    value: ConditionValue
    action: Action | None = None


@dataclass(frozen=True)
class Rule:
    id: str
    name: str
    conditions: tuple[Condition, ...] = ()
    is_active: bool = True
    priority: int = 0
