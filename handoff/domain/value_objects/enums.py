"""Domain enums — pure Python, no external dependencies."""

from __future__ import annotations

from enum import Enum


class ConditionField(str, Enum):
    SEGMENT = "segment"
    INDUSTRY = "industry"
    GEOGRAPHY = "geography"
    ARR = "arr"
    HEALTH_SCORE = "health_score"

    @classmethod
    def parse(cls, raw: object) -> ConditionField | None:
        """Return the matching member, or None for anything unrecognised."""
        try:
            return cls(raw)
        except (ValueError, TypeError):
            return None


class ConditionOperator(str, Enum):
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    IN = "in"

    @classmethod
    def parse(cls, raw: object) -> ConditionOperator | None:
        try:
            return cls(raw)
        except (ValueError, TypeError):
            return None


class ActionType(str, Enum):
    ASSIGN_POOL = "assign_pool"
    ROUND_ROBIN = "round_robin"
    LEAST_LOADED = "least_loaded"


class ArrTier(str, Enum):
    ENTERPRISE = "enterprise"
    MID_MARKET = "mid_market"
    SMB = "smb"
