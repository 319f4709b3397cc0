"""Factor scorers — how well a rep fits an account, one dimension at a time.

Every scorer is a pure function returning an integer in [0, 100]. They share
no state and read nothing but their arguments, so each can be tested at its
band edges in isolation.

Neutral 50 is returned wherever the data is too thin to judge (no industry,
no geography, empty portfolio): missing data neither rewards nor penalises.
"""

from __future__ import annotations

from collections.abc import Sequence

from handoff.domain.entities.account import Account
from handoff.domain.entities.rep import Rep
from handoff.domain.value_objects.enums import ArrTier

NEUTRAL_SCORE = 50

ENTERPRISE_ARR_FLOOR = 200_000
MID_MARKET_ARR_FLOOR = 50_000


def clamp_score(value: float) -> int:
    """Clamp a factor score into [0, 100]."""
    return int(max(0, min(100, value)))


def arr_tier(arr: float) -> ArrTier:
    if arr >= ENTERPRISE_ARR_FLOOR:
        return ArrTier.ENTERPRISE
    if arr >= MID_MARKET_ARR_FLOOR:
        return ArrTier.MID_MARKET
    return ArrTier.SMB


def score_capacity(rep: Rep, current_account_count: int) -> int:
    """Steep penalty near capacity, flat plateau below 70% utilization.

    Bands:
      utilization >= 1.0  →   0
      utilization >= 0.9  →  20
      utilization >= 0.7  →  60
      otherwise           → 100
    """
    utilization = current_account_count / max(rep.capacity, 1)
    if utilization >= 1:
        return 0
    if utilization >= 0.9:
        return 20
    if utilization >= 0.7:
        return 60
    return 100


def score_arr_match(account: Account, rep: Rep, rep_accounts: Sequence[Account]) -> int:
    """Does the account's ARR tier match the tier of the rep's average account?

    Binary (100 / 40): tier boundaries are categorical policy, so a near miss
    is still a miss. An empty portfolio is neutral.
    """
    if not rep_accounts:
        return NEUTRAL_SCORE

    rep_avg_arr = sum(a.arr for a in rep_accounts) / len(rep_accounts)
    if arr_tier(account.arr) == arr_tier(rep_avg_arr):
        return 100
    return 40


def score_industry_match(account: Account, rep: Rep, rep_accounts: Sequence[Account]) -> int:
    """Declared specialty → 100, portfolio experience → 70, otherwise 30."""
    if not account.industry:
        return NEUTRAL_SCORE

    if rep.has_specialty(account.industry):
        return 100

    industry = account.industry.lower()
    if any(a.industry and a.industry.lower() == industry for a in rep_accounts):
        return 70

    return 30


def score_geography_match(account: Account, rep_accounts: Sequence[Account]) -> int:
    """Rep already covers this geography → 100, otherwise 30."""
    if not account.geography:
        return NEUTRAL_SCORE

    geography = account.geography.lower()
    if any(a.geography and a.geography.lower() == geography for a in rep_accounts):
        return 100

    return 30


def score_health_risk(account: Account) -> int:
    # Importance, not fit: the less healthy the account, the more the
    # assignment matters. Independent of the rep.
    if account.health_score < 40:
        return 100
    if account.health_score < 60:
        return 70
    if account.health_score < 80:
        return 40
    return 20
