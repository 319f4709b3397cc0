"""RecommendAssignmentsUseCase — rules → factor scores → ranked top-N per account."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping, Sequence

from handoff.domain.entities.account import Account
from handoff.domain.entities.recommendation import (
    Recommendation,
    RecommendationEntry,
    ScoreBreakdown,
)
from handoff.domain.entities.rep import Rep
from handoff.domain.entities.rule import Rule
from handoff.domain.entities.workload import WorkloadSnapshot
from handoff.domain.policies.factor_scoring import (
    clamp_score,
    score_arr_match,
    score_capacity,
    score_geography_match,
    score_health_risk,
    score_industry_match,
)
from handoff.domain.policies.rule_evaluation import POOL_BONUS, evaluate_rules
from handoff.domain.policies.weighted_score import compute_final_score
from handoff.domain.value_objects.weights import DEFAULT_WEIGHTS, ScoringWeights

logger = logging.getLogger(__name__)

MAX_RECOMMENDATIONS = 3


def score_breakdown(
    account: Account,
    rep: Rep,
    current_account_count: int,
    rep_accounts: Sequence[Account],
) -> ScoreBreakdown:
    """All five factor scores for one (account, rep) pair, clamped to [0, 100]."""
    return ScoreBreakdown(
        capacity=clamp_score(score_capacity(rep, current_account_count)),
        arr_match=clamp_score(score_arr_match(account, rep, rep_accounts)),
        industry_match=clamp_score(score_industry_match(account, rep, rep_accounts)),
        geography_match=clamp_score(score_geography_match(account, rep_accounts)),
        health_score=clamp_score(score_health_risk(account)),
    )


class RecommendAssignmentsUseCase:
    """Ranks candidate reps for every account needing a new owner.

    Stateless: all inputs arrive with the call and nothing is kept between
    calls, so one instance may serve concurrent requests.
    """

    def __init__(
        self,
        weights: ScoringWeights = DEFAULT_WEIGHTS,
        max_recommendations: int = MAX_RECOMMENDATIONS,
        pool_bonus: float = POOL_BONUS,
    ):
        self._weights = weights
        self._limit = max_recommendations
        self._pool_bonus = pool_bonus
        if not math.isclose(weights.total(), 1.0):
            logger.warning("Scoring weights sum to %.2f, not 1.0", weights.total())

    @property
    def weights(self) -> ScoringWeights:
        return self._weights

    def execute(
        self,
        accounts: Sequence[Account],
        reps: Sequence[Rep],
        rep_account_counts: Mapping[str, int] | None = None,
        rep_current_accounts: Mapping[str, Iterable[Account]] | None = None,
        rules: Sequence[Rule] = (),
        weights: ScoringWeights | None = None,
    ) -> list[Recommendation]:
        """Produce one Recommendation per account, in input order.

        Args:
            accounts: accounts needing a new owner.
            reps: candidate pool, in tie-break order.
            rep_account_counts: rep id → current number of accounts.
            rep_current_accounts: rep id → accounts the rep owns today.
            rules: ordered rule list; only active rules take part.
            weights: per-call override of the configured weights.

        Returns:
            list of Recommendation, each with at most ``max_recommendations``
            entries sorted by descending score.
        """
        snapshot = WorkloadSnapshot.from_maps(rep_account_counts, rep_current_accounts)
        return self.execute_with_snapshot(accounts, reps, snapshot, rules, weights)

    def execute_with_snapshot(
        self,
        accounts: Sequence[Account],
        reps: Sequence[Rep],
        snapshot: WorkloadSnapshot,
        rules: Sequence[Rule] = (),
        weights: ScoringWeights | None = None,
    ) -> list[Recommendation]:
        weights = weights or self._weights
        logger.info(
            "Scoring %d accounts against %d reps with %d rules",
            len(accounts), len(reps), sum(1 for r in rules if r.is_active),
        )

        results = [self._recommend_for(account, reps, snapshot, rules, weights) for account in accounts]

        empty = sum(1 for r in results if not r.entries)
        if empty:
            logger.warning("%d/%d accounts have no eligible reps", empty, len(results))
        return results

    def _recommend_for(
        self,
        account: Account,
        reps: Sequence[Rep],
        snapshot: WorkloadSnapshot,
        rules: Sequence[Rule],
        weights: ScoringWeights,
    ) -> Recommendation:
        entries: list[RecommendationEntry] = []

        for rep in reps:
            outcome = evaluate_rules(account, rep, rules, pool_bonus=self._pool_bonus)
            if not outcome.eligible:
                logger.debug("Account %s: rep %s excluded by rules", account.id, rep.id)
                continue

            breakdown = score_breakdown(
                account, rep, snapshot.count_for(rep.id), snapshot.portfolio_for(rep.id)
            )
            entries.append(
                RecommendationEntry(
                    rep_id=rep.id,
                    rep_name=rep.name,
                    score=compute_final_score(breakdown, weights, outcome.bonus),
                    breakdown=breakdown,
                    bonus=outcome.bonus,
                    applied_rule_ids=outcome.applied_rule_ids,
                )
            )

        # sorted() is stable: equal scores keep the rep input order
        ranked = sorted(entries, key=lambda e: e.score, reverse=True)[: self._limit]

        recommendation = Recommendation(
            account_id=account.id,
            account_name=account.name,
            entries=tuple(ranked),
        )
        top = recommendation.top()
        logger.debug(
            "Account %s: %d eligible reps, top=%s",
            account.id, len(entries), top.rep_id if top else None,
        )
        return recommendation
