"""Tests for RecommendAssignmentsUseCase."""

from __future__ import annotations

import logging

from handoff.application.use_cases.recommend_assignments import (
    RecommendAssignmentsUseCase,
    score_breakdown,
)
from handoff.domain.entities.account import Account
from handoff.domain.entities.rep import Rep
from handoff.domain.entities.rule import AssignPool, Condition, RoundRobin, Rule
from handoff.domain.entities.workload import WorkloadSnapshot
from handoff.domain.value_objects.enums import ConditionField, ConditionOperator
from handoff.domain.value_objects.weights import ScoringWeights

# ─── Builders ────────────────────────────────────────────────────────


def _account(aid: str = "a1", arr: float = 100_000, health: int = 70,
             industry: str | None = "SaaS", geography: str | None = "EMEA",
             segment: str | None = "corporate") -> Account:
    return Account(id=aid, name=f"Account {aid}", arr=arr, health_score=health,
                   industry=industry, geography=geography, segment=segment)


def _rep(rid: str, capacity: int = 10, specialties: set[str] | None = None) -> Rep:
    return Rep(id=rid, name=rid.upper(), capacity=capacity,
               specialties=frozenset(specialties or set()))


def _pool_rule(rid: str, value: str, *targets: str, field=ConditionField.SEGMENT) -> Rule:
    return Rule(
        id=rid, name=rid,
        conditions=(Condition(field=field, operator=ConditionOperator.EQUALS, value=value,
                              action=AssignPool(frozenset(targets))),),
    )


# ─── Reference scenarios ─────────────────────────────────────────────


def test_reference_scenario_scores_77(fintech_account, fintech_rep):
    uc = RecommendAssignmentsUseCase()
    [rec] = uc.execute([fintech_account], [fintech_rep], {"rep-1": 2}, {"rep-1": []}, [])

    assert rec.account_id == "acc-1"
    assert rec.account_name == "Acme Pay"
    [entry] = rec.entries
    assert entry.rep_id == "rep-1"
    assert entry.rep_name == "Jordan Lee"
    assert entry.breakdown.capacity == 100
    assert entry.breakdown.arr_match == 50
    assert entry.breakdown.industry_match == 100
    assert entry.breakdown.geography_match == 30
    assert entry.breakdown.health_score == 100
    assert entry.score == 77
    assert entry.bonus == 0


def test_assign_pool_keeps_only_targets_with_bonus():
    """segment == enterprise → only rep-9, and rep-9 gets +20."""
    account = _account(segment="enterprise")
    reps = [_rep("rep-1"), _rep("rep-9"), _rep("rep-3")]
    rules = [_pool_rule("enterprise-pool", "enterprise", "rep-9")]

    uc = RecommendAssignmentsUseCase()
    baseline = uc.execute([account], [_rep("rep-9")], {}, {}, [])[0].entries[0].score
    [rec] = uc.execute([account], reps, {}, {}, rules)

    assert [e.rep_id for e in rec.entries] == ["rep-9"]
    assert rec.entries[0].score == baseline + 20
    assert rec.entries[0].bonus == 20
    assert rec.entries[0].applied_rule_ids == ("enterprise-pool",)


def test_assign_pool_excludes_even_the_best_rep():
    accounts = [_account("a1", segment="enterprise"), _account("a2", segment="smb")]
    star = _rep("star", specialties={"SaaS"})
    weak = _rep("weak", capacity=1)
    rules = [_pool_rule("p", "enterprise", "weak")]

    recs = RecommendAssignmentsUseCase().execute(accounts, [star, weak], {"weak": 0}, {}, rules)

    assert [e.rep_id for e in recs[0].entries] == ["weak"]
    # Rule does not match the smb account, so the star is still ranked first there
    assert [e.rep_id for e in recs[1].entries] == ["star", "weak"]


# ─── Ranking ─────────────────────────────────────────────────────────


def test_top_three_sorted_descending():
    reps = [
        _rep("full", capacity=10),
        _rep("busy", capacity=10),
        _rep("free", capacity=10),
        _rep("expert", capacity=10, specialties={"saas"}),
        _rep("tight", capacity=10),
    ]
    counts = {"full": 10, "busy": 9, "free": 0, "expert": 0, "tight": 7}

    [rec] = RecommendAssignmentsUseCase().execute([_account()], reps, counts, {}, [])

    assert len(rec.entries) == 3
    scores = [e.score for e in rec.entries]
    assert scores == sorted(scores, reverse=True)
    assert [e.rep_id for e in rec.entries] == ["expert", "free", "tight"]


def test_ties_keep_input_order():
    reps = [_rep("c"), _rep("a"), _rep("b"), _rep("d")]
    [rec] = RecommendAssignmentsUseCase().execute([_account()], reps, {}, {}, [])
    assert [e.rep_id for e in rec.entries] == ["c", "a", "b"]
    assert len({e.score for e in rec.entries}) == 1


def test_max_recommendations_configurable():
    reps = [_rep(f"r{i}") for i in range(6)]
    [rec] = RecommendAssignmentsUseCase(max_recommendations=5).execute([_account()], reps, {}, {}, [])
    assert len(rec.entries) == 5


def test_portfolio_drives_fit_scores():
    account = _account(arr=250_000, industry="Healthcare", geography="APAC")
    portfolio = [_account("p1", arr=300_000, industry="healthcare", geography="apac")]
    [rec] = RecommendAssignmentsUseCase().execute(
        [account], [_rep("r1")], {"r1": 1}, {"r1": portfolio}, []
    )
    breakdown = rec.entries[0].breakdown
    assert breakdown.arr_match == 100
    assert breakdown.industry_match == 70
    assert breakdown.geography_match == 100


def test_bonus_can_exceed_one_hundred():
    account = _account(segment="enterprise", industry="SaaS", geography="EMEA", health=10, arr=60_000)
    portfolio = [_account("p1", arr=60_000, industry="SaaS", geography="EMEA")]
    rules = [
        _pool_rule("seg", "enterprise", "r1"),
        _pool_rule("geo", "EMEA", "r1", field=ConditionField.GEOGRAPHY),
    ]
    [rec] = RecommendAssignmentsUseCase().execute(
        [account], [_rep("r1", specialties={"saas"})], {"r1": 1}, {"r1": portfolio}, rules
    )
    assert rec.entries[0].score == 140


# ─── Edge cases ──────────────────────────────────────────────────────


def test_empty_rep_pool_gives_empty_lists():
    accounts = [_account("a1"), _account("a2")]
    recs = RecommendAssignmentsUseCase().execute(accounts, [], {}, {}, [])
    assert [r.account_id for r in recs] == ["a1", "a2"]
    assert all(r.entries == () for r in recs)


def test_no_eligible_reps_is_not_an_error(caplog):
    rules = [_pool_rule("nobody", "corporate")]
    with caplog.at_level(logging.WARNING):
        [rec] = RecommendAssignmentsUseCase().execute([_account()], [_rep("r1")], {}, {}, rules)
    assert rec.entries == ()
    assert "no eligible reps" in caplog.text


def test_empty_accounts():
    assert RecommendAssignmentsUseCase().execute([], [_rep("r1")], {}, {}, []) == []


def test_preserves_account_order():
    accounts = [_account("z"), _account("a"), _account("m")]
    recs = RecommendAssignmentsUseCase().execute(accounts, [_rep("r1")], {}, {}, [])
    assert [r.account_id for r in recs] == ["z", "a", "m"]


def test_malformed_rules_do_not_break_batch():
    rules = [
        Rule(id="bad", name="bad", conditions=(
            Condition(field=ConditionField.ARR, operator=ConditionOperator.GREATER_THAN,
                      value="not-a-number", action=AssignPool(frozenset({"nobody"}))),
            Condition(field=ConditionField.SEGMENT, operator=None,
                      value="corporate", action=AssignPool(frozenset({"nobody"}))),
        )),
        Rule(id="rr", name="rr", conditions=(
            Condition(field=ConditionField.SEGMENT, operator=ConditionOperator.EQUALS,
                      value="corporate", action=RoundRobin()),
        )),
    ]
    [rec] = RecommendAssignmentsUseCase().execute([_account()], [_rep("r1")], {}, {}, rules)
    assert [e.rep_id for e in rec.entries] == ["r1"]
    assert rec.entries[0].bonus == 0


def test_inactive_rule_has_no_effect():
    rule = _pool_rule("off", "corporate", "r2")
    inactive = Rule(id=rule.id, name=rule.name, conditions=rule.conditions, is_active=False)
    [rec] = RecommendAssignmentsUseCase().execute([_account()], [_rep("r1"), _rep("r2")], {}, {}, [inactive])
    assert [e.rep_id for e in rec.entries] == ["r1", "r2"]


def test_deterministic_across_calls():
    accounts = [_account("a1", segment="enterprise"), _account("a2", health=20)]
    reps = [_rep("r1", specialties={"saas"}), _rep("r2"), _rep("r3", capacity=2)]
    counts = {"r1": 3, "r3": 1}
    portfolios = {"r2": [_account("p", geography="EMEA")]}
    rules = [_pool_rule("p", "enterprise", "r1", "r2")]
    uc = RecommendAssignmentsUseCase()

    first = uc.execute(accounts, reps, counts, portfolios, rules)
    second = uc.execute(accounts, reps, counts, portfolios, rules)
    assert first == second


# ─── Weights ─────────────────────────────────────────────────────────


def test_per_call_weights_override():
    weights = ScoringWeights(capacity=1.0, arr_match=0, industry_match=0,
                             geography_match=0, health_score=0)
    uc = RecommendAssignmentsUseCase()
    [rec] = uc.execute([_account()], [_rep("r1")], {"r1": 8}, {}, [], weights=weights)
    assert rec.entries[0].score == 60


def test_weights_not_summing_to_one_are_logged(caplog):
    lopsided = ScoringWeights(capacity=1.0, arr_match=1.0, industry_match=0,
                              geography_match=0, health_score=0)
    with caplog.at_level(logging.WARNING):
        RecommendAssignmentsUseCase()
    assert "Scoring weights" not in caplog.text

    with caplog.at_level(logging.WARNING):
        RecommendAssignmentsUseCase(weights=lopsided)
    assert "Scoring weights sum to 2.00" in caplog.text


def test_debug_log_names_top_rep(caplog):
    reps = [_rep("low"), _rep("high", specialties={"saas"})]
    with caplog.at_level(logging.DEBUG, logger="handoff.application.use_cases.recommend_assignments"):
        [rec] = RecommendAssignmentsUseCase().execute([_account()], reps, {}, {}, [])
    assert rec.top().rep_id == "high"
    assert "Account a1: 2 eligible reps, top=high" in caplog.text


def test_configured_weights_and_bonus():
    weights = ScoringWeights(capacity=0, arr_match=0, industry_match=0,
                             geography_match=0, health_score=1.0)
    uc = RecommendAssignmentsUseCase(weights=weights, pool_bonus=5)
    [rec] = uc.execute([_account(health=90)], [_rep("r1")], {}, {}, [_pool_rule("p", "corporate", "r1")])
    assert rec.entries[0].score == 25


# ─── Snapshot entry point ────────────────────────────────────────────


def test_execute_with_owned_accounts_snapshot():
    owned = [
        Account(id=f"o{i}", name=f"o{i}", arr=10_000, health_score=90, current_owner_id="r1")
        for i in range(9)
    ]
    snapshot = WorkloadSnapshot.from_owned_accounts(owned)
    [rec] = RecommendAssignmentsUseCase().execute_with_snapshot([_account()], [_rep("r1")], snapshot)
    assert rec.entries[0].breakdown.capacity == 20
    assert rec.entries[0].breakdown.arr_match == 40


def test_score_breakdown_clamped():
    breakdown = score_breakdown(_account(), _rep("r1"), 0, [])
    for value in breakdown.as_dict().values():
        assert 0 <= value <= 100
