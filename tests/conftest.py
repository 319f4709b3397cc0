"""Pytest configuration and shared fixtures."""

import pytest

from handoff.domain.entities.account import Account
from handoff.domain.entities.rep import Rep


@pytest.fixture
def fintech_account():
    return Account(
        id="acc-1", name="Acme Pay", arr=250_000, health_score=30,
        industry="fintech", geography="APAC", segment="enterprise",
    )


@pytest.fixture
def fintech_rep():
    return Rep(id="rep-1", name="Jordan Lee", capacity=10, specialties=frozenset({"fintech"}))
