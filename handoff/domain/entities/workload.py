"""WorkloadSnapshot — each rep's current book of accounts at call time.

Counts and portfolios change outside the engine as assignments are
committed, so they are passed in per call and never cached.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from handoff.domain.entities.account import Account


@dataclass(frozen=True)
class WorkloadSnapshot:
    counts: Mapping[str, int] = field(default_factory=dict)
    portfolios: Mapping[str, tuple[Account, ...]] = field(default_factory=dict)

    @classmethod
    def from_maps(
        cls,
        rep_account_counts: Mapping[str, int] | None,
        rep_current_accounts: Mapping[str, Iterable[Account]] | None,
    ) -> WorkloadSnapshot:
        return cls(
            counts=MappingProxyType(dict(rep_account_counts or {})),
            portfolios=MappingProxyType(
                {rep_id: tuple(accts) for rep_id, accts in (rep_current_accounts or {}).items()}
            ),
        )

    @classmethod
    def from_owned_accounts(cls, owned: Iterable[Account]) -> WorkloadSnapshot:
        """Group accounts by current owner; the count is the portfolio size."""
        grouped: dict[str, list[Account]] = {}
        for account in owned:
            if account.current_owner_id:
                grouped.setdefault(account.current_owner_id, []).append(account)
        return cls.from_maps(
            {rep_id: len(accts) for rep_id, accts in grouped.items()},
            grouped,
        )

    def count_for(self, rep_id: str) -> int:
        return self.counts.get(rep_id) or 0

    def portfolio_for(self, rep_id: str) -> tuple[Account, ...]:
        return self.portfolios.get(rep_id, ())
