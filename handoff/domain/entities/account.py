"""Account entity — a customer whose ownership is being handed off."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Account:
    id: str
    name: str
    arr: float
    health_score: int
    industry: str | None = None
    geography: str | None = None
    segment: str | None = None
    current_owner_id: str | None = None
