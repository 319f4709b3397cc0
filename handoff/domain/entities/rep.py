"""Rep entity — a candidate owner for handed-off accounts."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Rep:
    id: str
    name: str
    capacity: int
    specialties: frozenset[str] = field(default_factory=frozenset)

    def has_specialty(self, industry: str) -> bool:
        """Case-insensitive specialty lookup."""
        wanted = industry.lower()
        return any(s.lower() == wanted for s in self.specialties)
