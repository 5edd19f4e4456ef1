"""Symptom reference entity and the per-session symptom selection."""

from pydantic import BaseModel, Field
from typing import FrozenSet, List
from symptom_checker.models.triage import SymptomSeverity


class Symptom(BaseModel):
    """A named, severity-classified patient-reported complaint."""

    id: str
    name: str
    severity: SymptomSeverity

    class Config:
        frozen = True


class SelectedSymptomSet(BaseModel):
    """Ordered selection of distinct symptoms (unique by id).

    Only ``add`` and ``remove`` change the selection, so duplicates can never
    get in.
    """

    items: List[Symptom] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def __contains__(self, symptom_id: object) -> bool:
        return any(s.id == symptom_id for s in self.items)

    def ids(self) -> List[str]:
        return [s.id for s in self.items]

    def add(self, symptom: Symptom) -> bool:
        """Append a symptom. Returns False (no-op) if its id is already selected."""
        if symptom.id in self:
            return False
        self.items.append(symptom)
        return True

    def remove(self, symptom_id: str) -> bool:
        """Drop a symptom by id. Returns False (no-op) if it is not selected."""
        if symptom_id not in self:
            return False
        self.items = [s for s in self.items if s.id != symptom_id]
        return True

    def clear(self) -> None:
        self.items = []

    def names(self) -> FrozenSet[str]:
        """Lowercased symptom names, the input every rule predicate sees."""
        return frozenset(s.name.lower() for s in self.items)

    def has_severity(self, *levels: SymptomSeverity) -> bool:
        return any(s.severity in levels for s in self.items)
