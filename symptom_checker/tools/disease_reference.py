"""Disease reference for the disease lookup page.

Lists every condition the rule table can produce, plus the fallback, so a
user can read about a condition without running an analysis.
"""

from typing import Dict, List
from symptom_checker.engine.rules import (
    RULE_TABLE,
    FALLBACK_NAME,
    FALLBACK_DESCRIPTION,
    FALLBACK_RECOMMENDATIONS,
)
from pydantic import BaseModel, Field


class DiseaseEntry(BaseModel):
    """Reference information about one condition."""

    name: str
    system: str
    description: str
    recommendations: List[str] = Field(default_factory=list)


def _build_reference() -> List[DiseaseEntry]:
    entries: Dict[str, DiseaseEntry] = {}
    for rule in RULE_TABLE:
        name = rule.template.name
        if name in entries:
            continue
        entries[name] = DiseaseEntry(
            name=name,
            system=rule.system,
            description=rule.template.description,
            recommendations=list(rule.template.recommendations),
        )
    entries[FALLBACK_NAME] = DiseaseEntry(
        name=FALLBACK_NAME,
        system="general",
        description=FALLBACK_DESCRIPTION,
        recommendations=list(FALLBACK_RECOMMENDATIONS),
    )
    return list(entries.values())


DISEASE_REFERENCE: List[DiseaseEntry] = _build_reference()


def search_diseases(query: str) -> List[DiseaseEntry]:
    """Case-insensitive substring search on name and description.

    A blank query returns the whole reference.
    """
    text = query.strip().lower()
    if not text:
        return list(DISEASE_REFERENCE)
    return [
        d
        for d in DISEASE_REFERENCE
        if text in d.name.lower() or text in d.description.lower()
    ]
