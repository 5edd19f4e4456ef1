"""Triage urgency derived from an analysis."""

from typing import Sequence
from symptom_checker.models.condition import Condition, UrgencyVerdict
from symptom_checker.models.symptom import SelectedSymptomSet
from symptom_checker.models.triage import (
    ConditionSeverity,
    SymptomSeverity,
    UrgencyLevel,
)


URGENCY_MESSAGES = {
    UrgencyLevel.URGENT: "Seek immediate medical attention",
    UrgencyLevel.MODERATE: "Schedule appointment within 24-48 hours",
    UrgencyLevel.ROUTINE: "Consider routine consultation if symptoms persist",
}


def advise(symptoms: SelectedSymptomSet, results: Sequence[Condition]) -> UrgencyVerdict:
    """
    Derive the triage verdict for an analysis.

    Checked in order: a severe symptom or a high-severity top condition is
    urgent; a medium-severity top condition is moderate; anything else is
    routine.

    Args:
        symptoms: Selected symptoms the analysis ran on
        results: Ranked conditions, highest confidence first

    Returns:
        UrgencyVerdict with level and patient-facing message
    """
    top = results[0] if results else None

    if symptoms.has_severity(SymptomSeverity.SEVERE) or (
        top is not None and top.severity == ConditionSeverity.HIGH
    ):
        level = UrgencyLevel.URGENT
    elif top is not None and top.severity == ConditionSeverity.MEDIUM:
        level = UrgencyLevel.MODERATE
    else:
        level = UrgencyLevel.ROUTINE

    return UrgencyVerdict(level=level, message=URGENCY_MESSAGES[level])
