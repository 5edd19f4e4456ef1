"""Triage classification enums."""

from enum import Enum


class SymptomSeverity(str, Enum):
    """Severity class of a catalog symptom."""

    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


class ConditionSeverity(str, Enum):
    """Risk severity of a candidate condition."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class UrgencyLevel(str, Enum):
    """Triage urgency levels."""

    URGENT = "urgent"  # Seek care immediately
    MODERATE = "moderate"  # See a doctor within 24-48 hours
    ROUTINE = "routine"  # Routine consultation if symptoms persist


class WizardStep(str, Enum):
    """Steps of the symptom checker wizard."""

    INPUT = "input"
    ANALYZING = "analyzing"
    RESULTS = "results"
    DOCTORS = "doctors"
    BOOKING = "booking"
    DISEASE_LOOKUP = "disease_lookup"
