"""Candidate condition and urgency verdict models."""

from pydantic import BaseModel, Field
from typing import List
from symptom_checker.models.triage import ConditionSeverity, UrgencyLevel


class Condition(BaseModel):
    """A candidate diagnosis with confidence and risk severity.

    Rule templates are Conditions too; the engine copies a template and may
    escalate its severity before returning it.
    """

    name: str
    confidence: int = Field(..., ge=0, le=100)
    severity: ConditionSeverity
    description: str
    recommendations: List[str] = Field(default_factory=list)

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "name": "Common Cold",
                "confidence": 90,
                "severity": "low",
                "description": "Viral upper respiratory tract infection",
                "recommendations": ["Rest and hydration", "Monitor symptoms"],
            }
        }


# Templates share the Condition shape.
ConditionTemplate = Condition


class UrgencyVerdict(BaseModel):
    """Triage recommendation derived from an analysis."""

    level: UrgencyLevel
    message: str
