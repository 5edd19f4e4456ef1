"""In-memory schema for symptom checker sessions."""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from symptom_checker.models.condition import Condition
from symptom_checker.models.provider import Provider
from symptom_checker.models.symptom import SelectedSymptomSet
from symptom_checker.models.triage import WizardStep
import uuid


class BookingData(BaseModel):
    """Appointment form fields filled in during the booking step."""

    date: str = ""
    time: str = ""
    notes: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.date) and bool(self.time)


class BookingConfirmation(BaseModel):
    """Receipt handed back when a booking is confirmed (not stored)."""

    confirmation_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    doctor_id: Optional[str] = None
    doctor_name: Optional[str] = None
    date: str
    time: str
    notes: str = ""
    message: str = (
        "Appointment booked successfully! "
        "You will receive a confirmation email shortly."
    )


class Session(BaseModel):
    """Complete mutable state of one user's pass through the wizard."""

    session_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    # Bumped on every reset and every analysis start; analysis jobs carry it
    generation: int = 0

    # Workflow position
    step: WizardStep = WizardStep.INPUT

    # Clinical context
    symptoms: SelectedSymptomSet = Field(default_factory=SelectedSymptomSet)
    results: List[Condition] = Field(default_factory=list)

    # Provider / booking slots
    selected_doctor: Optional[Provider] = None
    booking: BookingData = Field(default_factory=BookingData)

    class Config:
        json_schema_extra = {
            "example": {
                "session_id": "123e4567-e89b-12d3-a456-426614174000",
                "step": "results",
                "symptoms": {
                    "items": [{"id": "50", "name": "Fever", "severity": "moderate"}]
                },
            }
        }
