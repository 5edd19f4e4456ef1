"""API request and response models."""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from symptom_checker.models.condition import Condition, UrgencyVerdict
from symptom_checker.models.provider import Provider
from symptom_checker.models.session import BookingData
from symptom_checker.models.symptom import Symptom
from symptom_checker.models.triage import WizardStep


class AddSymptomRequest(BaseModel):
    """Request to add a catalog symptom to the selection."""

    symptom_id: str = Field(..., description="Catalog symptom ID")


class BookingUpdateRequest(BaseModel):
    """Partial update of the booking form. Omitted fields are left unchanged."""

    date: Optional[str] = Field(None, max_length=32, description="Appointment date")
    time: Optional[str] = Field(None, max_length=32, description="Appointment slot")
    notes: Optional[str] = Field(None, max_length=2000, description="Notes for the doctor")


class SessionStateResponse(BaseModel):
    """Projection of a session for the presentation layer."""

    session_id: str
    step: WizardStep
    created_at: datetime
    updated_at: datetime
    symptoms: List[Symptom]
    results: List[Condition]
    urgency: Optional[UrgencyVerdict] = None
    selected_doctor: Optional[Provider] = None
    booking: BookingData


class SessionSummary(BaseModel):
    """Lightweight summary of a session for the listing."""

    session_id: str
    step: WizardStep
    created_at: datetime
    updated_at: datetime
    symptom_count: int


class SessionListResponse(BaseModel):
    """Paginated list of live sessions."""

    total: int
    limit: int
    offset: int
    sessions: List[SessionSummary]


class SymptomSearchResponse(BaseModel):
    """Catalog suggestions for a typed query."""

    query: str
    symptoms: List[Symptom]


class ProviderListResponse(BaseModel):
    """Providers from the directory."""

    providers: List[Provider]
