"""Symptom checker API endpoints.

Exposes the symptom catalog, the disease lookup, the provider directory and
every step of the symptom checker wizard:
- Build a symptom selection and request an analysis
- Read ranked conditions and the urgency verdict
- Pick a provider, fill in the booking form and confirm

Steps that are not allowed from the session's current step answer 409.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from symptom_checker.api.dependencies import get_session_machine
from symptom_checker.models.messages import (
    AddSymptomRequest,
    BookingUpdateRequest,
    ProviderListResponse,
    SessionListResponse,
    SessionStateResponse,
    SessionSummary,
    SymptomSearchResponse,
)
from symptom_checker.models.session import BookingConfirmation
from symptom_checker.models.triage import WizardStep
from symptom_checker.services.session_service import SessionService, get_session_service
from symptom_checker.services.workflow import SessionStateMachine
from symptom_checker.tools.disease_reference import DiseaseEntry, search_diseases
from symptom_checker.tools.provider_directory import get_provider, list_providers
from symptom_checker.tools.symptom_catalog import get_symptom, search_symptoms
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/checker", tags=["Symptom Checker"])


def _to_state(machine: SessionStateMachine) -> SessionStateResponse:
    session = machine.session
    return SessionStateResponse(
        session_id=session.session_id,
        step=session.step,
        created_at=session.created_at,
        updated_at=session.updated_at,
        symptoms=list(session.symptoms.items),
        results=list(session.results),
        urgency=machine.urgency,
        selected_doctor=session.selected_doctor,
        booking=session.booking,
    )


def _refused(machine: SessionStateMachine, action: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=f"Cannot {action} in step '{machine.step.value}'",
    )


# ── Reference data ───────────────────────────────────────────────────────────


@router.get("/symptoms", response_model=SymptomSearchResponse)
async def suggest_symptoms(
    q: str = Query("", max_length=100, description="Text typed by the user"),
    session_id: Optional[str] = Query(None, description="Exclude this session's selection"),
    session_service: SessionService = Depends(get_session_service),
):
    """Suggest catalog symptoms whose name contains the query."""
    exclude: List[str] = []
    if session_id:
        machine = await session_service.get_session(session_id)
        if machine is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Session not found"
            )
        exclude = machine.session.symptoms.ids()

    return SymptomSearchResponse(query=q, symptoms=search_symptoms(q, exclude))


@router.get("/diseases", response_model=List[DiseaseEntry])
async def lookup_diseases(q: str = Query("", max_length=100)):
    """Search the disease reference by name or description."""
    return search_diseases(q)


@router.get("/providers", response_model=ProviderListResponse)
async def get_providers(specialty: Optional[str] = Query(None, max_length=100)):
    """List providers from the directory."""
    return ProviderListResponse(providers=list_providers(specialty))


# ── Sessions ─────────────────────────────────────────────────────────────────


@router.post(
    "/sessions",
    response_model=SessionStateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def start_session(session_service: SessionService = Depends(get_session_service)):
    """Start a new symptom checker session at the input step."""
    machine = await session_service.create_session()
    if machine is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Too many active sessions, try again later",
        )
    return _to_state(machine)


@router.get("/sessions", response_model=SessionListResponse)
async def get_sessions(
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    session_service: SessionService = Depends(get_session_service),
):
    """List live sessions, most recently updated first."""
    machines, total = await session_service.list_sessions(limit=limit, offset=offset)
    summaries = [
        SessionSummary(
            session_id=m.session_id,
            step=m.step,
            created_at=m.session.created_at,
            updated_at=m.session.updated_at,
            symptom_count=len(m.session.symptoms),
        )
        for m in machines
    ]
    return SessionListResponse(total=total, limit=limit, offset=offset, sessions=summaries)


@router.get("/sessions/{session_id}", response_model=SessionStateResponse)
async def get_session_state(machine: SessionStateMachine = Depends(get_session_machine)):
    """Current step, selection, results, urgency and booking slots."""
    return _to_state(machine)


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    session_id: str,
    session_service: SessionService = Depends(get_session_service),
):
    """Drop a session, cancelling any pending analysis."""
    deleted = await session_service.delete_session(session_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Session not found"
        )


# ── Symptom selection ────────────────────────────────────────────────────────


@router.post("/sessions/{session_id}/symptoms", response_model=SessionStateResponse)
async def add_symptom(
    request: AddSymptomRequest,
    machine: SessionStateMachine = Depends(get_session_machine),
):
    """Add a catalog symptom. Adding one that is already selected changes nothing."""
    symptom = get_symptom(request.symptom_id)
    if symptom is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Symptom not found"
        )
    if machine.step != WizardStep.INPUT:
        raise _refused(machine, "change symptoms")
    machine.add_symptom(symptom)
    return _to_state(machine)


@router.delete(
    "/sessions/{session_id}/symptoms/{symptom_id}", response_model=SessionStateResponse
)
async def remove_symptom(
    symptom_id: str,
    machine: SessionStateMachine = Depends(get_session_machine),
):
    """Remove a symptom. Removing one that is not selected changes nothing."""
    if machine.step != WizardStep.INPUT:
        raise _refused(machine, "change symptoms")
    machine.remove_symptom(symptom_id)
    return _to_state(machine)


# ── Wizard steps ─────────────────────────────────────────────────────────────


@router.post(
    "/sessions/{session_id}/analyze",
    response_model=SessionStateResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def analyze(
    wait: bool = Query(False, description="Respond only once the analysis has finished"),
    machine: SessionStateMachine = Depends(get_session_machine),
):
    """Start the analysis. Poll the session (or pass wait=true) for results."""
    if not machine.request_analysis():
        raise _refused(machine, "start analysis")
    if wait:
        await machine.wait_for_analysis()
    return _to_state(machine)


@router.post("/sessions/{session_id}/doctors", response_model=SessionStateResponse)
async def view_doctors(machine: SessionStateMachine = Depends(get_session_machine)):
    """Move from results to the provider list."""
    if not machine.view_providers():
        raise _refused(machine, "view providers")
    return _to_state(machine)


@router.post(
    "/sessions/{session_id}/doctors/{doctor_id}", response_model=SessionStateResponse
)
async def select_doctor(
    doctor_id: str,
    machine: SessionStateMachine = Depends(get_session_machine),
):
    """Pick a provider and move to the booking form."""
    provider = get_provider(doctor_id)
    if provider is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Provider not found"
        )
    if not machine.select_provider(provider):
        raise _refused(machine, "select a provider")
    return _to_state(machine)


@router.patch("/sessions/{session_id}/booking", response_model=SessionStateResponse)
async def update_booking(
    request: BookingUpdateRequest,
    machine: SessionStateMachine = Depends(get_session_machine),
):
    """Fill in date, time and notes for the appointment."""
    if not machine.update_booking(
        date=request.date, time=request.time, notes=request.notes
    ):
        raise _refused(machine, "edit the booking")
    return _to_state(machine)


@router.post(
    "/sessions/{session_id}/booking/confirm", response_model=BookingConfirmation
)
async def confirm_booking(machine: SessionStateMachine = Depends(get_session_machine)):
    """Confirm the appointment. The session starts over at the input step."""
    confirmation = machine.confirm_booking()
    if confirmation is None:
        if machine.step == WizardStep.BOOKING:
            raise _refused(machine, "confirm a booking without date and time")
        raise _refused(machine, "confirm a booking")
    return confirmation


@router.post("/sessions/{session_id}/back", response_model=SessionStateResponse)
async def go_back(machine: SessionStateMachine = Depends(get_session_machine)):
    """Go back one step from doctors, booking or disease lookup."""
    if not machine.back():
        raise _refused(machine, "go back")
    return _to_state(machine)


@router.post("/sessions/{session_id}/restart", response_model=SessionStateResponse)
async def restart(machine: SessionStateMachine = Depends(get_session_machine)):
    """Start a new analysis from the results page."""
    if not machine.start_new_analysis():
        raise _refused(machine, "start a new analysis")
    return _to_state(machine)


@router.post("/sessions/{session_id}/disease-lookup", response_model=SessionStateResponse)
async def open_disease_lookup(machine: SessionStateMachine = Depends(get_session_machine)):
    """Switch from symptom input to the disease lookup page."""
    if not machine.open_disease_lookup():
        raise _refused(machine, "open disease lookup")
    return _to_state(machine)
