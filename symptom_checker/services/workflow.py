"""Session workflow state machine.

Drives one session through the wizard:

    input -> analyzing -> results -> doctors -> booking -> input
    input -> disease_lookup -> input

Every trigger returns whether it was accepted. A trigger that is not allowed
from the current step, or whose precondition fails (no symptoms, booking
without date and time), is refused and leaves the session untouched.

Analysis runs as an asyncio task that sleeps for the configured delay before
evaluating the rules. Each job carries the session generation it was
started for, and its result is only applied if the session is still in that
generation and still analyzing.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Tuple
from symptom_checker.engine.rule_engine import ConditionRuleEngine, get_rule_engine
from symptom_checker.models.condition import UrgencyVerdict
from symptom_checker.models.provider import Provider
from symptom_checker.models.session import BookingConfirmation, Session
from symptom_checker.models.symptom import Symptom
from symptom_checker.models.triage import WizardStep
from symptom_checker.utils.urgency import advise
import asyncio
import logging

logger = logging.getLogger(__name__)


class Trigger(str, Enum):
    """User actions and events that move the wizard."""

    REQUEST_ANALYSIS = "request_analysis"
    ANALYSIS_COMPLETE = "analysis_complete"
    VIEW_PROVIDERS = "view_providers"
    START_NEW_ANALYSIS = "start_new_analysis"
    SELECT_PROVIDER = "select_provider"
    BACK = "back"
    CONFIRM_BOOKING = "confirm_booking"
    OPEN_DISEASE_LOOKUP = "open_disease_lookup"


# (from, trigger) -> to. Anything not listed is refused.
TRANSITIONS: Dict[Tuple[WizardStep, Trigger], WizardStep] = {
    (WizardStep.INPUT, Trigger.REQUEST_ANALYSIS): WizardStep.ANALYZING,
    (WizardStep.ANALYZING, Trigger.ANALYSIS_COMPLETE): WizardStep.RESULTS,
    (WizardStep.RESULTS, Trigger.VIEW_PROVIDERS): WizardStep.DOCTORS,
    (WizardStep.RESULTS, Trigger.START_NEW_ANALYSIS): WizardStep.INPUT,
    (WizardStep.DOCTORS, Trigger.SELECT_PROVIDER): WizardStep.BOOKING,
    (WizardStep.DOCTORS, Trigger.BACK): WizardStep.RESULTS,
    (WizardStep.BOOKING, Trigger.CONFIRM_BOOKING): WizardStep.INPUT,
    (WizardStep.BOOKING, Trigger.BACK): WizardStep.DOCTORS,
    (WizardStep.INPUT, Trigger.OPEN_DISEASE_LOOKUP): WizardStep.DISEASE_LOOKUP,
    (WizardStep.DISEASE_LOOKUP, Trigger.BACK): WizardStep.INPUT,
}


@dataclass
class AnalysisJob:
    """One scheduled analysis, tagged with the generation it belongs to."""

    generation: int
    task: Optional["asyncio.Task[None]"] = None

    @property
    def pending(self) -> bool:
        return self.task is not None and not self.task.done()

    def cancel(self) -> None:
        if self.pending:
            self.task.cancel()


class SessionStateMachine:
    """Owns a Session and the rules for moving it between steps."""

    def __init__(
        self,
        session: Optional[Session] = None,
        engine: Optional[ConditionRuleEngine] = None,
        analysis_delay: Optional[float] = None,
    ):
        if analysis_delay is None:
            from symptom_checker.config.settings import settings

            analysis_delay = settings.analysis_delay_seconds

        self._session = session or Session()
        self._engine = engine or get_rule_engine()
        self._analysis_delay = analysis_delay
        self._job: Optional[AnalysisJob] = None

    # ── Read-only projections ────────────────────────────────────────────────

    @property
    def session(self) -> Session:
        return self._session

    @property
    def session_id(self) -> str:
        return self._session.session_id

    @property
    def step(self) -> WizardStep:
        return self._session.step

    @property
    def current_job(self) -> Optional[AnalysisJob]:
        return self._job

    @property
    def urgency(self) -> Optional[UrgencyVerdict]:
        """Triage verdict for the current results, None before analysis."""
        if not self._session.results:
            return None
        return advise(self._session.symptoms, self._session.results)

    def can(self, trigger: Trigger) -> bool:
        return (self._session.step, trigger) in TRANSITIONS

    # ── Symptom selection (input step only) ──────────────────────────────────

    def add_symptom(self, symptom: Symptom) -> bool:
        if self._session.step != WizardStep.INPUT:
            logger.warning(
                f"Session {self.session_id}: add_symptom refused in step {self.step.value}"
            )
            return False
        added = self._session.symptoms.add(symptom)
        if added:
            self._touch()
        return added

    def remove_symptom(self, symptom_id: str) -> bool:
        if self._session.step != WizardStep.INPUT:
            logger.warning(
                f"Session {self.session_id}: remove_symptom refused in step {self.step.value}"
            )
            return False
        removed = self._session.symptoms.remove(symptom_id)
        if removed:
            self._touch()
        return removed

    # ── Analysis ─────────────────────────────────────────────────────────────

    def request_analysis(self) -> bool:
        """Start the analysis job. Must be called from a running event loop."""
        if not self.can(Trigger.REQUEST_ANALYSIS):
            return self._refuse(Trigger.REQUEST_ANALYSIS)
        if len(self._session.symptoms) == 0:
            return self._refuse(Trigger.REQUEST_ANALYSIS, "no symptoms selected")

        self._session.generation += 1
        job = AnalysisJob(generation=self._session.generation)
        job.task = asyncio.get_running_loop().create_task(self._run_analysis(job))
        self._job = job
        self._apply(Trigger.REQUEST_ANALYSIS)

        logger.info(
            f"Session {self.session_id}: analysis started "
            f"(generation {job.generation}, {len(self._session.symptoms)} symptom(s))"
        )
        return True

    async def _run_analysis(self, job: AnalysisJob) -> None:
        try:
            await asyncio.sleep(self._analysis_delay)
        except asyncio.CancelledError:
            logger.debug(f"Session {self.session_id}: analysis job {job.generation} cancelled")
            raise
        try:
            self.complete_analysis(job)
        except Exception as e:
            logger.error(
                f"Session {self.session_id}: analysis job {job.generation} failed: {e}",
                exc_info=True,
            )
            # The job is finishing on its own; detach it so the reset does not cancel it
            if job is self._job:
                self._job = None
                self._reset()

    def complete_analysis(self, job: AnalysisJob) -> bool:
        """Apply a finished job's results, or drop them if the job is stale."""
        if (
            job is not self._job
            or job.generation != self._session.generation
            or self._session.step != WizardStep.ANALYZING
        ):
            logger.debug(
                f"Session {self.session_id}: discarding stale analysis job "
                f"(job generation {job.generation}, session generation "
                f"{self._session.generation}, step {self.step.value})"
            )
            return False

        self._session.results = self._engine.evaluate(self._session.symptoms)
        self._job = None
        self._apply(Trigger.ANALYSIS_COMPLETE)

        logger.info(
            f"Session {self.session_id}: analysis complete, "
            f"{len(self._session.results)} condition(s)"
        )
        return True

    async def wait_for_analysis(self) -> None:
        """Wait until the pending analysis job (if any) has finished."""
        job = self._job
        if job is not None and job.task is not None:
            await asyncio.wait({job.task})

    # ── Results / providers / booking ────────────────────────────────────────

    def view_providers(self) -> bool:
        if not self.can(Trigger.VIEW_PROVIDERS):
            return self._refuse(Trigger.VIEW_PROVIDERS)
        self._apply(Trigger.VIEW_PROVIDERS)
        return True

    def select_provider(self, provider: Provider) -> bool:
        if not self.can(Trigger.SELECT_PROVIDER):
            return self._refuse(Trigger.SELECT_PROVIDER)
        self._session.selected_doctor = provider
        self._apply(Trigger.SELECT_PROVIDER)
        logger.info(f"Session {self.session_id}: selected provider {provider.id}")
        return True

    def update_booking(
        self,
        date: Optional[str] = None,
        time: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> bool:
        """Fill in booking form fields; fields left as None keep their value."""
        if self._session.step != WizardStep.BOOKING:
            logger.warning(
                f"Session {self.session_id}: update_booking refused in step {self.step.value}"
            )
            return False
        changes = {
            key: value
            for key, value in (("date", date), ("time", time), ("notes", notes))
            if value is not None
        }
        self._session.booking = self._session.booking.model_copy(update=changes)
        self._touch()
        return True

    def confirm_booking(self) -> Optional[BookingConfirmation]:
        """Confirm the appointment and reset the session.

        Returns:
            BookingConfirmation, or None if the booking was refused
        """
        if not self.can(Trigger.CONFIRM_BOOKING):
            self._refuse(Trigger.CONFIRM_BOOKING)
            return None
        booking = self._session.booking
        if not booking.is_complete:
            self._refuse(Trigger.CONFIRM_BOOKING, "date and time are required")
            return None

        doctor = self._session.selected_doctor
        confirmation = BookingConfirmation(
            doctor_id=doctor.id if doctor else None,
            doctor_name=doctor.name if doctor else None,
            date=booking.date,
            time=booking.time,
            notes=booking.notes,
        )
        self._reset()
        logger.info(
            f"Session {self.session_id}: booking {confirmation.confirmation_id} confirmed "
            f"with {confirmation.doctor_name} on {confirmation.date} {confirmation.time}"
        )
        return confirmation

    def start_new_analysis(self) -> bool:
        if not self.can(Trigger.START_NEW_ANALYSIS):
            return self._refuse(Trigger.START_NEW_ANALYSIS)
        self._reset()
        logger.info(f"Session {self.session_id}: restarted")
        return True

    def open_disease_lookup(self) -> bool:
        if not self.can(Trigger.OPEN_DISEASE_LOOKUP):
            return self._refuse(Trigger.OPEN_DISEASE_LOOKUP)
        self._apply(Trigger.OPEN_DISEASE_LOOKUP)
        return True

    def back(self) -> bool:
        """Go back one step (doctors, booking and disease lookup only)."""
        if not self.can(Trigger.BACK):
            return self._refuse(Trigger.BACK)
        self._apply(Trigger.BACK)
        return True

    def abandon(self) -> None:
        """Cancel any pending analysis and reset, e.g. when the session is dropped."""
        self._reset()

    # ── Internals ────────────────────────────────────────────────────────────

    def _apply(self, trigger: Trigger) -> None:
        source = self._session.step
        self._session.step = TRANSITIONS[(source, trigger)]
        self._touch()
        logger.debug(
            f"Session {self.session_id}: {source.value} --{trigger.value}--> "
            f"{self._session.step.value}"
        )

    def _refuse(self, trigger: Trigger, reason: Optional[str] = None) -> bool:
        logger.warning(
            f"Session {self.session_id}: {trigger.value} refused in step "
            f"{self.step.value}" + (f" ({reason})" if reason else "")
        )
        return False

    def _reset(self) -> None:
        if self._job is not None:
            self._job.cancel()
            self._job = None
        old = self._session
        # Single assignment so no field of the old session survives
        self._session = Session(
            session_id=old.session_id,
            created_at=old.created_at,
            generation=old.generation + 1,
        )

    def _touch(self) -> None:
        self._session.updated_at = datetime.utcnow()
