"""Session management service."""

from datetime import datetime, timedelta
from symptom_checker.engine.rule_engine import ConditionRuleEngine
from symptom_checker.services.workflow import SessionStateMachine
from typing import Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


class SessionService:
    """Registry of live symptom checker sessions.

    Sessions live in process memory only and are lost on restart. Sessions
    left untouched for longer than the idle timeout are evicted the next
    time a session is created.
    """

    def __init__(
        self,
        engine: Optional[ConditionRuleEngine] = None,
        analysis_delay: Optional[float] = None,
        max_sessions: Optional[int] = None,
        idle_timeout: Optional[float] = None,
    ):
        from symptom_checker.config.settings import settings

        if max_sessions is None:
            max_sessions = settings.max_active_sessions
        if idle_timeout is None:
            idle_timeout = settings.session_idle_timeout_seconds

        self._engine = engine
        self._analysis_delay = analysis_delay
        self._max_sessions = max_sessions
        self._idle_timeout = timedelta(seconds=idle_timeout)
        self._machines: Dict[str, SessionStateMachine] = {}

    async def create_session(self) -> Optional[SessionStateMachine]:
        """
        Create a new session at the input step.

        Returns:
            The session's state machine, or None if the service is full
        """
        self._evict_idle()
        if len(self._machines) >= self._max_sessions:
            logger.warning(
                f"Refusing new session: {len(self._machines)} active "
                f"(limit {self._max_sessions})"
            )
            return None

        machine = SessionStateMachine(
            engine=self._engine, analysis_delay=self._analysis_delay
        )
        self._machines[machine.session_id] = machine

        logger.info(f"Created session {machine.session_id}")
        return machine

    async def get_session(self, session_id: str) -> Optional[SessionStateMachine]:
        """
        Get a session by ID.

        Args:
            session_id: Session identifier

        Returns:
            SessionStateMachine or None if not found
        """
        return self._machines.get(session_id)

    async def list_sessions(
        self, limit: int = 10, offset: int = 0
    ) -> tuple[List[SessionStateMachine], int]:
        """
        List live sessions, most recently updated first.

        Args:
            limit: Maximum number of sessions to return
            offset: Number of sessions to skip

        Returns:
            Tuple of (sessions list, total count)
        """
        machines = sorted(
            self._machines.values(),
            key=lambda m: m.session.updated_at,
            reverse=True,
        )
        return machines[offset : offset + limit], len(machines)

    async def delete_session(self, session_id: str) -> bool:
        """
        Drop a session, cancelling any analysis still pending for it.

        Args:
            session_id: Session identifier

        Returns:
            True if the session existed
        """
        machine = self._machines.pop(session_id, None)
        if machine is None:
            return False
        machine.abandon()
        logger.info(f"Deleted session {session_id}")
        return True

    async def shutdown(self) -> None:
        """Abandon every live session."""
        for machine in self._machines.values():
            machine.abandon()
        count = len(self._machines)
        self._machines.clear()
        logger.info(f"Session service shut down ({count} session(s) dropped)")

    def _evict_idle(self) -> int:
        """Abandon and drop sessions idle for longer than the timeout."""
        cutoff = datetime.utcnow() - self._idle_timeout
        idle = [
            session_id
            for session_id, machine in self._machines.items()
            if machine.session.updated_at < cutoff
        ]
        for session_id in idle:
            self._machines.pop(session_id).abandon()
        if idle:
            logger.info(f"Evicted {len(idle)} idle session(s)")
        return len(idle)


# Global service instance
_session_service: Optional[SessionService] = None


def get_session_service() -> SessionService:
    """Get or create SessionService instance."""
    global _session_service
    if _session_service is None:
        _session_service = SessionService()
    return _session_service
