"""FastAPI dependencies for session access."""

from fastapi import Depends, HTTPException, status
from symptom_checker.services.session_service import SessionService, get_session_service
from symptom_checker.services.workflow import SessionStateMachine
import logging

logger = logging.getLogger(__name__)


async def get_session_machine(
    session_id: str,
    session_service: SessionService = Depends(get_session_service),
) -> SessionStateMachine:
    """Return the state machine for the ``session_id`` path parameter.

    Raises:
        HTTP 404 – if no live session has that id
    """
    machine = await session_service.get_session(session_id)
    if machine is None:
        logger.debug("Session lookup failed: %s", session_id)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Session not found"
        )
    return machine
