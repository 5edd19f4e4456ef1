"""
Unit Tests for the Session Registry

Session limit and eviction of idle sessions.
"""
import asyncio
from datetime import datetime, timedelta

from symptom_checker.models.triage import WizardStep
from symptom_checker.services.session_service import SessionService


def _age(machine, hours: float = 2) -> None:
    machine.session.updated_at = datetime.utcnow() - timedelta(hours=hours)


class TestSessionRegistry:
    """Tests for the in-process session registry."""

    async def test_limit_refuses_when_sessions_are_active(self, engine):
        service = SessionService(engine=engine, analysis_delay=0.0, max_sessions=3)
        for _ in range(3):
            assert await service.create_session() is not None

        assert await service.create_session() is None
        assert (await service.list_sessions())[1] == 3

    async def test_idle_sessions_are_evicted_before_the_limit_applies(self, engine):
        service = SessionService(
            engine=engine, analysis_delay=0.0, max_sessions=3, idle_timeout=1800
        )
        idle = [await service.create_session() for _ in range(3)]
        for machine in idle:
            _age(machine)

        fresh = await service.create_session()

        assert fresh is not None
        sessions, total = await service.list_sessions()
        assert total == 1
        assert sessions[0].session_id == fresh.session_id
        for machine in idle:
            assert await service.get_session(machine.session_id) is None

    async def test_only_idle_sessions_are_evicted(self, engine):
        service = SessionService(
            engine=engine, analysis_delay=0.0, max_sessions=3, idle_timeout=1800
        )
        stale = await service.create_session()
        recent = await service.create_session()
        _age(stale)

        assert await service.create_session() is not None

        assert await service.get_session(stale.session_id) is None
        assert await service.get_session(recent.session_id) is recent

    async def test_eviction_cancels_pending_analysis(self, engine, symptom):
        service = SessionService(
            engine=engine, analysis_delay=60.0, max_sessions=1, idle_timeout=1800
        )
        machine = await service.create_session()
        machine.add_symptom(symptom("Fever"))
        machine.request_analysis()
        job = machine.current_job
        _age(machine)

        assert await service.create_session() is not None

        assert machine.current_job is None
        assert machine.step == WizardStep.INPUT
        await asyncio.wait({job.task})
        assert job.task.cancelled()
