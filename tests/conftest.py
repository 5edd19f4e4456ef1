"""
Pytest Configuration and Fixtures

Shared fixtures for symptom checker tests.
"""
import pytest
from pathlib import Path
from typing import Callable
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from symptom_checker.engine import ConditionRuleEngine
from symptom_checker.models.symptom import SelectedSymptomSet, Symptom
from symptom_checker.services.session_service import SessionService
from symptom_checker.services.workflow import SessionStateMachine
from symptom_checker.tools.symptom_catalog import SYMPTOM_CATALOG


_BY_NAME = {s.name.lower(): s for s in SYMPTOM_CATALOG}


def catalog_symptom(name: str) -> Symptom:
    """Catalog entry by (case-insensitive) name."""
    return _BY_NAME[name.lower()]


@pytest.fixture
def symptom() -> Callable[[str], Symptom]:
    """Look up catalog symptoms by name."""
    return catalog_symptom


@pytest.fixture
def selection() -> Callable[..., SelectedSymptomSet]:
    """Build a SelectedSymptomSet from catalog names."""

    def _build(*names: str) -> SelectedSymptomSet:
        selected = SelectedSymptomSet()
        for name in names:
            selected.add(catalog_symptom(name))
        return selected

    return _build


@pytest.fixture
def engine() -> ConditionRuleEngine:
    """Engine over the full rule table."""
    return ConditionRuleEngine()


@pytest.fixture
def machine(engine) -> SessionStateMachine:
    """State machine whose analysis completes on the next loop iteration."""
    return SessionStateMachine(engine=engine, analysis_delay=0.0)


@pytest.fixture
def slow_machine(engine) -> SessionStateMachine:
    """State machine whose analysis never finishes within a test."""
    return SessionStateMachine(engine=engine, analysis_delay=60.0)


@pytest.fixture
def session_service(engine) -> SessionService:
    """Session registry with instant analysis and a small session limit."""
    return SessionService(engine=engine, analysis_delay=0.0, max_sessions=5)
