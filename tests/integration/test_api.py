"""
Integration Tests for the Symptom Checker API

Drives the wizard over HTTP with async httpx against the ASGI app.
"""
import pytest
import httpx

from main import app
from symptom_checker.services.session_service import get_session_service

BASE = "/api/v1/checker"


@pytest.fixture
async def async_client(session_service):
    """Async test client backed by an isolated session service."""
    app.dependency_overrides[get_session_service] = lambda: session_service
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client
    app.dependency_overrides.clear()


async def _new_session(client) -> str:
    response = await client.post(f"{BASE}/sessions")
    assert response.status_code == 201
    return response.json()["session_id"]


@pytest.mark.asyncio
class TestHealthEndpoints:
    """Tests for service endpoints."""

    async def test_root_endpoint(self, async_client):
        response = await async_client.get("/")
        assert response.status_code == 200
        assert "version" in response.json()

    async def test_health_endpoint(self, async_client):
        response = await async_client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "ok"
        assert data["rules_loaded"] == 16


@pytest.mark.asyncio
class TestReferenceEndpoints:
    """Catalog, disease lookup and provider listing."""

    async def test_symptom_suggestions(self, async_client):
        response = await async_client.get(f"{BASE}/symptoms", params={"q": "chest"})
        assert response.status_code == 200
        assert [s["name"] for s in response.json()["symptoms"]] == [
            "Chest tightness",
            "Chest pain",
        ]

    async def test_symptom_suggestions_exclude_selection(self, async_client):
        session_id = await _new_session(async_client)
        await async_client.post(
            f"{BASE}/sessions/{session_id}/symptoms", json={"symptom_id": "21"}
        )

        response = await async_client.get(
            f"{BASE}/symptoms", params={"q": "chest", "session_id": session_id}
        )
        assert [s["id"] for s in response.json()["symptoms"]] == ["14"]

    async def test_symptom_suggestions_unknown_session(self, async_client):
        response = await async_client.get(
            f"{BASE}/symptoms", params={"q": "chest", "session_id": "missing"}
        )
        assert response.status_code == 404

    async def test_disease_lookup(self, async_client):
        response = await async_client.get(f"{BASE}/diseases", params={"q": "migraine"})
        assert response.status_code == 200
        assert [d["name"] for d in response.json()] == ["Migraine"]

    async def test_providers(self, async_client):
        response = await async_client.get(f"{BASE}/providers")
        assert response.status_code == 200
        assert len(response.json()["providers"]) == 3


@pytest.mark.asyncio
class TestSessionLifecycle:
    """Creating, listing and deleting sessions."""

    async def test_new_session_starts_at_input(self, async_client):
        response = await async_client.post(f"{BASE}/sessions")
        assert response.status_code == 201

        data = response.json()
        assert data["step"] == "input"
        assert data["symptoms"] == []
        assert data["results"] == []
        assert data["urgency"] is None
        assert data["booking"] == {"date": "", "time": "", "notes": ""}

    async def test_unknown_session_is_404(self, async_client):
        response = await async_client.get(f"{BASE}/sessions/does-not-exist")
        assert response.status_code == 404

    async def test_list_and_delete(self, async_client):
        first = await _new_session(async_client)
        await _new_session(async_client)

        listing = (await async_client.get(f"{BASE}/sessions")).json()
        assert listing["total"] == 2

        response = await async_client.delete(f"{BASE}/sessions/{first}")
        assert response.status_code == 204
        assert (await async_client.get(f"{BASE}/sessions/{first}")).status_code == 404
        assert (await async_client.delete(f"{BASE}/sessions/{first}")).status_code == 404

    async def test_session_limit(self, async_client):
        for _ in range(5):
            await _new_session(async_client)

        response = await async_client.post(f"{BASE}/sessions")
        assert response.status_code == 503


@pytest.mark.asyncio
class TestWizardFlow:
    """Full pass through the wizard."""

    async def test_add_symptom_twice_is_noop(self, async_client):
        session_id = await _new_session(async_client)

        for _ in range(2):
            response = await async_client.post(
                f"{BASE}/sessions/{session_id}/symptoms", json={"symptom_id": "50"}
            )
            assert response.status_code == 200

        assert [s["name"] for s in response.json()["symptoms"]] == ["Fever"]

    async def test_unknown_symptom_is_404(self, async_client):
        session_id = await _new_session(async_client)

        response = await async_client.post(
            f"{BASE}/sessions/{session_id}/symptoms", json={"symptom_id": "999"}
        )
        assert response.status_code == 404

    async def test_analyze_without_symptoms_is_409(self, async_client):
        session_id = await _new_session(async_client)

        response = await async_client.post(f"{BASE}/sessions/{session_id}/analyze")
        assert response.status_code == 409

    async def test_analyze_returns_analyzing_without_wait(self, async_client):
        session_id = await _new_session(async_client)
        await async_client.post(
            f"{BASE}/sessions/{session_id}/symptoms", json={"symptom_id": "62"}
        )

        response = await async_client.post(f"{BASE}/sessions/{session_id}/analyze")
        assert response.status_code == 202
        assert response.json()["step"] == "analyzing"

    async def test_illegal_transition_is_409(self, async_client):
        session_id = await _new_session(async_client)

        response = await async_client.post(f"{BASE}/sessions/{session_id}/doctors")
        assert response.status_code == 409
        assert "input" in response.json()["detail"]

    async def test_selection_locked_after_analysis(self, async_client):
        session_id = await _new_session(async_client)
        await async_client.post(
            f"{BASE}/sessions/{session_id}/symptoms", json={"symptom_id": "50"}
        )
        await async_client.post(
            f"{BASE}/sessions/{session_id}/analyze", params={"wait": True}
        )

        response = await async_client.delete(f"{BASE}/sessions/{session_id}/symptoms/50")
        assert response.status_code == 409

    async def test_disease_lookup_branch(self, async_client):
        session_id = await _new_session(async_client)

        response = await async_client.post(f"{BASE}/sessions/{session_id}/disease-lookup")
        assert response.json()["step"] == "disease_lookup"

        response = await async_client.post(f"{BASE}/sessions/{session_id}/back")
        assert response.json()["step"] == "input"

    async def test_restart_from_results(self, async_client):
        session_id = await _new_session(async_client)
        await async_client.post(
            f"{BASE}/sessions/{session_id}/symptoms", json={"symptom_id": "62"}
        )
        await async_client.post(
            f"{BASE}/sessions/{session_id}/analyze", params={"wait": True}
        )

        response = await async_client.post(f"{BASE}/sessions/{session_id}/restart")
        assert response.status_code == 200
        data = response.json()
        assert data["step"] == "input"
        assert data["symptoms"] == []
        assert data["results"] == []

    async def test_chest_pain_to_booking(self, async_client):
        session_id = await _new_session(async_client)
        url = f"{BASE}/sessions/{session_id}"

        await async_client.post(f"{url}/symptoms", json={"symptom_id": "21"})

        response = await async_client.post(f"{url}/analyze", params={"wait": True})
        assert response.status_code == 202
        data = response.json()
        assert data["step"] == "results"
        assert data["results"][0]["name"] == "Angina"
        assert data["results"][0]["confidence"] == 70
        assert data["results"][0]["severity"] == "high"
        assert data["urgency"]["level"] == "urgent"

        response = await async_client.post(f"{url}/doctors")
        assert response.json()["step"] == "doctors"

        response = await async_client.post(f"{url}/doctors/99")
        assert response.status_code == 404

        response = await async_client.post(f"{url}/doctors/2")
        data = response.json()
        assert data["step"] == "booking"
        assert data["selected_doctor"]["name"] == "Dr. Michael Chen"

        response = await async_client.post(f"{url}/booking/confirm")
        assert response.status_code == 409

        response = await async_client.patch(
            f"{url}/booking", json={"date": "2026-10-20", "time": "10:00 AM"}
        )
        assert response.json()["booking"]["time"] == "10:00 AM"

        response = await async_client.post(f"{url}/booking/confirm")
        assert response.status_code == 200
        confirmation = response.json()
        assert confirmation["doctor_id"] == "2"
        assert confirmation["date"] == "2026-10-20"
        assert confirmation["message"].startswith("Appointment booked successfully")

        data = (await async_client.get(url)).json()
        assert data["step"] == "input"
        assert data["symptoms"] == []
        assert data["results"] == []
        assert data["selected_doctor"] is None
        assert data["booking"] == {"date": "", "time": "", "notes": ""}
