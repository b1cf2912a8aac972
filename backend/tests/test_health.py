"""Tests for health and readiness endpoints."""

from pymongo.errors import ServerSelectionTimeoutError

from app.db.mongo import get_db
from app.main import app


class _DownDatabase:
    def command(self, name):
        raise ServerSelectionTimeoutError("no servers available")


def test_health_is_public(anon_client):
    response = anon_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_request_id_is_echoed(anon_client):
    response = anon_client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


def test_ready_reports_database_down(anon_client):
    app.dependency_overrides[get_db] = lambda: _DownDatabase()

    response = anon_client.get("/ready")

    assert response.status_code == 503
    assert response.json()["database"] == "down"


def test_error_envelope_carries_request_id(anon_client):
    response = anon_client.get("/questions", headers={"X-Request-ID": "req-456"})

    body = response.json()
    assert response.status_code == 401
    assert body["request_id"] == "req-456"
    assert set(body) == {"error", "error_code", "details", "request_id"}
