# This project was developed with assistance from AI tools.
"""Tests for application wiring: health, Problem Details errors, lifespan."""

from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient

from src import __version__
from src.core.config import settings
from src.main import app
from src.middleware.auth import get_current_user
from src.routes import health as health_module
from src.services import permissions as permissions_module
from src.services import store as store_module
from src.services.store import get_document_store
from tests.factories import InMemoryStore, make_user


def test_health_reports_api_and_database(monkeypatch):
    service = MagicMock()
    service.health_check = AsyncMock(return_value=True)
    monkeypatch.setattr(health_module, "get_db_service", lambda: service)

    resp = TestClient(app).get("/health/")
    assert resp.status_code == 200
    items = {item["name"]: item for item in resp.json()}
    assert items["API"]["version"] == __version__
    assert items["Database"]["status"] == "healthy"


def test_health_database_down(monkeypatch):
    service = MagicMock()
    service.health_check = AsyncMock(side_effect=OSError("connection refused"))
    monkeypatch.setattr(health_module, "get_db_service", lambda: service)

    items = {i["name"]: i for i in TestClient(app).get("/health/").json()}
    assert items["Database"]["status"] == "unhealthy"


def test_forbidden_is_problem_details():
    user = make_user(role_key="client", permissions=["view:own_proposals"])

    async def fake_user():
        return user

    app.dependency_overrides[get_current_user] = fake_user
    app.dependency_overrides[get_document_store] = lambda: InMemoryStore()
    try:
        resp = TestClient(app).get("/api/clients/", headers={"x-request-id": "req-1"})
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 403
    assert resp.headers["content-type"].startswith("application/problem+json")
    body = resp.json()
    assert body["type"] == "/problems/permission-denied"
    assert body["title"] == "Forbidden"
    assert body["request_id"] == "req-1"
    assert body["instance"] == "/api/clients/"


def test_missing_token_problem_keeps_www_authenticate(monkeypatch):
    monkeypatch.setattr(settings, "AUTH_DISABLED", False)
    resp = TestClient(app).get("/api/me")
    assert resp.status_code == 401
    assert resp.headers["www-authenticate"] == "Bearer"
    assert resp.json()["type"] == "/problems/unauthenticated"


def test_lifespan_initialises_store_and_resolver(monkeypatch):
    monkeypatch.setattr(store_module, "SqlDocumentStore", InMemoryStore)
    monkeypatch.setattr(store_module, "_store", None)
    monkeypatch.setattr(permissions_module, "_resolver", None)

    with TestClient(app):
        assert isinstance(store_module.get_document_store(), InMemoryStore)
        resolver = permissions_module.get_permission_resolver()
        assert resolver.role_store.cache.ttl_seconds == settings.PERMISSION_CACHE_TTL
