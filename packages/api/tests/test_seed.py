# This project was developed with assistance from AI tools.
"""Tests for default role fixtures, the seeder and the seed endpoint."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from db import Role, get_db
from db.enums import RoleKey
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.core.auth import build_data_scope
from src.core.permissions import ALL_PERMISSIONS
from src.middleware.auth import get_current_user
from src.routes.admin import router
from src.schemas.auth import ScopeLevel
from src.services.permissions import get_permission_resolver
from src.services.seed.fixtures import (
    DEFAULT_ROLES,
    compute_config_hash,
    role_permission_values,
)
from src.services.seed.seeder import seed_default_roles
from tests.factories import make_user

_ADMIN_USER = make_user(user_id="admin", role_key="admin", permissions=["edit:roles"])


def _mock_session(existing: list[Role]):
    session = MagicMock()
    result = MagicMock()
    result.scalars.return_value.all.return_value = existing
    session.execute = AsyncMock(return_value=result)
    session.commit = AsyncMock()
    return session


def _defaults() -> dict[str, list[str]]:
    return {r["key"]: role_permission_values(r) for r in DEFAULT_ROLES}


# ---------------------------------------------------------------------------
# Fixture data
# ---------------------------------------------------------------------------


def test_fixture_defines_builtin_roles():
    assert [r["key"] for r in DEFAULT_ROLES] == [k.value for k in RoleKey]


def test_fixture_permissions_are_in_catalog_and_unique():
    for key, perms in _defaults().items():
        assert set(perms) <= set(ALL_PERMISSIONS), key
        assert len(perms) == len(set(perms)), key


def test_default_role_scopes():
    defaults = _defaults()
    admin = build_data_scope("admin", defaults["admin"])
    manager = build_data_scope("manager", defaults["manager"])
    partner = build_data_scope("partner", defaults["partner"])
    client = build_data_scope("client", defaults["client"])

    assert admin.clients == ScopeLevel.ALL
    assert manager.proposals == ScopeLevel.TEAM
    assert partner.pipeline == ScopeLevel.OWN
    assert client.pipeline is None
    assert client.clients == ScopeLevel.OWN


def test_config_hash_is_deterministic():
    assert compute_config_hash() == compute_config_hash()
    assert len(compute_config_hash()) == 64


# ---------------------------------------------------------------------------
# Seeder
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_seed_creates_missing_roles():
    session = _mock_session(existing=[])
    resolver = MagicMock()

    result = await seed_default_roles(session, resolver=resolver)

    assert result["created"] == ["admin", "manager", "partner", "client"]
    assert result["updated"] == []
    assert session.add.call_count == 4
    session.commit.assert_awaited_once()
    assert resolver.invalidate.call_count == 4


@pytest.mark.asyncio
async def test_seed_leaves_customised_roles_without_force():
    manager = Role(key="manager", name="Gerente", permissions=["view:own_clients"])
    session = _mock_session(existing=[manager])

    result = await seed_default_roles(session)

    assert "manager" in result["unchanged"]
    assert manager.permissions == ["view:own_clients"]


@pytest.mark.asyncio
async def test_seed_force_resets_permissions():
    manager = Role(key="manager", name="Gerente", permissions=["view:own_clients"])
    admin = Role(key="admin", name="Administrador", permissions=_defaults()["admin"])
    session = _mock_session(existing=[manager, admin])

    result = await seed_default_roles(session, force=True)

    assert result["updated"] == ["manager"]
    assert "admin" in result["unchanged"]
    assert manager.permissions == _defaults()["manager"]


# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------


def _make_app(user, session):
    app = FastAPI()
    app.include_router(router, prefix="/api/admin")

    async def fake_user():
        return user

    async def fake_db():
        yield session

    app.dependency_overrides[get_current_user] = fake_user
    app.dependency_overrides[get_db] = fake_db
    app.dependency_overrides[get_permission_resolver] = lambda: MagicMock()
    return TestClient(app)


def test_seed_endpoint():
    resp = _make_app(_ADMIN_USER, _mock_session(existing=[])).post("/api/admin/seed")
    assert resp.status_code == 200
    assert len(resp.json()["created"]) == 4


def test_seed_endpoint_requires_edit_roles():
    user = make_user(user_id="m1", role_key="manager", permissions=["view:roles"])
    resp = _make_app(user, _mock_session(existing=[])).post("/api/admin/seed")
    assert resp.status_code == 403
