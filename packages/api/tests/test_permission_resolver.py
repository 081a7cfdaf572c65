# This project was developed with assistance from AI tools.
"""Tests for PermissionResolver checks, scope resolution and bootstrap admins."""

import logging
import random
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.core.auth import build_data_scope, resolve_scope, scope_from_permissions
from src.core.config import Settings
from src.core.permissions import ALL_PERMISSIONS, ROUTE_PERMISSIONS, Permission, ScopedResource
from src.schemas.auth import ScopeLevel
from src.services import permissions as permissions_module
from src.services.permissions import (
    BootstrapAdmins,
    PermissionResolver,
    get_permission_resolver,
    init_permission_resolver,
)
from src.services.role_permissions import RolePermissionCache, RolePermissionStore
from tests.factories import InMemoryStore

MANAGER = ["view:clients", "view:own_clients", "view:team_clients", "menu:clients"]
PARTNER = ["view:own_clients", "view:team_proposals", "view:all_pipeline", "menu:pipeline"]


def _resolver(roles: dict[str, list[str]] | None = None, admins=()) -> PermissionResolver:
    store = InMemoryStore(
        {
            "roles": [
                {"id": f"r-{k}", "key": k, "name": k, "permissions": v}
                for k, v in (roles or {}).items()
            ]
        }
    )
    role_store = RolePermissionStore(store, RolePermissionCache(ttl_seconds=300))
    return PermissionResolver(role_store, BootstrapAdmins(admins))


# ---------------------------------------------------------------------------
# Scope precedence
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "granted,expected",
    [
        ([], None),
        (["view:own_clients"], ScopeLevel.OWN),
        (["view:team_clients"], ScopeLevel.TEAM),
        (["view:all_clients"], ScopeLevel.ALL),
        (["view:own_clients", "view:team_clients"], ScopeLevel.TEAM),
        (["view:own_clients", "view:all_clients"], ScopeLevel.ALL),
        (["view:own_clients", "view:team_clients", "view:all_clients"], ScopeLevel.ALL),
        (["view:clients"], None),
        (["view:all_proposals"], None),
    ],
)
def test_scope_takes_highest_granted_level(granted, expected):
    """all beats team beats own; the bare view permission grants no scope."""
    assert scope_from_permissions(ScopedResource.CLIENTS, granted) == expected


def test_scope_is_independent_per_resource():
    scope = build_data_scope("manager", ["view:all_dashboard", "view:own_clients"])
    assert scope.dashboard == ScopeLevel.ALL
    assert scope.clients == ScopeLevel.OWN
    assert scope.proposals is None
    assert scope.pipeline is None


@pytest.mark.parametrize("resource", list(ScopedResource))
@pytest.mark.parametrize("level", ["own", "team", "all"])
def test_partner_scope_capped_at_own(resource, level):
    """Partners never see beyond their own records, whatever they were granted."""
    granted = [f"view:{level}_{resource.value}"]
    assert resolve_scope(resource, "partner", granted) == ScopeLevel.OWN


def test_partner_without_scope_stays_without_scope():
    assert resolve_scope(ScopedResource.CLIENTS, "partner", ["view:clients"]) is None


# ---------------------------------------------------------------------------
# Resolver checks
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_has_permission_async_literal():
    resolver = _resolver({"manager": MANAGER})
    assert await resolver.has_permission_async("manager", Permission.VIEW_TEAM_CLIENTS)
    assert not await resolver.has_permission_async("manager", Permission.VIEW_ALL_CLIENTS)


@pytest.mark.asyncio
@pytest.mark.parametrize("seed", range(5))
async def test_has_permission_matches_persisted_list(seed):
    """Literal checks agree with stored role permissions for random role fixtures."""
    rng = random.Random(seed)
    roles = {
        f"role_{i}": rng.sample(ALL_PERMISSIONS, rng.randint(0, len(ALL_PERMISSIONS)))
        for i in range(6)
    }
    resolver = _resolver(roles)

    for role_key, granted in roles.items():
        for permission in ALL_PERMISSIONS:
            expected = permission in granted
            assert await resolver.has_permission_async(role_key, permission) is expected


@pytest.mark.asyncio
async def test_coarse_permission_async():
    resolver = _resolver({"client": ["view:own_proposals"]})
    assert await resolver.has_coarse_permission_async("client", "view:proposals")
    assert not await resolver.has_coarse_permission_async("client", "view:clients")


def test_sync_check_before_refresh_denies():
    """The sync path reads the cache only."""
    resolver = _resolver({"manager": MANAGER})
    assert not resolver.has_permission("manager", Permission.VIEW_CLIENTS)


@pytest.mark.asyncio
async def test_sync_check_after_refresh_allows():
    resolver = _resolver({"manager": MANAGER})
    await resolver.refresh("manager")
    assert resolver.has_permission("manager", Permission.VIEW_CLIENTS)


@pytest.mark.asyncio
@pytest.mark.parametrize("role_key", [None, ""])
async def test_missing_role_key_denies_everything(role_key):
    resolver = _resolver({"manager": MANAGER})
    assert await resolver.refresh(role_key) == []
    assert not await resolver.has_permission_async(role_key, Permission.VIEW_CLIENTS)
    assert not await resolver.has_coarse_permission_async(role_key, "view:clients")
    assert await resolver.scope_for_async(ScopedResource.CLIENTS, role_key) is None
    assert not await resolver.can_access_route_async(role_key, "/clients")


@pytest.mark.asyncio
async def test_unknown_role_denies():
    resolver = _resolver({"manager": MANAGER})
    assert not await resolver.has_permission_async("auditor", Permission.VIEW_CLIENTS)


@pytest.mark.asyncio
async def test_can_access_route():
    resolver = _resolver({"manager": MANAGER})
    assert await resolver.can_access_route_async("manager", "/clients/99")
    assert not await resolver.can_access_route_async("manager", "/users")
    # Unmapped routes are open to everyone
    assert await resolver.can_access_route_async("manager", "/unknown/page")
    assert resolver.can_access_route(None, "/login")


@pytest.mark.asyncio
async def test_scope_for_async_applies_partner_cap():
    resolver = _resolver({"partner": PARTNER})
    assert await resolver.scope_for_async("proposals", "partner") == ScopeLevel.OWN
    assert await resolver.scope_for_async("pipeline", "partner") == ScopeLevel.OWN
    assert await resolver.scope_for_async("dashboard", "partner") is None


@pytest.mark.asyncio
async def test_refresh_swallows_unexpected_errors(caplog):
    role_store = MagicMock()
    role_store.get_permissions = AsyncMock(side_effect=RuntimeError("boom"))
    resolver = PermissionResolver(role_store)
    with caplog.at_level(logging.ERROR):
        assert await resolver.refresh("admin") == []
    assert "boom" in caplog.text


def test_check_with_broken_cache_denies():
    role_store = MagicMock()
    role_store.get_cached_permissions.side_effect = RuntimeError("corrupt")
    resolver = PermissionResolver(role_store)
    assert resolver.has_permission("admin", "view:users") is False
    assert resolver.has_coarse_permission("admin", "view:clients") is False
    assert resolver.scope_for("clients", "admin") is None


@pytest.mark.asyncio
async def test_invalidate_picks_up_role_change():
    store = InMemoryStore({"roles": [{"id": "r1", "key": "manager", "permissions": MANAGER}]})
    resolver = PermissionResolver(RolePermissionStore(store))
    await resolver.refresh("manager")
    store.collections["roles"][0]["permissions"] = ["view:all_clients"]

    resolver.invalidate("manager")
    assert await resolver.scope_for_async("clients", "manager") == ScopeLevel.ALL


# ---------------------------------------------------------------------------
# Bootstrap admins
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_bootstrap_admin_bypasses_role(caplog):
    """A listed identity holds everything, even with no role at all."""
    resolver = _resolver({}, admins=["Root@Example.com"])
    with caplog.at_level(logging.INFO):
        assert await resolver.has_permission_async(None, "delete:roles", email="root@example.com")
    assert "Bootstrap admin override" in caplog.text
    assert await resolver.refresh(None, email="root@example.com") == list(ALL_PERMISSIONS)
    assert resolver.scope_for("clients", None, email="root@example.com") == ScopeLevel.ALL
    assert resolver.data_scope_for("partner", email="root@example.com").pipeline == ScopeLevel.ALL


@pytest.mark.asyncio
async def test_bootstrap_admin_can_access_every_route():
    resolver = _resolver({"client": ["view:own_proposals"]}, admins=["root@example.com"])

    assert resolver.can_access_route(None, "/users", email="root@example.com")
    assert await resolver.can_access_route_async("client", "/roles", email="root@example.com")
    for route in ROUTE_PERMISSIONS:
        assert await resolver.can_access_route_async("client", route, email="root@example.com")
    # The same role without the override is denied
    assert not await resolver.can_access_route_async("client", "/roles")


@pytest.mark.asyncio
async def test_non_bootstrap_email_gets_no_bypass():
    resolver = _resolver({}, admins=["root@example.com"])
    assert not await resolver.has_permission_async(None, "view:users", email="other@example.com")


def test_bootstrap_admins_ignores_blank_entries():
    admins = BootstrapAdmins(["", "  "])
    assert not admins
    assert "" not in admins


# ---------------------------------------------------------------------------
# Singleton
# ---------------------------------------------------------------------------


def test_init_permission_resolver_uses_settings(monkeypatch, caplog):
    monkeypatch.setattr(permissions_module, "_resolver", None)
    cfg = Settings(PERMISSION_CACHE_TTL=42, BOOTSTRAP_ADMIN_EMAILS=["ops@example.com"])

    with caplog.at_level(logging.WARNING):
        resolver = init_permission_resolver(cfg, InMemoryStore())

    assert get_permission_resolver() is resolver
    assert resolver.role_store.cache.ttl_seconds == 42
    assert "ops@example.com" in resolver.bootstrap_admins
    assert "Bootstrap admin override active" in caplog.text


def test_get_permission_resolver_uninitialised(monkeypatch):
    monkeypatch.setattr(permissions_module, "_resolver", None)
    with pytest.raises(RuntimeError, match="not initialised"):
        get_permission_resolver()
