# This project was developed with assistance from AI tools.
"""Pure auth utility functions with no FastAPI or HTTP dependencies.

Scope resolution works on an already-materialized permission set, so the
same rules serve the request middleware, the permission resolver and tests
without touching the role store.
"""

from collections.abc import Iterable

from db.enums import RoleKey

from ..schemas.auth import DataScope, ScopeLevel
from .permissions import ScopedResource, scoped_permission

# Checked in order; the first level the permission set grants wins.
_SCOPE_PRECEDENCE = (ScopeLevel.ALL, ScopeLevel.TEAM, ScopeLevel.OWN)

_SCOPE_RANK = {ScopeLevel.OWN: 0, ScopeLevel.TEAM: 1, ScopeLevel.ALL: 2}

# Roles whose visibility never exceeds a level, whatever their permissions say.
ROLE_SCOPE_CEILINGS: dict[str, ScopeLevel] = {
    RoleKey.PARTNER.value: ScopeLevel.OWN,
}


def scope_from_permissions(
    resource: ScopedResource | str, permissions: Iterable[str]
) -> ScopeLevel | None:
    """Highest visibility level granted for ``resource``, or None."""
    granted = set(permissions)
    for level in _SCOPE_PRECEDENCE:
        if scoped_permission(level.value, resource) in granted:
            return level
    return None


def apply_scope_ceiling(role_key: str | None, scope: ScopeLevel | None) -> ScopeLevel | None:
    """Cap ``scope`` at the role's ceiling. No scope stays no scope."""
    ceiling = ROLE_SCOPE_CEILINGS.get(role_key or "")
    if scope is None or ceiling is None:
        return scope
    return scope if _SCOPE_RANK[scope] <= _SCOPE_RANK[ceiling] else ceiling


def resolve_scope(
    resource: ScopedResource | str, role_key: str | None, permissions: Iterable[str]
) -> ScopeLevel | None:
    return apply_scope_ceiling(role_key, scope_from_permissions(resource, permissions))


def build_data_scope(role_key: str | None, permissions: Iterable[str]) -> DataScope:
    """Build the per-resource data scope for a role's permission set."""
    granted = frozenset(permissions)
    return DataScope(
        **{
            resource.value: resolve_scope(resource, role_key, granted)
            for resource in ScopedResource
        }
    )


def full_data_scope() -> DataScope:
    """Unrestricted scope for bootstrap admins and the auth-disabled dev user."""
    return DataScope(**{resource.value: ScopeLevel.ALL for resource in ScopedResource})
