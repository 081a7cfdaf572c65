# This project was developed with assistance from AI tools.
"""Permission resolution for route guards and UI conditionals.

``PermissionResolver`` answers literal, coarse and route-level checks for a
role key, plus the visibility scope per resource. Checks never raise: a
missing role key, an unknown role or an unexpected error all resolve to
"denied".

Identities listed in ``BOOTSTRAP_ADMIN_EMAILS`` bypass every check. This is
a carry-over from the first deployments, where one operator account was
hard-wired as super-admin. It is kept as an explicit allow-list so the
bypass stays visible and auditable; every grant through it is logged.
"""

import logging
from collections.abc import Iterable

from ..core.auth import build_data_scope, full_data_scope, resolve_scope
from ..core.config import Settings
from ..core.permissions import (
    ALL_PERMISSIONS,
    Permission,
    ScopedResource,
    holds,
    holds_coarse,
    permission_value,
    required_permission_for_route,
)
from ..schemas.auth import DataScope, ScopeLevel
from .role_permissions import RolePermissionCache, RolePermissionStore

logger = logging.getLogger(__name__)


class BootstrapAdmins:
    """Allow-list of identities treated as holding every permission."""

    def __init__(self, emails: Iterable[str] = ()):
        self._emails = frozenset(e.strip().lower() for e in emails if e and e.strip())

    def __contains__(self, email: str | None) -> bool:
        return bool(email) and email.strip().lower() in self._emails

    def __bool__(self) -> bool:
        return bool(self._emails)

    def grants(self, email: str | None, what: str) -> bool:
        """True (and logged) when ``email`` is a bootstrap admin."""
        if email in self:
            logger.info("Bootstrap admin override: %s granted %s", email, what)
            return True
        return False


class PermissionResolver:
    """Boolean permission checks and scope lookups for a role key.

    Sync methods read the cache only; the ``*_async`` variants refresh the
    role's permissions first and should be used wherever freshness matters.
    """

    def __init__(
        self,
        role_store: RolePermissionStore,
        bootstrap_admins: BootstrapAdmins | None = None,
    ):
        self.role_store = role_store
        self.bootstrap_admins = bootstrap_admins or BootstrapAdmins()

    # -- permission sets --

    def permissions_for(self, role_key: str | None, *, email: str | None = None) -> list[str]:
        if email in self.bootstrap_admins:
            return list(ALL_PERMISSIONS)
        if not role_key:
            return []
        return self.role_store.get_cached_permissions(role_key)

    async def refresh(self, role_key: str | None, *, email: str | None = None) -> list[str]:
        """Materialize (and cache) the permissions for ``role_key``."""
        if self.bootstrap_admins.grants(email, "all permissions"):
            return list(ALL_PERMISSIONS)
        if not role_key:
            return []
        try:
            return await self.role_store.get_permissions(role_key)
        except Exception:
            logger.exception("Unexpected error refreshing permissions for role %s", role_key)
            return []

    def invalidate(self, role_key: str | None = None) -> None:
        self.role_store.invalidate(role_key)

    # -- checks --

    def has_permission(
        self, role_key: str | None, permission: Permission | str, *, email: str | None = None
    ) -> bool:
        """True iff ``permission`` is literally granted to ``role_key``."""
        value = permission_value(permission)
        if self.bootstrap_admins.grants(email, value):
            return True
        if not role_key:
            return False
        try:
            return holds(self.role_store.get_cached_permissions(role_key), value)
        except Exception:
            logger.exception("Permission check failed for role %s, %s", role_key, value)
            return False

    def has_coarse_permission(
        self, role_key: str | None, permission: Permission | str, *, email: str | None = None
    ) -> bool:
        """True if the role holds ``permission`` or any of its scoped variants."""
        value = permission_value(permission)
        if self.bootstrap_admins.grants(email, value):
            return True
        if not role_key:
            return False
        try:
            return holds_coarse(self.role_store.get_cached_permissions(role_key), value)
        except Exception:
            logger.exception("Coarse permission check failed for role %s, %s", role_key, value)
            return False

    @staticmethod
    def required_permission_for_route(route: str) -> Permission | None:
        return required_permission_for_route(route)

    def can_access_route(self, role_key: str | None, route: str, *, email: str | None = None) -> bool:
        required = required_permission_for_route(route)
        if required is None:
            logger.debug("No permission required for route %s", route)
            return True
        return self.has_permission(role_key, required, email=email)

    def scope_for(
        self, resource: ScopedResource | str, role_key: str | None, *, email: str | None = None
    ) -> ScopeLevel | None:
        if self.bootstrap_admins.grants(email, f"all scope on {getattr(resource, 'value', resource)}"):
            return ScopeLevel.ALL
        if not role_key:
            return None
        try:
            return resolve_scope(resource, role_key, self.role_store.get_cached_permissions(role_key))
        except Exception:
            logger.exception("Scope resolution failed for role %s on %s", role_key, resource)
            return None

    def data_scope_for(self, role_key: str | None, *, email: str | None = None) -> DataScope:
        if email in self.bootstrap_admins:
            return full_data_scope()
        return build_data_scope(role_key, self.permissions_for(role_key))

    # -- async twins --

    async def has_permission_async(
        self, role_key: str | None, permission: Permission | str, *, email: str | None = None
    ) -> bool:
        await self.refresh(role_key, email=email)
        return self.has_permission(role_key, permission, email=email)

    async def has_coarse_permission_async(
        self, role_key: str | None, permission: Permission | str, *, email: str | None = None
    ) -> bool:
        await self.refresh(role_key, email=email)
        return self.has_coarse_permission(role_key, permission, email=email)

    async def can_access_route_async(
        self, role_key: str | None, route: str, *, email: str | None = None
    ) -> bool:
        await self.refresh(role_key, email=email)
        return self.can_access_route(role_key, route, email=email)

    async def scope_for_async(
        self, resource: ScopedResource | str, role_key: str | None, *, email: str | None = None
    ) -> ScopeLevel | None:
        await self.refresh(role_key, email=email)
        return self.scope_for(resource, role_key, email=email)


# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------

_resolver: PermissionResolver | None = None


def init_permission_resolver(cfg: Settings, store) -> PermissionResolver:
    """Initialise the singleton (called once from app lifespan)."""
    global _resolver  # noqa: PLW0603
    cache = RolePermissionCache(ttl_seconds=cfg.PERMISSION_CACHE_TTL)
    role_store = RolePermissionStore(store, cache, timeout_seconds=cfg.STORE_TIMEOUT_SECONDS)
    bootstrap_admins = BootstrapAdmins(cfg.BOOTSTRAP_ADMIN_EMAILS)
    if bootstrap_admins:
        logger.warning(
            "Bootstrap admin override active for %d identities; review with the system owner",
            len(cfg.BOOTSTRAP_ADMIN_EMAILS),
        )
    _resolver = PermissionResolver(role_store, bootstrap_admins)
    logger.info("PermissionResolver initialised (ttl=%ss)", cfg.PERMISSION_CACHE_TTL)
    return _resolver


def get_permission_resolver() -> PermissionResolver:
    """Return the initialised PermissionResolver singleton."""
    if _resolver is None:
        raise RuntimeError(
            "PermissionResolver not initialised -- call init_permission_resolver() first"
        )
    return _resolver
