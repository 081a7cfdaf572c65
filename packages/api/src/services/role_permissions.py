# This project was developed with assistance from AI tools.
"""Role permission loading with a time-expiring cache.

Permissions are read from the ``roles`` collection by role key. The cache
keeps one last-refresh timestamp for every role: once it is older than the
TTL, the next lookup for *any* role refetches that role and resets the
timestamp for all of them. A role already cached keeps being served until
that happens, so staleness is bounded by the TTL across the whole cache.
"""

import asyncio
import logging
import time
from collections.abc import Callable

from db.enums import Collection
from db.store import DocumentStore

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300


class RolePermissionCache:
    """Role key -> permissions, with a single shared refresh timestamp."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._permissions: dict[str, list[str]] = {}
        self._last_refresh: float | None = None

    def now(self) -> float:
        return self._clock()

    def get(self, role_key: str) -> list[str] | None:
        """Cached permissions for ``role_key``, or None when not cached."""
        return self._permissions.get(role_key)

    def is_stale(self, role_key: str, now: float | None = None) -> bool:
        """True on a miss or when the shared timestamp has expired."""
        if role_key not in self._permissions or self._last_refresh is None:
            return True
        now = self.now() if now is None else now
        return now - self._last_refresh > self.ttl_seconds

    def put(self, role_key: str, permissions: list[str], now: float | None = None) -> None:
        self._permissions[role_key] = list(permissions)
        self._last_refresh = self.now() if now is None else now

    def invalidate(self, role_key: str | None = None) -> None:
        """Drop one role, or everything when ``role_key`` is None."""
        if role_key is None:
            self._permissions.clear()
            self._last_refresh = None
        else:
            self._permissions.pop(role_key, None)

    def __contains__(self, role_key: str) -> bool:
        return role_key in self._permissions


class RolePermissionStore:
    """Fetches role permissions from the document store through the cache."""

    def __init__(
        self,
        store: DocumentStore,
        cache: RolePermissionCache | None = None,
        timeout_seconds: float = 5.0,
    ):
        self._store = store
        self.cache = cache or RolePermissionCache()
        self._timeout = timeout_seconds

    async def load(self, role_key: str) -> list[str]:
        """Read the permission list of ``role_key`` straight from the store.

        Every failure mode degrades to an empty list: unknown role, store
        error or timeout, and a malformed ``permissions`` field.
        """
        try:
            roles = await asyncio.wait_for(
                self._store.query_by_field(Collection.ROLES.value, "key", role_key),
                timeout=self._timeout,
            )
        except TimeoutError:
            logger.error("Timed out loading permissions for role %s", role_key)
            return []
        except Exception as exc:
            logger.error("Failed to load permissions for role %s: %s", role_key, exc)
            return []

        if not roles:
            logger.warning("Role %s not found; treating as no permissions", role_key)
            return []
        if len(roles) > 1:
            logger.warning(
                "Role key %s matches %d role records, using first (id=%s)",
                role_key,
                len(roles),
                roles[0].get("id"),
            )

        permissions = roles[0].get("permissions")
        if not isinstance(permissions, list):
            logger.warning("Role %s has no permission list defined", role_key)
            return []
        return [p for p in permissions if isinstance(p, str)]

    async def get_permissions(self, role_key: str) -> list[str]:
        """Return permissions for ``role_key``, refetching when the cache is stale."""
        now = self.cache.now()
        if self.cache.is_stale(role_key, now):
            permissions = await self.load(role_key)
            self.cache.put(role_key, permissions, now)
        return self.cache.get(role_key) or []

    def get_cached_permissions(self, role_key: str) -> list[str]:
        """Cache-only lookup. May lag behind the store by up to the TTL."""
        permissions = self.cache.get(role_key)
        if permissions is None:
            logger.warning("Role %s not present in permission cache", role_key)
            return []
        return permissions

    def invalidate(self, role_key: str | None = None) -> None:
        self.cache.invalidate(role_key)
