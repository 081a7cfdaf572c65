# This project was developed with assistance from AI tools.
"""Role management service.

Roles are read by key on every permission refresh, so every write here
invalidates the permission cache for the affected role key. Without that,
a change would take up to the cache TTL to reach route guards.
"""

import logging

from db import Role, User
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.permissions import permission_value
from ..schemas.role import RoleCreate, RoleUpdate
from .permissions import PermissionResolver

logger = logging.getLogger(__name__)


class RoleConflictError(ValueError):
    """Raised when a role key is already taken."""

    pass


class RoleInUseError(ValueError):
    """Raised when deleting a role that users still reference."""

    pass


def _dedupe(permissions) -> list[str]:
    return list(dict.fromkeys(permission_value(p) for p in permissions))


async def list_roles(session: AsyncSession) -> list[Role]:
    result = await session.execute(select(Role).order_by(Role.key))
    return list(result.scalars().all())


async def get_role(session: AsyncSession, role_id: str) -> Role | None:
    return await session.get(Role, role_id)


async def _get_by_key(session: AsyncSession, key: str) -> Role | None:
    result = await session.execute(select(Role).where(Role.key == key))
    return result.scalars().first()


async def create_role(
    session: AsyncSession, body: RoleCreate, resolver: PermissionResolver | None = None
) -> Role:
    """Create a role. Raises RoleConflictError if the key exists."""
    if await _get_by_key(session, body.key) is not None:
        raise RoleConflictError(f"Role key '{body.key}' already exists")

    role = Role(key=body.key, name=body.name, permissions=_dedupe(body.permissions))
    session.add(role)
    try:
        await session.commit()
    except IntegrityError as exc:
        # Lost a race with a concurrent create of the same key
        await session.rollback()
        raise RoleConflictError(f"Role key '{body.key}' already exists") from exc
    await session.refresh(role)
    logger.info("Role %s created with %d permissions", role.key, len(role.permissions))

    if resolver is not None:
        resolver.invalidate(role.key)
    return role


async def update_role(
    session: AsyncSession,
    role_id: str,
    body: RoleUpdate,
    resolver: PermissionResolver | None = None,
) -> Role | None:
    """Apply a partial update. Returns None when the role does not exist."""
    role = await session.get(Role, role_id)
    if role is None:
        return None

    if body.name is not None:
        role.name = body.name
    if body.permissions is not None:
        role.permissions = _dedupe(body.permissions)

    await session.commit()
    await session.refresh(role)
    logger.info("Role %s updated", role.key)

    if resolver is not None:
        resolver.invalidate(role.key)
    return role


async def delete_role(
    session: AsyncSession, role_id: str, resolver: PermissionResolver | None = None
) -> bool:
    """Delete a role. Returns False when it does not exist.

    Raises RoleInUseError while any user still references it by key or id.
    """
    role = await session.get(Role, role_id)
    if role is None:
        return False

    stmt = select(func.count(User.id)).where(
        or_(User.role_key == role.key, User.role_id == role.id)
    )
    in_use = (await session.execute(stmt)).scalar() or 0
    if in_use:
        raise RoleInUseError(f"Role '{role.key}' is assigned to {in_use} user(s)")

    key = role.key
    await session.delete(role)
    await session.commit()
    logger.info("Role %s deleted", key)

    if resolver is not None:
        resolver.invalidate(key)
    return True
