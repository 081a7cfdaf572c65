# This project was developed with assistance from AI tools.
"""Default role seeding service.

Creates the built-in roles that are missing. With ``force`` it also
rewrites the permission list of existing built-in roles to the defaults,
which reverts any customisation made through role management. Roles with
other keys are never touched.
"""

import logging

from db import Role
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..permissions import PermissionResolver
from .fixtures import DEFAULT_ROLES, compute_config_hash, role_permission_values

logger = logging.getLogger(__name__)


async def seed_default_roles(
    session: AsyncSession,
    *,
    force: bool = False,
    resolver: PermissionResolver | None = None,
) -> dict:
    """Seed the default roles and return the keys created/updated/unchanged."""
    keys = [r["key"] for r in DEFAULT_ROLES]
    result = await session.execute(select(Role).where(Role.key.in_(keys)))
    existing = {role.key: role for role in result.scalars().all()}

    created, updated, unchanged = [], [], []
    for definition in DEFAULT_ROLES:
        key = definition["key"]
        permissions = role_permission_values(definition)
        role = existing.get(key)

        if role is None:
            session.add(Role(key=key, name=definition["name"], permissions=permissions))
            created.append(key)
        elif force and sorted(role.permissions or []) != sorted(permissions):
            missing = set(permissions) - set(role.permissions or [])
            extra = set(role.permissions or []) - set(permissions)
            logger.info(
                "Resetting role %s permissions (missing=%d, extra=%d)",
                key,
                len(missing),
                len(extra),
            )
            role.permissions = permissions
            updated.append(key)
        else:
            unchanged.append(key)

    await session.commit()
    logger.info(
        "Role seeding complete (config=%s): created=%s updated=%s unchanged=%s",
        compute_config_hash()[:12],
        created,
        updated,
        unchanged,
    )

    if resolver is not None and (created or updated):
        for key in created + updated:
            resolver.invalidate(key)

    return {"created": created, "updated": updated, "unchanged": unchanged}
