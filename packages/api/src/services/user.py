# This project was developed with assistance from AI tools.
"""User listing and role/team assignment.

The user record carries a denormalized copy of its role (id, key and name)
and its team id. Assignment writes all of them together so permission
resolution, which reads ``role_key``, and team scope, which reads ``team``,
see the change on the next request.
"""

import logging

from db import Role, Team, User
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.user import UserAssignment
from .permissions import PermissionResolver

logger = logging.getLogger(__name__)


class UnknownRoleError(ValueError):
    pass


class UnknownTeamError(ValueError):
    pass


async def list_users(
    session: AsyncSession, *, offset: int = 0, limit: int = 20
) -> tuple[list[User], int]:
    total = (await session.execute(select(func.count(User.id)))).scalar() or 0
    result = await session.execute(
        select(User).order_by(User.email).offset(offset).limit(limit)
    )
    return list(result.scalars().all()), total


async def get_user(session: AsyncSession, user_id: str) -> User | None:
    return await session.get(User, user_id)


async def _assign_role(session: AsyncSession, user: User, role_key: str | None) -> None:
    if role_key is None:
        user.role_id = user.role_key = user.role_name = None
        return
    result = await session.execute(select(Role).where(Role.key == role_key))
    role = result.scalars().first()
    if role is None:
        raise UnknownRoleError(f"Role '{role_key}' does not exist")
    user.role_id, user.role_key, user.role_name = role.id, role.key, role.name


async def _move_to_team(session: AsyncSession, user: User, team_id: str | None) -> None:
    new_team = None
    if team_id is not None:
        new_team = await session.get(Team, team_id)
        if new_team is None:
            raise UnknownTeamError(f"Team '{team_id}' does not exist")

    if user.team:
        old_team = await session.get(Team, user.team)
        if old_team is not None and user.id in (old_team.members or []):
            old_team.members = [m for m in old_team.members if m != user.id]
    if new_team is not None and user.id not in (new_team.members or []):
        new_team.members = [*(new_team.members or []), user.id]
    user.team = team_id


async def assign_user(
    session: AsyncSession,
    user_id: str,
    body: UserAssignment,
    resolver: PermissionResolver | None = None,
) -> User | None:
    """Apply the fields present in ``body``. Returns None when the user does not exist.

    Raises:
        UnknownRoleError: ``role_key`` names no role.
        UnknownTeamError: ``team`` names no team.
    """
    user = await session.get(User, user_id)
    if user is None:
        return None

    fields = body.model_fields_set
    previous_key = user.role_key
    if "role_key" in fields:
        await _assign_role(session, user, body.role_key)
    if "team" in fields and body.team != user.team:
        await _move_to_team(session, user, body.team)

    await session.commit()
    await session.refresh(user)
    logger.info("User %s assigned role=%s team=%s", user.id, user.role_key, user.team)

    if resolver is not None and "role_key" in fields:
        for key in {previous_key, user.role_key} - {None}:
            resolver.invalidate(key)
    return user
