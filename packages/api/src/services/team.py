# This project was developed with assistance from AI tools.
"""Team management service.

Team scope resolves membership from both ``teams.members`` and the
``users.team`` back-reference, so every membership write here updates both
sides. A user belongs to at most one team: adding them to a team drops them
from any other team's member list.
"""

import logging
import random

from db import Team, User
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.team import TeamCreate, TeamUpdate

logger = logging.getLogger(__name__)

_CODE_ATTEMPTS = 20


class TeamCodeConflictError(ValueError):
    """Raised when a team code is already used by another team."""

    pass


class UnknownMemberError(ValueError):
    """Raised when a member list names users that do not exist."""

    pass


def _dedupe(ids) -> list[str]:
    return list(dict.fromkeys(i for i in ids if i))


async def list_teams(session: AsyncSession) -> list[Team]:
    result = await session.execute(select(Team).order_by(Team.name))
    return list(result.scalars().all())


async def get_team(session: AsyncSession, team_id: str) -> Team | None:
    return await session.get(Team, team_id)


async def _get_by_code(session: AsyncSession, code: str) -> Team | None:
    result = await session.execute(select(Team).where(Team.team_code == code))
    return result.scalars().first()


async def _check_code(session: AsyncSession, code: str, team_id: str | None = None) -> None:
    existing = await _get_by_code(session, code)
    if existing is not None and existing.id != team_id:
        raise TeamCodeConflictError(f"Team code '{code}' is already in use")


async def generate_team_code(session: AsyncSession, rng: random.Random | None = None) -> str:
    """Pick an unused four-digit team code."""
    rng = rng or random.Random()
    for _ in range(_CODE_ATTEMPTS):
        code = str(rng.randint(1000, 9999))
        if await _get_by_code(session, code) is None:
            return code
    raise TeamCodeConflictError("Could not generate an unused team code")


async def _check_members(session: AsyncSession, member_ids: list[str]) -> None:
    if not member_ids:
        return
    result = await session.execute(select(User.id).where(User.id.in_(member_ids)))
    missing = set(member_ids) - set(result.scalars().all())
    if missing:
        raise UnknownMemberError(f"Unknown users: {', '.join(sorted(missing))}")


async def _sync_members(session: AsyncSession, team: Team, previous: list[str]) -> None:
    """Point added members at ``team`` and detach removed ones."""
    current = set(team.members or [])
    added = sorted(current - set(previous))
    removed = sorted(set(previous) - current)

    if added:
        await session.execute(update(User).where(User.id.in_(added)).values(team=team.id))
        others = await session.execute(select(Team).where(Team.id != team.id))
        for other in others.scalars().all():
            kept = [m for m in other.members or [] if m not in added]
            if len(kept) != len(other.members or []):
                other.members = kept
    if removed:
        await session.execute(
            update(User)
            .where(User.id.in_(removed), User.team == team.id)
            .values(team=None)
        )
    logger.debug("Team %s membership: +%d -%d", team.id, len(added), len(removed))


async def create_team(session: AsyncSession, body: TeamCreate) -> Team:
    """Create a team and attach its members.

    Raises:
        TeamCodeConflictError: The requested code belongs to another team.
        UnknownMemberError: A listed member does not exist.
    """
    members = _dedupe(body.members)
    await _check_members(session, members)
    if body.team_code:
        await _check_code(session, body.team_code)
        code = body.team_code
    else:
        code = await generate_team_code(session)

    team = Team(name=body.name, team_code=code, members=members)
    session.add(team)
    await session.flush()  # Assign team.id
    await _sync_members(session, team, [])
    await session.commit()
    await session.refresh(team)
    logger.info("Team %s created with %d members", team.id, len(members))
    return team


async def update_team(session: AsyncSession, team_id: str, body: TeamUpdate) -> Team | None:
    """Apply a partial update. Returns None when the team does not exist."""
    team = await session.get(Team, team_id)
    if team is None:
        return None

    if body.name is not None:
        team.name = body.name
    if body.team_code is not None and body.team_code != team.team_code:
        await _check_code(session, body.team_code, team.id)
        team.team_code = body.team_code
    if body.members is not None:
        members = _dedupe(body.members)
        await _check_members(session, members)
        previous = list(team.members or [])
        team.members = members
        await _sync_members(session, team, previous)

    await session.commit()
    await session.refresh(team)
    logger.info("Team %s updated", team.id)
    return team


async def delete_team(session: AsyncSession, team_id: str) -> bool:
    """Delete a team and detach its users. Returns False when it does not exist."""
    team = await session.get(Team, team_id)
    if team is None:
        return False

    await session.execute(update(User).where(User.team == team.id).values(team=None))
    await session.delete(team)
    await session.commit()
    logger.info("Team %s deleted", team_id)
    return True
