# This project was developed with assistance from AI tools.
"""Team management routes.

Team membership feeds team-level data scope, so these writes change what
team-scoped users see on their next request.
"""

from db import get_db
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.permissions import Permission
from ..middleware.auth import require_permission
from ..schemas.team import TeamCreate, TeamListResponse, TeamResponse, TeamUpdate
from ..services import team as team_service
from ..services.team import TeamCodeConflictError, UnknownMemberError

router = APIRouter()


def _write_error(exc: ValueError) -> HTTPException:
    if isinstance(exc, TeamCodeConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    return HTTPException(status_code=422, detail=str(exc))


@router.get(
    "/",
    response_model=TeamListResponse,
    dependencies=[Depends(require_permission(Permission.VIEW_TEAMS))],
)
async def list_teams(session: AsyncSession = Depends(get_db)) -> TeamListResponse:
    teams = await team_service.list_teams(session)
    return TeamListResponse(
        data=[TeamResponse.model_validate(t) for t in teams],
        count=len(teams),
    )


@router.get(
    "/{team_id}",
    response_model=TeamResponse,
    dependencies=[Depends(require_permission(Permission.VIEW_TEAMS))],
)
async def get_team(team_id: str, session: AsyncSession = Depends(get_db)) -> TeamResponse:
    team = await team_service.get_team(session, team_id)
    if team is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Team not found")
    return TeamResponse.model_validate(team)


@router.post(
    "/",
    response_model=TeamResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission(Permission.EDIT_TEAMS))],
)
async def create_team(body: TeamCreate, session: AsyncSession = Depends(get_db)) -> TeamResponse:
    try:
        team = await team_service.create_team(session, body)
    except (TeamCodeConflictError, UnknownMemberError) as exc:
        raise _write_error(exc) from exc
    return TeamResponse.model_validate(team)


@router.patch(
    "/{team_id}",
    response_model=TeamResponse,
    dependencies=[Depends(require_permission(Permission.EDIT_TEAMS))],
)
async def update_team(
    team_id: str,
    body: TeamUpdate,
    session: AsyncSession = Depends(get_db),
) -> TeamResponse:
    try:
        team = await team_service.update_team(session, team_id, body)
    except (TeamCodeConflictError, UnknownMemberError) as exc:
        raise _write_error(exc) from exc
    if team is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Team not found")
    return TeamResponse.model_validate(team)


@router.delete(
    "/{team_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission(Permission.DELETE_TEAMS))],
)
async def delete_team(team_id: str, session: AsyncSession = Depends(get_db)) -> None:
    if not await team_service.delete_team(session, team_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Team not found")
