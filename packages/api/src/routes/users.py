# This project was developed with assistance from AI tools.
"""User listing and role/team assignment routes."""

from db import get_db
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.permissions import Permission
from ..middleware.auth import require_permission
from ..schemas import Pagination
from ..schemas.user import UserAssignment, UserListResponse, UserResponse
from ..services import user as user_service
from ..services.permissions import PermissionResolver, get_permission_resolver
from ..services.user import UnknownRoleError, UnknownTeamError

router = APIRouter()


@router.get(
    "/",
    response_model=UserListResponse,
    dependencies=[Depends(require_permission(Permission.VIEW_USERS))],
)
async def list_users(
    session: AsyncSession = Depends(get_db),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=20, ge=1, le=100),
) -> UserListResponse:
    users, total = await user_service.list_users(session, offset=offset, limit=limit)
    return UserListResponse(
        data=[UserResponse.model_validate(u) for u in users],
        pagination=Pagination.window(total, offset, limit),
    )


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    dependencies=[Depends(require_permission(Permission.VIEW_USERS))],
)
async def get_user(user_id: str, session: AsyncSession = Depends(get_db)) -> UserResponse:
    user = await user_service.get_user(session, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserResponse.model_validate(user)


@router.patch(
    "/{user_id}",
    response_model=UserResponse,
    dependencies=[Depends(require_permission(Permission.EDIT_USERS))],
)
async def assign_user(
    user_id: str,
    body: UserAssignment,
    session: AsyncSession = Depends(get_db),
    resolver: PermissionResolver = Depends(get_permission_resolver),
) -> UserResponse:
    """Change a user's role and/or team."""
    try:
        user = await user_service.assign_user(session, user_id, body, resolver)
    except (UnknownRoleError, UnknownTeamError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserResponse.model_validate(user)
