# This project was developed with assistance from AI tools.
"""Role management routes.

Every write invalidates the cached permissions of the affected role so
route guards pick up the change on the next request.
"""

from db import get_db
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.permissions import Permission
from ..middleware.auth import require_permission
from ..schemas.role import RoleCreate, RoleListResponse, RoleResponse, RoleUpdate
from ..services import role as role_service
from ..services.permissions import PermissionResolver, get_permission_resolver
from ..services.role import RoleConflictError, RoleInUseError

router = APIRouter()


@router.get(
    "/",
    response_model=RoleListResponse,
    dependencies=[Depends(require_permission(Permission.VIEW_ROLES))],
)
async def list_roles(session: AsyncSession = Depends(get_db)) -> RoleListResponse:
    roles = await role_service.list_roles(session)
    return RoleListResponse(
        data=[RoleResponse.model_validate(r) for r in roles],
        count=len(roles),
    )


@router.get(
    "/{role_id}",
    response_model=RoleResponse,
    dependencies=[Depends(require_permission(Permission.VIEW_ROLES))],
)
async def get_role(role_id: str, session: AsyncSession = Depends(get_db)) -> RoleResponse:
    role = await role_service.get_role(session, role_id)
    if role is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Role not found")
    return RoleResponse.model_validate(role)


@router.post(
    "/",
    response_model=RoleResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission(Permission.EDIT_ROLES))],
)
async def create_role(
    body: RoleCreate,
    session: AsyncSession = Depends(get_db),
    resolver: PermissionResolver = Depends(get_permission_resolver),
) -> RoleResponse:
    try:
        role = await role_service.create_role(session, body, resolver)
    except RoleConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return RoleResponse.model_validate(role)


@router.patch(
    "/{role_id}",
    response_model=RoleResponse,
    dependencies=[Depends(require_permission(Permission.EDIT_ROLES))],
)
async def update_role(
    role_id: str,
    body: RoleUpdate,
    session: AsyncSession = Depends(get_db),
    resolver: PermissionResolver = Depends(get_permission_resolver),
) -> RoleResponse:
    role = await role_service.update_role(session, role_id, body, resolver)
    if role is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Role not found")
    return RoleResponse.model_validate(role)


@router.delete(
    "/{role_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission(Permission.DELETE_ROLES))],
)
async def delete_role(
    role_id: str,
    session: AsyncSession = Depends(get_db),
    resolver: PermissionResolver = Depends(get_permission_resolver),
) -> None:
    try:
        deleted = await role_service.delete_role(session, role_id, resolver)
    except RoleInUseError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Role not found")
