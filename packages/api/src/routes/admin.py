# This project was developed with assistance from AI tools.
"""Admin endpoints for seeding the built-in roles."""

from db import get_db
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.permissions import Permission
from ..middleware.auth import require_permission
from ..schemas.admin import SeedResponse
from ..services.permissions import PermissionResolver, get_permission_resolver
from ..services.seed.seeder import seed_default_roles

router = APIRouter()


@router.post(
    "/seed",
    response_model=SeedResponse,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_permission(Permission.EDIT_ROLES))],
)
async def seed_roles(
    force: bool = False,
    session: AsyncSession = Depends(get_db),
    resolver: PermissionResolver = Depends(get_permission_resolver),
) -> SeedResponse:
    """Create missing built-in roles. Pass force=true to reset their permissions."""
    result = await seed_default_roles(session, force=force, resolver=resolver)
    return SeedResponse(**result)
