# This project was developed with assistance from AI tools.
"""The caller's own permissions, scopes and route access."""

from fastapi import APIRouter, Depends, Query

from ..core.permissions import ROUTE_PERMISSIONS, base_route, holds, required_permission_for_route
from ..middleware.auth import CurrentUser
from ..schemas.me import MeResponse, RouteAccessResponse
from ..services.permissions import PermissionResolver, get_permission_resolver

router = APIRouter()


@router.get("/me", response_model=MeResponse)
async def me(
    user: CurrentUser,
    resolver: PermissionResolver = Depends(get_permission_resolver),
) -> MeResponse:
    """Identity, granted permissions, data scope and reachable menu routes."""
    menu_routes = sorted(
        route
        for route, permission in ROUTE_PERMISSIONS.items()
        if route != "/" and holds(user.permissions, permission)
    )
    return MeResponse(
        user_id=user.user_id,
        email=user.email,
        name=user.name,
        role_key=user.role_key,
        role_name=user.role_name,
        team=user.team,
        bootstrap_admin=user.email in resolver.bootstrap_admins,
        permissions=sorted(user.permissions),
        data_scope=user.data_scope,
        menu_routes=menu_routes,
    )


@router.get("/me/route-access", response_model=RouteAccessResponse)
async def route_access(
    user: CurrentUser,
    path: str = Query(..., min_length=1, description="Front-end path, e.g. /clients/42"),
) -> RouteAccessResponse:
    """Whether the caller may open ``path``. Unmapped routes are allowed."""
    required = required_permission_for_route(path)
    return RouteAccessResponse(
        path=path,
        base_route=base_route(path),
        required_permission=required.value if required else None,
        allowed=required is None or holds(user.permissions, required),
    )
