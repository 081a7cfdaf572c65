# This project was developed with assistance from AI tools.
"""Schemas describing the caller's own access."""

from pydantic import BaseModel

from .auth import DataScope


class MeResponse(BaseModel):
    """Identity plus everything the dashboard needs to render menus and guards."""

    user_id: str
    email: str
    name: str
    role_key: str | None = None
    role_name: str | None = None
    team: str | None = None
    bootstrap_admin: bool = False
    permissions: list[str]
    data_scope: DataScope
    menu_routes: list[str]


class RouteAccessResponse(BaseModel):
    path: str
    base_route: str
    required_permission: str | None = None
    allowed: bool


class DashboardSummary(BaseModel):
    """Counts of records visible under the caller's dashboard scope."""

    scope: str | None = None
    clients: int
    proposals: int
    proposals_by_status: dict[str, int]
    proposals_by_pipeline_status: dict[str, int]
