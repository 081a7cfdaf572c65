# This project was developed with assistance from AI tools.
"""User listing and role/team assignment schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from . import Pagination


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str | None = None
    role_id: str | None = None
    role_key: str | None = None
    role_name: str | None = None
    team: str | None = None
    created_at: datetime | None = None


class UserListResponse(BaseModel):
    data: list[UserResponse]
    pagination: Pagination


class UserAssignment(BaseModel):
    """Change a user's role and/or team.

    Only fields present in the request body are applied; an explicit
    ``"team": null`` removes the user from their team.
    """

    role_key: str | None = Field(default=None, min_length=1, max_length=64)
    team: str | None = None
