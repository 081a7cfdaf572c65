# This project was developed with assistance from AI tools.
"""Role management request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..core.permissions import Permission


class RoleCreate(BaseModel):
    """Create a role. Keys are the stable join point with users and must be unique."""

    key: str = Field(min_length=1, max_length=64, pattern=r"^[a-z0-9_\-]+$")
    name: str = Field(min_length=1, max_length=255)
    permissions: list[Permission] = []


class RoleUpdate(BaseModel):
    """Partial update. The key is immutable once users reference it."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    permissions: list[Permission] | None = None


class RoleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    key: str
    name: str
    permissions: list[str]
    created_at: datetime | None = None
    updated_at: datetime | None = None


class RoleListResponse(BaseModel):
    data: list[RoleResponse]
    count: int
