# This project was developed with assistance from AI tools.
"""Team management request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

TEAM_CODE_PATTERN = r"^[0-9]{4}$"


class TeamCreate(BaseModel):
    """Create a team. A four-digit code is generated when none is given."""

    name: str = Field(min_length=1, max_length=255)
    team_code: str | None = Field(default=None, pattern=TEAM_CODE_PATTERN)
    members: list[str] = []


class TeamUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    team_code: str | None = Field(default=None, pattern=TEAM_CODE_PATTERN)
    members: list[str] | None = None


class TeamResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    team_code: str | None = None
    members: list[str] = []
    created_at: datetime | None = None


class TeamListResponse(BaseModel):
    data: list[TeamResponse]
    count: int
