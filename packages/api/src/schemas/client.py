# This project was developed with assistance from AI tools.
"""Client registration response schemas."""

from datetime import datetime

from db.enums import PipelineStatus, RegistrationType
from pydantic import BaseModel, ConfigDict

from . import Pagination


class ClientRecord(BaseModel):
    """Client registration, including the ownership signals used for scoping."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    type: RegistrationType | None = None
    name: str | None = None
    company_name: str | None = None
    email: str | None = None
    pipeline_status: PipelineStatus | None = None
    user_id: str | None = None
    created_by: str | None = None
    inviter_user_id: str | None = None
    partner_email: str | None = None
    team_id: str | None = None
    team_name: str | None = None
    team_code: str | None = None
    created_at: datetime | None = None


class ClientListResponse(BaseModel):
    """Paginated list of visible clients."""

    data: list[ClientRecord]
    pagination: Pagination
