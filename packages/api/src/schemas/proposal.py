# This project was developed with assistance from AI tools.
"""Proposal and pipeline response schemas."""

from datetime import datetime
from decimal import Decimal

from db.enums import PipelineStatus, ProposalStatus
from pydantic import BaseModel, ConfigDict

from . import Pagination


class ProposalRecord(BaseModel):
    """Credit proposal, including the ownership signals used for scoping."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    proposal_number: str | None = None
    client_name: str | None = None
    desired_credit: Decimal | None = None
    status: ProposalStatus = ProposalStatus.PENDING
    pipeline_status: PipelineStatus = PipelineStatus.SUBMITTED
    notes: str | None = None
    client_id: str | None = None
    client_email: str | None = None
    user_id: str | None = None
    created_by: str | None = None
    inviter_user_id: str | None = None
    partner_email: str | None = None
    team_id: str | None = None
    team_name: str | None = None
    team_code: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProposalListResponse(BaseModel):
    """Paginated list of visible proposals."""

    data: list[ProposalRecord]
    pagination: Pagination


class PipelineColumn(BaseModel):
    """One pipeline stage with the proposals currently in it."""

    status: PipelineStatus
    count: int
    proposals: list[ProposalRecord]


class PipelineResponse(BaseModel):
    columns: list[PipelineColumn]
