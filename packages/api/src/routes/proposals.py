# This project was developed with assistance from AI tools.
"""Proposal, pipeline and dashboard routes filtered by data scope."""

from db.enums import ProposalStatus
from db.store import DocumentStore
from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..core.config import settings
from ..core.permissions import Permission
from ..middleware.auth import CurrentUser, require_coarse_permission
from ..schemas import Pagination
from ..schemas.me import DashboardSummary
from ..schemas.proposal import PipelineResponse, ProposalListResponse, ProposalRecord
from ..services import proposal as proposal_service
from ..services.store import get_document_store

router = APIRouter()


@router.get(
    "/proposals/",
    response_model=ProposalListResponse,
    dependencies=[Depends(require_coarse_permission(Permission.VIEW_PROPOSALS))],
)
async def list_proposals(
    user: CurrentUser,
    store: DocumentStore = Depends(get_document_store),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=20, ge=1, le=100),
    filter_status: ProposalStatus | None = None,
) -> ProposalListResponse:
    """List proposals visible under the caller's proposals scope."""
    records, total = await proposal_service.list_proposals(
        store,
        user,
        offset=offset,
        limit=limit,
        status=filter_status,
        timeout=settings.STORE_TIMEOUT_SECONDS,
    )
    return ProposalListResponse(
        data=records,
        pagination=Pagination.window(total, offset, limit),
    )


@router.get(
    "/proposals/{proposal_id}",
    response_model=ProposalRecord,
    dependencies=[Depends(require_coarse_permission(Permission.VIEW_PROPOSALS))],
)
async def get_proposal(
    proposal_id: str,
    user: CurrentUser,
    store: DocumentStore = Depends(get_document_store),
) -> ProposalRecord:
    record = await proposal_service.get_proposal(
        store, user, proposal_id, timeout=settings.STORE_TIMEOUT_SECONDS
    )
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Proposal not found")
    return record


@router.get(
    "/pipeline",
    response_model=PipelineResponse,
    dependencies=[Depends(require_coarse_permission(Permission.VIEW_PIPELINE))],
)
async def pipeline(
    user: CurrentUser,
    store: DocumentStore = Depends(get_document_store),
) -> PipelineResponse:
    """Visible proposals grouped by pipeline stage, under the pipeline scope."""
    return await proposal_service.pipeline_board(
        store, user, timeout=settings.STORE_TIMEOUT_SECONDS
    )


@router.get(
    "/dashboard/summary",
    response_model=DashboardSummary,
    dependencies=[Depends(require_coarse_permission(Permission.VIEW_DASHBOARD))],
)
async def dashboard_summary(
    user: CurrentUser,
    store: DocumentStore = Depends(get_document_store),
) -> DashboardSummary:
    return await proposal_service.dashboard_summary(
        store, user, timeout=settings.STORE_TIMEOUT_SECONDS
    )
