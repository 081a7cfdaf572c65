# This project was developed with assistance from AI tools.
"""Proposal listings, pipeline board and dashboard counts.

Each view is filtered by its own scope: proposal listings use the
``proposals`` scope, the pipeline board the ``pipeline`` scope and the
dashboard summary the ``dashboard`` scope. A role can therefore see a
proposal in one view and not in another.
"""

import logging
from collections import Counter

from db.enums import Collection, PipelineStatus, ProposalStatus
from db.store import DocumentStore

from ..schemas.auth import ScopeLevel, UserContext
from ..schemas.me import DashboardSummary
from ..schemas.proposal import PipelineColumn, PipelineResponse, ProposalRecord
from .scope import CLIENT_SIGNALS, PROPOSAL_SIGNALS, fetch_visible, newest_first

logger = logging.getLogger(__name__)


async def _visible_proposals(
    store: DocumentStore, user: UserContext, scope: ScopeLevel | None, timeout: float
) -> list[ProposalRecord]:
    docs = await fetch_visible(
        store,
        user,
        Collection.PROPOSALS,
        scope,
        PROPOSAL_SIGNALS,
        with_referrals=True,
        timeout=timeout,
    )
    return [ProposalRecord.model_validate(doc) for doc in newest_first(docs)]


async def list_proposals(
    store: DocumentStore,
    user: UserContext,
    *,
    offset: int = 0,
    limit: int = 20,
    status: ProposalStatus | None = None,
    timeout: float = 5.0,
) -> tuple[list[ProposalRecord], int]:
    """Return one page of visible proposals and the visible total.

    Args:
        status: Only return proposals in this status.
    """
    records = await _visible_proposals(store, user, user.data_scope.proposals, timeout)
    if status is not None:
        records = [r for r in records if r.status == status]
    return records[offset : offset + limit], len(records)


async def get_proposal(
    store: DocumentStore, user: UserContext, proposal_id: str, *, timeout: float = 5.0
) -> ProposalRecord | None:
    """Return a proposal if it exists and is visible, else None."""
    records = await _visible_proposals(store, user, user.data_scope.proposals, timeout)
    return next((r for r in records if r.id == proposal_id), None)


async def pipeline_board(
    store: DocumentStore, user: UserContext, *, timeout: float = 5.0
) -> PipelineResponse:
    """Visible proposals grouped into one column per pipeline stage."""
    records = await _visible_proposals(store, user, user.data_scope.pipeline, timeout)
    columns = []
    for stage in PipelineStatus.ordered():
        in_stage = [r for r in records if r.pipeline_status == stage]
        columns.append(PipelineColumn(status=stage, count=len(in_stage), proposals=in_stage))
    return PipelineResponse(columns=columns)


async def dashboard_summary(
    store: DocumentStore, user: UserContext, *, timeout: float = 5.0
) -> DashboardSummary:
    """Counts of clients and proposals visible under the dashboard scope."""
    scope = user.data_scope.dashboard
    clients = await fetch_visible(
        store, user, Collection.REGISTRATIONS, scope, CLIENT_SIGNALS, timeout=timeout
    )
    proposals = await _visible_proposals(store, user, scope, timeout)

    by_status = Counter(r.status.value for r in proposals)
    by_stage = Counter(r.pipeline_status.value for r in proposals)
    return DashboardSummary(
        scope=scope.value if scope else None,
        clients=len(clients),
        proposals=len(proposals),
        proposals_by_status={s.value: by_status.get(s.value, 0) for s in ProposalStatus},
        proposals_by_pipeline_status={
            s.value: by_stage.get(s.value, 0) for s in PipelineStatus.ordered()
        },
    )
