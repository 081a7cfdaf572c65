# This project was developed with assistance from AI tools.
"""Client registration routes filtered by data scope."""

from db.store import DocumentStore
from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..core.config import settings
from ..core.permissions import Permission
from ..middleware.auth import CurrentUser, require_coarse_permission
from ..schemas import Pagination
from ..schemas.client import ClientListResponse, ClientRecord
from ..services import client as client_service
from ..services.store import get_document_store

router = APIRouter(dependencies=[Depends(require_coarse_permission(Permission.VIEW_CLIENTS))])


@router.get("/", response_model=ClientListResponse)
async def list_clients(
    user: CurrentUser,
    store: DocumentStore = Depends(get_document_store),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=20, ge=1, le=100),
) -> ClientListResponse:
    """List client registrations visible under the caller's clients scope."""
    records, total = await client_service.list_clients(
        store, user, offset=offset, limit=limit, timeout=settings.STORE_TIMEOUT_SECONDS
    )
    return ClientListResponse(
        data=records,
        pagination=Pagination.window(total, offset, limit),
    )


@router.get("/{client_id}", response_model=ClientRecord)
async def get_client(
    client_id: str,
    user: CurrentUser,
    store: DocumentStore = Depends(get_document_store),
) -> ClientRecord:
    record = await client_service.get_client(
        store, user, client_id, timeout=settings.STORE_TIMEOUT_SECONDS
    )
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")
    return record
