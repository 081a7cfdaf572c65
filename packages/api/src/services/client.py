# This project was developed with assistance from AI tools.
"""Client registration listings filtered by the caller's clients scope."""

import logging

from db.enums import Collection
from db.store import DocumentStore

from ..schemas.auth import UserContext
from ..schemas.client import ClientRecord
from .scope import CLIENT_SIGNALS, fetch_visible, newest_first

logger = logging.getLogger(__name__)


async def visible_clients(
    store: DocumentStore, user: UserContext, *, timeout: float = 5.0
) -> list[ClientRecord]:
    """All client registrations visible to ``user``, newest first."""
    docs = await fetch_visible(
        store,
        user,
        Collection.REGISTRATIONS,
        user.data_scope.clients,
        CLIENT_SIGNALS,
        timeout=timeout,
    )
    return [ClientRecord.model_validate(doc) for doc in newest_first(docs)]


async def list_clients(
    store: DocumentStore,
    user: UserContext,
    *,
    offset: int = 0,
    limit: int = 20,
    timeout: float = 5.0,
) -> tuple[list[ClientRecord], int]:
    """Return one page of visible clients and the visible total."""
    records = await visible_clients(store, user, timeout=timeout)
    return records[offset : offset + limit], len(records)


async def get_client(
    store: DocumentStore, user: UserContext, client_id: str, *, timeout: float = 5.0
) -> ClientRecord | None:
    """Return a client if it exists and is visible to ``user``.

    Out-of-scope records are reported as missing so their existence is not
    disclosed.
    """
    for record in await visible_clients(store, user, timeout=timeout):
        if record.id == client_id:
            return record
    logger.debug("Client %s not visible to %s", client_id, user.user_id)
    return None
