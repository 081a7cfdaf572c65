# This project was developed with assistance from AI tools.
"""Document-store facade over the relational tables.

The access-control layer only needs equality lookups by collection and
field, lookup by id, and full collection fetches. ``DocumentStore`` is that
narrow contract; ``SqlDocumentStore`` implements it with SQLAlchemy and
returns plain dicts so callers never hold ORM state.
"""

import logging
from typing import Any, Protocol

from sqlalchemy import inspect, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .database import Base, SessionLocal
from .enums import Collection
from .models import Proposal, Registration, Role, Team, User

logger = logging.getLogger(__name__)

Document = dict[str, Any]

COLLECTION_MODELS: dict[Collection, type[Base]] = {
    Collection.ROLES: Role,
    Collection.USERS: User,
    Collection.TEAMS: Team,
    Collection.REGISTRATIONS: Registration,
    Collection.PROPOSALS: Proposal,
}


class UnknownCollectionError(ValueError):
    """Raised when a collection name has no backing table."""


class UnknownFieldError(ValueError):
    """Raised when a query names a field the collection does not have."""


class DocumentStore(Protocol):
    async def query_by_field(self, collection: str, field: str, value: Any) -> list[Document]: ...

    async def get_by_id(self, collection: str, document_id: str) -> Document | None: ...

    async def list_collection(self, collection: str) -> list[Document]: ...


def to_document(row: Base) -> Document:
    """Flatten an ORM row into a dict keyed by column attribute name."""
    mapper = inspect(row).mapper
    return {attr.key: getattr(row, attr.key) for attr in mapper.column_attrs}


def _model_for(collection: str) -> type[Base]:
    try:
        return COLLECTION_MODELS[Collection(collection)]
    except ValueError as exc:
        raise UnknownCollectionError(f"Unknown collection: {collection}") from exc


class SqlDocumentStore:
    """``DocumentStore`` backed by an async SQLAlchemy session factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] = SessionLocal):
        self._session_factory = session_factory

    async def query_by_field(self, collection: str, field: str, value: Any) -> list[Document]:
        model = _model_for(collection)
        if field not in inspect(model).column_attrs:
            raise UnknownFieldError(f"Collection {collection} has no field {field}")

        stmt = select(model).where(getattr(model, field) == value)
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            rows = result.scalars().all()
        logger.debug("query_by_field %s.%s -> %d rows", collection, field, len(rows))
        return [to_document(row) for row in rows]

    async def get_by_id(self, collection: str, document_id: str) -> Document | None:
        model = _model_for(collection)
        async with self._session_factory() as session:
            row = await session.get(model, document_id)
        return to_document(row) if row is not None else None

    async def list_collection(self, collection: str) -> list[Document]:
        model = _model_for(collection)
        async with self._session_factory() as session:
            result = await session.execute(select(model))
            rows = result.scalars().all()
        return [to_document(row) for row in rows]
