# This project was developed with assistance from AI tools.
"""Process-wide document store used by the access-control services."""

import logging

from db.store import DocumentStore, SqlDocumentStore

logger = logging.getLogger(__name__)

_store: DocumentStore | None = None


def init_document_store(store: DocumentStore | None = None) -> DocumentStore:
    """Initialise the singleton (called once from app lifespan)."""
    global _store  # noqa: PLW0603
    _store = store or SqlDocumentStore()
    logger.info("Document store initialised (%s)", type(_store).__name__)
    return _store


def get_document_store() -> DocumentStore:
    """Return the initialised document store singleton."""
    if _store is None:
        raise RuntimeError("Document store not initialised -- call init_document_store() first")
    return _store
