# This project was developed with assistance from AI tools.
"""Shared test factories: an in-memory document store and user contexts."""

import asyncio
from collections import Counter

from src.core.auth import build_data_scope
from src.schemas.auth import UserContext


class InMemoryStore:
    """Dict-backed ``DocumentStore`` that counts calls per method.

    ``fail`` makes every call raise; ``delay`` makes every call sleep first
    (to exercise timeouts).
    """

    def __init__(self, collections: dict[str, list[dict]] | None = None):
        self.collections = {k: [dict(d) for d in v] for k, v in (collections or {}).items()}
        self.calls: Counter = Counter()
        self.fail: Exception | None = None
        self.delay: float = 0

    async def _enter(self, method: str) -> None:
        self.calls[method] += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail is not None:
            raise self.fail

    async def query_by_field(self, collection, field, value):
        await self._enter("query_by_field")
        return [dict(d) for d in self.collections.get(collection, []) if d.get(field) == value]

    async def get_by_id(self, collection, document_id):
        await self._enter("get_by_id")
        for doc in self.collections.get(collection, []):
            if doc.get("id") == document_id:
                return dict(doc)
        return None

    async def list_collection(self, collection):
        await self._enter("list_collection")
        return [dict(d) for d in self.collections.get(collection, [])]


def make_user(
    user_id="user-1",
    email="user@example.com",
    role_key="client",
    permissions=(),
    team=None,
    name="Test User",
) -> UserContext:
    """UserContext whose data scope is derived from ``permissions``."""
    return UserContext(
        user_id=user_id,
        email=email,
        name=name,
        role_key=role_key,
        team=team,
        permissions=frozenset(permissions),
        data_scope=build_data_scope(role_key, permissions),
    )
