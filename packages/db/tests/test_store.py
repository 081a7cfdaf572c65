# This project was developed with assistance from AI tools.
"""SqlDocumentStore tests against a mocked async session factory."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from db.models import Role, Team
from db.store import (
    SqlDocumentStore,
    UnknownCollectionError,
    UnknownFieldError,
    to_document,
)


def _factory(rows=None, get_result=None):
    """Session factory whose sessions return ``rows`` from execute()."""
    session = MagicMock()
    result = MagicMock()
    result.scalars.return_value.all.return_value = rows or []
    session.execute = AsyncMock(return_value=result)
    session.get = AsyncMock(return_value=get_result)

    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=session)
    context.__aexit__ = AsyncMock(return_value=False)
    return MagicMock(return_value=context), session


def test_to_document_flattens_columns():
    role = Role(id="r1", key="admin", name="Administrador", permissions=["view:users"])
    doc = to_document(role)
    assert doc["id"] == "r1"
    assert doc["key"] == "admin"
    assert doc["permissions"] == ["view:users"]
    assert set(doc) == {"id", "key", "name", "permissions", "created_at", "updated_at"}


@pytest.mark.asyncio
async def test_query_by_field_returns_documents():
    factory, session = _factory(rows=[Role(id="r1", key="manager", name="Gerente", permissions=[])])
    store = SqlDocumentStore(factory)

    docs = await store.query_by_field("roles", "key", "manager")

    assert [d["key"] for d in docs] == ["manager"]
    session.execute.assert_awaited_once()


@pytest.mark.asyncio
async def test_query_unknown_field_raises_before_querying():
    factory, session = _factory()
    with pytest.raises(UnknownFieldError):
        await SqlDocumentStore(factory).query_by_field("roles", "colour", "red")
    session.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_unknown_collection_raises():
    factory, _ = _factory()
    with pytest.raises(UnknownCollectionError):
        await SqlDocumentStore(factory).list_collection("webhooks")


@pytest.mark.asyncio
async def test_get_by_id_found_and_missing():
    team = Team(id="t1", name="Sales", team_code="SS", members=["u1"])
    factory, _ = _factory(get_result=team)
    assert (await SqlDocumentStore(factory).get_by_id("teams", "t1"))["members"] == ["u1"]

    factory, _ = _factory(get_result=None)
    assert await SqlDocumentStore(factory).get_by_id("teams", "t9") is None


@pytest.mark.asyncio
async def test_list_collection():
    rows = [Team(id="t1", name="A"), Team(id="t2", name="B")]
    factory, _ = _factory(rows=rows)
    docs = await SqlDocumentStore(factory).list_collection("teams")
    assert [d["id"] for d in docs] == ["t1", "t2"]
