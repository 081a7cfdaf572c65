# This project was developed with assistance from AI tools.
"""DatabaseService tests with a mocked session factory."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from db.database import DatabaseService


@pytest.mark.asyncio
async def test_health_check_runs_select_one():
    session = MagicMock()
    result = MagicMock()
    result.scalar.return_value = 1
    session.execute = AsyncMock(return_value=result)

    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=session)
    context.__aexit__ = AsyncMock(return_value=False)

    service = DatabaseService(MagicMock(return_value=context))
    assert await service.health_check() is True
    session.execute.assert_awaited_once()
