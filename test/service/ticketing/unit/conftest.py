"""
Unit test configuration for ticketing service.

Provides an in-memory Unit of Work whose repositories are AsyncMocks, so use
cases run without a database.
"""

from unittest.mock import AsyncMock

import pytest

from tikiti.platform.database.unit_of_work import AbstractUnitOfWork


class MockUnitOfWork(AbstractUnitOfWork):
    def __init__(self) -> None:
        self.event_command_repo = AsyncMock()
        self.ticket_command_repo = AsyncMock()
        self.payment_command_repo = AsyncMock()
        self.committed = AsyncMock()
        self.rolled_back = AsyncMock()

    async def _commit(self) -> None:
        await self.committed()

    async def rollback(self) -> None:
        await self.rolled_back()


@pytest.fixture
def mock_uow() -> MockUnitOfWork:
    return MockUnitOfWork()
