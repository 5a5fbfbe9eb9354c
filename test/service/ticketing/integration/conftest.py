"""
Integration test configuration for ticketing service.

Each test gets its own SQLite file under tmp_path. SQLite serializes writers
(busy timeout), so the conditional UPDATEs are exercised under real contention.
"""

from collections.abc import AsyncGenerator, AsyncIterator, Callable
from contextlib import asynccontextmanager
from decimal import Decimal
from pathlib import Path
from typing import Any, Awaitable

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from tikiti.platform.config.core_setting import settings
from tikiti.platform.database.orm_db_setting import (
    create_db_and_tables,
    dispose_engine,
    get_engine,
    get_session_maker,
)
from tikiti.platform.database.unit_of_work import AbstractUnitOfWork, SqlAlchemyUnitOfWork
from tikiti.service.ticketing.driven_adapter.model.event_model import EventModel
from tikiti.service.ticketing.driven_adapter.model.ticket_model import TicketModel


@pytest_asyncio.fixture
async def db_engine(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> AsyncGenerator[AsyncEngine, None]:
    monkeypatch.setattr(settings, 'DATABASE_URL', f'sqlite+aiosqlite:///{tmp_path / "tikiti.db"}')
    await dispose_engine()
    await create_db_and_tables()
    yield get_engine()
    await dispose_engine()


@pytest.fixture
def session_maker(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return get_session_maker()


@pytest.fixture
def new_uow(
    session_maker: async_sessionmaker[AsyncSession],
) -> Callable[[], Any]:
    """Opens a fresh session per unit of work, as one HTTP request would"""

    @asynccontextmanager
    async def _new_uow() -> AsyncIterator[AbstractUnitOfWork]:
        async with session_maker() as session:
            yield SqlAlchemyUnitOfWork(session)

    return _new_uow


@pytest.fixture
def seed_event(
    session_maker: async_sessionmaker[AsyncSession],
) -> Callable[..., Awaitable[None]]:
    async def _seed(
        event_id: str = 'launch-2025', total_tickets: int = 10, price: str = '5000'
    ) -> None:
        async with session_maker() as session:
            session.add(
                EventModel(
                    id=event_id,
                    title=f'Event {event_id}',
                    total_tickets=total_tickets,
                    price=Decimal(price),
                    organizer_id='org-1',
                )
            )
            await session.commit()

    return _seed


@pytest.fixture
def read_inventory(
    session_maker: async_sessionmaker[AsyncSession],
) -> Callable[[str], Awaitable[tuple[int, int]]]:
    """Returns (total_tickets, issued ticket rows) for an event"""

    async def _read(event_id: str) -> tuple[int, int]:
        async with session_maker() as session:
            total = await session.scalar(
                select(EventModel.total_tickets).where(EventModel.id == event_id)
            )
            issued = await session.scalar(
                select(func.count())
                .select_from(TicketModel)
                .where(TicketModel.event_id == event_id)
            )
            return int(total or 0), int(issued or 0)

    return _read
