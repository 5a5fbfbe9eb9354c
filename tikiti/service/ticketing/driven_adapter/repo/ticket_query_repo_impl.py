from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tikiti.platform.logging.loguru_io import Logger
from tikiti.service.ticketing.app.interface.i_ticket_query_repo import ITicketQueryRepo
from tikiti.service.ticketing.domain.entity.ticket_entity import TicketEntity
from tikiti.service.ticketing.domain.enum.payment_status import PaymentStatus
from tikiti.service.ticketing.driven_adapter.model.ticket_model import TicketModel
from tikiti.service.ticketing.driven_adapter.repo.ticket_command_repo_impl import (
    ticket_model_to_entity,
)


class TicketQueryRepoImpl(ITicketQueryRepo):
    def __init__(
        self, session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None
    ) -> None:
        self.session_factory = session_factory

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        if self.session_factory is None:
            raise RuntimeError('No session_factory available')
        async with self.session_factory() as session:
            yield session

    @Logger.io
    async def get_paid_by_code(self, *, code: str) -> TicketEntity | None:
        async with self._get_session() as session:
            result = await session.execute(
                select(TicketModel).where(
                    TicketModel.code == code,
                    TicketModel.payment_status == PaymentStatus.PAID.value,
                )
            )
            db_ticket = result.scalar_one_or_none()
            return ticket_model_to_entity(db_ticket) if db_ticket else None

    @Logger.io
    async def list_by_payment_reference(self, *, payment_reference: str) -> List[TicketEntity]:
        async with self._get_session() as session:
            result = await session.execute(
                select(TicketModel)
                .where(TicketModel.payment_reference == payment_reference)
                .order_by(TicketModel.created_at, TicketModel.id)
            )
            return [ticket_model_to_entity(db_ticket) for db_ticket in result.scalars().all()]
