"""
Unit of Work Pattern - one database transaction shared by several repositories

Architecture:
- UoW owns the session lifecycle for a single business operation
- UoW owns commit/rollback
- Repositories receive the shared session from the UoW
- Use cases coordinate repositories through the UoW
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

import anyio
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tikiti.platform.database.orm_db_setting import get_async_session


if TYPE_CHECKING:
    from tikiti.service.ticketing.app.interface.i_event_command_repo import IEventCommandRepo
    from tikiti.service.ticketing.app.interface.i_payment_command_repo import (
        IPaymentCommandRepo,
    )
    from tikiti.service.ticketing.app.interface.i_ticket_command_repo import (
        ITicketCommandRepo,
    )


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the Ticketing Service

    Usage:
        async with uow:
            changed = await uow.event_command_repo.decrement_tickets_if_unchanged(...)
            await uow.ticket_command_repo.create_many(tickets=...)
            await uow.commit()

    Leaving the block without commit() rolls back.
    """

    event_command_repo: IEventCommandRepo
    ticket_command_repo: ITicketCommandRepo
    payment_command_repo: IPaymentCommandRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args) -> None:
        # Must still run when the caller was cancelled by a timeout
        with anyio.CancelScope(shield=True):
            await self.rollback()

    async def commit(self) -> None:
        """Commit the transaction; once started it runs to completion even under cancellation"""
        with anyio.CancelScope(shield=True):
            await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def __aenter__(self) -> AbstractUnitOfWork:
        from tikiti.service.ticketing.driven_adapter.repo.event_command_repo_impl import (
            EventCommandRepoImpl,
        )
        from tikiti.service.ticketing.driven_adapter.repo.payment_command_repo_impl import (
            PaymentCommandRepoImpl,
        )
        from tikiti.service.ticketing.driven_adapter.repo.ticket_command_repo_impl import (
            TicketCommandRepoImpl,
        )

        # Create repositories with shared session
        self.event_command_repo = EventCommandRepoImpl(session=self.session)
        self.ticket_command_repo = TicketCommandRepoImpl(session=self.session)
        self.payment_command_repo = PaymentCommandRepoImpl(session=self.session)

        return await super().__aenter__()

    async def _commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()


def get_unit_of_work(
    session: AsyncSession = Depends(get_async_session),
) -> AbstractUnitOfWork:
    """
    FastAPI dependency for Unit of Work

    Usage:
        async def purchase(uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
            async with uow:
                ...
                await uow.commit()
    """
    return SqlAlchemyUnitOfWork(session)
