from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tikiti.platform.logging.loguru_io import Logger
from tikiti.service.ticketing.app.interface.i_payment_query_repo import IPaymentQueryRepo
from tikiti.service.ticketing.domain.entity.payment_entity import PaymentEntity
from tikiti.service.ticketing.driven_adapter.model.payment_model import PaymentModel
from tikiti.service.ticketing.driven_adapter.repo.payment_command_repo_impl import (
    payment_model_to_entity,
)


class PaymentQueryRepoImpl(IPaymentQueryRepo):
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
    async def get_by_reference(self, *, reference: str) -> PaymentEntity | None:
        async with self._get_session() as session:
            result = await session.execute(
                select(PaymentModel).where(PaymentModel.reference == reference)
            )
            db_payment = result.scalar_one_or_none()
            return payment_model_to_entity(db_payment) if db_payment else None
