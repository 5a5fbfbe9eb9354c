from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from tikiti.platform.config.di import Container
from tikiti.platform.logging.loguru_io import Logger
from tikiti.service.ticketing.app.dto.payment_lookup_result import PaymentLookupResult
from tikiti.service.ticketing.app.interface.i_payment_query_repo import IPaymentQueryRepo
from tikiti.service.ticketing.app.interface.i_ticket_query_repo import ITicketQueryRepo
from tikiti.service.ticketing.domain.ticketing_error import PaymentNotFoundError


class LookupPaymentUseCase:
    def __init__(
        self, *, payment_query_repo: IPaymentQueryRepo, ticket_query_repo: ITicketQueryRepo
    ) -> None:
        self.payment_query_repo = payment_query_repo
        self.ticket_query_repo = ticket_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        payment_query_repo: IPaymentQueryRepo = Depends(Provide[Container.payment_query_repo]),
        ticket_query_repo: ITicketQueryRepo = Depends(Provide[Container.ticket_query_repo]),
    ) -> Self:
        return cls(payment_query_repo=payment_query_repo, ticket_query_repo=ticket_query_repo)

    @Logger.io
    async def lookup(self, *, reference: str) -> PaymentLookupResult:
        reference = (reference or '').strip()
        payment = (
            await self.payment_query_repo.get_by_reference(reference=reference)
            if reference
            else None
        )
        if not payment:
            raise PaymentNotFoundError('Payment not found')

        tickets = await self.ticket_query_repo.list_by_payment_reference(
            payment_reference=payment.reference
        )
        return PaymentLookupResult(payment=payment, tickets=tickets)
