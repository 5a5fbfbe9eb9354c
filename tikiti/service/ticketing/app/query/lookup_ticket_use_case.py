from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from tikiti.platform.config.di import Container
from tikiti.platform.logging.loguru_io import Logger
from tikiti.service.ticketing.app.interface.i_ticket_query_repo import ITicketQueryRepo
from tikiti.service.ticketing.domain.entity.ticket_entity import TicketEntity
from tikiti.service.ticketing.domain.ticketing_error import TicketNotFoundError


class LookupTicketUseCase:
    """Read-only check of a scanned code; never changes the used flag"""

    def __init__(self, *, ticket_query_repo: ITicketQueryRepo) -> None:
        self.ticket_query_repo = ticket_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        ticket_query_repo: ITicketQueryRepo = Depends(Provide[Container.ticket_query_repo]),
    ) -> Self:
        return cls(ticket_query_repo=ticket_query_repo)

    @Logger.io
    async def lookup(self, *, code: str) -> TicketEntity:
        code = (code or '').strip()
        ticket = await self.ticket_query_repo.get_paid_by_code(code=code) if code else None
        if not ticket:
            raise TicketNotFoundError('Ticket not found')
        return ticket
