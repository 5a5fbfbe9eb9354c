from abc import ABC, abstractmethod
from typing import List

from tikiti.service.ticketing.domain.entity.ticket_entity import TicketEntity


class ITicketQueryRepo(ABC):
    @abstractmethod
    async def get_paid_by_code(self, *, code: str) -> TicketEntity | None:
        pass

    @abstractmethod
    async def list_by_payment_reference(self, *, payment_reference: str) -> List[TicketEntity]:
        pass
