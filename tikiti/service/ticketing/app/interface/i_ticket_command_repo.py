from abc import ABC, abstractmethod
from datetime import datetime
from typing import List

from tikiti.service.ticketing.domain.entity.ticket_entity import TicketEntity


class ITicketCommandRepo(ABC):
    @abstractmethod
    async def create_many(self, *, tickets: List[TicketEntity]) -> List[TicketEntity]:
        pass

    @abstractmethod
    async def get_paid_by_code(self, *, code: str) -> TicketEntity | None:
        pass

    @abstractmethod
    async def mark_used_if_unused(self, *, ticket_id: str, used_at: datetime) -> bool:
        """
        Flip used false→true in a single conditional write.

        Returns:
            True for the one caller that flipped the flag, False when it was already set
        """
        pass

    @abstractmethod
    async def list_by_payment_reference(self, *, payment_reference: str) -> List[TicketEntity]:
        pass
