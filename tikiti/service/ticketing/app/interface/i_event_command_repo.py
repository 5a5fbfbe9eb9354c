from abc import ABC, abstractmethod

from tikiti.service.ticketing.domain.entity.event_entity import EventEntity


class IEventCommandRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, event_id: str) -> EventEntity | None:
        pass

    @abstractmethod
    async def decrement_tickets_if_unchanged(
        self, *, event_id: str, observed_total: int, quantity: int
    ) -> bool:
        """
        Compare-and-swap decrement of the event inventory.

        Applies only when total_tickets still equals observed_total and covers
        quantity.

        Returns:
            True when exactly one row changed, False when the inventory moved
            since it was read
        """
        pass
