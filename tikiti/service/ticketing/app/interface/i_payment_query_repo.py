from abc import ABC, abstractmethod

from tikiti.service.ticketing.domain.entity.payment_entity import PaymentEntity


class IPaymentQueryRepo(ABC):
    @abstractmethod
    async def get_by_reference(self, *, reference: str) -> PaymentEntity | None:
        pass
