from abc import ABC, abstractmethod

from tikiti.service.ticketing.domain.entity.payment_entity import PaymentEntity


class IPaymentCommandRepo(ABC):
    @abstractmethod
    async def get_by_reference(self, *, reference: str) -> PaymentEntity | None:
        pass

    @abstractmethod
    async def create(self, *, payment: PaymentEntity) -> bool:
        """
        Record the payment reference as consumed.

        Returns:
            False when the reference is already recorded (concurrent purchase
            with the same reference); the transaction must then be rolled back
        """
        pass
