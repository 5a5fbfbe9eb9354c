from abc import ABC, abstractmethod

from tikiti.service.ticketing.domain.value_object.payment_verification import (
    PaymentVerification,
)


class IPaymentVerifier(ABC):
    """
    Port to the payment gateway.

    Implementations report whether the gateway confirmed a successful charge for
    exactly the given reference. A definitive "no" is returned as
    PaymentVerification(confirmed=False); an unreachable gateway raises
    PaymentGatewayError so the caller can retry.
    """

    @abstractmethod
    async def verify(self, *, reference: str) -> PaymentVerification:
        pass
