import time
from typing import Optional, Self

import anyio
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from tikiti.platform.config.core_setting import settings
from tikiti.platform.config.di import Container
from tikiti.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from tikiti.platform.exception.exceptions import CustomBaseError, DomainError
from tikiti.platform.logging.loguru_io import Logger
from tikiti.platform.metrics.ticketing_metrics import metrics
from tikiti.service.ticketing.app.dto.purchase_result import PurchaseResult
from tikiti.service.ticketing.app.interface.i_payment_verifier import IPaymentVerifier
from tikiti.service.ticketing.domain.entity.event_entity import EventEntity
from tikiti.service.ticketing.domain.entity.payment_entity import PaymentEntity
from tikiti.service.ticketing.domain.entity.ticket_entity import TicketEntity
from tikiti.service.ticketing.domain.ticketing_error import (
    EventNotFoundError,
    InsufficientInventoryError,
    OperationTimeoutError,
    PaymentNotConfirmedError,
    PaymentReferenceReusedError,
    PurchaseConflictError,
)
from tikiti.service.ticketing.domain.value_object.buyer_info import BuyerInfo
from tikiti.service.ticketing.domain.value_object.payment_verification import (
    PaymentVerification,
)


tracer = trace.get_tracer(__name__)


class PurchaseTicketsUseCase:
    """
    Turns one confirmed payment into tickets without overselling.

    Flow:
    1. Verify the reference with the gateway (no transaction open yet)
    2. Replay: a reference already recorded returns the tickets it issued
    3. Read the event, check amount/currency and remaining inventory
    4. One transaction: compare-and-swap decrement, record the payment, insert tickets
    5. A lost race (inventory moved, or the reference was claimed concurrently)
       rolls back and goes back to step 2, up to max_attempts times
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        payment_verifier: IPaymentVerifier,
        max_attempts: Optional[int] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        self.uow = uow
        self.payment_verifier = payment_verifier
        self.max_attempts = max_attempts or settings.PURCHASE_MAX_ATTEMPTS
        self.timeout_seconds = timeout_seconds or settings.PURCHASE_TIMEOUT_SECONDS

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(get_unit_of_work),
        payment_verifier: IPaymentVerifier = Depends(Provide[Container.payment_verifier]),
    ) -> Self:
        return cls(uow=uow, payment_verifier=payment_verifier)

    @Logger.io
    async def purchase(
        self,
        *,
        payment_reference: str,
        event_id: str,
        quantity: int,
        buyer: BuyerInfo,
    ) -> PurchaseResult:
        reference = (payment_reference or '').strip()
        if not reference:
            raise DomainError('Payment reference is required')
        if quantity < 1 or quantity > settings.MAX_TICKETS_PER_PURCHASE:
            raise DomainError(
                f'quantity must be between 1 and {settings.MAX_TICKETS_PER_PURCHASE}'
            )

        start_time = time.perf_counter()
        with tracer.start_as_current_span('use_case.purchase_tickets') as span:
            span.set_attribute('payment.reference', reference)
            span.set_attribute('event_id', event_id)
            span.set_attribute('quantity', quantity)

            try:
                with anyio.fail_after(self.timeout_seconds):
                    result = await self._purchase(
                        reference=reference, event_id=event_id, quantity=quantity, buyer=buyer
                    )
            except TimeoutError as e:
                metrics.record_purchase(result='timeout', duration=time.perf_counter() - start_time)
                raise OperationTimeoutError('Purchase timed out, please retry') from e
            except CustomBaseError as e:
                metrics.record_purchase(
                    result=e.error_code.lower(),
                    duration=time.perf_counter() - start_time,
                )
                raise

            outcome = 'replayed' if result.replayed else 'issued'
            span.set_attribute('purchase.outcome', outcome)
            metrics.record_purchase(result=outcome, duration=time.perf_counter() - start_time)
            return result

    async def _purchase(
        self, *, reference: str, event_id: str, quantity: int, buyer: BuyerInfo
    ) -> PurchaseResult:
        verification = await self.payment_verifier.verify(reference=reference)
        if not verification.confirmed or verification.reference != reference:
            raise PaymentNotConfirmedError('Payment verification failed')

        async with self.uow:
            for attempt in range(1, self.max_attempts + 1):
                existing_payment = await self.uow.payment_command_repo.get_by_reference(
                    reference=reference
                )
                if existing_payment:
                    return await self._replay(payment=existing_payment, event_id=event_id)

                event = await self.uow.event_command_repo.get_by_id(event_id=event_id)
                if not event:
                    raise EventNotFoundError('Event not found')
                self._ensure_purchasable(
                    event=event, quantity=quantity, verification=verification
                )

                result = await self._try_issue(
                    event=event,
                    reference=reference,
                    quantity=quantity,
                    buyer=buyer,
                    verification=verification,
                )
                if result:
                    return result

                await self.uow.rollback()
                Logger.base.info(
                    f'🔁 [PURCHASE] Lost race for {reference} on event {event_id} '
                    f'(attempt {attempt}/{self.max_attempts})'
                )

        Logger.base.warning(
            f'🧾 [RECONCILE] Confirmed payment {reference} unfulfilled: '
            f'gave up after {self.max_attempts} conflicting attempts on event {event_id}'
        )
        raise PurchaseConflictError('Tickets are in high demand, please retry')

    def _ensure_purchasable(
        self, *, event: EventEntity, quantity: int, verification: PaymentVerification
    ) -> None:
        amount_due = event.total_price_for(quantity)
        if not verification.covers(amount_due=amount_due, currency=settings.PAYMENT_CURRENCY):
            raise PaymentNotConfirmedError(
                f'Payment of {verification.amount} {verification.currency} does not cover '
                f'{amount_due} {settings.PAYMENT_CURRENCY}'
            )

        if not event.has_inventory_for(quantity):
            Logger.base.warning(
                f'🧾 [RECONCILE] Confirmed payment {verification.reference} unfulfilled: '
                f'event {event.id} has {event.total_tickets} tickets left, {quantity} requested'
            )
            raise InsufficientInventoryError('Not enough tickets available')

    async def _try_issue(
        self,
        *,
        event: EventEntity,
        reference: str,
        quantity: int,
        buyer: BuyerInfo,
        verification: PaymentVerification,
    ) -> PurchaseResult | None:
        """Returns None when a concurrent writer won; the caller rolls back and retries"""
        decremented = await self.uow.event_command_repo.decrement_tickets_if_unchanged(
            event_id=event.id, observed_total=event.total_tickets, quantity=quantity
        )
        if not decremented:
            metrics.record_inventory_conflict(event_id=event.id)
            return None

        claimed = await self.uow.payment_command_repo.create(
            payment=PaymentEntity.record(
                reference=reference,
                event_id=event.id,
                buyer_id=buyer.user_id,
                quantity=quantity,
                amount=verification.amount,
                currency=verification.currency,
            )
        )
        if not claimed:
            metrics.record_reference_conflict()
            return None

        tickets = await self.uow.ticket_command_repo.create_many(
            tickets=[
                TicketEntity.issue(
                    event_id=event.id, buyer=buyer, payment_reference=reference, index=index
                )
                for index in range(quantity)
            ]
        )
        await self.uow.commit()

        metrics.record_tickets_issued(event_id=event.id, quantity=len(tickets))
        Logger.base.info(
            f'🎟️ [PURCHASE] Issued {len(tickets)} tickets for event {event.id} '
            f'(reference {reference}, {event.total_tickets - quantity} left)'
        )
        return PurchaseResult(
            payment_reference=reference, event_id=event.id, tickets=tickets, replayed=False
        )

    async def _replay(self, *, payment: PaymentEntity, event_id: str) -> PurchaseResult:
        if payment.event_id != event_id:
            raise PaymentReferenceReusedError(
                'Payment reference was already used for a different event'
            )

        tickets = await self.uow.ticket_command_repo.list_by_payment_reference(
            payment_reference=payment.reference
        )
        Logger.base.info(
            f'🔁 [PURCHASE] Reference {payment.reference} already fulfilled, '
            f'returning {len(tickets)} existing tickets'
        )
        return PurchaseResult(
            payment_reference=payment.reference, event_id=event_id, tickets=tickets, replayed=True
        )
