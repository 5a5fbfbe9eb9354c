from fastapi import APIRouter, Depends, Query

from tikiti.platform.logging.loguru_io import Logger
from tikiti.service.ticketing.app.query.lookup_payment_use_case import LookupPaymentUseCase
from tikiti.service.ticketing.driving_adapter.http_controller.schema.payment_schema import (
    IssuedTicketResponse,
    PaymentLookupResponse,
)


router = APIRouter()


@router.get('/lookup')
@Logger.io
async def lookup_payment(
    reference: str = Query(min_length=1, max_length=255),
    use_case: LookupPaymentUseCase = Depends(LookupPaymentUseCase.depends),
) -> PaymentLookupResponse:
    result = await use_case.lookup(reference=reference)
    payment = result.payment
    return PaymentLookupResponse(
        reference=payment.reference,
        event_id=payment.event_id,
        buyer_id=payment.buyer_id,
        quantity=payment.quantity,
        amount=payment.amount,
        currency=payment.currency,
        created_at=payment.created_at,
        tickets=[IssuedTicketResponse.from_entity(ticket) for ticket in result.tickets],
    )
