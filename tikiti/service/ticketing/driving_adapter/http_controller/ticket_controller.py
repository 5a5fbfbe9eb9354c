from fastapi import APIRouter, Depends, Response, status
from opentelemetry import trace

from tikiti.platform.logging.loguru_io import Logger
from tikiti.service.ticketing.app.command.purchase_tickets_use_case import PurchaseTicketsUseCase
from tikiti.service.ticketing.app.command.redeem_ticket_use_case import RedeemTicketUseCase
from tikiti.service.ticketing.app.query.lookup_ticket_use_case import LookupTicketUseCase
from tikiti.service.ticketing.domain.enum.redemption_status import RedemptionStatus
from tikiti.service.ticketing.domain.value_object.buyer_info import BuyerInfo
from tikiti.service.ticketing.driving_adapter.http_controller.auth.scanner_auth import (
    require_scanner_key,
)
from tikiti.service.ticketing.driving_adapter.http_controller.schema.ticket_schema import (
    PurchaseRequest,
    PurchaseResponse,
    RedemptionResponse,
    TicketCodeRequest,
    TicketResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)

REDEMPTION_HTTP_STATUS = {
    RedemptionStatus.VALID: status.HTTP_200_OK,
    RedemptionStatus.ALREADY_USED: status.HTTP_200_OK,
    RedemptionStatus.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    RedemptionStatus.ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@router.post('/purchase', status_code=status.HTTP_201_CREATED)
@Logger.io
async def purchase_tickets(
    request: PurchaseRequest,
    response: Response,
    use_case: PurchaseTicketsUseCase = Depends(PurchaseTicketsUseCase.depends),
) -> PurchaseResponse:
    with tracer.start_as_current_span('controller.purchase_tickets') as span:
        span.set_attribute('event_id', request.event_id)
        span.set_attribute('quantity', request.quantity)

        result = await use_case.purchase(
            payment_reference=request.payment_reference,
            event_id=request.event_id,
            quantity=request.quantity,
            buyer=BuyerInfo(
                user_id=request.buyer.user_id,
                email=str(request.buyer.email),
                name=request.buyer.name,
            ),
        )

        if result.replayed:
            response.status_code = status.HTTP_200_OK

        return PurchaseResponse(
            payment_reference=result.payment_reference,
            event_id=result.event_id,
            quantity=len(result.tickets),
            replayed=result.replayed,
            tickets=[TicketResponse.from_entity(ticket) for ticket in result.tickets],
        )


@router.post('/redeem', dependencies=[Depends(require_scanner_key)])
@Logger.io
async def redeem_ticket(
    request: TicketCodeRequest,
    response: Response,
    use_case: RedeemTicketUseCase = Depends(RedeemTicketUseCase.depends),
) -> RedemptionResponse:
    result = await use_case.redeem(code=request.code)
    response.status_code = REDEMPTION_HTTP_STATUS[result.status]
    return RedemptionResponse(
        success=result.success,
        status=result.status.value,
        ticket=TicketResponse.from_entity(result.ticket) if result.ticket else None,
        error=None if result.success else result.message,
    )


@router.post('/lookup', dependencies=[Depends(require_scanner_key)])
@Logger.io
async def lookup_ticket(
    request: TicketCodeRequest,
    use_case: LookupTicketUseCase = Depends(LookupTicketUseCase.depends),
) -> TicketResponse:
    ticket = await use_case.lookup(code=request.code)
    return TicketResponse.from_entity(ticket)
