from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from tikiti.service.ticketing.domain.entity.ticket_entity import TicketEntity


class IssuedTicketResponse(BaseModel):
    """Display fields only; the redeemable code is never exposed by payment lookup"""

    id: str
    attendee_name: str
    email: str
    payment_status: str
    used: bool

    @classmethod
    def from_entity(cls, ticket: TicketEntity) -> 'IssuedTicketResponse':
        return cls(
            id=ticket.id,
            attendee_name=ticket.attendee_name,
            email=ticket.email,
            payment_status=ticket.payment_status.value,
            used=ticket.used,
        )


class PaymentLookupResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'reference': 'EVT-launch-2025-u42-1736500000000-k3j9x2',
                'event_id': 'launch-2025',
                'buyer_id': 'u42',
                'quantity': 2,
                'amount': '10000.00',
                'currency': 'NGN',
                'created_at': '2025-01-10T10:30:00',
                'tickets': [],
            }
        },
    }

    reference: str
    event_id: str
    buyer_id: str
    quantity: int
    amount: Decimal
    currency: str
    created_at: Optional[datetime] = None
    tickets: list[IssuedTicketResponse]
