from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from tikiti.service.ticketing.domain.entity.ticket_entity import TicketEntity
from tikiti.service.ticketing.domain.value_object.buyer_info import (
    ATTENDEE_NAME_MAX_LENGTH,
    BUYER_ID_MAX_LENGTH,
)


class BuyerRequest(BaseModel):
    user_id: str = Field(min_length=1, max_length=BUYER_ID_MAX_LENGTH)
    email: EmailStr
    name: Optional[str] = Field(default=None, max_length=ATTENDEE_NAME_MAX_LENGTH)


class PurchaseRequest(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'payment_reference': 'EVT-launch-2025-u42-1736500000000-k3j9x2',
                'event_id': 'launch-2025',
                'quantity': 2,
                'buyer': {'user_id': 'u42', 'name': 'Ada Obi', 'email': 'ada@example.com'},
            }
        },
    }

    payment_reference: str = Field(min_length=1, max_length=255)
    event_id: str = Field(min_length=1, max_length=64)
    quantity: int = Field(ge=1)
    buyer: BuyerRequest


class TicketResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'event_id': 'launch-2025',
                'attendee_name': 'Ada Obi',
                'email': 'ada@example.com',
                'code': 'TICKET-launch-2025-u42-1736500000123456789-0-9f2c4b1a',
                'payment_status': 'paid',
                'used': False,
                'used_at': None,
                'created_at': '2025-01-10T10:30:00',
            }
        },
    }

    id: str
    event_id: str
    attendee_name: str
    email: str
    code: str
    payment_status: str
    used: bool
    used_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, ticket: TicketEntity) -> 'TicketResponse':
        return cls(
            id=ticket.id,
            event_id=ticket.event_id,
            attendee_name=ticket.attendee_name,
            email=ticket.email,
            code=ticket.code,
            payment_status=ticket.payment_status.value,
            used=ticket.used,
            used_at=ticket.used_at,
            created_at=ticket.created_at,
        )


class PurchaseResponse(BaseModel):
    payment_reference: str
    event_id: str
    quantity: int
    replayed: bool
    tickets: list[TicketResponse]


class TicketCodeRequest(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {'code': 'TICKET-launch-2025-u42-1736500000123456789-0-9f2c4b1a'}
        },
    }

    code: str = ''


class RedemptionResponse(BaseModel):
    success: bool
    status: str
    ticket: Optional[TicketResponse] = None
    error: Optional[str] = None
