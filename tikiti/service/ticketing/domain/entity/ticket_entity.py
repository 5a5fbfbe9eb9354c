from datetime import datetime, timezone
import secrets
import time
from typing import Optional

import attrs
import uuid_utils

from tikiti.service.ticketing.domain.enum.payment_status import PaymentStatus
from tikiti.service.ticketing.domain.value_object.buyer_info import BuyerInfo


def generate_ticket_code(*, event_id: str, buyer_id: str, index: int) -> str:
    """
    Opaque code printed into the ticket QR.

    Nanosecond timestamp plus index keeps codes distinct within a purchase;
    the random suffix keeps them unguessable and distinct across processes.
    """
    return f'TICKET-{event_id}-{buyer_id}-{time.time_ns()}-{index}-{secrets.token_hex(4)}'


@attrs.define
class TicketEntity:
    id: str
    event_id: str
    attendee_name: str
    email: str
    code: str
    payment_status: PaymentStatus = PaymentStatus.PENDING
    used: bool = False
    used_at: Optional[datetime] = None
    payment_reference: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def issue(
        cls, *, event_id: str, buyer: BuyerInfo, payment_reference: str, index: int
    ) -> 'TicketEntity':
        return cls(
            id=str(uuid_utils.uuid7()),
            event_id=event_id,
            attendee_name=buyer.attendee_name,
            email=buyer.email,
            code=generate_ticket_code(event_id=event_id, buyer_id=buyer.user_id, index=index),
            payment_status=PaymentStatus.PAID,
            payment_reference=payment_reference,
            created_at=datetime.now(timezone.utc),
        )

    @property
    def is_redeemable(self) -> bool:
        return self.payment_status == PaymentStatus.PAID and not self.used

    def mark_used(self, *, used_at: datetime) -> 'TicketEntity':
        return attrs.evolve(self, used=True, used_at=used_at)
