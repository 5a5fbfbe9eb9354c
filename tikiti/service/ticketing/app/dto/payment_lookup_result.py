"""Payment lookup DTO."""

from typing import List

import attrs

from tikiti.service.ticketing.domain.entity.payment_entity import PaymentEntity
from tikiti.service.ticketing.domain.entity.ticket_entity import TicketEntity


@attrs.define(frozen=True)
class PaymentLookupResult:
    payment: PaymentEntity
    tickets: List[TicketEntity] = attrs.field(factory=list)
