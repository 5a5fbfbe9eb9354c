"""Purchase outcome DTO."""

from typing import List

import attrs

from tikiti.service.ticketing.domain.entity.ticket_entity import TicketEntity


@attrs.define(frozen=True)
class PurchaseResult:
    """
    Tickets issued for one payment reference.

    replayed is True when the reference had already been consumed and the
    tickets returned are the ones issued the first time.
    """

    payment_reference: str
    event_id: str
    tickets: List[TicketEntity]
    replayed: bool = False
