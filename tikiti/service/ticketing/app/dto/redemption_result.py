"""Redemption outcome DTO."""

from typing import Optional

import attrs

from tikiti.service.ticketing.domain.entity.ticket_entity import TicketEntity
from tikiti.service.ticketing.domain.enum.redemption_status import RedemptionStatus


@attrs.define(frozen=True)
class RedemptionResult:
    status: RedemptionStatus
    ticket: Optional[TicketEntity] = None
    message: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status == RedemptionStatus.VALID
