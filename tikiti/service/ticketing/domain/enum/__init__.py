"""Ticketing Domain Enums"""

from tikiti.service.ticketing.domain.enum.payment_status import PaymentStatus
from tikiti.service.ticketing.domain.enum.redemption_status import RedemptionStatus

__all__ = ['PaymentStatus', 'RedemptionStatus']
