"""Ticketing Domain Value Objects"""

from tikiti.service.ticketing.domain.value_object.buyer_info import BuyerInfo
from tikiti.service.ticketing.domain.value_object.payment_verification import (
    PaymentVerification,
)

__all__ = ['BuyerInfo', 'PaymentVerification']
