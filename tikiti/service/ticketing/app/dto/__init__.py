"""Application layer DTOs"""

from tikiti.service.ticketing.app.dto.payment_lookup_result import PaymentLookupResult
from tikiti.service.ticketing.app.dto.purchase_result import PurchaseResult
from tikiti.service.ticketing.app.dto.redemption_result import RedemptionResult

__all__ = [
    'PaymentLookupResult',
    'PurchaseResult',
    'RedemptionResult',
]
