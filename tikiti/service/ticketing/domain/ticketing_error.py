"""
Typed failures of the purchase and lookup flows.

Redemption outcomes are not exceptions; see RedemptionStatus.
"""

from tikiti.platform.exception.exceptions import (
    ConflictError,
    CustomBaseError,
    DomainError,
    NotFoundError,
    ServiceUnavailableError,
    UpstreamServiceError,
)


class PaymentNotConfirmedError(DomainError):
    error_code = 'PAYMENT_NOT_CONFIRMED'


class InsufficientInventoryError(DomainError):
    error_code = 'INSUFFICIENT_INVENTORY'


class EventNotFoundError(NotFoundError):
    error_code = 'EVENT_NOT_FOUND'


class PaymentNotFoundError(NotFoundError):
    error_code = 'PAYMENT_NOT_FOUND'


class TicketNotFoundError(NotFoundError):
    error_code = 'TICKET_NOT_FOUND'


class PaymentReferenceReusedError(ConflictError):
    error_code = 'PAYMENT_REFERENCE_REUSED'


class PurchaseConflictError(ConflictError):
    error_code = 'CONFLICT'


class PaymentGatewayError(UpstreamServiceError):
    error_code = 'PAYMENT_GATEWAY_ERROR'


class OperationTimeoutError(ServiceUnavailableError):
    error_code = 'TIMEOUT'


class PaymentGatewayMisconfiguredError(CustomBaseError):
    error_code = 'SERVER_MISCONFIGURED'

    def __init__(self, message: str) -> None:
        super().__init__(message, 500)
