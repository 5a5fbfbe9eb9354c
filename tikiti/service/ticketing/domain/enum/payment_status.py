from enum import StrEnum


class PaymentStatus(StrEnum):
    """Payment state of a ticket row; only PAID tickets can be redeemed"""

    PENDING = 'pending'
    PAID = 'paid'
    FAILED = 'failed'
