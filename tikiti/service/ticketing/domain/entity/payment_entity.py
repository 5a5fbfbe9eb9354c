from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

import attrs


@attrs.define
class PaymentEntity:
    """A payment reference consumed by exactly one purchase"""

    reference: str
    event_id: str
    buyer_id: str
    quantity: int
    amount: Decimal = attrs.field(converter=Decimal)
    currency: str
    created_at: Optional[datetime] = None

    @classmethod
    def record(
        cls,
        *,
        reference: str,
        event_id: str,
        buyer_id: str,
        quantity: int,
        amount: Decimal,
        currency: str,
    ) -> 'PaymentEntity':
        return cls(
            reference=reference,
            event_id=event_id,
            buyer_id=buyer_id,
            quantity=quantity,
            amount=amount,
            currency=currency,
            created_at=datetime.now(timezone.utc),
        )
