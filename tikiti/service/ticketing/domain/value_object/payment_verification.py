from decimal import Decimal

import attrs


@attrs.define(frozen=True)
class PaymentVerification:
    """Gateway answer for one payment reference, amount in major currency units"""

    reference: str
    confirmed: bool
    amount: Decimal = Decimal('0')
    currency: str = ''

    def covers(self, *, amount_due: Decimal, currency: str) -> bool:
        return self.currency.upper() == currency.upper() and self.amount >= amount_due
