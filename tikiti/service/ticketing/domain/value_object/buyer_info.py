from typing import Optional

import attrs


DEFAULT_ATTENDEE_NAME = 'Attendee'

# Sized to the payment.buyer_id and ticket.attendee_name columns
BUYER_ID_MAX_LENGTH = 64
ATTENDEE_NAME_MAX_LENGTH = 255


@attrs.define(frozen=True)
class BuyerInfo:
    """Identity of the purchaser as supplied by the authenticated caller"""

    user_id: str = attrs.field(
        validator=[attrs.validators.min_len(1), attrs.validators.max_len(BUYER_ID_MAX_LENGTH)]
    )
    email: str
    name: Optional[str] = attrs.field(
        default=None,
        validator=attrs.validators.optional(attrs.validators.max_len(ATTENDEE_NAME_MAX_LENGTH)),
    )

    @property
    def attendee_name(self) -> str:
        if self.name and self.name.strip():
            return self.name.strip()
        local_part = self.email.split('@', 1)[0].strip()
        return local_part or DEFAULT_ATTENDEE_NAME
