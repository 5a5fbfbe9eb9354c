from decimal import Decimal
from typing import Optional

import attrs


def _validate_non_empty_string(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not value or not value.strip():
        raise ValueError(f'Event {attribute.name} cannot be empty')


def _validate_non_negative(
    instance: object, attribute: attrs.Attribute, value: int | Decimal
) -> None:
    if value < 0:
        raise ValueError(f'Event {attribute.name} cannot be negative')


@attrs.define
class EventEntity:
    id: str = attrs.field(validator=_validate_non_empty_string)
    title: str
    total_tickets: int = attrs.field(validator=_validate_non_negative)
    price: Decimal = attrs.field(converter=Decimal, validator=_validate_non_negative)
    organizer_id: Optional[str] = None

    def has_inventory_for(self, quantity: int) -> bool:
        return self.total_tickets >= quantity

    def total_price_for(self, quantity: int) -> Decimal:
        return self.price * quantity
