"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from tikiti.service.ticketing.app.command import purchase_tickets_use_case
from tikiti.service.ticketing.app.query import (
    lookup_payment_use_case,
    lookup_ticket_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    purchase_tickets_use_case,
    lookup_ticket_use_case,
    lookup_payment_use_case,
]
