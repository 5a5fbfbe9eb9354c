"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from tikiti.service.ticketing.driven_adapter.model.event_model import EventModel
from tikiti.service.ticketing.driven_adapter.model.payment_model import PaymentModel
from tikiti.service.ticketing.driven_adapter.model.ticket_model import TicketModel

__all__ = [
    'EventModel',
    'PaymentModel',
    'TicketModel',
]
