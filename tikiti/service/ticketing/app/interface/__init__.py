"""Application layer interfaces (Ports)"""

from tikiti.service.ticketing.app.interface.i_event_command_repo import IEventCommandRepo
from tikiti.service.ticketing.app.interface.i_payment_command_repo import IPaymentCommandRepo
from tikiti.service.ticketing.app.interface.i_payment_query_repo import IPaymentQueryRepo
from tikiti.service.ticketing.app.interface.i_payment_verifier import IPaymentVerifier
from tikiti.service.ticketing.app.interface.i_ticket_command_repo import ITicketCommandRepo
from tikiti.service.ticketing.app.interface.i_ticket_query_repo import ITicketQueryRepo

__all__ = [
    'IEventCommandRepo',
    'IPaymentCommandRepo',
    'IPaymentQueryRepo',
    'IPaymentVerifier',
    'ITicketCommandRepo',
    'ITicketQueryRepo',
]
