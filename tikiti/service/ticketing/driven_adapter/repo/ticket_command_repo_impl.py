from datetime import datetime, timezone
from typing import List

from sqlalchemy import select, update as sql_update
from sqlalchemy.ext.asyncio import AsyncSession

from tikiti.platform.logging.loguru_io import Logger
from tikiti.service.ticketing.app.interface.i_ticket_command_repo import ITicketCommandRepo
from tikiti.service.ticketing.domain.entity.ticket_entity import TicketEntity
from tikiti.service.ticketing.domain.enum.payment_status import PaymentStatus
from tikiti.service.ticketing.driven_adapter.model.ticket_model import TicketModel


def ticket_model_to_entity(db_ticket: TicketModel) -> TicketEntity:
    return TicketEntity(
        id=db_ticket.id,
        event_id=db_ticket.event_id,
        attendee_name=db_ticket.attendee_name,
        email=db_ticket.email,
        code=db_ticket.code,
        payment_status=PaymentStatus(db_ticket.payment_status),
        used=db_ticket.used,
        used_at=db_ticket.used_at,
        payment_reference=db_ticket.payment_reference,
        created_at=db_ticket.created_at,
    )


class TicketCommandRepoImpl(ITicketCommandRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def create_many(self, *, tickets: List[TicketEntity]) -> List[TicketEntity]:
        db_tickets = [
            TicketModel(
                id=ticket.id,
                event_id=ticket.event_id,
                attendee_name=ticket.attendee_name,
                email=ticket.email,
                code=ticket.code,
                payment_status=ticket.payment_status.value,
                used=ticket.used,
                used_at=ticket.used_at,
                payment_reference=ticket.payment_reference,
                created_at=ticket.created_at or datetime.now(timezone.utc),
            )
            for ticket in tickets
        ]
        self.session.add_all(db_tickets)
        await self.session.flush()
        return [ticket_model_to_entity(db_ticket) for db_ticket in db_tickets]

    @Logger.io
    async def get_paid_by_code(self, *, code: str) -> TicketEntity | None:
        result = await self.session.execute(
            select(TicketModel)
            .where(
                TicketModel.code == code,
                TicketModel.payment_status == PaymentStatus.PAID.value,
            )
            .execution_options(populate_existing=True)
        )
        db_ticket = result.scalar_one_or_none()
        return ticket_model_to_entity(db_ticket) if db_ticket else None

    @Logger.io
    async def mark_used_if_unused(self, *, ticket_id: str, used_at: datetime) -> bool:
        stmt = (
            sql_update(TicketModel)
            .where(TicketModel.id == ticket_id, TicketModel.used.is_(False))
            .values(used=True, used_at=used_at)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def list_by_payment_reference(self, *, payment_reference: str) -> List[TicketEntity]:
        result = await self.session.execute(
            select(TicketModel)
            .where(TicketModel.payment_reference == payment_reference)
            .order_by(TicketModel.created_at, TicketModel.id)
        )
        return [ticket_model_to_entity(db_ticket) for db_ticket in result.scalars().all()]
