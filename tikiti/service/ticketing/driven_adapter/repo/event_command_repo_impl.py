from sqlalchemy import select, update as sql_update
from sqlalchemy.ext.asyncio import AsyncSession

from tikiti.platform.logging.loguru_io import Logger
from tikiti.service.ticketing.app.interface.i_event_command_repo import IEventCommandRepo
from tikiti.service.ticketing.domain.entity.event_entity import EventEntity
from tikiti.service.ticketing.driven_adapter.model.event_model import EventModel


class EventCommandRepoImpl(IEventCommandRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _to_entity(db_event: EventModel) -> EventEntity:
        return EventEntity(
            id=db_event.id,
            title=db_event.title,
            total_tickets=db_event.total_tickets,
            price=db_event.price,
            organizer_id=db_event.organizer_id,
        )

    @Logger.io
    async def get_by_id(self, *, event_id: str) -> EventEntity | None:
        # populate_existing: a retry must see the committed count, not the identity map copy
        result = await self.session.execute(
            select(EventModel)
            .where(EventModel.id == event_id)
            .execution_options(populate_existing=True)
        )
        db_event = result.scalar_one_or_none()
        return self._to_entity(db_event) if db_event else None

    @Logger.io
    async def decrement_tickets_if_unchanged(
        self, *, event_id: str, observed_total: int, quantity: int
    ) -> bool:
        stmt = (
            sql_update(EventModel)
            .where(
                EventModel.id == event_id,
                EventModel.total_tickets == observed_total,
                EventModel.total_tickets >= quantity,
            )
            .values(total_tickets=EventModel.total_tickets - quantity)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1  # type: ignore[attr-defined]
