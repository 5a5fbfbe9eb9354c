from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tikiti.platform.logging.loguru_io import Logger
from tikiti.service.ticketing.app.interface.i_payment_command_repo import IPaymentCommandRepo
from tikiti.service.ticketing.domain.entity.payment_entity import PaymentEntity
from tikiti.service.ticketing.driven_adapter.model.payment_model import PaymentModel


def payment_model_to_entity(db_payment: PaymentModel) -> PaymentEntity:
    return PaymentEntity(
        reference=db_payment.reference,
        event_id=db_payment.event_id,
        buyer_id=db_payment.buyer_id,
        quantity=db_payment.quantity,
        amount=db_payment.amount,
        currency=db_payment.currency,
        created_at=db_payment.created_at,
    )


class PaymentCommandRepoImpl(IPaymentCommandRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def get_by_reference(self, *, reference: str) -> PaymentEntity | None:
        result = await self.session.execute(
            select(PaymentModel).where(PaymentModel.reference == reference)
        )
        db_payment = result.scalar_one_or_none()
        return payment_model_to_entity(db_payment) if db_payment else None

    @Logger.io
    async def create(self, *, payment: PaymentEntity) -> bool:
        stmt = insert(PaymentModel).values(
            reference=payment.reference,
            event_id=payment.event_id,
            buyer_id=payment.buyer_id,
            quantity=payment.quantity,
            amount=payment.amount,
            currency=payment.currency,
            created_at=payment.created_at,
        )
        try:
            await self.session.execute(stmt)
        except IntegrityError:
            Logger.base.warning(f'🔁 [PAYMENT] Reference {payment.reference} already recorded')
            return False
        return True
