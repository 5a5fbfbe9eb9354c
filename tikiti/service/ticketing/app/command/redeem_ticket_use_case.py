from datetime import datetime, timezone
import time
from typing import Optional, Self

import anyio
from fastapi import Depends
from opentelemetry import trace
from sqlalchemy.exc import SQLAlchemyError

from tikiti.platform.config.core_setting import settings
from tikiti.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from tikiti.platform.logging.loguru_io import Logger
from tikiti.platform.metrics.ticketing_metrics import metrics
from tikiti.service.ticketing.app.dto.redemption_result import RedemptionResult
from tikiti.service.ticketing.domain.entity.ticket_entity import TicketEntity
from tikiti.service.ticketing.domain.enum.redemption_status import RedemptionStatus


tracer = trace.get_tracer(__name__)


class RedeemTicketUseCase:
    """
    Single-use check-in of a scanned ticket code.

    The used flag flips through one conditional UPDATE, so among any number of
    concurrent scans of the same code exactly one sees VALID.
    """

    def __init__(self, *, uow: AbstractUnitOfWork, timeout_seconds: Optional[float] = None) -> None:
        self.uow = uow
        self.timeout_seconds = timeout_seconds or settings.REDEMPTION_TIMEOUT_SECONDS

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def redeem(self, *, code: str) -> RedemptionResult:
        start_time = time.perf_counter()
        with tracer.start_as_current_span('use_case.redeem_ticket') as span:
            result = await self._redeem(code=(code or '').strip())
            span.set_attribute('redemption.status', result.status.value)
            metrics.record_redemption(
                status=result.status.value, duration=time.perf_counter() - start_time
            )
            return result

    async def _redeem(self, *, code: str) -> RedemptionResult:
        if not code:
            return RedemptionResult(status=RedemptionStatus.NOT_FOUND, message='Ticket not found')

        outcome: Optional[RedemptionResult] = None
        redeemed: Optional[TicketEntity] = None
        try:
            with anyio.fail_after(self.timeout_seconds):
                async with self.uow:
                    ticket = await self.uow.ticket_command_repo.get_paid_by_code(code=code)
                    if ticket is None:
                        outcome = RedemptionResult(
                            status=RedemptionStatus.NOT_FOUND, message='Ticket not found'
                        )
                    else:
                        used_at = datetime.now(timezone.utc)
                        flipped = await self.uow.ticket_command_repo.mark_used_if_unused(
                            ticket_id=ticket.id, used_at=used_at
                        )
                        if flipped:
                            await self.uow.commit()
                            redeemed = ticket.mark_used(used_at=used_at)
                        else:
                            current = await self.uow.ticket_command_repo.get_paid_by_code(
                                code=code
                            )
                            outcome = RedemptionResult(
                                status=RedemptionStatus.ALREADY_USED,
                                ticket=current or ticket,
                                message='Ticket already used',
                            )
        except (SQLAlchemyError, TimeoutError, OSError) as e:
            if redeemed is None:
                Logger.base.error(f'❌ [REDEEM] Validation failed: {type(e).__name__}: {e}')
                return RedemptionResult(
                    status=RedemptionStatus.ERROR, message='Validation failed, please retry'
                )
            # Commit already went through; the ticket is redeemed
            Logger.base.warning(f'⚠️ [REDEEM] {type(e).__name__} after commit of {redeemed.id}')

        if redeemed is not None:
            Logger.base.info(
                f'✅ [REDEEM] Ticket {redeemed.id} admitted for event {redeemed.event_id}'
            )
            return RedemptionResult(
                status=RedemptionStatus.VALID, ticket=redeemed, message='Ticket validated'
            )

        if outcome is None:
            raise RuntimeError('Redemption finished without an outcome')
        if outcome.status == RedemptionStatus.ALREADY_USED and outcome.ticket:
            Logger.base.info(f'🚫 [REDEEM] Ticket {outcome.ticket.id} already used')
        return outcome
