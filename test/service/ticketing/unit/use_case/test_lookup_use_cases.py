from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from tikiti.service.ticketing.app.query.lookup_payment_use_case import LookupPaymentUseCase
from tikiti.service.ticketing.app.query.lookup_ticket_use_case import LookupTicketUseCase
from tikiti.service.ticketing.domain.entity.payment_entity import PaymentEntity
from tikiti.service.ticketing.domain.entity.ticket_entity import TicketEntity
from tikiti.service.ticketing.domain.ticketing_error import (
    PaymentNotFoundError,
    TicketNotFoundError,
)
from tikiti.service.ticketing.domain.value_object.buyer_info import BuyerInfo


@pytest.fixture
def mock_ticket_query_repo() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def mock_payment_query_repo() -> AsyncMock:
    return AsyncMock()


@pytest.mark.unit
class TestLookupTicketUseCase:
    @pytest.mark.asyncio
    async def test_lookup_found(self, mock_ticket_query_repo: AsyncMock) -> None:
        ticket = TicketEntity.issue(
            event_id='e1',
            buyer=BuyerInfo(user_id='u1', email='a@example.com'),
            payment_reference='ref',
            index=0,
        )
        mock_ticket_query_repo.get_paid_by_code.return_value = ticket

        result = await LookupTicketUseCase(ticket_query_repo=mock_ticket_query_repo).lookup(
            code=ticket.code
        )

        assert result == ticket
        assert result.used is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize('code', ['', 'TICKET-missing'])
    async def test_lookup_not_found(self, mock_ticket_query_repo: AsyncMock, code: str) -> None:
        mock_ticket_query_repo.get_paid_by_code.return_value = None

        with pytest.raises(TicketNotFoundError) as exc_info:
            await LookupTicketUseCase(ticket_query_repo=mock_ticket_query_repo).lookup(code=code)

        assert exc_info.value.status_code == 404


@pytest.mark.unit
class TestLookupPaymentUseCase:
    @pytest.mark.asyncio
    async def test_lookup_returns_payment_with_tickets(
        self, mock_payment_query_repo: AsyncMock, mock_ticket_query_repo: AsyncMock
    ) -> None:
        # Arrange
        payment = PaymentEntity.record(
            reference='ref-1',
            event_id='e1',
            buyer_id='u1',
            quantity=1,
            amount=Decimal('5000'),
            currency='NGN',
        )
        mock_payment_query_repo.get_by_reference.return_value = payment
        mock_ticket_query_repo.list_by_payment_reference.return_value = []
        use_case = LookupPaymentUseCase(
            payment_query_repo=mock_payment_query_repo, ticket_query_repo=mock_ticket_query_repo
        )

        # Act
        result = await use_case.lookup(reference=' ref-1 ')

        # Assert
        assert result.payment == payment
        mock_payment_query_repo.get_by_reference.assert_awaited_once_with(reference='ref-1')
        mock_ticket_query_repo.list_by_payment_reference.assert_awaited_once_with(
            payment_reference='ref-1'
        )

    @pytest.mark.asyncio
    async def test_lookup_unknown_reference(
        self, mock_payment_query_repo: AsyncMock, mock_ticket_query_repo: AsyncMock
    ) -> None:
        mock_payment_query_repo.get_by_reference.return_value = None
        use_case = LookupPaymentUseCase(
            payment_query_repo=mock_payment_query_repo, ticket_query_repo=mock_ticket_query_repo
        )

        with pytest.raises(PaymentNotFoundError):
            await use_case.lookup(reference='nope')

        mock_ticket_query_repo.list_by_payment_reference.assert_not_awaited()
