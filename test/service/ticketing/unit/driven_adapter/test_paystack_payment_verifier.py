"""
Unit tests for PaystackPaymentVerifier

The gateway is replaced with httpx.MockTransport; no network access.
"""

from decimal import Decimal
from typing import Any, Callable

import httpx
import pytest

from tikiti.service.ticketing.domain.ticketing_error import (
    PaymentGatewayError,
    PaymentGatewayMisconfiguredError,
)
from tikiti.service.ticketing.driven_adapter.payment.paystack_payment_verifier import (
    PaystackPaymentVerifier,
)


REFERENCE = 'EVT-launch-2025-u42-1736500000000-k3j9x2'


def _verifier(handler: Callable[[httpx.Request], httpx.Response]) -> PaystackPaymentVerifier:
    return PaystackPaymentVerifier(
        secret_key='sk_test_abc',
        base_url='https://paystack.test',
        timeout_seconds=2,
        transport=httpx.MockTransport(handler),
    )


def _success_body(**data_overrides: Any) -> dict[str, Any]:
    data = {'status': 'success', 'reference': REFERENCE, 'amount': 1000050, 'currency': 'NGN'}
    return {'status': True, 'message': 'Verification successful', 'data': data | data_overrides}


@pytest.mark.unit
class TestPaystackPaymentVerifier:
    @pytest.mark.asyncio
    async def test_verify_success__converts_kobo_and_sends_bearer_key(self) -> None:
        # Arrange
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_success_body())

        # Act
        verification = await _verifier(handler).verify(reference=REFERENCE)

        # Assert
        assert verification.confirmed is True
        assert verification.reference == REFERENCE
        assert verification.amount == Decimal('10000.50')
        assert verification.currency == 'NGN'
        assert seen[0].url == f'https://paystack.test/transaction/verify/{REFERENCE}'
        assert seen[0].headers['Authorization'] == 'Bearer sk_test_abc'

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'body',
        [
            _success_body(status='failed'),
            _success_body(status='abandoned'),
            _success_body(reference='another-reference'),
            {'status': False, 'message': 'Transaction reference not found'},
            ['unexpected'],
        ],
    )
    async def test_verify_not_confirmed(self, body: Any) -> None:
        verification = await _verifier(lambda request: httpx.Response(200, json=body)).verify(
            reference=REFERENCE
        )

        assert verification.confirmed is False

    @pytest.mark.asyncio
    async def test_verify_client_error__not_confirmed(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={'status': False, 'message': 'Not found'})

        verification = await _verifier(handler).verify(reference=REFERENCE)

        assert verification.confirmed is False

    @pytest.mark.asyncio
    async def test_verify_server_error__gateway_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text='upstream unavailable')

        with pytest.raises(PaymentGatewayError) as exc_info:
            await _verifier(handler).verify(reference=REFERENCE)

        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_verify_transport_error__gateway_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError('connection refused', request=request)

        with pytest.raises(PaymentGatewayError):
            await _verifier(handler).verify(reference=REFERENCE)

    @pytest.mark.asyncio
    async def test_verify_unreadable_body__gateway_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text='<html>maintenance</html>')

        with pytest.raises(PaymentGatewayError):
            await _verifier(handler).verify(reference=REFERENCE)

    @pytest.mark.asyncio
    async def test_verify_without_secret_key__misconfigured(self) -> None:
        verifier = PaystackPaymentVerifier(
            secret_key='',
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json={})),
        )

        with pytest.raises(PaymentGatewayMisconfiguredError) as exc_info:
            await verifier.verify(reference=REFERENCE)

        assert exc_info.value.status_code == 500
        assert exc_info.value.error_code == 'SERVER_MISCONFIGURED'
