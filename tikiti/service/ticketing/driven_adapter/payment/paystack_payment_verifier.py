"""
Paystack payment verification over HTTPS.

https://paystack.com/docs/api/transaction/#verify
"""

from decimal import Decimal
from typing import Any, Optional

import httpx
from opentelemetry import trace

from tikiti.platform.config.core_setting import settings
from tikiti.platform.logging.loguru_io import Logger
from tikiti.service.ticketing.app.interface.i_payment_verifier import IPaymentVerifier
from tikiti.service.ticketing.domain.ticketing_error import (
    PaymentGatewayError,
    PaymentGatewayMisconfiguredError,
)
from tikiti.service.ticketing.domain.value_object.payment_verification import (
    PaymentVerification,
)


# Paystack reports amounts in the currency subunit (kobo, pesewas, cents)
MINOR_UNITS_PER_MAJOR = Decimal('100')

tracer = trace.get_tracer(__name__)


class PaystackPaymentVerifier(IPaymentVerifier):
    def __init__(
        self,
        *,
        secret_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.secret_key = (
            secret_key if secret_key is not None else settings.PAYSTACK_SECRET_KEY.get_secret_value()
        )
        self.base_url = (base_url or settings.PAYSTACK_BASE_URL).rstrip('/')
        self.timeout_seconds = timeout_seconds or settings.PAYMENT_VERIFY_TIMEOUT_SECONDS
        self._transport = transport

    @Logger.io
    async def verify(self, *, reference: str) -> PaymentVerification:
        if not self.secret_key:
            raise PaymentGatewayMisconfiguredError('Server misconfiguration')

        with tracer.start_as_current_span('paystack.verify') as span:
            span.set_attribute('payment.reference', reference)
            response = await self._get_verification(reference=reference)
            span.set_attribute('http.status_code', response.status_code)

            if response.status_code >= 500:
                raise PaymentGatewayError(
                    f'Payment gateway unavailable (HTTP {response.status_code})'
                )
            if response.status_code >= 400:
                Logger.base.info(
                    f'💳 [PAYSTACK] Reference {reference} rejected (HTTP {response.status_code})'
                )
                return PaymentVerification(reference=reference, confirmed=False)

            try:
                body = response.json()
            except ValueError as e:
                raise PaymentGatewayError('Payment gateway returned an unreadable response') from e

            verification = self._to_verification(reference=reference, body=body)
            span.set_attribute('payment.confirmed', verification.confirmed)
            return verification

    async def _get_verification(self, *, reference: str) -> httpx.Response:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout_seconds),
                transport=self._transport,
            ) as client:
                return await client.get(
                    f'/transaction/verify/{reference}',
                    headers={
                        'Authorization': f'Bearer {self.secret_key}',
                        'Content-Type': 'application/json',
                    },
                )
        except httpx.HTTPError as e:
            raise PaymentGatewayError(f'Payment gateway unreachable: {type(e).__name__}') from e

    @staticmethod
    def _to_verification(*, reference: str, body: Any) -> PaymentVerification:
        if not isinstance(body, dict):
            return PaymentVerification(reference=reference, confirmed=False)
        data = body.get('data')
        if not isinstance(data, dict):
            data = {}

        confirmed = (
            body.get('status') is True
            and data.get('status') == 'success'
            and data.get('reference') == reference
        )

        try:
            amount = Decimal(str(data.get('amount') or 0)) / MINOR_UNITS_PER_MAJOR
        except ArithmeticError:
            amount = Decimal('0')
            confirmed = False

        return PaymentVerification(
            reference=reference,
            confirmed=confirmed,
            amount=amount,
            currency=str(data.get('currency') or ''),
        )
