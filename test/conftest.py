"""
Test Configuration and Fixtures

Architecture:
- Unit tests (test/**/unit/): collaborators replaced with AsyncMock / stubs
- Integration tests (test/**/integration/): real SQLAlchemy against a per-test
  SQLite file (aiosqlite), see test/service/ticketing/integration/conftest.py
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings and the loguru sinks are configured at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{test_log_dir / "tikiti_default.db"}'
    os.environ['PAYSTACK_SECRET_KEY'] = 'sk_test_tikiti'
    os.environ['PAYSTACK_BASE_URL'] = 'https://paystack.test'
    os.environ['PAYMENT_CURRENCY'] = 'NGN'
    os.environ['SERVICE_NAME'] = 'tikiti-test'


_early_setup_test_environment()

from decimal import Decimal  # noqa: E402
from typing import Callable  # noqa: E402

import pytest  # noqa: E402

from tikiti.service.ticketing.app.interface.i_payment_verifier import (  # noqa: E402
    IPaymentVerifier,
)
from tikiti.service.ticketing.domain.value_object.buyer_info import BuyerInfo  # noqa: E402
from tikiti.service.ticketing.domain.value_object.payment_verification import (  # noqa: E402
    PaymentVerification,
)


class StubPaymentVerifier(IPaymentVerifier):
    """Confirms every reference for a fixed amount unless told otherwise"""

    def __init__(
        self,
        *,
        amount: Decimal = Decimal('1000000'),
        currency: str = 'NGN',
        rejected: set[str] | None = None,
    ) -> None:
        self.amount = amount
        self.currency = currency
        self.rejected = rejected or set()
        self.calls: list[str] = []

    async def verify(self, *, reference: str) -> PaymentVerification:
        self.calls.append(reference)
        return PaymentVerification(
            reference=reference,
            confirmed=reference not in self.rejected,
            amount=self.amount,
            currency=self.currency,
        )


@pytest.fixture
def stub_payment_verifier() -> StubPaymentVerifier:
    return StubPaymentVerifier()


@pytest.fixture
def buyer_factory() -> Callable[..., BuyerInfo]:
    def _make(
        user_id: str = 'u42', email: str = 'ada@example.com', name: str | None = 'Ada Obi'
    ) -> BuyerInfo:
        return BuyerInfo(user_id=user_id, email=email, name=name)

    return _make
