from collections.abc import Iterator

import pytest

from tikiti.platform.config.core_setting import settings
from tikiti.platform.config.di import container
from tikiti.service.ticketing.driven_adapter.payment.paystack_payment_verifier import (
    PaystackPaymentVerifier,
)


@pytest.fixture
def fresh_container() -> Iterator[None]:
    container.reset_singletons()
    yield
    container.reset_singletons()


@pytest.mark.unit
@pytest.mark.usefixtures('fresh_container')
class TestContainer:
    def test_config_service_is_module_settings(self) -> None:
        assert container.config_service() is settings

    def test_payment_verifier_built_from_settings(self) -> None:
        # Act
        verifier = container.payment_verifier()

        # Assert
        assert isinstance(verifier, PaystackPaymentVerifier)
        assert verifier.secret_key == settings.PAYSTACK_SECRET_KEY.get_secret_value()
        assert verifier.base_url == settings.PAYSTACK_BASE_URL.rstrip('/')
        assert verifier.timeout_seconds == settings.PAYMENT_VERIFY_TIMEOUT_SECONDS
        assert container.payment_verifier() is verifier
