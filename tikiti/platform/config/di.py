"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from tikiti.platform.config.core_setting import settings
from tikiti.platform.database.orm_db_setting import Database
from tikiti.service.ticketing.driven_adapter.payment.paystack_payment_verifier import (
    PaystackPaymentVerifier,
)
from tikiti.service.ticketing.driven_adapter.repo.payment_query_repo_impl import (
    PaymentQueryRepoImpl,
)
from tikiti.service.ticketing.driven_adapter.repo.ticket_query_repo_impl import (
    TicketQueryRepoImpl,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Object(settings)

    # Database (uses AsyncEngineManager with settings from core_setting)
    database = providers.Singleton(Database)

    # External services
    payment_verifier = providers.Singleton(
        PaystackPaymentVerifier,
        secret_key=config_service.provided.PAYSTACK_SECRET_KEY.get_secret_value.call(),
        base_url=config_service.provided.PAYSTACK_BASE_URL,
        timeout_seconds=config_service.provided.PAYMENT_VERIFY_TIMEOUT_SECONDS,
    )

    # Query repositories (stateless - open a session per call)
    ticket_query_repo = providers.Singleton(
        TicketQueryRepoImpl, session_factory=database.provided.session
    )
    payment_query_repo = providers.Singleton(
        PaymentQueryRepoImpl, session_factory=database.provided.session
    )


container = Container()


def setup() -> None:
    container.payment_verifier()


def cleanup() -> None:
    container.reset_singletons()
