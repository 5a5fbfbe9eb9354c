"""
Tikiti API - Main Application
Handles paid ticket issuance and gate redemption.

Run with:
    granian --interface asgi tikiti.main:app
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from tikiti.platform.app_factory import create_app
from tikiti.platform.config.di import cleanup, container, setup
from tikiti.platform.database.orm_db_setting import (
    create_db_and_tables,
    dispose_engine,
    get_engine,
)
from tikiti.platform.logging.loguru_io import Logger
from tikiti.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Manage application lifespan: startup and shutdown"""
    Logger.base.info('🚀 [Tikiti] Starting up...')

    setup()

    tracing = TracingConfig(service_name='tikiti-api')
    tracing.setup()
    tracing.instrument_sqlalchemy(engine=get_engine())
    Logger.base.info('📊 [Tikiti] OpenTelemetry tracing configured')

    await create_db_and_tables()

    Logger.base.info('✅ [Tikiti] Startup complete')

    yield

    Logger.base.info('🛑 [Tikiti] Shutting down...')

    await dispose_engine()
    Logger.base.info('🗄️ [Tikiti] Database engine disposed')

    tracing.shutdown()
    container.unwire()
    cleanup()

    Logger.base.info('👋 [Tikiti] Shutdown complete')


app = create_app(lifespan=lifespan)
