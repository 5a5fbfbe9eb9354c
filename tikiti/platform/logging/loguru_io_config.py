"""
Loguru sinks and the call-chain context shared by Logger.io.

Every line carries the writing process (service_context). Lines written inside
a Logger.io call also carry the decorated target and the moment the outermost
decorated call of the chain began, so one purchase or redemption can be
followed from controller to repository.
"""

from contextvars import ContextVar
from enum import StrEnum
import os
import sys
from typing import TYPE_CHECKING

from loguru import logger as loguru_logger

from tikiti.platform.config.core_setting import settings
from tikiti.platform.constant.path import LOG_DIR
from tikiti.platform.logging.service_context import get_service_context


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    CALL_TARGET = 'call_target'
    CHAIN_START_TIME = 'chain_start_time'


# Argument and attribute names whose values never reach a log line
SENSITIVE_KEYWORDS = frozenset(
    {'password', 'secret_key', 'api_key', 'authorization', 'x_api_key', 'code'}
)
MAX_LOGGED_CONTENT_LENGTH = 500

chain_start_time_var: ContextVar[float] = ContextVar('chain_start_time', default=0.0)
call_depth_var: ContextVar[int] = ContextVar('call_depth', default=0)

LOG_FORMAT = (
    f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</> | <lvl>{{level:<8}}</> | '
    f'<c>{{name}}:{{function}}:{{line}}</> => <y>{{extra[{ExtraField.CALL_TARGET}]}}</> | '
    f'{{message}} | <lk>{{elapsed}} chain@{{extra[{ExtraField.CHAIN_START_TIME}]}}</>'
)


def _log_file_path() -> str:
    test_log_dir = os.environ.get('TEST_LOG_DIR')
    directory = test_log_dir or str(LOG_DIR)
    prefix = 'test_' if test_log_dir else ''
    return f'{directory}/{prefix}tikiti_{{time:YYYY-MM-DD_HH}}.log'


def configure_sinks() -> 'LoguruLogger':
    """stdout always; an hourly rotated file as well while DEBUG is on"""
    level = 'DEBUG' if settings.DEBUG else 'INFO'

    loguru_logger.remove()
    loguru_logger.configure(
        extra={
            ExtraField.SERVICE_CONTEXT: get_service_context(),
            ExtraField.CALL_TARGET: '',
            ExtraField.CHAIN_START_TIME: '',
        }
    )
    loguru_logger.add(sys.stdout, format=LOG_FORMAT, level=level, enqueue=True)
    if settings.DEBUG:
        loguru_logger.add(
            _log_file_path(),
            format=LOG_FORMAT,
            level=level,
            rotation='1 hour',
            retention='7 days',
            compression='gz',
            enqueue=True,
        )
    return loguru_logger


custom_logger = configure_sinks()
